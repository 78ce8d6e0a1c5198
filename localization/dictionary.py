"""
Static phrase dictionary and the key resolution fallback chain.
"""

import logging
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping, Optional

from .languages import DEFAULT_LANGUAGE
from .phrases import TRANSLATIONS

if TYPE_CHECKING:
    from .cache import TranslationCache

logger = logging.getLogger("UrbanPulse.Dictionary")

KEY_SEPARATOR = "."


def is_translation_key(value: str) -> bool:
    """Namespaced keys such as 'dashboard.title' contain the separator."""
    return bool(value) and KEY_SEPARATOR in value


class StaticDictionary:
    """
    Immutable language -> key -> phrase mapping.

    The fallback language table is the reference: keys present in other
    languages but missing from it are reported once at construction.
    """

    def __init__(
        self,
        tables: Optional[Mapping[str, Mapping[str, str]]] = None,
        fallback_language: str = DEFAULT_LANGUAGE,
    ):
        source = TRANSLATIONS if tables is None else tables
        self._tables: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {lang: MappingProxyType(dict(phrases)) for lang, phrases in source.items()}
        )
        self.fallback_language = fallback_language

        for lang in self._tables:
            missing = self.missing_in_fallback(lang)
            if missing:
                logger.warning(
                    f"{len(missing)} key(s) in '{lang}' have no "
                    f"'{fallback_language}' phrase: {sorted(missing)[:5]}"
                )

    def lookup(self, language: str, key: str) -> Optional[str]:
        table = self._tables.get(language)
        if table is None:
            return None
        return table.get(key)

    def languages(self) -> list[str]:
        return list(self._tables.keys())

    def keys(self, language: str) -> set[str]:
        return set(self._tables.get(language, {}).keys())

    def missing_in_fallback(self, language: str) -> set[str]:
        return self.keys(language) - self.keys(self.fallback_language)


class KeyResolver:
    """
    Resolves a key to a displayable phrase.

    Namespaced keys go through active language -> fallback language -> raw
    key. Anything else is literal text: returned as-is in the fallback
    language, otherwise looked up in the free-text cache.
    """

    def __init__(
        self,
        dictionary: StaticDictionary,
        cache: Optional["TranslationCache"] = None,
    ):
        self.dictionary = dictionary
        self.cache = cache

    @property
    def default_language(self) -> str:
        return self.dictionary.fallback_language

    def resolve(self, key: str, active_language: str) -> str:
        if not is_translation_key(key):
            return self.resolve_text(key, active_language)

        translated = self.dictionary.lookup(active_language, key)
        if translated:
            return translated

        translated = self.dictionary.lookup(self.default_language, key)
        if translated:
            return translated

        logger.debug(f"Unresolved key '{key}' for '{active_language}'")
        return key

    def resolve_text(self, text: str, active_language: str) -> str:
        """Literal text: cached translation for the active language, else the text itself."""
        if not text or active_language == self.default_language or self.cache is None:
            return text
        cached = self.cache.get(self.default_language, active_language, text)
        return cached if cached is not None else text
