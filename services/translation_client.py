"""
Remote translation with a pass-through failure policy.
"""

import logging
from typing import Optional

from localization.languages import DEFAULT_LANGUAGE, supported_codes

from .base import TranslationProvider
from .factory import get_provider

logger = logging.getLogger("UrbanPulse.RemoteTranslationClient")


class RemoteTranslationClient:
    """
    Wraps a TranslationProvider so that callers never see provider errors.

    translate() returns the original text on any failure and detect()
    returns the default language. Cancellation is not a failure and still
    propagates.
    """

    def __init__(
        self,
        provider: Optional[TranslationProvider] = None,
        default_language: str = DEFAULT_LANGUAGE,
        supported: Optional[list[str]] = None,
    ):
        self._provider: Optional[TranslationProvider] = provider
        self.default_language = default_language
        self.supported = supported or supported_codes()

    @property
    def provider(self) -> TranslationProvider:
        """Lazy-load the configured provider."""
        if self._provider is None:
            self._provider = get_provider()
        return self._provider

    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        translated, _ = await self.try_translate(text, source_lang, target_lang)
        return translated

    async def try_translate(
        self, text: str, source_lang: str, target_lang: str
    ) -> tuple[str, bool]:
        """Like translate(), but also reports whether the provider succeeded."""
        try:
            return await self.provider.translate(text, source_lang, target_lang), True
        except Exception as e:
            logger.warning(
                f"Translation {source_lang}->{target_lang} failed, keeping source text: {e}"
            )
            return text, False

    async def detect(self, text: str) -> str:
        if not text or not text.strip():
            return self.default_language
        try:
            detected = await self.provider.detect(text)
        except Exception as e:
            logger.warning(f"Language detection failed, assuming '{self.default_language}': {e}")
            return self.default_language
        return self.normalise_language(detected)

    def normalise_language(self, code: str) -> str:
        """Map 'en-GB' style codes to a supported base code, else the default."""
        base = code.strip().lower().replace("_", "-").split("-")[0]
        if base in self.supported:
            return base
        logger.info(f"Detected unsupported language '{code}', using '{self.default_language}'")
        return self.default_language

    async def aclose(self) -> None:
        if self._provider is not None:
            await self._provider.aclose()
