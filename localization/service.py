"""
Localization service: current-language state, key lookups, free-text
translation and the live re-translation run on language change.

One instance is created by the application's composition root and passed
to consumers. Static lookups through t() are synchronous and never raise;
free-text translation and language changes are coroutines.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Mapping, Optional

from settings import settings

from .cache import CacheKey, TranslationCache
from .dictionary import KeyResolver, StaticDictionary
from .errors import ConcurrentLanguageChangeError
from .languages import Language, get_language
from .registry import TextRegistry
from .storage import JsonFileStore, KeyValueStore, LanguageStore

if TYPE_CHECKING:
    from services.translation_client import RemoteTranslationClient

logger = logging.getLogger("UrbanPulse.LocalizationService")


class LanguageChangeState(Enum):
    """Phases of change_language()."""
    IDLE = "idle"
    TRANSLATING = "translating"
    PERSISTING = "persisting"
    PUBLISHED = "published"


@dataclass(frozen=True)
class LanguageChangeEvent:
    previous_language: str
    current_language: str
    revision: int
    translations: Mapping[str, str] = field(default_factory=dict)


LanguageChangeListener = Callable[[LanguageChangeEvent], None]


class LocalizationService:
    """
    Owns the current language, the revision counter and the collaborators
    that resolve text for it.

    Consumers either re-render when ``revision`` changes or subscribe with
    on_language_changed().
    """

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        remote: Optional["RemoteTranslationClient"] = None,
        dictionary: Optional[StaticDictionary] = None,
        cache: Optional[TranslationCache] = None,
        registry: Optional[TextRegistry] = None,
        default_language: Optional[str] = None,
        supported_languages: Optional[list[str]] = None,
        max_concurrency: Optional[int] = None,
        clock: Callable[[], float] = time.time,
    ):
        self.default_language: str = default_language or settings.default_language
        self.supported_languages: list[str] = (
            supported_languages or settings.supported_language_list
        )
        self.max_concurrency: int = max_concurrency or settings.max_concurrent_translations

        store = store if store is not None else JsonFileStore(settings.storage_path)
        self.language_store = LanguageStore(
            store,
            storage_key=settings.language_storage_key,
            default_language=self.default_language,
            supported=self.supported_languages,
        )
        self.cache = cache if cache is not None else TranslationCache(
            store,
            storage_key=settings.translation_cache_key,
            ttl_seconds=settings.cache_ttl_seconds,
            clock=clock,
        )
        self.dictionary = dictionary or StaticDictionary(
            fallback_language=self.default_language
        )
        self.resolver = KeyResolver(self.dictionary, self.cache)
        self.registry = registry if registry is not None else TextRegistry(clock=clock)
        self._remote: Optional["RemoteTranslationClient"] = remote

        self._current_language: str = self.default_language
        self._is_loading: bool = True
        self._revision: int = 0
        self._state = LanguageChangeState.IDLE
        self._translating = False
        self._change_lock = asyncio.Lock()
        self._last_translations: Mapping[str, str] = MappingProxyType({})
        self._listeners: list[LanguageChangeListener] = []
        self._inflight: dict[CacheKey, asyncio.Task] = {}

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def current_language(self) -> str:
        return self._current_language

    @property
    def language(self) -> Language:
        return get_language(self._current_language)

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def state(self) -> LanguageChangeState:
        return self._state

    @property
    def is_translating(self) -> bool:
        return self._translating

    @property
    def last_translations(self) -> Mapping[str, str]:
        """key -> text produced by the most recent language change."""
        return self._last_translations

    @property
    def remote(self) -> "RemoteTranslationClient":
        """Lazy-load the remote client."""
        if self._remote is None:
            from services.translation_client import RemoteTranslationClient

            self._remote = RemoteTranslationClient(
                default_language=self.default_language,
                supported=self.supported_languages,
            )
        return self._remote

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def load(self) -> str:
        """Restore the saved language and translation cache."""
        try:
            self._current_language = self.language_store.load()
            self.cache.load()
        finally:
            self._is_loading = False
        logger.info(f"Localization ready, language '{self._current_language}'")
        return self._current_language

    async def aclose(self) -> None:
        for task in list(self._inflight.values()):
            task.cancel()
        if self._remote is not None:
            await self._remote.aclose()

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def on_language_changed(self, callback: LanguageChangeListener) -> Callable[[], None]:
        """Call *callback* after every published language change. Returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self, event: LanguageChangeEvent) -> None:
        for callback in list(self._listeners):
            try:
                callback(event)
            except Exception:
                logger.exception(f"Language change listener {callback!r} failed")

    # ------------------------------------------------------------------
    # Static lookups
    # ------------------------------------------------------------------

    def t(self, key: str, fallback_text: Optional[str] = None) -> str:
        """Resolve *key* for the current language. Always returns a string."""
        if not key:
            # Bare fallback text is always literal, even when it contains the key separator
            text = fallback_text or ""
            resolve = self.resolver.resolve_text
        else:
            text = key
            resolve = self.resolver.resolve

        try:
            if key and fallback_text:
                self.registry.register(key, fallback_text)
            return resolve(text, self._current_language)
        except Exception:
            logger.exception(f"Lookup failed for '{text}'")
            return text

    # ------------------------------------------------------------------
    # Free-text translation
    # ------------------------------------------------------------------

    async def translate_free_text(
        self,
        text: str,
        source_lang: Optional[str] = None,
        target_lang: Optional[str] = None,
    ) -> str:
        """
        Translate arbitrary text, using the cache when possible.

        A missing source language is detected first; a missing target means
        the current language. Provider failures return *text* unchanged.
        """
        if not text or not text.strip():
            return text

        target = target_lang or self._current_language
        if source_lang == target:
            return text

        source = source_lang or await self.detect_language(text)
        if source == target:
            return text

        cached = self.cache.get(source, target, text)
        if cached is not None:
            logger.debug(f"Cache hit {source}->{target}: {text[:30]}")
            return cached

        key = (source, target, text)
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._fetch_and_store(text, source, target))
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))

        # The fetch keeps running and still fills the cache if our caller gives up.
        return await asyncio.shield(task)

    async def _fetch_and_store(self, text: str, source: str, target: str) -> str:
        translated, ok = await self.remote.try_translate(text, source, target)
        if ok and translated != text:
            await self.cache.aput(source, target, text, translated)
        return translated

    async def translate_batch(
        self,
        texts: list[str],
        source_lang: str = "en",
        target_lang: Optional[str] = None,
    ) -> list[str]:
        """Translate several texts concurrently, preserving order."""
        if not texts:
            return texts
        return list(await asyncio.gather(
            *(self.translate_free_text(text, source_lang, target_lang) for text in texts)
        ))

    async def detect_language(self, text: str) -> str:
        return await self.remote.detect(text)

    def clear_cache(self) -> None:
        self.cache.clear()

    # ------------------------------------------------------------------
    # Language change
    # ------------------------------------------------------------------

    async def change_language(self, new_language: str) -> None:
        """
        Switch the current language.

        Re-translates every registered text, persists the choice, bumps the
        revision and notifies listeners. Calls made while a change is running
        wait for it to finish. A call for the current language does nothing.

        Raises:
            ValueError: If *new_language* is not a supported code
        """
        if new_language not in self.supported_languages:
            raise ValueError(f"Unsupported language: {new_language}")
        if new_language == self._current_language:
            return

        async with self._change_lock:
            if new_language == self._current_language:
                return
            if self._translating:
                raise ConcurrentLanguageChangeError(
                    f"Language change to '{new_language}' overlapped a running change"
                )

            self._translating = True
            previous = self._current_language
            try:
                self._state = LanguageChangeState.TRANSLATING
                translations = await self._retranslate_registered(previous, new_language)

                self._state = LanguageChangeState.PERSISTING
                self._current_language = new_language
                if not self.language_store.save(new_language):
                    logger.warning(f"Language '{new_language}' active for this session only")

                self._revision += 1
                self._last_translations = MappingProxyType(translations)
                self._state = LanguageChangeState.PUBLISHED
            finally:
                self._translating = False
                if self._state is not LanguageChangeState.PUBLISHED:
                    self._state = LanguageChangeState.IDLE

        logger.info(
            f"Language changed {previous} -> {new_language} "
            f"({len(translations)} texts, revision {self._revision})"
        )
        self._notify(LanguageChangeEvent(
            previous_language=previous,
            current_language=new_language,
            revision=self._revision,
            translations=self._last_translations,
        ))

    async def _retranslate_registered(self, source: str, target: str) -> dict[str, str]:
        visible = self.registry.snapshot()
        if not visible:
            return {}

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def retranslate(text: str) -> str:
            async with semaphore:
                return await self.translate_free_text(text, source, target)

        results = await asyncio.gather(
            *(retranslate(text) for _, text in visible),
            return_exceptions=True,
        )

        translations: dict[str, str] = {}
        for (key, text), result in zip(visible, results):
            if isinstance(result, BaseException):
                if isinstance(result, asyncio.CancelledError):
                    raise result
                logger.warning(f"Re-translation of '{key}' failed: {result}")
                translations[key] = text
            else:
                translations[key] = result
        return translations
