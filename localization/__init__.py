"""Language state, static phrase lookup and free-text translation caching."""

from .cache import CacheEntry, TranslationCache
from .dictionary import KeyResolver, StaticDictionary, is_translation_key
from .errors import (
    ConcurrentLanguageChangeError,
    LocalizationError,
    PersistenceError,
    TranslationProviderError,
)
from .languages import DEFAULT_LANGUAGE, LANGUAGES, Language, get_language
from .registry import RegisteredText, TextRegistry
from .service import LanguageChangeEvent, LanguageChangeState, LocalizationService
from .storage import JsonFileStore, KeyValueStore, LanguageStore, MemoryStore

__all__ = [
    "CacheEntry",
    "TranslationCache",
    "KeyResolver",
    "StaticDictionary",
    "is_translation_key",
    "ConcurrentLanguageChangeError",
    "LocalizationError",
    "PersistenceError",
    "TranslationProviderError",
    "DEFAULT_LANGUAGE",
    "LANGUAGES",
    "Language",
    "get_language",
    "RegisteredText",
    "TextRegistry",
    "LanguageChangeEvent",
    "LanguageChangeState",
    "LocalizationService",
    "JsonFileStore",
    "KeyValueStore",
    "LanguageStore",
    "MemoryStore",
]
