"""Remote translation providers."""

from .base import TranslationProvider
from .factory import get_provider, register_provider
from .llm_client import LLMClient
from .mymemory_client import MyMemoryClient
from .translation_client import RemoteTranslationClient

__all__ = [
    "TranslationProvider",
    "get_provider",
    "register_provider",
    "LLMClient",
    "MyMemoryClient",
    "RemoteTranslationClient",
]
