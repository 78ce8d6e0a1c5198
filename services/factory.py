"""
Factory for creating translation providers by name.
"""

import logging
from typing import Optional, Type

from settings import settings

from .base import TranslationProvider

logger = logging.getLogger("UrbanPulse.ProviderFactory")

# Registry of providers by name
_PROVIDER_REGISTRY: dict[str, Type[TranslationProvider]] = {}


def register_provider(name: str, provider_class: Type[TranslationProvider]) -> None:
    """
    Register a provider class under a name.

    Args:
        name: Provider name as used in settings (e.g., 'mymemory')
        provider_class: Provider class to register
    """
    key = name.lower().strip()
    _PROVIDER_REGISTRY[key] = provider_class
    logger.debug(f"Registered provider '{key}': {provider_class.__name__}")


def get_provider(name: Optional[str] = None) -> TranslationProvider:
    """
    Instantiate the provider registered under *name*.

    Args:
        name: Provider name; defaults to settings.translation_provider

    Raises:
        ValueError: If no provider is registered under that name
    """
    key = (name or settings.translation_provider).lower().strip()

    if key not in _PROVIDER_REGISTRY:
        supported = ", ".join(sorted(_PROVIDER_REGISTRY))
        raise ValueError(f"Unsupported translation provider: {key}. Supported: {supported}")

    provider_class = _PROVIDER_REGISTRY[key]
    logger.info(f"Creating {provider_class.__name__}")
    return provider_class()


def get_provider_names() -> list[str]:
    return sorted(_PROVIDER_REGISTRY.keys())


def _auto_register():
    from .llm_client import LLMClient
    from .mymemory_client import MyMemoryClient

    register_provider(MyMemoryClient.name, MyMemoryClient)
    register_provider(LLMClient.name, LLMClient)


_auto_register()
