"""
Base interface for remote translation providers.
"""

from abc import ABC, abstractmethod


class TranslationProvider(ABC):
    """
    Abstract base class for remote translation backends.

    Providers raise on failure (TranslationProviderError for bad responses,
    transport exceptions otherwise). The failure policy that turns errors
    into pass-through results lives in RemoteTranslationClient, not here.
    """

    name: str = "base"

    @abstractmethod
    async def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """
        Translate *text* from *source_lang* to *target_lang*.

        Raises:
            TranslationProviderError: On a non-success or malformed response
        """
        pass

    @abstractmethod
    async def detect(self, text: str) -> str:
        """
        Detect the language of *text*.

        Returns:
            A language code as reported by the backend (not normalised)
        """
        pass

    async def aclose(self) -> None:
        """Release network resources. Default implementation does nothing."""
        return None
