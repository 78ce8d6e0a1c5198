"""
Error types raised inside the localization layer.

None of these reach UI callers except ConcurrentLanguageChangeError, which
signals a programming error.
"""


class LocalizationError(Exception):
    pass


class PersistenceError(LocalizationError):
    """A key-value store read or write failed."""


class TranslationProviderError(LocalizationError):
    """The remote provider returned a non-success or malformed response."""


class ConcurrentLanguageChangeError(LocalizationError, RuntimeError):
    """A re-translation pass started while another one was still running."""
