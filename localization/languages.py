"""
Supported languages, in display order.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    code: str
    name: str
    native_name: str


LANGUAGES: list[Language] = [
    Language("en", "English", "English"),
    Language("hi", "Hindi", "हिंदी"),
    Language("te", "Telugu", "తెలుగు"),
    Language("ta", "Tamil", "தமிழ்"),
    Language("kn", "Kannada", "ಕನ್ನಡ"),
    Language("ml", "Malayalam", "മലയാളം"),
    Language("mr", "Marathi", "मराठी"),
    Language("gu", "Gujarati", "ગુજરાતી"),
    Language("bn", "Bengali", "বাংলা"),
    Language("pa", "Punjabi", "ਪੰਜਾਬੀ"),
    Language("ur", "Urdu", "اردو"),
]

DEFAULT_LANGUAGE = "en"

_BY_CODE: dict[str, Language] = {lang.code: lang for lang in LANGUAGES}


def get_language(code: str) -> Language:
    """Return the language for *code*, or the first entry if unknown."""
    return _BY_CODE.get(code, LANGUAGES[0])


def is_supported(code: str) -> bool:
    return code in _BY_CODE


def supported_codes() -> list[str]:
    return [lang.code for lang in LANGUAGES]
