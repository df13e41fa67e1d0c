"""Supported target languages.

The ten languages mandated by NYC's local language access law. The table is
fixed; it is not discovered from the provider backends.
"""

from dataclasses import dataclass
from typing import Dict, List

from .errors import InvalidInputError


@dataclass(frozen=True)
class SupportedLanguage:
    """A target language with its speaking rate."""

    code: str
    name: str
    words_per_minute: int


DEFAULT_WORDS_PER_MINUTE = 175

SUPPORTED_LANGUAGES: Dict[str, SupportedLanguage] = {
    lang.code: lang
    for lang in (
        SupportedLanguage("es", "Spanish", 180),
        SupportedLanguage("zh", "Chinese (Mandarin)", 160),
        SupportedLanguage("ru", "Russian", 184),
        SupportedLanguage("bn", "Bengali", 170),
        SupportedLanguage("ht", "Haitian Creole", 175),
        SupportedLanguage("ko", "Korean", 170),
        SupportedLanguage("ar", "Arabic", 165),
        SupportedLanguage("ur", "Urdu", 170),
        SupportedLanguage("fr", "French", 195),
        SupportedLanguage("pl", "Polish", 190),
    )
}


def get_supported_languages() -> List[Dict[str, str]]:
    """Return the supported languages as ``{code, name}`` pairs."""
    return [{"code": lang.code, "name": lang.name} for lang in SUPPORTED_LANGUAGES.values()]


def resolve_language(code: str) -> SupportedLanguage:
    """Look up a target language by code.

    Raises:
        InvalidInputError: If the code is not one of the supported languages
    """
    language = SUPPORTED_LANGUAGES.get((code or "").strip().lower())
    if language is None:
        raise InvalidInputError(
            f"Unsupported target language '{code}'. "
            f"Supported: {', '.join(SUPPORTED_LANGUAGES)}"
        )
    return language
