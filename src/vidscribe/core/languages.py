"""Languages offered for translation.

The generation call auto-detects the spoken language; its outputs are
stored under the ``original`` label. Translation always produces the
fixed set of target languages below.
"""

from __future__ import annotations

ORIGINAL = "original"

TARGET_LANGUAGES: dict[str, str] = {
    "es": "spanish",
    "de": "german",
    "it": "italian",
    "fr": "french",
    "nl": "dutch",
}


def is_valid_language(code: str) -> bool:
    """Check if a code names the original output or a translation target."""
    return code == ORIGINAL or code in TARGET_LANGUAGES


def language_name(code: str) -> str:
    """Get the full language name for a code, or the code itself if unknown."""
    return TARGET_LANGUAGES.get(code, code)


def validate_language(code: str) -> str:
    """Validate a language label and return it, raising ValueError if invalid."""
    if not is_valid_language(code):
        choices = ", ".join([ORIGINAL, *TARGET_LANGUAGES])
        raise ValueError(f"Unsupported language: '{code}'. Choose one of: {choices}.")
    return code
