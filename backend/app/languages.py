"""
Report languages offered in the picker.
"""
from __future__ import annotations

SUPPORTED_LANGUAGES = [
    "English",
    "Hindi",
    "Tamil",
    "Telugu",
    "Kannada",
    "Malayalam",
    "Marathi",
    "Bengali",
    "Gujarati",
    "Punjabi",
    "Odia",
    "Urdu",
    "Assamese",
    "Spanish",
    "French",
    "German",
    "Portuguese",
    "Arabic",
    "Chinese",
    "Japanese",
]


def match_languages(query: str | None, languages: list[str] | None = None) -> list[str]:
    """
    Filter the picklist for a typed query.
    Prefix matches come first, then substring matches, both case-insensitive
    and in list order. A blank query returns the full list.
    """
    languages = SUPPORTED_LANGUAGES if languages is None else languages
    needle = (query or "").strip().lower()
    if not needle:
        return list(languages)

    prefix = [lang for lang in languages if lang.lower().startswith(needle)]
    contains = [lang for lang in languages if needle in lang.lower() and lang not in prefix]
    return prefix + contains


def resolve_language(name: str | None, default: str = "English") -> str:
    """Canonical language name for a picker value; unknown values fall back to the default."""
    if not name:
        return default
    for lang in SUPPORTED_LANGUAGES:
        if lang.lower() == name.strip().lower():
            return lang
    return default
