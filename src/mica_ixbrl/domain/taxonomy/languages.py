# src/mica_ixbrl/domain/taxonomy/languages.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Document languages accepted for MiCA white papers.

White papers are drawn up in an official language of the home or host
Member State, or in a language customary in international finance.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Final

LANGUAGE_NAMES: Final = MappingProxyType(
    {
        "bg": "Bulgarian",
        "cs": "Czech",
        "da": "Danish",
        "de": "German",
        "el": "Greek",
        "en": "English",
        "es": "Spanish",
        "et": "Estonian",
        "fi": "Finnish",
        "fr": "French",
        "ga": "Irish",
        "hr": "Croatian",
        "hu": "Hungarian",
        "it": "Italian",
        "lt": "Lithuanian",
        "lv": "Latvian",
        "mt": "Maltese",
        "nl": "Dutch",
        "pl": "Polish",
        "pt": "Portuguese",
        "ro": "Romanian",
        "sk": "Slovak",
        "sl": "Slovenian",
        "sv": "Swedish",
    }
)

SUPPORTED_LANGUAGES: Final[tuple[str, ...]] = tuple(LANGUAGE_NAMES)
DEFAULT_LANGUAGE: Final[str] = "en"


def is_supported_language(code: str) -> bool:
    """Return True when ``code`` is one of the 24 official EU languages."""
    return code in LANGUAGE_NAMES


def language_name(code: str) -> str:
    """Return the English name of ``code``, or the code itself when unknown."""
    return LANGUAGE_NAMES.get(code, code)


__all__ = [
    "DEFAULT_LANGUAGE",
    "LANGUAGE_NAMES",
    "SUPPORTED_LANGUAGES",
    "is_supported_language",
    "language_name",
]
