# src/mica_ixbrl/domain/services/value_extraction.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Best-effort value extraction from free-text field content.

Purpose:
    Isolate machine values (numbers, currencies, country codes) from the
    narrative text that upstream extraction places in the raw-field bag, and
    decide whether a lexical value is numeric enough for ``ix:nonFraction``.

Layer:
    domain/services

Notes:
    - Extraction never guesses: when no candidate survives, callers get an
      empty string (numbers) or ``None`` (countries, currencies) and fall
      back to plain-text representation.
    - ``is_value_numeric`` is the single arbiter of numeric vs. text tagging.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Final

from mica_ixbrl.domain.taxonomy.enumerations import MEMBER_STATE

# --------------------------------------------------------------------------- #
# Numeric normalization                                                       #
# --------------------------------------------------------------------------- #

_NUMERIC_NOISE_RE: Final = re.compile(r"[,%$€£\s]")
_FINITE_NUMBER_RE: Final = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def is_value_numeric(value: str | None) -> bool:
    """Return True when ``value`` parses as a finite number after normalization.

    Commas, currency symbols, percent signs and whitespace are stripped, then a
    single trailing period is dropped (``"7."`` is numeric, ``"7 days."`` is
    not).

    Args:
        value: Lexical value to inspect.

    Returns:
        True iff the normalized value is a finite decimal number.
    """
    if not value or not value.strip():
        return False
    cleaned = _NUMERIC_NOISE_RE.sub("", value)
    if cleaned.endswith("."):
        cleaned = cleaned[:-1]
    if not cleaned:
        return False
    return bool(_FINITE_NUMBER_RE.match(cleaned))


def split_numeric_sign(value: str) -> tuple[str, bool]:
    """Return unsigned display digits for a numeric ``value`` and whether it is negative.

    Exponent notation is expanded to plain digits. Values without a sign or an
    exponent come back stripped but otherwise as written, so grouping
    separators survive. ``value`` must satisfy ``is_value_numeric``.
    """
    text = value.strip()
    cleaned = _NUMERIC_NOISE_RE.sub("", text)
    if cleaned.endswith("."):
        cleaned = cleaned[:-1]
    if not cleaned.startswith(("+", "-")) and "e" not in cleaned.lower():
        return text, False
    number = Decimal(cleaned)
    return format(abs(number), "f"), number < 0


# --------------------------------------------------------------------------- #
# Number extraction                                                           #
# --------------------------------------------------------------------------- #

_NUMBER: Final[str] = r"\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?"
_CURRENCY_TOKEN: Final[str] = r"(?:[$€£]|\b(?:EUR|USD|GBP|CHF)\b)"
_UNIT_TOKEN: Final[str] = r"(?:[$€£%]|\b(?:EUR|USD|GBP|CHF)\b)"

_CURRENCY_BEFORE_RE: Final = re.compile(
    rf"{_CURRENCY_TOKEN}\s?(?P<num>{_NUMBER})(?![\d])"
)
_UNIT_AFTER_RE: Final = re.compile(
    rf"(?<![\w.,])(?P<num>{_NUMBER})\s?{_UNIT_TOKEN}"
)
_STANDALONE_NUMBER_RE: Final = re.compile(rf"(?<![\w.,])(?P<num>{_NUMBER})(?![\d])")

_MONTHS: Final[str] = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?"
    r"|Aug(?:ust)?|Sep(?:tember)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
_DATE_TIME_RES: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"\b\d{4}-\d{1,2}-\d{1,2}(?:T\d{1,2}:\d{2}(?::\d{2})?(?:Z|[+-]\d{2}:?\d{2})?)?"),
    re.compile(r"\b\d{1,2}[./-]\d{1,2}[./-]\d{2,4}\b"),
    re.compile(r"\b\d{1,2}:\d{2}(?::\d{2})?\s?(?:[AaPp][Mm])?"),
    re.compile(rf"\b\d{{1,2}}(?:st|nd|rd|th)?\s+{_MONTHS}\.?,?\s+\d{{4}}\b", re.IGNORECASE),
    re.compile(rf"\b{_MONTHS}\.?\s+\d{{1,2}}(?:st|nd|rd|th)?,?\s+\d{{4}}\b", re.IGNORECASE),
    re.compile(r"\b[Qq][1-4]\s+\d{4}\b"),
)
_CURRENCY_PUNCTUATION_RE: Final = re.compile(r"[$€£¥]")

_YEAR_MIN: Final[int] = 1900
_YEAR_MAX: Final[int] = 2100


def _looks_like_year(token: str) -> bool:
    """Return True for bare 4-digit tokens in the calendar-year range."""
    return len(token) == 4 and token.isdigit() and _YEAR_MIN <= int(token) <= _YEAR_MAX


def extract_numeric_value(text: str | None) -> str:
    """Isolate a numeric token from free text.

    Strategy:
        1. Prefer a number adjacent to a currency or unit symbol
           (``"EUR 1,500.00"``, ``"81%"``).
        2. Otherwise remove date/time-like substrings and currency
           punctuation and take the first remaining number, skipping bare
           4-digit tokens in the calendar-year range.

    Args:
        text: Free-text field content.

    Returns:
        The numeric token as written (thousands separators kept), or ``""``
        when no number can be isolated.
    """
    if not text or not text.strip():
        return ""
    candidate = text.strip()
    if is_value_numeric(candidate):
        cleaned = re.sub(r"[$€£%\s]", "", candidate)
        return cleaned[:-1] if cleaned.endswith(".") else cleaned

    for pattern in (_CURRENCY_BEFORE_RE, _UNIT_AFTER_RE):
        match = pattern.search(candidate)
        if match:
            return match.group("num")

    stripped = candidate
    for pattern in _DATE_TIME_RES:
        stripped = pattern.sub(" ", stripped)
    stripped = _CURRENCY_PUNCTUATION_RE.sub(" ", stripped)

    for match in _STANDALONE_NUMBER_RE.finditer(stripped):
        token = match.group("num")
        if _looks_like_year(token):
            continue
        return token
    return ""


# --------------------------------------------------------------------------- #
# Currency detection                                                          #
# --------------------------------------------------------------------------- #

_CURRENCY_CODE_RE: Final = re.compile(r"\b(EUR|USD|GBP|CHF)\b")
_CURRENCY_SYMBOLS: Final = {"€": "EUR", "$": "USD", "£": "GBP"}


def detect_currency(text: str | None) -> str | None:
    """Return the ISO 4217 code named or symbolized in ``text``, if any."""
    if not text:
        return None
    match = _CURRENCY_CODE_RE.search(text)
    if match:
        return match.group(1)
    for symbol, code in _CURRENCY_SYMBOLS.items():
        if symbol in text:
            return code
    return None


# --------------------------------------------------------------------------- #
# Country extraction                                                          #
# --------------------------------------------------------------------------- #

_COUNTRY_ALIASES: Final[dict[str, str]] = {
    "czech republic": "CZ",
    "the netherlands": "NL",
    "holland": "NL",
    "deutschland": "DE",
    "österreich": "AT",
    "osterreich": "AT",
    "españa": "ES",
    "espana": "ES",
    "italia": "IT",
    "hellas": "GR",
    "éire": "IE",
    "eire": "IE",
}
_POSTAL_PREFIX_RE: Final = re.compile(r"\b([A-Z]{2})-\d{3,6}\b")


def _country_names() -> dict[str, str]:
    """Return lower-cased member-state names and aliases mapped to codes."""
    names = {option.label.lower(): code for code, option in MEMBER_STATE.items()}
    names.update(_COUNTRY_ALIASES)
    return names


_COUNTRY_NAME_RE: Final = re.compile(
    r"\b("
    + "|".join(re.escape(n) for n in sorted(_country_names(), key=len, reverse=True))
    + r")\b",
    re.IGNORECASE,
)


def extract_country_code(text: str | None) -> str | None:
    """Extract an EU member-state code from free-text address content.

    Candidates, in order of preference:
        1. The last member-state name (or common alias) in the text.
        2. A postal prefix such as ``"DE-10115"``.
        3. A comma-separated address segment consisting solely of a code.

    Args:
        text: Address or country text.

    Returns:
        Two-letter member-state code, or ``None`` when nothing matches.
    """
    if not text or not text.strip():
        return None

    names = _country_names()
    matches = _COUNTRY_NAME_RE.findall(text)
    if matches:
        return names[matches[-1].lower()]

    postal = _POSTAL_PREFIX_RE.search(text)
    if postal and postal.group(1) in MEMBER_STATE:
        return postal.group(1)

    for segment in reversed(re.split(r"[,\n;]", text)):
        token = segment.strip().rstrip(".")
        if len(token) == 2 and token.upper() == token and token in MEMBER_STATE:
            return token
    return None


__all__ = [
    "detect_currency",
    "extract_country_code",
    "extract_numeric_value",
    "is_value_numeric",
    "split_numeric_sign",
]
