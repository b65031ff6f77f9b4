# src/mica_ixbrl/domain/services/lei.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Legal Entity Identifier (ISO 17442) format and checksum helpers.

Purpose:
    Provide the structural checks shared by the context builder (which
    refuses to generate without a parseable primary LEI) and the identifier
    validator.

Layer:
    domain/services

Notes:
    - An LEI is 18 alphanumeric characters followed by 2 check digits.
    - The checksum follows ISO 7064 MOD 97-10, as for IBANs: letters map to
      A=10 .. Z=35, the resulting digit string is reduced modulo 97 one digit
      at a time, and the identifier is valid iff the remainder equals 1.
"""

from __future__ import annotations

import re
from typing import Final

LEI_SCHEME: Final[str] = "http://standards.iso.org/iso/17442"
LEI_LENGTH: Final[int] = 20

_LEI_FORMAT_RE: Final[re.Pattern[str]] = re.compile(r"^[A-Z0-9]{18}[0-9]{2}$")


def normalize_lei(value: str | None) -> str:
    """Upper-case an identifier and strip all whitespace from it."""
    if not value:
        return ""
    return re.sub(r"\s+", "", value).upper()


def is_valid_lei_format(lei: str) -> bool:
    """Return True when ``lei`` has the 18 + 2 character structure."""
    return bool(_LEI_FORMAT_RE.match(lei))


def lei_mod97(lei: str) -> int:
    """Compute the running MOD 97 remainder over the letter-expanded identifier.

    Args:
        lei: Upper-case alphanumeric identifier.

    Returns:
        Remainder in ``0..96``.
    """
    remainder = 0
    for ch in lei:
        digits = str(int(ch, 36))
        for digit in digits:
            remainder = (remainder * 10 + int(digit)) % 97
    return remainder


def is_valid_lei_checksum(lei: str) -> bool:
    """Return True when a well-formed identifier carries correct check digits."""
    if not is_valid_lei_format(lei):
        return False
    return lei_mod97(lei) == 1


def is_valid_lei(value: str | None) -> bool:
    """Return True when ``value`` normalizes to a format- and checksum-valid LEI."""
    return is_valid_lei_checksum(normalize_lei(value))


__all__ = [
    "LEI_LENGTH",
    "LEI_SCHEME",
    "is_valid_lei",
    "is_valid_lei_checksum",
    "is_valid_lei_format",
    "lei_mod97",
    "normalize_lei",
]
