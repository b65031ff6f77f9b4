# src/mica_ixbrl/domain/enums/mica.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""MiCA taxonomy and validation enumerations.

Purpose:
    Provide the closed vocabularies shared by the taxonomy catalog, the fact
    model builder and the validation engines.

Layer:
    domain/enums
"""

from __future__ import annotations

from enum import Enum


class TokenType(str, Enum):
    """MiCA crypto-asset white-paper category."""

    OTHR = "OTHR"  # Other crypto-assets (Title II).
    ART = "ART"  # Asset-referenced tokens (Title III).
    EMT = "EMT"  # E-money tokens (Title IV).


class XBRLDataType(str, Enum):
    """Data type of a taxonomy field, as it drives tagging."""

    STRING = "string"
    BOOLEAN = "boolean"
    DATE = "date"
    MONETARY = "monetary"
    DECIMAL = "decimal"
    INTEGER = "integer"
    PERCENT = "percent"
    TEXT_BLOCK = "textblock"
    ENUMERATION = "enumeration"

    @property
    def is_numeric(self) -> bool:
        """Return True for types reported through ``ix:nonFraction``."""
        return self in _NUMERIC_TYPES


_NUMERIC_TYPES = frozenset(
    {
        XBRLDataType.MONETARY,
        XBRLDataType.DECIMAL,
        XBRLDataType.INTEGER,
        XBRLDataType.PERCENT,
    }
)


class PeriodType(str, Enum):
    """XBRL period type of an element."""

    INSTANT = "instant"
    DURATION = "duration"


class Severity(str, Enum):
    """Severity of a validation finding."""

    ERROR = "ERROR"
    WARNING = "WARNING"


class ValidationCategory(str, Enum):
    """Category a validation finding belongs to."""

    LEI = "lei"
    EXISTENCE = "existence"
    VALUE = "value"
    DUPLICATE = "duplicate"


class ManagementBodyRole(str, Enum):
    """Entity whose management body a member belongs to."""

    OFFEROR = "offeror"
    ISSUER = "issuer"
    OPERATOR = "operator"


__all__ = [
    "ManagementBodyRole",
    "PeriodType",
    "Severity",
    "TokenType",
    "ValidationCategory",
    "XBRLDataType",
]
