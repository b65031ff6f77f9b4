# src/mica_ixbrl/domain/entities/taxonomy.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Taxonomy catalog value objects.

Purpose:
    Describe the shape of the static MiCA taxonomy catalog: field
    definitions, sections and enumeration options.

Layer:
    domain/entities
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from mica_ixbrl.domain.enums.mica import PeriodType, XBRLDataType

_SUB_FIELD_RE = re.compile(r"^(?P<parent>[A-Z]+\.\d+)[a-z]$")


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    """A single white-paper field and its taxonomy element.

    Attributes:
        number:
            Field number as printed in the white-paper table (``"A.1"``,
            ``"A.3a"``, ``"01"``).
        label:
            Human-readable field label.
        element:
            Target element QName, e.g. ``"mica:NameOfOtherTokenOfferor"``.
        data_type:
            Data type governing numeric vs. text tagging.
        period_type:
            Whether facts use the instant or the duration context.
        section:
            Section key (``"summary"``, ``"A"`` .. ``"J"``, ``"S"``).
        is_text_block:
            Rendered as block text with the block-format attribute pair.
        is_hidden:
            Enumeration field whose machine value lives in ``ix:hidden``.
        is_dimensional:
            Reported per repeated sub-record against a per-index context,
            never as a plain section row.
    """

    number: str
    label: str
    element: str
    data_type: XBRLDataType
    section: str
    period_type: PeriodType = PeriodType.DURATION
    is_text_block: bool = False
    is_hidden: bool = False
    is_dimensional: bool = False

    @property
    def parent_number(self) -> str | None:
        """Return the parent field number for lettered sub-fields (``A.3a`` -> ``A.3``)."""
        match = _SUB_FIELD_RE.match(self.number)
        return match.group("parent") if match else None


@dataclass(frozen=True, slots=True)
class SectionDefinition:
    """A white-paper section in canonical order."""

    key: str
    title: str
    anchor: str


@dataclass(frozen=True, slots=True)
class EnumerationOption:
    """One allowed value of an enumeration element.

    Attributes:
        key: Stable value key (``"EUR"``, ``"publicOffering"``, ``"DE"``).
        label: Human-readable label shown in the document.
        uri: Taxonomy member URI stored in the hidden fact.
    """

    key: str
    label: str
    uri: str


__all__ = ["EnumerationOption", "FieldDefinition", "SectionDefinition"]
