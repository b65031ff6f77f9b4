# src/mica_ixbrl/domain/entities/ixbrl_document.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Inline XBRL fact-model value objects.

Purpose:
    Provide the immutable structures produced by the fact model builder and
    consumed by the document assembler, the duplicate detector and the
    validation orchestrator:

        * Periods (instant vs duration).
        * Contexts (entity + period + optional typed member).
        * Units.
        * Fact values keyed by element, and flat fact records.
        * Dimensional blocks for repeated sub-records.
        * Hidden-fact entries for enumerations.

Design:
    - All types are frozen dataclasses.
    - Invariants are enforced in __post_init__ hooks.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date

# --------------------------------------------------------------------------- #
# Contexts and units                                                          #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class XBRLPeriod:
    """XBRL reporting period.

    Attributes:
        instant_date: Date of an instant period.
        start_date: Start of a duration period.
        end_date: End of a duration period.
    """

    instant_date: date | None = None
    start_date: date | None = None
    end_date: date | None = None

    def __post_init__(self) -> None:
        """Enforce that a period is either an instant or a duration."""
        if self.instant_date is not None:
            if self.start_date is not None or self.end_date is not None:
                raise ValueError("An instant period must not carry start/end dates.")
        elif self.start_date is None or self.end_date is None:
            raise ValueError("A duration period requires both start_date and end_date.")

    @property
    def is_instant(self) -> bool:
        """Return True for instant periods."""
        return self.instant_date is not None


@dataclass(frozen=True, slots=True)
class XBRLTypedMember:
    """Typed dimension member narrowing a context to one sub-record.

    Attributes:
        dimension: Dimension QName, e.g. ``"mica:OfferorManagementBodyMemberDimension"``.
        value: Typed member value, e.g. ``"member_0"`` or an LEI.
    """

    dimension: str
    value: str


@dataclass(frozen=True, slots=True)
class XBRLContext:
    """XBRL context.

    Attributes:
        id: Context id referenced by facts.
        entity_identifier: Legal-entity identifier of the reporting entity.
        scheme: Identifier scheme URI.
        period: Reporting period.
        typed_member: Optional typed dimension member in the segment.
    """

    id: str
    entity_identifier: str
    scheme: str
    period: XBRLPeriod
    typed_member: XBRLTypedMember | None = None

    def __post_init__(self) -> None:
        """Validate that the context id is non-empty."""
        if not self.id.strip():
            raise ValueError("XBRLContext.id must not be empty.")


@dataclass(frozen=True, slots=True)
class XBRLUnit:
    """XBRL unit (id and a single measure QName)."""

    id: str
    measure: str

    def __post_init__(self) -> None:
        """Validate that id and measure are non-empty."""
        if not self.id.strip() or not self.measure.strip():
            raise ValueError("XBRLUnit id and measure must not be empty.")


# --------------------------------------------------------------------------- #
# Facts                                                                       #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class FactValue:
    """Value assigned to one taxonomy element during a generation pass.

    Attributes:
        value:
            Lexical value as it will be shown in the document.
        context_ref:
            Id of the context the fact is reported against.
        unit_ref:
            Unit id for numeric facts.
        decimals:
            Decimal precision for numeric facts.
        taxonomy_uri:
            Resolved enumeration member URI; when set the fact is emitted in
            the hidden block and linked from visible text.
        display_label:
            Human-readable override shown instead of ``value``.
    """

    value: str
    context_ref: str
    unit_ref: str | None = None
    decimals: int | None = None
    taxonomy_uri: str | None = None
    display_label: str | None = None


@dataclass(frozen=True, slots=True)
class FactRecord:
    """Flat view of one emitted fact, used for duplicate detection.

    Attributes:
        name: Element QName.
        context_ref: Context id.
        unit_ref: Unit id, or None for non-numeric facts.
        value: Lexical value.
        decimals: Decimal precision, if numeric.
    """

    name: str
    context_ref: str
    unit_ref: str | None
    value: str
    decimals: int | None = None

    @property
    def identity_key(self) -> tuple[str, str, str]:
        """Return the (element, context, unit) identity key."""
        return (self.name, self.context_ref, self.unit_ref or "")


@dataclass(frozen=True, slots=True)
class HiddenFactEntry:
    """Enumeration fact placed in ``ix:hidden``.

    Attributes:
        fact_id: Id linked from the visible ``-ix-hidden`` style.
        name: Element QName.
        context_ref: Context id.
        taxonomy_uri: Enumeration member URI (the machine value).
        label: Human-readable label shown in the body.
    """

    fact_id: str
    name: str
    context_ref: str
    taxonomy_uri: str
    label: str


# --------------------------------------------------------------------------- #
# Dimensional sub-records                                                     #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class DimensionalRow:
    """One repeated sub-record rendered against its own context.

    Attributes:
        index: Zero-based position of the sub-record.
        context_ref: Per-index dimensional context id.
        cells: Fact value per element, in column order; ``None`` for empty cells.
    """

    index: int
    context_ref: str
    cells: tuple[tuple[str, FactValue | None], ...]


@dataclass(frozen=True, slots=True)
class DimensionalBlock:
    """Repeating block of sub-records (management body or persons involved).

    Attributes:
        key: Stable block key, e.g. ``"offeror_management"``.
        section: Section the block is rendered under.
        title: Block heading.
        field_numbers: Catalog field numbers of the columns.
        rows: Sub-record rows.
    """

    key: str
    section: str
    title: str
    field_numbers: tuple[str, ...]
    rows: tuple[DimensionalRow, ...]


# --------------------------------------------------------------------------- #
# Fact model                                                                  #
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class FactModel:
    """Output of one fact model build.

    Attributes:
        contexts: Contexts by id, in creation order.
        units: Units by id.
        facts: Non-dimensional fact values keyed by element QName.
        dimensional_blocks: Repeated sub-record blocks.
        default_currency: Currency used for monetary facts without their own.
    """

    contexts: Mapping[str, XBRLContext]
    units: Mapping[str, XBRLUnit]
    facts: Mapping[str, FactValue]
    dimensional_blocks: tuple[DimensionalBlock, ...] = field(default=())
    default_currency: str = "EUR"

    def records(self) -> list[FactRecord]:
        """Return every fact the document will carry as flat records."""
        out = [
            FactRecord(
                name=name,
                context_ref=fv.context_ref,
                unit_ref=fv.unit_ref,
                value=fv.value,
                decimals=fv.decimals,
            )
            for name, fv in self.facts.items()
        ]
        for block in self.dimensional_blocks:
            for row in block.rows:
                for name, fv in row.cells:
                    if fv is None:
                        continue
                    out.append(
                        FactRecord(
                            name=name,
                            context_ref=fv.context_ref,
                            unit_ref=fv.unit_ref,
                            value=fv.value,
                            decimals=fv.decimals,
                        )
                    )
        return out


__all__ = [
    "DimensionalBlock",
    "DimensionalRow",
    "FactModel",
    "FactRecord",
    "FactValue",
    "HiddenFactEntry",
    "XBRLContext",
    "XBRLPeriod",
    "XBRLTypedMember",
    "XBRLUnit",
]
