# src/mica_ixbrl/domain/services/context_builder.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""XBRL context and unit construction.

Purpose:
    Build the contexts every fact is reported against, anchored on the
    primary entity's LEI and the document date, and resolve unit ids to unit
    definitions.

Layer:
    domain/services

Notes:
    - A missing or structurally unusable primary LEI is the single fatal
      generation precondition (``MissingEntityIdentifierError``).
    - Secondary entities get a dimensional context only when their LEI is
      present and differs from the primary LEI.
    - Repeated sub-records get one context per index with a stable typed
      member value (``member_0``, ``person_0``).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from typing import Final

from mica_ixbrl.domain.entities.ixbrl_document import (
    XBRLContext,
    XBRLPeriod,
    XBRLTypedMember,
    XBRLUnit,
)
from mica_ixbrl.domain.entities.whitepaper import WhitepaperData
from mica_ixbrl.domain.enums.mica import ManagementBodyRole
from mica_ixbrl.domain.exceptions.mica import MissingEntityIdentifierError
from mica_ixbrl.domain.services.lei import LEI_SCHEME, is_valid_lei_format, normalize_lei

INSTANT_CONTEXT_ID: Final[str] = "ctx_instant"
DURATION_CONTEXT_ID: Final[str] = "ctx_duration"
ISSUER_CONTEXT_ID: Final[str] = "ctx_issuer"
OPERATOR_CONTEXT_ID: Final[str] = "ctx_operator"

_MANAGEMENT_DIMENSIONS: Final[Mapping[ManagementBodyRole, str]] = {
    ManagementBodyRole.OFFEROR: "mica:OfferorManagementBodyMemberDimension",
    ManagementBodyRole.ISSUER: "mica:IssuerManagementBodyMemberDimension",
    ManagementBodyRole.OPERATOR: "mica:OperatorManagementBodyMemberDimension",
}
_PERSON_DIMENSION: Final[str] = "mica:PersonInvolvedInImplementationDimension"

PURE_UNIT_ID: Final[str] = "unit_pure"
ENERGY_UNIT_ID: Final[str] = "unit_kWh"

STANDARD_UNITS: Final[Mapping[str, XBRLUnit]] = {
    "unit_EUR": XBRLUnit("unit_EUR", "iso4217:EUR"),
    "unit_USD": XBRLUnit("unit_USD", "iso4217:USD"),
    "unit_GBP": XBRLUnit("unit_GBP", "iso4217:GBP"),
    "unit_CHF": XBRLUnit("unit_CHF", "iso4217:CHF"),
    PURE_UNIT_ID: XBRLUnit(PURE_UNIT_ID, "xbrli:pure"),
    ENERGY_UNIT_ID: XBRLUnit(ENERGY_UNIT_ID, "utr:kWh"),
}


def currency_unit_id(currency: str) -> str:
    """Return the unit id for an ISO 4217 currency code (``EUR`` -> ``unit_EUR``)."""
    return f"unit_{currency.strip().upper()}"


def resolve_unit(unit_id: str) -> XBRLUnit:
    """Return the unit definition for ``unit_id``.

    Standard units are predeclared; any other ``unit_XXX`` with a three-letter
    code is treated as an ISO 4217 currency.

    Raises:
        ValueError: If the id is neither standard nor a currency unit.
    """
    if unit_id in STANDARD_UNITS:
        return STANDARD_UNITS[unit_id]
    code = unit_id.removeprefix("unit_")
    if len(code) == 3 and code.isalpha() and code.isupper():
        return XBRLUnit(unit_id, f"iso4217:{code}")
    raise ValueError(f"Unknown unit id: {unit_id!r}")


def management_context_id(role: ManagementBodyRole, index: int) -> str:
    """Return the context id of one management-body member."""
    return f"ctx_mgmt_{role.value}_{index}"


def person_context_id(index: int) -> str:
    """Return the context id of one person involved in implementation."""
    return f"ctx_person_involved_{index}"


def resolve_document_date(raw: str | None, *, today: date | None = None) -> date:
    """Parse the ISO document date, falling back to ``today`` when unusable."""
    if raw:
        try:
            return date.fromisoformat(raw.strip())
        except ValueError:
            pass
    return today or date.today()


@dataclass(frozen=True, slots=True)
class ContextSet:
    """Contexts built for one record.

    Attributes:
        primary_lei: Normalized primary entity identifier.
        contexts: All contexts by id, in creation order.
        management: Context ids per management-body role, indexed by member.
        persons: Context ids per person involved, indexed by person.
    """

    primary_lei: str
    contexts: Mapping[str, XBRLContext]
    management: Mapping[ManagementBodyRole, tuple[str, ...]]
    persons: tuple[str, ...]


def build_contexts(record: WhitepaperData, *, today: date | None = None) -> ContextSet:
    """Build every context a record's facts can reference.

    Args:
        record: White-paper record.
        today: Fallback date when the record has no usable document date.

    Returns:
        The context set for the record.

    Raises:
        MissingEntityIdentifierError: If the primary LEI is absent or not
            structurally parseable.
    """
    lei = normalize_lei(record.part_a.lei)
    if not lei:
        raise MissingEntityIdentifierError(
            "Primary entity LEI is required to build XBRL contexts.",
            details={"field_path": "part_a.lei"},
        )
    if not is_valid_lei_format(lei):
        raise MissingEntityIdentifierError(
            "Primary entity LEI is not a structurally valid identifier.",
            details={"field_path": "part_a.lei", "lei": lei},
        )

    doc_date = resolve_document_date(record.document_date, today=today)
    instant = XBRLPeriod(instant_date=doc_date)
    duration = XBRLPeriod(
        start_date=date(doc_date.year, 1, 1),
        end_date=date(doc_date.year, 12, 31),
    )

    contexts: dict[str, XBRLContext] = {
        INSTANT_CONTEXT_ID: XBRLContext(INSTANT_CONTEXT_ID, lei, LEI_SCHEME, instant),
        DURATION_CONTEXT_ID: XBRLContext(DURATION_CONTEXT_ID, lei, LEI_SCHEME, duration),
    }

    secondary = (
        (ISSUER_CONTEXT_ID, "mica:IssuerDimension", record.part_b),
        (OPERATOR_CONTEXT_ID, "mica:OperatorDimension", record.part_c),
    )
    for ctx_id, dimension, entity in secondary:
        other = normalize_lei(entity.lei) if entity else ""
        if other and other != lei:
            contexts[ctx_id] = XBRLContext(
                ctx_id, lei, LEI_SCHEME, duration, XBRLTypedMember(dimension, other)
            )

    bodies = record.management_bodies
    members_by_role = {
        ManagementBodyRole.OFFEROR: bodies.offeror,
        ManagementBodyRole.ISSUER: bodies.issuer,
        ManagementBodyRole.OPERATOR: bodies.operator,
    }
    management: dict[ManagementBodyRole, tuple[str, ...]] = {}
    for role, members in members_by_role.items():
        ids: list[str] = []
        for index in range(len(members)):
            ctx_id = management_context_id(role, index)
            contexts[ctx_id] = XBRLContext(
                ctx_id,
                lei,
                LEI_SCHEME,
                instant,
                XBRLTypedMember(_MANAGEMENT_DIMENSIONS[role], f"member_{index}"),
            )
            ids.append(ctx_id)
        management[role] = tuple(ids)

    persons: list[str] = []
    for index in range(len(record.persons_involved)):
        ctx_id = person_context_id(index)
        contexts[ctx_id] = XBRLContext(
            ctx_id, lei, LEI_SCHEME, duration, XBRLTypedMember(_PERSON_DIMENSION, f"person_{index}")
        )
        persons.append(ctx_id)

    return ContextSet(
        primary_lei=lei,
        contexts=contexts,
        management=management,
        persons=tuple(persons),
    )


__all__ = [
    "DURATION_CONTEXT_ID",
    "ENERGY_UNIT_ID",
    "INSTANT_CONTEXT_ID",
    "ISSUER_CONTEXT_ID",
    "OPERATOR_CONTEXT_ID",
    "PURE_UNIT_ID",
    "STANDARD_UNITS",
    "ContextSet",
    "build_contexts",
    "currency_unit_id",
    "management_context_id",
    "person_context_id",
    "resolve_document_date",
    "resolve_unit",
]
