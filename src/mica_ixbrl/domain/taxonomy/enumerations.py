# src/mica_ixbrl/domain/taxonomy/enumerations.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""MiCA enumeration tables.

Purpose:
    Map enumeration value keys to their human-readable labels and ESMA
    taxonomy member URIs, indexed by target element. Enumeration facts carry
    the member URI in ``ix:hidden`` while the label is shown in the body.

Layer:
    domain/taxonomy

Notes:
    - Tables are immutable and built once at import time.
    - Lookups never raise; an unknown element or key yields ``None`` so the
      caller can fall back to plain-text representation.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from mica_ixbrl.domain.entities.taxonomy import EnumerationOption

TAXONOMY_BASE: Final[str] = "https://www.esma.europa.eu/taxonomy/2025-03-31/mica/"


def _table(*rows: tuple[str, str, str]) -> Mapping[str, EnumerationOption]:
    """Build an immutable key -> option table from (key, label, member) rows."""
    return MappingProxyType(
        {
            key: EnumerationOption(key=key, label=label, uri=f"{TAXONOMY_BASE}#{member}")
            for key, label, member in rows
        }
    )


# --------------------------------------------------------------------------- #
# Tables                                                                      #
# --------------------------------------------------------------------------- #

PUBLIC_OFFERING: Final = _table(
    ("publicOffering", "Public offering", "OfferToThePublic"),
    ("admissionToTrading", "Admission to trading", "AdmissionToTrading"),
    (
        "both",
        "Both public offering and admission to trading",
        "OfferToThePublicAndAdmissionToTrading",
    ),
)

CURRENCY: Final = _table(
    ("EUR", "Euro (EUR)", "EUR"),
    ("USD", "US Dollar (USD)", "USD"),
    ("GBP", "British Pound (GBP)", "GBP"),
    ("CHF", "Swiss Franc (CHF)", "CHF"),
)

TARGETED_HOLDERS: Final = _table(
    ("allInvestors", "All types of investors", "AllTypesOfInvestors"),
    ("retailInvestors", "Retail investors", "RetailInvestors"),
    ("qualifiedInvestors", "Qualified investors", "QualifiedInvestors"),
)

PLACEMENT_FORM: Final = _table(
    ("direct", "Direct placement", "DirectPlacement"),
    ("throughCASP", "Through CASP", "ThroughCASP"),
)

WHITE_PAPER_TYPE: Final = _table(
    ("initial", "Initial white paper", "InitialWhitePaper"),
    ("modified", "Modified white paper", "ModifiedWhitePaper"),
)

SUBMISSION_TYPE: Final = _table(
    ("notification", "Notification", "Notification"),
    ("application", "Application for admission to trading", "ApplicationForAdmissionToTrading"),
)

MEMBER_STATE: Final = _table(
    ("AT", "Austria", "AT"),
    ("BE", "Belgium", "BE"),
    ("BG", "Bulgaria", "BG"),
    ("HR", "Croatia", "HR"),
    ("CY", "Cyprus", "CY"),
    ("CZ", "Czechia", "CZ"),
    ("DK", "Denmark", "DK"),
    ("EE", "Estonia", "EE"),
    ("FI", "Finland", "FI"),
    ("FR", "France", "FR"),
    ("DE", "Germany", "DE"),
    ("GR", "Greece", "GR"),
    ("HU", "Hungary", "HU"),
    ("IE", "Ireland", "IE"),
    ("IT", "Italy", "IT"),
    ("LV", "Latvia", "LV"),
    ("LT", "Lithuania", "LT"),
    ("LU", "Luxembourg", "LU"),
    ("MT", "Malta", "MT"),
    ("NL", "Netherlands", "NL"),
    ("PL", "Poland", "PL"),
    ("PT", "Portugal", "PT"),
    ("RO", "Romania", "RO"),
    ("SK", "Slovakia", "SK"),
    ("SI", "Slovenia", "SI"),
    ("ES", "Spain", "ES"),
    ("SE", "Sweden", "SE"),
)

PERSON_TYPE: Final = _table(
    ("advisor", "Advisor", "Advisor"),
    ("auditor", "Auditor", "Auditor"),
    ("otherPerson", "Other person", "OtherPerson"),
)

COMPETENT_AUTHORITY: Final = _table(
    ("ecb", "European Central Bank", "ECB"),
    ("nca", "National Competent Authority", "NCA"),
)

ENUMERATION_MAPPINGS: Final[Mapping[str, Mapping[str, EnumerationOption]]] = MappingProxyType(
    {
        "mica:PublicOfferingOrAdmissionToTrading": PUBLIC_OFFERING,
        "mica:OfficialCurrencyDeterminingIssuePrice": CURRENCY,
        "mica:TargetedHoldersForOtherToken": TARGETED_HOLDERS,
        "mica:PlacementFormForOtherToken": PLACEMENT_FORM,
        "mica:OtherTokenTypeOfWhitePaper": WHITE_PAPER_TYPE,
        "mica:OtherTokenTypeOfSubmission": SUBMISSION_TYPE,
        "mica:OtherTokenHomeMemberState": MEMBER_STATE,
        "mica:OtherTokenHostMemberStates": MEMBER_STATE,
        "mica:OfferorsRegisteredCountry": MEMBER_STATE,
        "mica:OfferorsHeadOfficeCountry": MEMBER_STATE,
        "mica:IssuersRegisteredCountry": MEMBER_STATE,
        "mica:IssuersHeadOfficeCountry": MEMBER_STATE,
        "mica:OperatorsRegisteredCountry": MEMBER_STATE,
        "mica:OperatorsHeadOfficeCountry": MEMBER_STATE,
        "mica:TypeOfPersonInvolvedInImplementationOfOtherToken": PERSON_TYPE,
        "mica:DomicileOfCompanyOfPersonInvolvedInImplementationOfOtherToken": MEMBER_STATE,
        "mica:CompetentAuthorityForCreditInstitutions": COMPETENT_AUTHORITY,
    }
)


# --------------------------------------------------------------------------- #
# Lookups                                                                     #
# --------------------------------------------------------------------------- #


def get_enumeration_uri(element: str, key: str) -> str | None:
    """Return the member URI for ``key`` of ``element``, if mapped."""
    option = ENUMERATION_MAPPINGS.get(element, {}).get(key)
    return option.uri if option else None


def get_enumeration_label(element: str, key: str) -> str | None:
    """Return the human-readable label for ``key`` of ``element``, if mapped."""
    option = ENUMERATION_MAPPINGS.get(element, {}).get(key)
    return option.label if option else None


def find_enumeration_key(element: str, label: str) -> str | None:
    """Return the key whose label matches ``label`` case-insensitively."""
    wanted = label.strip().lower()
    for key, option in ENUMERATION_MAPPINGS.get(element, {}).items():
        if option.label.lower() == wanted:
            return key
    return None


def resolve_enumeration(element: str, value: str) -> EnumerationOption | None:
    """Resolve a raw or typed value to an enumeration option.

    Matching order: exact key, case-insensitive key, case-insensitive label.

    Args:
        element: Target element QName.
        value: Key or label as supplied by the record.

    Returns:
        The matching option, or ``None`` when the value cannot be resolved.
    """
    table = ENUMERATION_MAPPINGS.get(element)
    if not table:
        return None
    candidate = value.strip()
    if candidate in table:
        return table[candidate]
    lowered = candidate.lower()
    for key, option in table.items():
        if key.lower() == lowered:
            return option
    key = find_enumeration_key(element, candidate)
    return table[key] if key else None


def is_country_enumeration(element: str) -> bool:
    """Return True when ``element`` is backed by the member-state table."""
    return ENUMERATION_MAPPINGS.get(element) is MEMBER_STATE


__all__ = [
    "COMPETENT_AUTHORITY",
    "CURRENCY",
    "ENUMERATION_MAPPINGS",
    "MEMBER_STATE",
    "PERSON_TYPE",
    "PLACEMENT_FORM",
    "PUBLIC_OFFERING",
    "SUBMISSION_TYPE",
    "TARGETED_HOLDERS",
    "TAXONOMY_BASE",
    "WHITE_PAPER_TYPE",
    "find_enumeration_key",
    "get_enumeration_label",
    "get_enumeration_uri",
    "is_country_enumeration",
    "resolve_enumeration",
]
