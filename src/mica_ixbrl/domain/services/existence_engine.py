# src/mica_ixbrl/domain/services/existence_engine.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Existence assertions.

Purpose:
    Catalog of required (ERROR) and recommended (WARNING) fields per token
    type, and their evaluation against a white-paper record.

Layer:
    domain/services

Notes:
    A field is absent when it is ``None``, a blank string or an empty
    sequence. A rule with a precondition only fires while the precondition
    holds.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Final

from mica_ixbrl.domain.entities.validation import ExistenceAssertion, ValidationError
from mica_ixbrl.domain.entities.whitepaper import WhitepaperData
from mica_ixbrl.domain.enums.mica import Severity, TokenType, ValidationCategory

_ALL: Final = frozenset(TokenType)
_E = Severity.ERROR
_W = Severity.WARNING


def _rule(
    rule_id: str,
    description: str,
    field_path: str,
    element: str,
    severity: Severity = _E,
    *,
    token_types: frozenset[TokenType] = _ALL,
    precondition: Callable[[WhitepaperData], bool] | None = None,
) -> ExistenceAssertion:
    return ExistenceAssertion(
        rule_id=rule_id,
        description=description,
        field_path=field_path,
        token_types=token_types,
        severity=severity,
        element=element,
        precondition=precondition,
    )


def _is_public_offering(record: WhitepaperData) -> bool:
    return record.part_e.is_public_offering is True


COMMON_ASSERTIONS: Final[tuple[ExistenceAssertion, ...]] = (
    _rule("EXS-A-001", "Offeror legal name is required", "part_a.legal_name",
          "mica:NameOfOtherTokenOfferor"),
    _rule("EXS-A-002", "Offeror LEI is required", "part_a.lei",
          "mica:OfferorsLegalEntityIdentifier"),
    _rule("EXS-A-003", "Offeror registered address is required", "part_a.registered_address",
          "mica:OfferorsRegisteredAddress"),
    _rule("EXS-A-004", "Offeror country is required", "part_a.country",
          "mica:OfferorsRegisteredCountry"),
    _rule("EXS-A-005", "Offeror website is recommended", "part_a.website",
          "mica:OtherTokenIssuersWebsite", _W),
    _rule("EXS-A-006", "Offeror contact email is recommended", "part_a.contact_email",
          "mica:OfferorsEmailAddress", _W),
    _rule("EXS-D-001", "Crypto-asset name is required", "part_d.crypto_asset_name",
          "mica:NameOfOtherToken"),
    _rule("EXS-D-002", "Crypto-asset symbol is required", "part_d.crypto_asset_symbol",
          "mica:OtherTokenProjectAbbreviation"),
    _rule("EXS-D-003", "Total supply should be provided", "part_d.total_supply",
          "mica:TotalNumberOfOfferedOrTradedOtherTokens", _W),
    _rule("EXS-D-004", "Project description is required", "part_d.project_description",
          "mica:DescriptionOfOtherTokenProjectExplanatory"),
    _rule("EXS-E-001", "Public offering status must be specified", "part_e.is_public_offering",
          "mica:PublicOfferingOrAdmissionToTrading"),
    _rule("EXS-E-002", "Public offering start date required if public offering",
          "part_e.public_offering_start_date", "mica:SubscriptionPeriodBeginning",
          precondition=_is_public_offering),
    _rule("EXS-H-001", "Blockchain description is required", "part_h.blockchain_description",
          "mica:DistributedLedgerTechnologyForOtherTokenExplanatory"),
)

_OTHR = frozenset({TokenType.OTHR})
_ART = frozenset({TokenType.ART})
_EMT = frozenset({TokenType.EMT})

OTHR_ASSERTIONS: Final[tuple[ExistenceAssertion, ...]] = (
    _rule("EXS-OTHR-001", "Token standard should be specified", "part_d.token_standard",
          "mica:OtherTokenType", _W, token_types=_OTHR),
    _rule("EXS-OTHR-002", "Blockchain network should be specified", "part_d.blockchain_network",
          "mica:NameOfDistributedLedgerForOtherToken", _W, token_types=_OTHR),
    _rule("EXS-OTHR-003", "Consensus mechanism should be documented",
          "part_d.consensus_mechanism", "mica:ConsensusMechanismForOtherTokenExplanatory", _W,
          token_types=_OTHR),
)

ART_ASSERTIONS: Final[tuple[ExistenceAssertion, ...]] = (
    _rule("EXS-ART-001", "Issuer information required for ART", "part_b.legal_name",
          "mica:NameOfOtherTokenIssuer", token_types=_ART),
    _rule("EXS-ART-002", "Issuer LEI required for ART", "part_b.lei",
          "mica:IssuersLegalEntityIdentifier", token_types=_ART),
    _rule("EXS-ART-003", "Reserve asset information required for ART", "part_g.ownership_rights",
          "mica:ExerciseOfRightsAndObligationsExplanatory", token_types=_ART),
)

EMT_ASSERTIONS: Final[tuple[ExistenceAssertion, ...]] = (
    _rule("EXS-EMT-001", "Issuer information required for EMT", "part_b.legal_name",
          "mica:NameOfOtherTokenIssuer", token_types=_EMT),
    _rule("EXS-EMT-002", "Issuer LEI required for EMT", "part_b.lei",
          "mica:IssuersLegalEntityIdentifier", token_types=_EMT),
)

SUSTAINABILITY_ASSERTIONS: Final[tuple[ExistenceAssertion, ...]] = (
    _rule("EXS-J-001", "Energy consumption should be disclosed", "part_j.energy_consumption",
          "mica:EnergyConsumption", _W),
    _rule("EXS-J-002", "Consensus mechanism type should be specified for sustainability",
          "part_j.consensus_mechanism_type", "mica:ConsensusMechanismSustainabilityExplanatory",
          _W),
)


def get_existence_assertions(
    token_type: TokenType,
    *,
    skip_rules: Iterable[str] = (),
) -> tuple[ExistenceAssertion, ...]:
    """Return the assertions applicable to ``token_type``, minus skipped ids."""
    skipped = frozenset(skip_rules)
    specific = {
        TokenType.OTHR: OTHR_ASSERTIONS,
        TokenType.ART: ART_ASSERTIONS,
        TokenType.EMT: EMT_ASSERTIONS,
    }[token_type]
    return tuple(
        a
        for a in (*COMMON_ASSERTIONS, *SUSTAINABILITY_ASSERTIONS, *specific)
        if token_type in a.token_types and a.rule_id not in skipped
    )


def is_present(value: Any) -> bool:
    """Return False for ``None``, blank strings and empty sequences."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, frozenset, set, dict)):
        return len(value) > 0
    return True


def evaluate_existence(
    record: WhitepaperData, assertions: Sequence[ExistenceAssertion]
) -> tuple[ValidationError, ...]:
    """Evaluate ``assertions`` and return one finding per fired rule."""
    findings: list[ValidationError] = []
    for assertion in assertions:
        if assertion.precondition is not None and not assertion.precondition(record):
            continue
        if is_present(record.resolve_path(assertion.field_path)):
            continue
        findings.append(
            ValidationError(
                rule_id=assertion.rule_id,
                severity=assertion.severity,
                message=assertion.description,
                category=ValidationCategory.EXISTENCE,
                element=assertion.element,
                field_path=assertion.field_path,
            )
        )
    return tuple(findings)


def existence_requirements(token_type: TokenType) -> dict[str, list[str]]:
    """Return required and recommended field paths for ``token_type``."""
    assertions = get_existence_assertions(token_type)
    return {
        "required": [a.field_path for a in assertions if a.severity is Severity.ERROR],
        "recommended": [a.field_path for a in assertions if a.severity is Severity.WARNING],
    }


__all__ = [
    "ART_ASSERTIONS",
    "COMMON_ASSERTIONS",
    "EMT_ASSERTIONS",
    "OTHR_ASSERTIONS",
    "SUSTAINABILITY_ASSERTIONS",
    "evaluate_existence",
    "existence_requirements",
    "get_existence_assertions",
    "is_present",
]
