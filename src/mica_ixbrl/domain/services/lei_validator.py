# src/mica_ixbrl/domain/services/lei_validator.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Legal Entity Identifier validation.

Purpose:
    Validate the offeror LEI (mandatory) and, when present, the issuer and
    operator LEIs: presence, format, checksum and, when a registry answer is
    supplied, registry membership and status.

Layer:
    domain/services

Notes:
    - Rule ids: ``LEI-000`` missing, ``LEI-001`` format, ``LEI-002``
      checksum (ERRORs); ``LEI-003`` unknown to the registry and ``LEI-004``
      status not ISSUED (WARNINGs). Secondary identifiers reuse the rules
      with ``-ISSUER`` / ``-OPERATOR`` suffixes.
    - Registry answers are looked up outside the domain and passed in; a
      missing answer means "not checked", never "not found".
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from mica_ixbrl.domain.entities.validation import LeiRegistryRecord, ValidationError
from mica_ixbrl.domain.entities.whitepaper import WhitepaperData
from mica_ixbrl.domain.enums.mica import Severity, ValidationCategory
from mica_ixbrl.domain.services.lei import (
    is_valid_lei_checksum,
    is_valid_lei_format,
    normalize_lei,
)

LEI_CHECKS_PER_IDENTIFIER: Final[int] = 6
ACTIVE_REGISTRATION_STATUS: Final[str] = "ISSUED"


@dataclass(frozen=True, slots=True)
class LeiTarget:
    """One identifier scheduled for validation."""

    value: str | None
    field_path: str
    rule_suffix: str = ""
    message_prefix: str = ""


def lei_targets(record: WhitepaperData) -> tuple[LeiTarget, ...]:
    """Return the identifiers to validate for ``record``.

    The offeror is always validated. Issuer and operator identifiers are
    validated only when present and different from the offeror's.
    """
    primary = normalize_lei(record.part_a.lei)
    targets = [LeiTarget(record.part_a.lei, "part_a.lei")]
    secondary = (
        (record.part_b, "part_b.lei", "-ISSUER", "Issuer "),
        (record.part_c, "part_c.lei", "-OPERATOR", "Operator "),
    )
    for entity, path, suffix, prefix in secondary:
        if entity is None:
            continue
        lei = normalize_lei(entity.lei)
        if lei and lei != primary:
            targets.append(LeiTarget(entity.lei, path, suffix, prefix))
    return tuple(targets)


def _finding(
    target: LeiTarget, rule: str, severity: Severity, message: str
) -> ValidationError:
    return ValidationError(
        rule_id=f"{rule}{target.rule_suffix}",
        severity=severity,
        message=f"{target.message_prefix}{message}",
        category=ValidationCategory.LEI,
        element="lei",
        field_path=target.field_path,
    )


def validate_lei(
    target: LeiTarget,
    *,
    registry: LeiRegistryRecord | None = None,
) -> tuple[ValidationError, ...]:
    """Validate one identifier, stopping at the first structural failure.

    Args:
        target: Identifier and its reporting metadata.
        registry: Registry answer for the identifier, when one was obtained.

    Returns:
        Findings in rule order; empty when the identifier passes.
    """
    lei = normalize_lei(target.value)
    if not lei:
        return (
            _finding(
                target,
                "LEI-000",
                Severity.ERROR,
                "Legal Entity Identifier (LEI) is required",
            ),
        )
    if not is_valid_lei_format(lei):
        return (
            _finding(
                target,
                "LEI-001",
                Severity.ERROR,
                f'Invalid LEI format: "{target.value}". LEI must be 20 characters '
                "(18 alphanumeric + 2 check digits)",
            ),
        )
    if not is_valid_lei_checksum(lei):
        return (
            _finding(
                target,
                "LEI-002",
                Severity.ERROR,
                "LEI checksum validation failed - please verify the identifier",
            ),
        )

    if registry is None:
        return ()
    if not registry.found:
        return (
            _finding(
                target,
                "LEI-003",
                Severity.WARNING,
                "LEI not found in GLEIF database - verify the identifier is correct",
            ),
        )
    status = (registry.registration_status or "").upper()
    if status != ACTIVE_REGISTRATION_STATUS:
        return (
            _finding(
                target,
                "LEI-004",
                Severity.WARNING,
                f"LEI status is {registry.registration_status or 'UNKNOWN'} - should be ISSUED",
            ),
        )
    return ()


def validate_all_leis(
    record: WhitepaperData,
    *,
    registry_records: Mapping[str, LeiRegistryRecord] | None = None,
) -> tuple[tuple[ValidationError, ...], int]:
    """Validate every identifier of ``record``.

    Args:
        record: White-paper record.
        registry_records: Registry answers keyed by normalized LEI.

    Returns:
        ``(findings, assertion_total)`` where the total is six checks per
        validated identifier.
    """
    records = registry_records or {}
    findings: list[ValidationError] = []
    targets = lei_targets(record)
    for target in targets:
        findings.extend(validate_lei(target, registry=records.get(normalize_lei(target.value))))
    return tuple(findings), LEI_CHECKS_PER_IDENTIFIER * len(targets)


__all__ = [
    "ACTIVE_REGISTRATION_STATUS",
    "LEI_CHECKS_PER_IDENTIFIER",
    "LeiTarget",
    "lei_targets",
    "validate_all_leis",
    "validate_lei",
]
