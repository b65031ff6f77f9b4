# src/mica_ixbrl/domain/services/duplicate_detector.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Duplicate fact detection.

Purpose:
    Group facts by their identity key (element, context, unit) and report
    every group with two or more members. The scan never mutates or
    deduplicates its input.

Layer:
    domain/services
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from mica_ixbrl.domain.entities.ixbrl_document import FactRecord
from mica_ixbrl.domain.entities.validation import (
    DuplicateFactResult,
    DuplicateGroup,
    ValidationError,
)
from mica_ixbrl.domain.enums.mica import Severity, ValidationCategory

DUPLICATE_RULE_ID: Final[str] = "DUP-001"

_PREVIEW_VALUES: Final[int] = 3
_PREVIEW_CHARS: Final[int] = 50


def detect_duplicate_facts(facts: Iterable[FactRecord]) -> DuplicateFactResult:
    """Scan ``facts`` for identity-key collisions.

    Args:
        facts: Fact records, e.g. ``FactModel.records()`` or the output of the
            inline-XBRL fact reader.

    Returns:
        Duplicate groups in first-seen order, plus the number of facts seen.
    """
    groups: dict[tuple[str, str, str], list[FactRecord]] = {}
    total = 0
    for fact in facts:
        total += 1
        groups.setdefault(fact.identity_key, []).append(fact)

    duplicates = tuple(
        DuplicateGroup(
            name=members[0].name,
            context_ref=members[0].context_ref,
            unit_ref=members[0].unit_ref,
            count=len(members),
            values=tuple(m.value for m in members),
        )
        for members in groups.values()
        if len(members) >= 2
    )
    return DuplicateFactResult(
        has_duplicates=bool(duplicates),
        duplicate_groups=duplicates,
        total_facts=total,
    )


def _preview(values: tuple[str, ...]) -> str:
    shown = ", ".join(f'"{v[:_PREVIEW_CHARS]}"' for v in values[:_PREVIEW_VALUES])
    extra = len(values) - _PREVIEW_VALUES
    return f"{shown} ... and {extra} more" if extra > 0 else shown


def duplicates_to_findings(result: DuplicateFactResult) -> tuple[ValidationError, ...]:
    """Turn each duplicate group into one ERROR finding."""
    findings: list[ValidationError] = []
    for group in result.duplicate_groups:
        unit = f' with unit "{group.unit_ref}"' if group.unit_ref else ""
        findings.append(
            ValidationError(
                rule_id=DUPLICATE_RULE_ID,
                severity=Severity.ERROR,
                message=(
                    f'Duplicate fact: element "{group.name}" with context '
                    f'"{group.context_ref}"{unit} appears {group.count} times. '
                    f"Values: {_preview(group.values)}"
                ),
                category=ValidationCategory.DUPLICATE,
                element=group.name,
            )
        )
    return tuple(findings)


__all__ = ["DUPLICATE_RULE_ID", "detect_duplicate_facts", "duplicates_to_findings"]
