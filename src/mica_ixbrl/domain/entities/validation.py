# src/mica_ixbrl/domain/entities/validation.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Validation findings and results.

Purpose:
    Immutable structures emitted by the identifier, existence, value and
    duplicate-fact validators and aggregated by the validation orchestrator.

Layer:
    domain/entities
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from mica_ixbrl.domain.entities.whitepaper import WhitepaperData
from mica_ixbrl.domain.enums.mica import Severity, TokenType, ValidationCategory


@dataclass(frozen=True, slots=True)
class ValidationError:
    """A single validation finding.

    Attributes:
        rule_id: Stable rule identifier, e.g. ``"LEI-002"``.
        severity: ERROR blocks acceptance; WARNING never does.
        message: Human-readable explanation.
        category: Category that produced the finding.
        element: Target taxonomy element, when known.
        field_path: Dotted path into the record, when known.
    """

    rule_id: str
    severity: Severity
    message: str
    category: ValidationCategory
    element: str | None = None
    field_path: str | None = None

    @property
    def is_error(self) -> bool:
        """Return True for ERROR-severity findings."""
        return self.severity is Severity.ERROR


@dataclass(frozen=True, slots=True)
class ExistenceAssertion:
    """Required or recommended field rule.

    Attributes:
        rule_id: Stable rule identifier.
        description: Message used when the rule fires.
        field_path: Dotted record path that must be present.
        token_types: Token types the rule applies to.
        severity: Finding severity.
        element: Taxonomy element backing the field, if any.
        precondition: Optional predicate; the rule only fires when it holds.
    """

    rule_id: str
    description: str
    field_path: str
    token_types: frozenset[TokenType]
    severity: Severity
    element: str | None = None
    precondition: Callable[[WhitepaperData], bool] | None = None


@dataclass(frozen=True, slots=True)
class ValueAssertion:
    """Cross-field or format rule.

    ``check`` returns a failure message, or ``None`` when the record passes
    (including when the rule does not apply because inputs are absent).
    """

    rule_id: str
    description: str
    token_types: frozenset[TokenType]
    severity: Severity
    check: Callable[[WhitepaperData], str | None]
    field_path: str | None = None
    element: str | None = None


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    """Facts sharing one (element, context, unit) identity key."""

    name: str
    context_ref: str
    unit_ref: str | None
    count: int
    values: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DuplicateFactResult:
    """Outcome of a duplicate-fact scan."""

    has_duplicates: bool
    duplicate_groups: tuple[DuplicateGroup, ...]
    total_facts: int


@dataclass(frozen=True, slots=True)
class LeiRegistryRecord:
    """Registry answer for one LEI.

    Attributes:
        lei: Identifier looked up.
        found: False when the registry has no record.
        registration_status: Registry status, e.g. ``"ISSUED"`` or ``"LAPSED"``.
        legal_name: Legal name on record, if any.
    """

    lei: str
    found: bool
    registration_status: str | None = None
    legal_name: str | None = None


@dataclass(frozen=True, slots=True)
class AssertionCounts:
    """Assertion pass/fail counts for one category."""

    total: int
    passed: int
    failed: int


@dataclass(frozen=True, slots=True)
class CategoryResult:
    """Errors and warnings of one category."""

    errors: tuple[ValidationError, ...] = ()
    warnings: tuple[ValidationError, ...] = ()


@dataclass(frozen=True, slots=True)
class ValidationSummary:
    """Aggregate figures across all categories."""

    total_assertions: int
    passed: int
    errors: int
    warnings: int


@dataclass(frozen=True, slots=True)
class ValidationOptions:
    """Options controlling one validation run.

    Attributes:
        token_type: Overrides the record's token type when set.
        skip_rules: Rule ids removed from every catalog before evaluation.
        check_registry: Whether registry findings should be considered.
    """

    token_type: TokenType | None = None
    skip_rules: frozenset[str] = frozenset()
    check_registry: bool = False


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Structured validation outcome.

    Attributes:
        valid: True iff no ERROR-severity finding exists.
        errors: Flat list of ERROR findings across categories.
        warnings: Flat list of WARNING findings across categories.
        by_category: Errors and warnings per category.
        assertion_counts: Pass/fail counts per category.
        summary: Aggregate figures.
        duplicates: Duplicate scan outcome, when it ran.
    """

    valid: bool
    errors: tuple[ValidationError, ...]
    warnings: tuple[ValidationError, ...]
    by_category: Mapping[ValidationCategory, CategoryResult]
    assertion_counts: Mapping[ValidationCategory, AssertionCounts]
    summary: ValidationSummary
    duplicates: DuplicateFactResult | None = None


__all__ = [
    "AssertionCounts",
    "CategoryResult",
    "DuplicateFactResult",
    "DuplicateGroup",
    "ExistenceAssertion",
    "LeiRegistryRecord",
    "ValidationError",
    "ValidationOptions",
    "ValidationResult",
    "ValidationSummary",
    "ValueAssertion",
]
