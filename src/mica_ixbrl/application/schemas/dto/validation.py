# src/mica_ixbrl/application/schemas/dto/validation.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Application DTOs for validation output.

Synopsis:
    Serializable views of ``ValidationResult`` and its parts, dumped as
    camelCase JSON by the CLI.

Layer:
    application/schemas/dto
"""

from __future__ import annotations

from pydantic import Field

from mica_ixbrl.application.schemas.dto.base import BaseDTO
from mica_ixbrl.domain.entities.validation import (
    AssertionCounts,
    CategoryResult,
    DuplicateFactResult,
    ValidationError,
    ValidationResult,
)
from mica_ixbrl.domain.enums.mica import Severity, TokenType, ValidationCategory
from mica_ixbrl.domain.services.validation_orchestrator import ValidationRequirements


class ValidationFindingDTO(BaseDTO):
    """One finding."""

    rule_id: str
    severity: Severity
    message: str
    category: ValidationCategory
    element: str | None = None
    field_path: str | None = None

    @classmethod
    def from_entity(cls, finding: ValidationError) -> ValidationFindingDTO:
        return cls(
            rule_id=finding.rule_id,
            severity=finding.severity,
            message=finding.message,
            category=finding.category,
            element=finding.element,
            field_path=finding.field_path,
        )


class CategoryResultDTO(BaseDTO):
    """Errors and warnings of one category."""

    errors: list[ValidationFindingDTO] = Field(default_factory=list)
    warnings: list[ValidationFindingDTO] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, result: CategoryResult) -> CategoryResultDTO:
        return cls(
            errors=[ValidationFindingDTO.from_entity(e) for e in result.errors],
            warnings=[ValidationFindingDTO.from_entity(w) for w in result.warnings],
        )


class AssertionCountsDTO(BaseDTO):
    """Pass/fail counts of one category."""

    total: int
    passed: int
    failed: int

    @classmethod
    def from_entity(cls, counts: AssertionCounts) -> AssertionCountsDTO:
        return cls(total=counts.total, passed=counts.passed, failed=counts.failed)


class ValidationSummaryDTO(BaseDTO):
    """Aggregate figures."""

    total_assertions: int
    passed: int
    errors: int
    warnings: int


class DuplicateGroupDTO(BaseDTO):
    """Facts sharing one identity key."""

    name: str
    context_ref: str
    unit_ref: str | None = None
    count: int
    values: list[str]


class DuplicateReportDTO(BaseDTO):
    """Duplicate scan outcome."""

    has_duplicates: bool
    total_facts: int
    duplicate_groups: list[DuplicateGroupDTO] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, result: DuplicateFactResult) -> DuplicateReportDTO:
        return cls(
            has_duplicates=result.has_duplicates,
            total_facts=result.total_facts,
            duplicate_groups=[
                DuplicateGroupDTO(
                    name=g.name,
                    context_ref=g.context_ref,
                    unit_ref=g.unit_ref,
                    count=g.count,
                    values=list(g.values),
                )
                for g in result.duplicate_groups
            ],
        )


class ValidationResultDTO(BaseDTO):
    """Structured validation outcome.

    ``by_category`` and ``assertion_counts`` are keyed by the lower-case
    category value (``lei``, ``existence``, ``value``, ``duplicate``).
    """

    valid: bool
    errors: list[ValidationFindingDTO]
    warnings: list[ValidationFindingDTO]
    by_category: dict[str, CategoryResultDTO]
    assertion_counts: dict[str, AssertionCountsDTO]
    summary: ValidationSummaryDTO
    duplicates: DuplicateReportDTO | None = None

    @classmethod
    def from_entity(cls, result: ValidationResult) -> ValidationResultDTO:
        """Build the DTO from a domain ``ValidationResult``."""
        return cls(
            valid=result.valid,
            errors=[ValidationFindingDTO.from_entity(e) for e in result.errors],
            warnings=[ValidationFindingDTO.from_entity(w) for w in result.warnings],
            by_category={
                category.value: CategoryResultDTO.from_entity(cat)
                for category, cat in result.by_category.items()
            },
            assertion_counts={
                category.value: AssertionCountsDTO.from_entity(counts)
                for category, counts in result.assertion_counts.items()
            },
            summary=ValidationSummaryDTO(
                total_assertions=result.summary.total_assertions,
                passed=result.summary.passed,
                errors=result.summary.errors,
                warnings=result.summary.warnings,
            ),
            duplicates=(
                DuplicateReportDTO.from_entity(result.duplicates)
                if result.duplicates is not None
                else None
            ),
        )


class ValidationRequirementsDTO(BaseDTO):
    """Required and recommended field paths plus assertion totals for a token type."""

    token_type: TokenType
    required: list[str]
    recommended: list[str]
    existence_assertions: int
    value_assertions: int
    total_assertions: int

    @classmethod
    def from_entity(cls, req: ValidationRequirements) -> ValidationRequirementsDTO:
        return cls(
            token_type=req.token_type,
            required=list(req.required),
            recommended=list(req.recommended),
            existence_assertions=req.existence_total,
            value_assertions=req.value_total,
            total_assertions=req.total,
        )


__all__ = [
    "AssertionCountsDTO",
    "CategoryResultDTO",
    "DuplicateGroupDTO",
    "DuplicateReportDTO",
    "ValidationFindingDTO",
    "ValidationRequirementsDTO",
    "ValidationResultDTO",
    "ValidationSummaryDTO",
]
