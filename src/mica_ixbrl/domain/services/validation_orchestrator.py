# src/mica_ixbrl/domain/services/validation_orchestrator.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Validation orchestrator.

Purpose:
    Run identifier, existence, value and duplicate-fact validation over one
    record and merge the findings into a single ``ValidationResult`` with
    per-category breakdowns and assertion counts.

Layer:
    domain/services

Notes:
    - A record is valid iff no ERROR-severity finding exists; WARNINGs
      never block.
    - Duplicate detection re-runs the fact model builder so it checks
      exactly the facts generation would emit. When the builder cannot run
      (unusable primary LEI) the scan is skipped and counts zero
      assertions; the identifier category already reports the cause.
    - Registry answers are supplied by the caller; the domain performs no
      I/O.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from mica_ixbrl.domain.entities.validation import (
    AssertionCounts,
    CategoryResult,
    DuplicateFactResult,
    LeiRegistryRecord,
    ValidationError,
    ValidationOptions,
    ValidationResult,
    ValidationSummary,
)
from mica_ixbrl.domain.entities.whitepaper import WhitepaperData
from mica_ixbrl.domain.enums.mica import Severity, TokenType, ValidationCategory
from mica_ixbrl.domain.exceptions.mica import MissingEntityIdentifierError
from mica_ixbrl.domain.services.duplicate_detector import (
    detect_duplicate_facts,
    duplicates_to_findings,
)
from mica_ixbrl.domain.services.existence_engine import (
    evaluate_existence,
    existence_requirements,
    get_existence_assertions,
)
from mica_ixbrl.domain.services.fact_model_builder import FactModelBuilder
from mica_ixbrl.domain.services.lei_validator import (
    LEI_CHECKS_PER_IDENTIFIER,
    validate_all_leis,
)
from mica_ixbrl.domain.services.value_engine import evaluate_values, get_value_assertions

DEFAULT_TOKEN_TYPE: Final[TokenType] = TokenType.OTHR
DUPLICATE_ASSERTIONS: Final[int] = 1

_CATEGORY_ORDER: Final[tuple[ValidationCategory, ...]] = (
    ValidationCategory.LEI,
    ValidationCategory.EXISTENCE,
    ValidationCategory.VALUE,
    ValidationCategory.DUPLICATE,
)


def resolve_token_type(record: WhitepaperData, override: TokenType | None = None) -> TokenType:
    """Return the effective token type: override, then record, then OTHR."""
    return override or record.token_type or DEFAULT_TOKEN_TYPE


def _split(findings: tuple[ValidationError, ...]) -> CategoryResult:
    return CategoryResult(
        errors=tuple(f for f in findings if f.severity is Severity.ERROR),
        warnings=tuple(f for f in findings if f.severity is Severity.WARNING),
    )


def _counts(total: int, failed: int) -> AssertionCounts:
    failed = min(failed, total)
    return AssertionCounts(total=total, passed=total - failed, failed=failed)


@dataclass(frozen=True, slots=True)
class QuickValidationResult:
    """Outcome of the identifier and existence subset of validation."""

    valid: bool
    error_count: int
    errors: tuple[ValidationError, ...]


@dataclass(frozen=True, slots=True)
class ValidationRequirements:
    """Field paths and assertion totals for one token type."""

    token_type: TokenType
    required: tuple[str, ...]
    recommended: tuple[str, ...]
    existence_total: int
    value_total: int
    total: int


class ValidationOrchestrator:
    """Run every validation category over a record.

    Args:
        builder: Fact model builder used for the duplicate scan.
    """

    def __init__(self, *, builder: FactModelBuilder | None = None) -> None:
        self._builder = builder or FactModelBuilder()

    def validate(
        self,
        record: WhitepaperData,
        options: ValidationOptions | None = None,
        *,
        registry_records: Mapping[str, LeiRegistryRecord] | None = None,
    ) -> ValidationResult:
        """Validate ``record``.

        Args:
            record: White-paper record.
            options: Token-type override, skipped rule ids, registry toggle.
            registry_records: Registry answers keyed by normalized LEI. Only
                consulted when ``options.check_registry`` is set.

        Returns:
            The merged validation result.
        """
        opts = options or ValidationOptions()
        token_type = resolve_token_type(record, opts.token_type)
        skipped = opts.skip_rules

        # 1. identifiers
        lei_findings, lei_total = validate_all_leis(
            record, registry_records=registry_records if opts.check_registry else None
        )
        lei_findings = tuple(f for f in lei_findings if f.rule_id not in skipped)

        # 2. existence
        existence = get_existence_assertions(token_type, skip_rules=skipped)
        existence_findings = evaluate_existence(record, existence)

        # 3. values
        values = get_value_assertions(token_type, skip_rules=skipped)
        value_findings = evaluate_values(record, values)

        # 4. duplicates
        duplicates = self._scan_duplicates(record)
        duplicate_findings: tuple[ValidationError, ...] = ()
        duplicate_total = 0
        if duplicates is not None:
            duplicate_total = DUPLICATE_ASSERTIONS
            duplicate_findings = tuple(
                f for f in duplicates_to_findings(duplicates) if f.rule_id not in skipped
            )

        by_category = {
            ValidationCategory.LEI: _split(lei_findings),
            ValidationCategory.EXISTENCE: _split(existence_findings),
            ValidationCategory.VALUE: _split(value_findings),
            ValidationCategory.DUPLICATE: _split(duplicate_findings),
        }
        assertion_counts = {
            ValidationCategory.LEI: _counts(
                lei_total, len(by_category[ValidationCategory.LEI].errors)
            ),
            ValidationCategory.EXISTENCE: _counts(
                len(existence), len(by_category[ValidationCategory.EXISTENCE].errors)
            ),
            ValidationCategory.VALUE: _counts(
                len(values), len(by_category[ValidationCategory.VALUE].errors)
            ),
            ValidationCategory.DUPLICATE: _counts(
                duplicate_total, 1 if by_category[ValidationCategory.DUPLICATE].errors else 0
            ),
        }

        errors = tuple(e for c in _CATEGORY_ORDER for e in by_category[c].errors)
        warnings = tuple(w for c in _CATEGORY_ORDER for w in by_category[c].warnings)
        summary = ValidationSummary(
            total_assertions=sum(c.total for c in assertion_counts.values()),
            passed=sum(c.passed for c in assertion_counts.values()),
            errors=len(errors),
            warnings=len(warnings),
        )
        return ValidationResult(
            valid=not errors,
            errors=errors,
            warnings=warnings,
            by_category=by_category,
            assertion_counts=assertion_counts,
            summary=summary,
            duplicates=duplicates,
        )

    def _scan_duplicates(self, record: WhitepaperData) -> DuplicateFactResult | None:
        try:
            model = self._builder.build(record)
        except MissingEntityIdentifierError:
            return None
        return detect_duplicate_facts(model.records())


# --------------------------------------------------------------------------- #
# Convenience entry points                                                    #
# --------------------------------------------------------------------------- #


def validate_whitepaper(
    record: WhitepaperData,
    options: ValidationOptions | None = None,
    *,
    registry_records: Mapping[str, LeiRegistryRecord] | None = None,
) -> ValidationResult:
    """Validate ``record`` with a default orchestrator."""
    return ValidationOrchestrator().validate(
        record, options, registry_records=registry_records
    )


def quick_validate(
    record: WhitepaperData, token_type: TokenType | None = None
) -> QuickValidationResult:
    """Run identifier and existence checks only, keeping ERRORs only."""
    effective = resolve_token_type(record, token_type)
    lei_findings, _ = validate_all_leis(record)
    existence_findings = evaluate_existence(record, get_existence_assertions(effective))
    errors = tuple(
        f for f in (*lei_findings, *existence_findings) if f.severity is Severity.ERROR
    )
    return QuickValidationResult(valid=not errors, error_count=len(errors), errors=errors)


def validate_field(
    record: WhitepaperData,
    field_path: str,
    token_type: TokenType | None = None,
) -> tuple[ValidationError, ...]:
    """Return every existence, value and identifier finding for ``field_path``."""
    effective = resolve_token_type(record, token_type)
    findings = (
        *evaluate_existence(record, get_existence_assertions(effective)),
        *evaluate_values(record, get_value_assertions(effective)),
        *validate_all_leis(record)[0],
    )
    return tuple(f for f in findings if f.field_path == field_path)


def get_validation_requirements(token_type: TokenType) -> ValidationRequirements:
    """Describe what validation expects for ``token_type``."""
    paths = existence_requirements(token_type)
    existence_total = len(get_existence_assertions(token_type))
    value_total = len(get_value_assertions(token_type))
    return ValidationRequirements(
        token_type=token_type,
        required=tuple(paths["required"]),
        recommended=tuple(paths["recommended"]),
        existence_total=existence_total,
        value_total=value_total,
        total=existence_total + value_total + LEI_CHECKS_PER_IDENTIFIER + DUPLICATE_ASSERTIONS,
    )


__all__ = [
    "DEFAULT_TOKEN_TYPE",
    "QuickValidationResult",
    "ValidationOrchestrator",
    "ValidationRequirements",
    "get_validation_requirements",
    "quick_validate",
    "resolve_token_type",
    "validate_field",
    "validate_whitepaper",
]
