from __future__ import annotations

from collections.abc import Callable

from fixtures.leis import OFFEROR_LEI

from mica_ixbrl.domain.entities.validation import LeiRegistryRecord, ValidationOptions
from mica_ixbrl.domain.entities.whitepaper import (
    ManagementBodies,
    ManagementBodyMember,
    OfferorInfo,
    ProjectInfo,
    WhitepaperData,
)
from mica_ixbrl.domain.enums.mica import TokenType, ValidationCategory
from mica_ixbrl.domain.services.duplicate_detector import DUPLICATE_RULE_ID
from mica_ixbrl.domain.services.fact_model_builder import FactModelBuilder
from mica_ixbrl.domain.services.validation_orchestrator import (
    ValidationOrchestrator,
    get_validation_requirements,
    quick_validate,
    resolve_token_type,
    validate_field,
    validate_whitepaper,
)


def _without_lei(make_whitepaper: Callable[..., WhitepaperData]) -> WhitepaperData:
    return make_whitepaper(
        part_a=OfferorInfo(
            legal_name="Example Token Foundation",
            registered_address="Hauptstrasse 1, 10115 Berlin, Germany",
            country="DE",
            website="https://example.org",
            contact_email="info@example.org",
        )
    )


def test_complete_record_is_valid_with_full_counts(whitepaper: WhitepaperData) -> None:
    result = ValidationOrchestrator().validate(whitepaper)

    assert result.valid
    assert result.errors == ()
    assert result.warnings == ()
    assert result.summary.total_assertions == 39
    assert result.summary.passed == 39
    counts = result.assertion_counts
    assert counts[ValidationCategory.LEI].total == 6
    assert counts[ValidationCategory.EXISTENCE].total == 18
    assert counts[ValidationCategory.VALUE].total == 14
    assert counts[ValidationCategory.DUPLICATE].total == 1
    assert result.duplicates is not None
    assert not result.duplicates.has_duplicates
    assert result.duplicates.total_facts > 0


def test_missing_identifier_fails_and_skips_duplicate_scan(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    result = validate_whitepaper(_without_lei(make_whitepaper))

    assert not result.valid
    assert [e.rule_id for e in result.errors] == ["LEI-000", "EXS-A-002"]
    assert result.duplicates is None
    assert result.assertion_counts[ValidationCategory.DUPLICATE].total == 0
    assert result.assertion_counts[ValidationCategory.LEI].failed == 1
    assert result.summary.total_assertions == 38
    assert result.summary.passed == 36
    assert result.summary.errors == 2


def test_management_body_members_get_own_contexts_without_duplicates(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        management_bodies=ManagementBodies(
            offeror=(
                ManagementBodyMember(identity="Jane Doe", function="CEO"),
                ManagementBodyMember(identity="John Roe", function="CFO"),
            ),
        )
    )

    contexts = FactModelBuilder().build(record).contexts
    result = ValidationOrchestrator().validate(record)

    member_contexts = sorted(c for c in contexts if c.startswith("ctx_mgmt_"))
    assert member_contexts == ["ctx_mgmt_offeror_0", "ctx_mgmt_offeror_1"]
    assert result.duplicates is not None
    assert not result.duplicates.has_duplicates
    assert result.by_category[ValidationCategory.DUPLICATE].errors == ()
    assert DUPLICATE_RULE_ID not in {e.rule_id for e in result.errors}


def test_warnings_never_invalidate(make_whitepaper: Callable[..., WhitepaperData]) -> None:
    record = make_whitepaper(language="ja")

    result = validate_whitepaper(record)

    assert result.valid
    assert [w.rule_id for w in result.warnings] == ["VAL-014"]
    assert result.by_category[ValidationCategory.VALUE].warnings == result.warnings
    assert result.assertion_counts[ValidationCategory.VALUE].failed == 0


def test_skip_rules_apply_across_categories(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    options = ValidationOptions(skip_rules=frozenset({"LEI-000", "EXS-A-002"}))

    result = validate_whitepaper(_without_lei(make_whitepaper), options)

    assert result.valid
    assert result.assertion_counts[ValidationCategory.EXISTENCE].total == 17


def test_registry_answers_only_count_when_requested(whitepaper: WhitepaperData) -> None:
    registry = {OFFEROR_LEI: LeiRegistryRecord(lei=OFFEROR_LEI, found=False)}

    unchecked = validate_whitepaper(whitepaper, registry_records=registry)
    checked = validate_whitepaper(
        whitepaper, ValidationOptions(check_registry=True), registry_records=registry
    )

    assert unchecked.warnings == ()
    assert [w.rule_id for w in checked.warnings] == ["LEI-003"]
    assert checked.valid


def test_token_type_override_selects_catalog(whitepaper: WhitepaperData) -> None:
    result = validate_whitepaper(whitepaper, ValidationOptions(token_type=TokenType.ART))

    assert {e.rule_id for e in result.errors} == {"EXS-ART-001", "EXS-ART-002"}
    assert resolve_token_type(whitepaper, TokenType.EMT) is TokenType.EMT
    assert resolve_token_type(WhitepaperData()) is TokenType.OTHR


def test_quick_validate_keeps_identifier_and_existence_errors_only(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        part_d=ProjectInfo(crypto_asset_symbol="ext", project_description="A token."),
    )

    result = quick_validate(record)

    assert not result.valid
    assert [e.rule_id for e in result.errors] == ["EXS-D-001"]
    assert result.error_count == 1


def test_validate_field_filters_by_path(make_whitepaper: Callable[..., WhitepaperData]) -> None:
    record = _without_lei(make_whitepaper)

    findings = validate_field(record, "part_a.lei")

    assert sorted(f.rule_id for f in findings) == ["EXS-A-002", "LEI-000"]
    assert validate_field(record, "part_a.website") == ()


def test_requirements_totals() -> None:
    othr = get_validation_requirements(TokenType.OTHR)
    art = get_validation_requirements(TokenType.ART)

    assert (othr.existence_total, othr.value_total, othr.total) == (18, 14, 39)
    assert art.total == 40
    assert "part_b.lei" in art.required
    assert "part_j.energy_consumption" in othr.recommended
