from __future__ import annotations

from collections.abc import Callable

import pytest
from fixtures.leis import BAD_CHECKSUM_LEI, ISSUER_LEI, OFFEROR_LEI, OPERATOR_LEI

from mica_ixbrl.domain.entities.validation import LeiRegistryRecord
from mica_ixbrl.domain.entities.whitepaper import EntityInfo, OfferorInfo, WhitepaperData
from mica_ixbrl.domain.enums.mica import Severity, ValidationCategory
from mica_ixbrl.domain.services.lei_validator import (
    LeiTarget,
    lei_targets,
    validate_all_leis,
    validate_lei,
)


def _rules(findings: tuple) -> list[str]:
    return [f.rule_id for f in findings]


@pytest.mark.parametrize(
    ("value", "rule"),
    [
        (None, "LEI-000"),
        ("   ", "LEI-000"),
        ("TOO-SHORT", "LEI-001"),
        (BAD_CHECKSUM_LEI, "LEI-002"),
    ],
)
def test_structural_failures_stop_at_first_rule(value: str | None, rule: str) -> None:
    (finding,) = validate_lei(LeiTarget(value, "part_a.lei"))

    assert finding.rule_id == rule
    assert finding.severity is Severity.ERROR
    assert finding.category is ValidationCategory.LEI
    assert finding.field_path == "part_a.lei"


def test_valid_identifier_without_registry_answer_passes() -> None:
    assert validate_lei(LeiTarget(OFFEROR_LEI, "part_a.lei")) == ()


def test_registry_not_found_is_a_warning() -> None:
    (finding,) = validate_lei(
        LeiTarget(OFFEROR_LEI, "part_a.lei"),
        registry=LeiRegistryRecord(lei=OFFEROR_LEI, found=False),
    )

    assert finding.rule_id == "LEI-003"
    assert finding.severity is Severity.WARNING


def test_lapsed_registration_is_a_warning() -> None:
    (finding,) = validate_lei(
        LeiTarget(OFFEROR_LEI, "part_a.lei"),
        registry=LeiRegistryRecord(lei=OFFEROR_LEI, found=True, registration_status="LAPSED"),
    )

    assert finding.rule_id == "LEI-004"
    assert "LAPSED" in finding.message


def test_issued_registration_passes() -> None:
    registry = LeiRegistryRecord(lei=OFFEROR_LEI, found=True, registration_status="issued")

    assert validate_lei(LeiTarget(OFFEROR_LEI, "part_a.lei"), registry=registry) == ()


def test_secondary_identifiers_are_suffixed_and_prefixed(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        part_b=EntityInfo(lei=BAD_CHECKSUM_LEI),
        part_c=EntityInfo(lei="short"),
    )

    findings, total = validate_all_leis(record)

    assert _rules(findings) == ["LEI-002-ISSUER", "LEI-001-OPERATOR"]
    assert findings[0].message.startswith("Issuer ")
    assert findings[1].field_path == "part_c.lei"
    assert total == 18


def test_secondary_identifier_equal_to_offeror_is_not_revalidated(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        part_b=EntityInfo(lei=OFFEROR_LEI.lower()),
        part_c=EntityInfo(lei=None),
    )

    targets = lei_targets(record)

    assert [t.field_path for t in targets] == ["part_a.lei"]
    assert validate_all_leis(record)[1] == 6


def test_registry_answers_are_matched_by_normalized_identifier(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        part_a=OfferorInfo(lei=OFFEROR_LEI.lower()),
        part_b=EntityInfo(lei=ISSUER_LEI),
        part_c=EntityInfo(lei=OPERATOR_LEI),
    )
    registry = {
        OFFEROR_LEI: LeiRegistryRecord(OFFEROR_LEI, True, "ISSUED"),
        ISSUER_LEI: LeiRegistryRecord(ISSUER_LEI, False),
    }

    findings, total = validate_all_leis(record, registry_records=registry)

    assert _rules(findings) == ["LEI-003-ISSUER"]
    assert total == 18
