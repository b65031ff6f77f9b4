from __future__ import annotations

from collections.abc import Callable
from datetime import date

import pytest
from fixtures.leis import ISSUER_LEI, OFFEROR_LEI, OPERATOR_LEI

from mica_ixbrl.domain.entities.whitepaper import (
    EntityInfo,
    ManagementBodies,
    ManagementBodyMember,
    OfferorInfo,
    PersonInvolved,
    WhitepaperData,
)
from mica_ixbrl.domain.enums.mica import ManagementBodyRole
from mica_ixbrl.domain.exceptions.mica import MissingEntityIdentifierError
from mica_ixbrl.domain.services.context_builder import (
    DURATION_CONTEXT_ID,
    INSTANT_CONTEXT_ID,
    ISSUER_CONTEXT_ID,
    OPERATOR_CONTEXT_ID,
    build_contexts,
    resolve_document_date,
    resolve_unit,
)
from mica_ixbrl.domain.services.lei import LEI_SCHEME


def test_primary_contexts_anchor_on_document_date(whitepaper: WhitepaperData) -> None:
    result = build_contexts(whitepaper)

    instant = result.contexts[INSTANT_CONTEXT_ID]
    duration = result.contexts[DURATION_CONTEXT_ID]
    assert result.primary_lei == OFFEROR_LEI
    assert instant.entity_identifier == OFFEROR_LEI
    assert instant.scheme == LEI_SCHEME
    assert instant.period.instant_date == date(2025, 6, 30)
    assert duration.period.start_date == date(2025, 1, 1)
    assert duration.period.end_date == date(2025, 12, 31)
    assert instant.typed_member is None


def test_secondary_contexts_only_for_distinct_identifiers(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        part_b=EntityInfo(legal_name="Issuer AG", lei=ISSUER_LEI),
        part_c=EntityInfo(legal_name="Same as offeror", lei=OFFEROR_LEI.lower()),
    )

    result = build_contexts(record)

    issuer = result.contexts[ISSUER_CONTEXT_ID]
    assert issuer.entity_identifier == OFFEROR_LEI
    assert issuer.typed_member is not None
    assert issuer.typed_member.value == ISSUER_LEI
    assert OPERATOR_CONTEXT_ID not in result.contexts


def test_operator_context_carries_operator_identifier(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(part_c=EntityInfo(lei=OPERATOR_LEI))

    member = build_contexts(record).contexts[OPERATOR_CONTEXT_ID].typed_member

    assert member is not None
    assert member.dimension == "mica:OperatorDimension"
    assert member.value == OPERATOR_LEI


def test_repeated_sub_records_get_one_context_each(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(
        management_bodies=ManagementBodies(
            offeror=(ManagementBodyMember(identity="A"), ManagementBodyMember(identity="B")),
        ),
        persons_involved=(PersonInvolved(name="Advisor Ltd"),),
    )

    result = build_contexts(record)

    assert result.management[ManagementBodyRole.OFFEROR] == (
        "ctx_mgmt_offeror_0",
        "ctx_mgmt_offeror_1",
    )
    assert result.management[ManagementBodyRole.ISSUER] == ()
    assert result.persons == ("ctx_person_involved_0",)

    second = result.contexts["ctx_mgmt_offeror_1"]
    assert second.period.is_instant
    assert second.typed_member is not None
    assert second.typed_member.dimension == "mica:OfferorManagementBodyMemberDimension"
    assert second.typed_member.value == "member_1"

    person = result.contexts["ctx_person_involved_0"]
    assert not person.period.is_instant
    assert person.typed_member is not None
    assert person.typed_member.value == "person_0"


@pytest.mark.parametrize("lei", [None, "", "   ", "NOT-AN-LEI"])
def test_unusable_primary_identifier_raises(
    make_whitepaper: Callable[..., WhitepaperData], lei: str | None
) -> None:
    record = make_whitepaper(part_a=OfferorInfo(legal_name="No LEI Ltd", lei=lei))

    with pytest.raises(MissingEntityIdentifierError) as excinfo:
        build_contexts(record)

    assert excinfo.value.details["field_path"] == "part_a.lei"


def test_bad_document_date_falls_back_to_today() -> None:
    fallback = date(2024, 2, 29)
    assert resolve_document_date("30/06/2025", today=fallback) == fallback
    assert resolve_document_date(None, today=fallback) == fallback
    assert resolve_document_date(" 2025-06-30 ", today=fallback) == date(2025, 6, 30)


def test_resolve_unit_accepts_standard_and_currency_units() -> None:
    assert resolve_unit("unit_pure").measure == "xbrli:pure"
    assert resolve_unit("unit_kWh").measure == "utr:kWh"
    assert resolve_unit("unit_JPY").measure == "iso4217:JPY"

    with pytest.raises(ValueError):
        resolve_unit("unit_tokens")
