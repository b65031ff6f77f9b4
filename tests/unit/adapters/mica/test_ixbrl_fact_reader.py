from __future__ import annotations

from collections.abc import Callable

import pytest

from mica_ixbrl.adapters.mappers.ixbrl_fact_reader import IXBRLFactReader
from mica_ixbrl.domain.entities.whitepaper import WhitepaperData
from mica_ixbrl.domain.exceptions.mica import InvalidIXBRLDocumentError
from mica_ixbrl.domain.services.document_assembler import NAMESPACES, DocumentAssembler
from mica_ixbrl.domain.services.duplicate_detector import detect_duplicate_facts

_HEAD = (
    f'<html xmlns="http://www.w3.org/1999/xhtml" xmlns:ix="{NAMESPACES["ix"]}" '
    f'xmlns:mica="{NAMESPACES["mica"]}"><body>'
)
_TAIL = "</body></html>"


def _doc(body: str) -> str:
    return f"{_HEAD}{body}{_TAIL}"


def test_reads_back_every_generated_fact(whitepaper: WhitepaperData) -> None:
    document = DocumentAssembler().assemble(whitepaper)

    records = IXBRLFactReader().read(document.html)

    assert len(records) == document.fact_count
    assert not detect_duplicate_facts(records).has_duplicates
    by_name = {r.name: r for r in records}
    price = by_name["mica:IssuePrice"]
    assert price.unit_ref == "unit_EUR"
    assert price.decimals is not None
    assert by_name["mica:OfferorsRegisteredCountry"].value.startswith(NAMESPACES["mica"])


def test_follows_continuation_chain() -> None:
    body = (
        '<ix:nonNumeric id="f1" name="mica:Explanatory" contextRef="c1" '
        'continuedAt="cont_f1_1">first </ix:nonNumeric>'
        '<p>not part of the fact</p>'
        '<ix:continuation id="cont_f1_1" continuedAt="cont_f1_2">second </ix:continuation>'
        '<ix:continuation id="cont_f1_2">third</ix:continuation>'
    )

    (record,) = IXBRLFactReader().read(_doc(body).encode("utf-8"))

    assert record.value == "first second third"
    assert record.unit_ref is None
    assert record.decimals is None


def test_exclude_content_is_dropped() -> None:
    body = (
        '<ix:nonNumeric name="mica:Explanatory" contextRef="c1">'
        "kept <ix:exclude>page 3</ix:exclude>tail</ix:nonNumeric>"
    )

    (record,) = IXBRLFactReader().read(_doc(body))

    assert record.value == "kept tail"


def test_numeric_attributes_are_read() -> None:
    body = (
        '<ix:nonFraction name="mica:IssuePrice" contextRef="c1" unitRef="unit_EUR" '
        'decimals="INF">0.25</ix:nonFraction>'
        '<ix:nonFraction name="mica:MaximumSubscriptionGoals" contextRef="c1" '
        'unitRef="unit_EUR" decimals="0">5000000</ix:nonFraction>'
    )

    price, goal = IXBRLFactReader().read(_doc(body))

    assert (price.value, price.unit_ref, price.decimals) == ("0.25", "unit_EUR", None)
    assert (goal.value, goal.decimals) == ("5000000", 0)


def test_negative_sign_attribute_is_folded_into_value() -> None:
    body = (
        '<ix:nonFraction name="mica:TotalNumberOfUnits" contextRef="c1" unitRef="unit_pure" '
        'decimals="0" sign="-">5</ix:nonFraction>'
    )

    (record,) = IXBRLFactReader().read(_doc(body))

    assert record.value == "-5"


def test_control_characters_in_field_text_still_read_back(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(raw_fields={"E.11": "page one\x0cpage two \x0b end\x01"})

    records = IXBRLFactReader().read(DocumentAssembler().generate(record))

    values = [r.value for r in records]
    assert "page one\npage two \n end" in values


def test_duplicate_facts_are_visible_to_detector() -> None:
    fact = '<ix:nonNumeric name="mica:Explanatory" contextRef="c1">{}</ix:nonNumeric>'
    body = fact.format("one") + fact.format("two")

    result = detect_duplicate_facts(IXBRLFactReader().read(_doc(body)))

    assert result.has_duplicates
    (group,) = result.duplicate_groups
    assert group.count == 2


@pytest.mark.parametrize(
    "body",
    [
        '<ix:nonNumeric id="f1" name="mica:X" contextRef="c1" '
        'continuedAt="cont_f1_1">a</ix:nonNumeric>',
        '<ix:nonNumeric id="f1" name="mica:X" contextRef="c1" continuedAt="cont_f1_1">a'
        '</ix:nonNumeric><ix:continuation id="cont_f1_1" continuedAt="cont_f1_1">b'
        "</ix:continuation>",
        '<ix:nonNumeric name="mica:X">a</ix:nonNumeric>',
    ],
    ids=["dangling", "cyclic", "no-context"],
)
def test_broken_documents_are_rejected(body: str) -> None:
    with pytest.raises(InvalidIXBRLDocumentError):
        IXBRLFactReader().read(_doc(body))


def test_malformed_xml_is_rejected() -> None:
    with pytest.raises(InvalidIXBRLDocumentError) as info:
        IXBRLFactReader().read("<html><body>")

    assert "error" in info.value.details


def test_entity_declarations_are_rejected() -> None:
    document = (
        '<?xml version="1.0"?><!DOCTYPE html [<!ENTITY x "boom">]>'
        "<html><body>&x;</body></html>"
    )

    with pytest.raises(InvalidIXBRLDocumentError):
        IXBRLFactReader().read(document)
