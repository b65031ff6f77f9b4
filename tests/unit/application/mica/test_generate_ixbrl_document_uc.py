from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

import pytest

from mica_ixbrl.application.use_cases.generate_ixbrl_document import (
    GenerateIXBRLDocumentUseCase,
)
from mica_ixbrl.domain.entities.whitepaper import OfferorInfo, WhitepaperData
from mica_ixbrl.domain.enums.mica import TokenType
from mica_ixbrl.domain.exceptions.mica import InvalidWhitepaperError, MissingEntityIdentifierError


class FakeMetrics:
    def __init__(self) -> None:
        self.generations: list[dict[str, Any]] = []
        self.validations: list[dict[str, Any]] = []

    def record_generation(
        self,
        *,
        token_type: str,
        outcome: str,
        latency_s: float,
        facts_by_kind: Mapping[str, int],
    ) -> None:
        self.generations.append(
            {
                "token_type": token_type,
                "outcome": outcome,
                "latency_s": latency_s,
                "facts_by_kind": dict(facts_by_kind),
            }
        )

    def record_validation(
        self, *, token_type: str, valid: bool, findings: Mapping[tuple[str, str], int]
    ) -> None:  # pragma: no cover - not used
        self.validations.append({"token_type": token_type, "valid": valid})


@pytest.mark.asyncio
async def test_generates_document_and_records_success(whitepaper: WhitepaperData) -> None:
    metrics = FakeMetrics()

    result = await GenerateIXBRLDocumentUseCase(metrics=metrics).execute(whitepaper)

    assert result.html.startswith('<?xml version="1.0" encoding="utf-8"?>')
    assert result.token_type is TokenType.OTHR
    assert result.hidden_fact_count == 3
    assert result.facts_by_kind["hidden"] == 3
    assert sum(result.facts_by_kind.values()) == result.fact_count
    (call,) = metrics.generations
    assert call["outcome"] == "success"
    assert call["token_type"] == "OTHR"
    assert call["latency_s"] >= 0
    assert call["facts_by_kind"] == dict(result.facts_by_kind)


@pytest.mark.asyncio
async def test_accepts_raw_payload(whitepaper_payload: dict[str, Any]) -> None:
    result = await GenerateIXBRLDocumentUseCase().execute(whitepaper_payload)

    assert 'xml:lang="en"' in result.html
    assert "Example Token Foundation e.V." in result.html
    assert result.facts_by_kind["dimensional"] > 0


@pytest.mark.asyncio
async def test_default_language_fills_missing_language(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    record = make_whitepaper(language=None)

    result = await GenerateIXBRLDocumentUseCase(default_language="de").execute(record)

    assert 'xml:lang="de"' in result.html


@pytest.mark.asyncio
async def test_record_language_wins_over_default(whitepaper: WhitepaperData) -> None:
    result = await GenerateIXBRLDocumentUseCase(default_language="de").execute(whitepaper)

    assert 'xml:lang="en"' in result.html


@pytest.mark.asyncio
async def test_missing_identifier_is_recorded_and_reraised(
    make_whitepaper: Callable[..., WhitepaperData],
) -> None:
    metrics = FakeMetrics()
    record = make_whitepaper(part_a=OfferorInfo(legal_name="No Identifier Ltd"))

    with pytest.raises(MissingEntityIdentifierError):
        await GenerateIXBRLDocumentUseCase(metrics=metrics).execute(record)

    (call,) = metrics.generations
    assert call["outcome"] == "error"
    assert call["facts_by_kind"] == {}


@pytest.mark.asyncio
async def test_malformed_payload_raises_before_generation() -> None:
    metrics = FakeMetrics()

    with pytest.raises(InvalidWhitepaperError):
        await GenerateIXBRLDocumentUseCase(metrics=metrics).execute({"partZ": {}})

    assert metrics.generations == []
