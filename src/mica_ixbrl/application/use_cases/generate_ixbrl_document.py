# src/mica_ixbrl/application/use_cases/generate_ixbrl_document.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Use case: Generate an inline XBRL white paper.

Scope:
    * Accept either a raw JSON-like payload or an already parsed
      ``WhitepaperData`` record.
    * Fill the document language from configuration when the record has none.
    * Assemble the XHTML document on a fresh generation context.
    * Log and record metrics for the attempt.

Notes:
    * ``MissingEntityIdentifierError`` is the only generation failure; it is
      logged and re-raised unchanged, never turned into a partial document.
    * Validation is a separate use case; a generated document is eligible
      for filing only when validation reports no ERROR findings.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from mica_ixbrl.application.interfaces.metrics_recorder import MetricsRecorder
from mica_ixbrl.application.schemas.dto.whitepaper import whitepaper_from_payload
from mica_ixbrl.domain.entities.ixbrl_document import FactModel
from mica_ixbrl.domain.entities.whitepaper import WhitepaperData
from mica_ixbrl.domain.enums.mica import TokenType
from mica_ixbrl.domain.exceptions.mica import MissingEntityIdentifierError
from mica_ixbrl.domain.services.document_assembler import AssembledDocument, DocumentAssembler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a successful generation.

    Attributes:
        html: Complete XHTML document.
        token_type: Token type the document was rendered for.
        fact_count: Facts in the model, dimensional cells included.
        hidden_fact_count: Enumeration facts placed in ``ix:hidden``.
        facts_by_kind: Fact counts keyed by ``numeric|text|hidden|dimensional``.
    """

    html: str
    token_type: TokenType
    fact_count: int
    hidden_fact_count: int
    facts_by_kind: Mapping[str, int]


def count_facts_by_kind(model: FactModel) -> dict[str, int]:
    """Classify model facts as numeric, text, hidden enumeration or dimensional."""
    counts = {"numeric": 0, "text": 0, "hidden": 0, "dimensional": 0}
    for fact in model.facts.values():
        if fact.taxonomy_uri:
            counts["hidden"] += 1
        elif fact.unit_ref:
            counts["numeric"] += 1
        else:
            counts["text"] += 1
    for block in model.dimensional_blocks:
        for row in block.rows:
            counts["dimensional"] += sum(1 for _, cell in row.cells if cell is not None)
    return counts


class GenerateIXBRLDocumentUseCase:
    """Generate the inline XBRL document for one white-paper record.

    Args:
        assembler: Document assembler; a default OTHR assembler when omitted.
        metrics: Optional metrics sink.
        default_language: Language applied when the record carries none.
    """

    def __init__(
        self,
        *,
        assembler: DocumentAssembler | None = None,
        metrics: MetricsRecorder | None = None,
        default_language: str | None = None,
    ) -> None:
        self._assembler = assembler or DocumentAssembler()
        self._metrics = metrics
        self._default_language = default_language

    async def execute(self, data: WhitepaperData | Mapping[str, Any]) -> GenerationResult:
        """Generate the document.

        Args:
            data: Parsed record or raw payload.

        Returns:
            The generated document and its fact statistics.

        Raises:
            InvalidWhitepaperError: If a raw payload cannot be parsed.
            MissingEntityIdentifierError: If the primary LEI is unusable.
        """
        record = data if isinstance(data, WhitepaperData) else whitepaper_from_payload(data)
        if not record.language and self._default_language:
            record = dataclasses.replace(record, language=self._default_language)

        token_type = record.token_type or TokenType.OTHR
        logger.info(
            "ixbrl.generate.start",
            extra={
                "token_type": token_type.value,
                "language": record.language,
                "document_date": record.document_date,
            },
        )

        start = time.perf_counter()
        try:
            document: AssembledDocument = self._assembler.assemble(record)
        except MissingEntityIdentifierError as exc:
            elapsed = time.perf_counter() - start
            logger.warning(
                "ixbrl.generate.missing_identifier",
                extra={"token_type": token_type.value, "error_code": exc.code},
            )
            self._record(token_type, "error", elapsed, {})
            raise

        elapsed = time.perf_counter() - start
        by_kind = count_facts_by_kind(document.model)
        self._record(token_type, "success", elapsed, by_kind)

        logger.info(
            "ixbrl.generate.success",
            extra={
                "token_type": token_type.value,
                "fact_count": document.fact_count,
                "hidden_fact_count": document.hidden_fact_count,
                "bytes": len(document.html.encode("utf-8")),
                "latency_ms": round(elapsed * 1000, 2),
            },
        )
        return GenerationResult(
            html=document.html,
            token_type=token_type,
            fact_count=document.fact_count,
            hidden_fact_count=document.hidden_fact_count,
            facts_by_kind=by_kind,
        )

    def _record(
        self, token_type: TokenType, outcome: str, elapsed: float, by_kind: Mapping[str, int]
    ) -> None:
        if self._metrics is None:
            return
        self._metrics.record_generation(
            token_type=token_type.value,
            outcome=outcome,
            latency_s=elapsed,
            facts_by_kind=by_kind,
        )


__all__ = ["GenerateIXBRLDocumentUseCase", "GenerationResult", "count_facts_by_kind"]
