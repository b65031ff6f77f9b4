# src/mica_ixbrl/application/use_cases/validate_whitepaper.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Use case: Validate a white-paper record.

Scope:
    * Parse the payload (or accept a parsed record).
    * When registry checking is requested, look up every structurally valid
      LEI through the registry gateway.
    * Run the validation orchestrator and report metrics.

Notes:
    * Registry lookups degrade gracefully: a gateway that returns ``None``
      (or a missing gateway) leaves that identifier with format-only
      validation. Lookup failures are logged, never raised.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping
from typing import Any

from mica_ixbrl.application.interfaces.metrics_recorder import MetricsRecorder
from mica_ixbrl.application.schemas.dto.whitepaper import whitepaper_from_payload
from mica_ixbrl.domain.entities.validation import (
    LeiRegistryRecord,
    ValidationOptions,
    ValidationResult,
)
from mica_ixbrl.domain.entities.whitepaper import WhitepaperData
from mica_ixbrl.domain.interfaces.gateways.lei_registry_gateway import (
    LeiRegistryGatewayProtocol,
)
from mica_ixbrl.domain.services.lei import (
    is_valid_lei_checksum,
    is_valid_lei_format,
    normalize_lei,
)
from mica_ixbrl.domain.services.lei_validator import lei_targets
from mica_ixbrl.domain.services.validation_orchestrator import (
    ValidationOrchestrator,
    resolve_token_type,
)

logger = logging.getLogger(__name__)


class ValidateWhitepaperUseCase:
    """Validate one white-paper record.

    Args:
        registry: Optional LEI registry gateway.
        orchestrator: Validation orchestrator; a default one when omitted.
        metrics: Optional metrics sink.
    """

    def __init__(
        self,
        *,
        registry: LeiRegistryGatewayProtocol | None = None,
        orchestrator: ValidationOrchestrator | None = None,
        metrics: MetricsRecorder | None = None,
    ) -> None:
        self._registry = registry
        self._orchestrator = orchestrator or ValidationOrchestrator()
        self._metrics = metrics

    async def execute(
        self,
        data: WhitepaperData | Mapping[str, Any],
        options: ValidationOptions | None = None,
    ) -> ValidationResult:
        """Validate ``data``.

        Raises:
            InvalidWhitepaperError: If a raw payload cannot be parsed.
        """
        record = data if isinstance(data, WhitepaperData) else whitepaper_from_payload(data)
        opts = options or ValidationOptions()
        token_type = resolve_token_type(record, opts.token_type)

        logger.info(
            "whitepaper.validate.start",
            extra={
                "token_type": token_type.value,
                "check_registry": opts.check_registry,
                "skip_rules": sorted(opts.skip_rules),
            },
        )

        registry_records: dict[str, LeiRegistryRecord] = {}
        if opts.check_registry:
            registry_records = await self._lookup_registry(record)

        result = self._orchestrator.validate(record, opts, registry_records=registry_records)

        findings = Counter(
            (f.category.value, f.severity.value) for f in (*result.errors, *result.warnings)
        )
        if self._metrics is not None:
            self._metrics.record_validation(
                token_type=token_type.value, valid=result.valid, findings=findings
            )

        logger.info(
            "whitepaper.validate.done",
            extra={
                "token_type": token_type.value,
                "valid": result.valid,
                "errors": result.summary.errors,
                "warnings": result.summary.warnings,
                "total_assertions": result.summary.total_assertions,
            },
        )
        return result

    async def _lookup_registry(self, record: WhitepaperData) -> dict[str, LeiRegistryRecord]:
        """Look up every structurally valid identifier of ``record``."""
        if self._registry is None:
            logger.warning("whitepaper.validate.registry_unconfigured")
            return {}

        answers: dict[str, LeiRegistryRecord] = {}
        for target in lei_targets(record):
            lei = normalize_lei(target.value)
            if lei in answers or not (is_valid_lei_format(lei) and is_valid_lei_checksum(lei)):
                continue
            answer = await self._registry.lookup(lei)
            if answer is None:
                logger.warning(
                    "whitepaper.validate.registry_skipped",
                    extra={"lei": lei, "field_path": target.field_path},
                )
                continue
            answers[lei] = answer
        return answers


__all__ = ["ValidateWhitepaperUseCase"]
