# src/mica_ixbrl/application/interfaces/metrics_recorder.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Application-level metrics recorder interface.

Purpose:
    Let use cases report generation and validation outcomes without
    importing the Prometheus wiring that lives in infrastructure.

Layer:
    application
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class MetricsRecorder(Protocol):
    """Sink for use-case level measurements."""

    def record_generation(
        self,
        *,
        token_type: str,
        outcome: str,
        latency_s: float,
        facts_by_kind: Mapping[str, int],
    ) -> None:
        """Record one generation attempt.

        Args:
            token_type: Effective token type value.
            outcome: ``success`` or ``error``.
            latency_s: Wall time of the attempt in seconds.
            facts_by_kind: Emitted fact counts keyed by kind; empty on error.
        """
        ...

    def record_validation(
        self,
        *,
        token_type: str,
        valid: bool,
        findings: Mapping[tuple[str, str], int],
    ) -> None:
        """Record one validation run.

        Args:
            token_type: Effective token type value.
            valid: Overall outcome.
            findings: Finding counts keyed by ``(category, severity)``.
        """
        ...


__all__ = ["MetricsRecorder"]
