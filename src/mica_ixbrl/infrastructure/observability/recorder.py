# src/mica_ixbrl/infrastructure/observability/recorder.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Prometheus-backed implementation of the application ``MetricsRecorder``."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import suppress

from mica_ixbrl.infrastructure.observability.metrics import (
    get_documents_generated_total,
    get_facts_emitted_total,
    get_generation_latency_seconds,
    get_validation_findings_total,
    get_validation_runs_total,
)


class PrometheusMetricsRecorder:
    """Record use-case outcomes on the active Prometheus registry.

    Metric failures are swallowed: instrumentation must never fail a run.
    """

    def record_generation(
        self,
        *,
        token_type: str,
        outcome: str,
        latency_s: float,
        facts_by_kind: Mapping[str, int],
    ) -> None:
        with suppress(Exception):
            get_documents_generated_total().labels(token_type=token_type, outcome=outcome).inc()
            get_generation_latency_seconds().labels(token_type=token_type).observe(latency_s)
            facts = get_facts_emitted_total()
            for kind, count in facts_by_kind.items():
                if count:
                    facts.labels(kind=kind).inc(count)

    def record_validation(
        self,
        *,
        token_type: str,
        valid: bool,
        findings: Mapping[tuple[str, str], int],
    ) -> None:
        with suppress(Exception):
            get_validation_runs_total().labels(
                token_type=token_type, outcome="valid" if valid else "invalid"
            ).inc()
            counter = get_validation_findings_total()
            for (category, severity), count in findings.items():
                if count:
                    counter.labels(category=category, severity=severity).inc(count)


__all__ = ["PrometheusMetricsRecorder"]
