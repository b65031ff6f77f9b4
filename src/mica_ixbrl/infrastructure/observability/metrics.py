# src/mica_ixbrl/infrastructure/observability/metrics.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Prometheus metrics (registry-aware, test safe).

Every collector is obtained through an accessor that returns a singleton
bound to the currently active ``prometheus_client.REGISTRY``. Caches reset
when the active registry changes, so tests that swap the default registry
never hit duplicate-registration errors.

Example:
    get_documents_generated_total().labels(token_type="OTHR", outcome="success").inc()
    get_generation_latency_seconds().labels(token_type="OTHR").observe(0.08)
"""

from __future__ import annotations

import logging
import threading
from contextlib import suppress
from typing import Final

import prometheus_client as prom
from prometheus_client import Counter, Histogram

_log = logging.getLogger(__name__)

_BUCKETS: Final[tuple[float, ...]] = (
    0.005,
    0.010,
    0.025,
    0.050,
    0.100,
    0.250,
    0.500,
    1.000,
    2.500,
    5.000,
    10.000,
)

_registry_id: int | None = None
_hist_cache: dict[str, Histogram] = {}
_counter_cache: dict[str, Counter] = {}
_lock = threading.RLock()


# ---------------------------------------------------------------------------
# Registry-handling primitives


def _ensure_registry() -> None:
    """Reset caches if the active registry changed."""
    global _registry_id
    with _lock:
        rid = id(prom.REGISTRY)
        if _registry_id != rid:
            _hist_cache.clear()
            _counter_cache.clear()
            _registry_id = rid


def _lookup_existing(name: str) -> object | None:
    """Return a collector already registered under ``name`` on the active registry."""
    with _lock, suppress(Exception):
        mapping = getattr(prom.REGISTRY, "_names_to_collectors", None)
        if isinstance(mapping, dict):
            return mapping.get(name)
    return None


def _get_or_create_hist(
    name: str,
    help_text: str,
    *,
    labelnames: tuple[str, ...] = (),
    buckets: tuple[float, ...] = _BUCKETS,
) -> Histogram:
    """Get or create a registry-bound ``Histogram`` with stable identity.

    Args:
        name: Metric name (snake_case).
        help_text: Human-readable description.
        labelnames: Label names.
        buckets: Histogram buckets in seconds.

    Returns:
        Histogram: Bound to ``prom.REGISTRY``.
    """
    _ensure_registry()
    with _lock:
        cached = _hist_cache.get(name)
        if cached is not None:
            return cached

        existing = _lookup_existing(name)
        if isinstance(existing, Histogram):
            _hist_cache[name] = existing
            return existing

        try:
            hist = Histogram(name, help_text, labelnames, buckets=buckets, registry=prom.REGISTRY)
        except ValueError:
            again = _lookup_existing(name)
            if isinstance(again, Histogram):
                _hist_cache[name] = again
                return again
            _log.exception("Failed to register Prometheus histogram %s", name)
            raise
        _hist_cache[name] = hist
        return hist


def _get_or_create_counter(
    name: str,
    help_text: str,
    *,
    labelnames: tuple[str, ...] = (),
) -> Counter:
    """Get or create a registry-bound ``Counter`` with stable identity.

    ``prometheus_client`` registers counters under their base name without the
    ``_total`` suffix, so the lookup tries both spellings.
    """
    _ensure_registry()
    with _lock:
        cached = _counter_cache.get(name)
        if cached is not None:
            return cached

        for candidate in (name, name.removesuffix("_total")):
            existing = _lookup_existing(candidate)
            if isinstance(existing, Counter):
                _counter_cache[name] = existing
                return existing

        try:
            counter = Counter(name, help_text, labelnames, registry=prom.REGISTRY)
        except ValueError:
            again = _lookup_existing(name.removesuffix("_total"))
            if isinstance(again, Counter):
                _counter_cache[name] = again
                return again
            _log.exception("Failed to register Prometheus counter %s", name)
            raise
        _counter_cache[name] = counter
        return counter


# ---------------------------------------------------------------------------
# Generation metrics


def get_documents_generated_total() -> Counter:
    """Return counter of generation attempts.

    Labels:
        token_type: ``OTHR|ART|EMT``.
        outcome: ``success|error``.
    """
    return _get_or_create_counter(
        "mica_documents_generated_total",
        "Inline XBRL generation attempts by token type and outcome",
        labelnames=("token_type", "outcome"),
    )


def get_facts_emitted_total() -> Counter:
    """Return counter of emitted facts.

    Labels:
        kind: ``numeric|text|hidden|dimensional``.
    """
    return _get_or_create_counter(
        "mica_facts_emitted_total",
        "Facts emitted into generated documents by kind",
        labelnames=("kind",),
    )


def get_generation_latency_seconds() -> Histogram:
    """Return histogram of end-to-end generation latency."""
    return _get_or_create_hist(
        "mica_generation_latency_seconds",
        "Latency (seconds) of inline XBRL document generation",
        labelnames=("token_type",),
    )


# ---------------------------------------------------------------------------
# Validation metrics


def get_validation_runs_total() -> Counter:
    """Return counter of validation runs.

    Labels:
        token_type: Effective token type.
        outcome: ``valid|invalid``.
    """
    return _get_or_create_counter(
        "mica_validation_runs_total",
        "Validation runs by token type and outcome",
        labelnames=("token_type", "outcome"),
    )


def get_validation_findings_total() -> Counter:
    """Return counter of validation findings.

    Labels:
        category: ``lei|existence|value|duplicate``.
        severity: ``ERROR|WARNING``.
    """
    return _get_or_create_counter(
        "mica_validation_findings_total",
        "Validation findings by category and severity",
        labelnames=("category", "severity"),
    )


# ---------------------------------------------------------------------------
# Registry metrics


def get_registry_lookup_latency_seconds() -> Histogram:
    """Return histogram of LEI registry lookup latency.

    Labels:
        outcome: ``found|not_found|error``.
    """
    return _get_or_create_hist(
        "mica_registry_lookup_latency_seconds",
        "Latency (seconds) of LEI registry lookups",
        labelnames=("outcome",),
    )


def get_registry_errors_total() -> Counter:
    """Return counter of failed registry lookups.

    Labels:
        reason: Exception class name or HTTP status family.
    """
    return _get_or_create_counter(
        "mica_registry_errors_total",
        "LEI registry lookup failures",
        labelnames=("reason",),
    )


__all__ = [
    "get_documents_generated_total",
    "get_facts_emitted_total",
    "get_generation_latency_seconds",
    "get_registry_errors_total",
    "get_registry_lookup_latency_seconds",
    "get_validation_findings_total",
    "get_validation_runs_total",
]
