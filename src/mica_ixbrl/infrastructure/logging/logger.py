# src/mica_ixbrl/infrastructure/logging/logger.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Structured JSON logging utilities.

This module exposes an idempotent root configurator and a per-module logger
factory producing one JSON object per line, so CLI runs and batch jobs can be
shipped to a log pipeline without further parsing.

Features:
    * Stable keys: ``ts``, ``level``, ``logger``, ``message``.
    * Run correlation via ``run_id`` held in a contextvar (one id per CLI
      invocation or use-case execution).
    * ``extra={...}`` keys are merged into the payload.

Typical usage:
    configure_root_logging()
    log = get_json_logger(__name__)
    log.info("ixbrl.generate.success", extra={"facts": 212})
"""

from __future__ import annotations

import json
import logging
import os
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, Final

__all__ = [
    "configure_root_logging",
    "get_json_logger",
    "get_run_id",
    "set_run_context",
]

_RUN_ID_ENV_KEY: Final[str] = "MICA_RUN_ID"

_RUN_ID_CTX: ContextVar[str | None] = ContextVar("mica_run_id", default=None)

# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RESERVED_ATTRS: Final[frozenset[str]] = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


def set_run_context(*, run_id: str | None = None) -> None:
    """Bind a run correlation id to the current context.

    Args:
        run_id: Identifier shared by every log line of one run.
    """
    if run_id is not None:
        _RUN_ID_CTX.set(run_id)


def get_run_id() -> str | None:
    """Return the current run id from contextvars, if any."""
    return _RUN_ID_CTX.get(None)


class _JsonFormatter(logging.Formatter):
    """JSON log formatter emitting stable keys and optional extras."""

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON object.

        Args:
            record: Logging record.

        Returns:
            JSON-encoded log line.
        """
        payload: dict[str, Any] = {
            "ts": datetime.now(tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        run_id = (
            getattr(record, "run_id", None) or _RUN_ID_CTX.get(None) or os.getenv(_RUN_ID_ENV_KEY)
        )
        if run_id:
            payload["run_id"] = run_id

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            if exc_type is not None:
                payload["exc_type"] = exc_type.__name__
            if exc_value is not None:
                payload["exc_message"] = str(exc_value)

        for key, value in vars(record).items():
            if key in _RESERVED_ATTRS or key in payload or key == "run_id":
                continue
            if key == "extra" and isinstance(value, dict):
                payload.update(value)
                continue
            payload[key] = value

        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def configure_root_logging(level: str | int | None = None) -> None:
    """Initialize the root logger with a JSON stream handler (idempotent).

    Args:
        level: Logging level or level name. If ``None``, use env ``LOG_LEVEL``
            or ``INFO``.
    """
    root = logging.getLogger()

    env_level = os.getenv("LOG_LEVEL")
    resolved: int | str = (
        level if level is not None else (env_level.upper() if env_level else "INFO")
    )
    if isinstance(resolved, str):
        resolved = resolved.upper()
    root.setLevel(resolved)

    if any(isinstance(h.formatter, _JsonFormatter) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(_JsonFormatter())
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return a module-specific logger backed by the JSON root handler.

    This does not configure the root logger; call
    :func:`configure_root_logging` once at startup.

    Args:
        name: Logger name, typically ``__name__`` of the caller.

    Returns:
        Configured logger.
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
