# src/mica_ixbrl/domain/exceptions/base.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Base domain exception.

Purpose:
    Provide a single root for all domain-level errors so outer layers can map
    them to exit codes or structured output without importing transport
    specifics.

Layer:
    domain/exceptions
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


class DomainError(Exception):
    """Root of the domain exception hierarchy.

    Attributes:
        code: Stable machine-readable error code.
        message: Human-readable description.
        details: Optional structured context for logs and callers.
    """

    code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "", *, details: Mapping[str, Any] | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable description.
            details: Optional structured context.
        """
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = dict(details or {})

    def __str__(self) -> str:
        """Return the human-readable message."""
        return self.message or self.code


__all__ = ["DomainError"]
