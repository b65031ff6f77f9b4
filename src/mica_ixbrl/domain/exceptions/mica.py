# src/mica_ixbrl/domain/exceptions/mica.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""MiCA white-paper domain exceptions."""

from __future__ import annotations

from mica_ixbrl.domain.exceptions.base import DomainError


class MissingEntityIdentifierError(DomainError):
    """Raised when the primary entity has no usable legal-entity identifier.

    Every context is reported against the primary LEI, so generation aborts
    without producing a partial document.
    """

    code = "MISSING_ENTITY_IDENTIFIER"


class InvalidWhitepaperError(DomainError):
    """Raised when input data cannot be turned into a white-paper record."""

    code = "INVALID_WHITEPAPER"


class InvalidIXBRLDocumentError(DomainError):
    """Raised when an inline XBRL document cannot be parsed back into facts."""

    code = "INVALID_IXBRL_DOCUMENT"


class LeiRegistryError(DomainError):
    """Raised by registry clients on non-recoverable lookup failures."""

    code = "LEI_REGISTRY_ERROR"


class LeiRegistryUnavailable(LeiRegistryError):
    """Raised when the registry cannot be reached or answers with 5xx/timeout."""

    code = "LEI_REGISTRY_UNAVAILABLE"


class LeiNotFound(LeiRegistryError):
    """Raised when the registry has no record for the identifier."""

    code = "LEI_NOT_FOUND"


__all__ = [
    "InvalidIXBRLDocumentError",
    "InvalidWhitepaperError",
    "LeiNotFound",
    "LeiRegistryError",
    "LeiRegistryUnavailable",
    "MissingEntityIdentifierError",
]
