# src/mica_ixbrl/domain/interfaces/gateways/lei_registry_gateway.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""LEI Registry Gateway Protocol.

Synopsis:
    Domain-level Protocol (PEP 544) abstracting the external Legal Entity
    Identifier registry (GLEIF). The concrete implementation lives in the
    adapters layer and must satisfy this contract.

Design:
    * Keeps the domain and application layers independent of HTTP.
    * A lookup never raises for transport problems: registry outages must
      degrade to format-only identifier validation.

Layer:
    domain/interfaces/gateways
"""

from __future__ import annotations

from typing import Protocol

from mica_ixbrl.domain.entities.validation import LeiRegistryRecord


class LeiRegistryGatewayProtocol(Protocol):
    """Abstraction over the LEI registry."""

    async def lookup(self, lei: str) -> LeiRegistryRecord | None:
        """Look up one normalized LEI.

        Args:
            lei: Upper-case, whitespace-free identifier.

        Returns:
            ``LeiRegistryRecord(found=False)`` when the registry has no
            record, a populated record when it does, or ``None`` when the
            lookup could not be performed (timeout, outage, bad payload).
        """
        ...
