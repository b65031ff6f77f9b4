# src/mica_ixbrl/adapters/gateways/gleif_registry_gateway.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""GLEIF-backed LEI registry gateway.

Synopsis:
    Implements ``LeiRegistryGatewayProtocol`` on top of the GLEIF transport
    client. Transport and payload failures are absorbed here so validation
    falls back to format-only identifier checks.

Layer:
    adapters/gateways
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from mica_ixbrl.adapters.mappers.gleif_record_mapper import map_gleif_record
from mica_ixbrl.domain.entities.validation import LeiRegistryRecord
from mica_ixbrl.domain.exceptions.mica import LeiNotFound, LeiRegistryError
from mica_ixbrl.domain.services.lei import normalize_lei

logger = logging.getLogger(__name__)


class _LeiRecordClient(Protocol):
    async def fetch_lei_record(self, lei: str) -> Mapping[str, Any]: ...


class GleifRegistryGateway:
    """LEI registry gateway backed by the GLEIF REST API.

    Args:
        client: Transport exposing ``fetch_lei_record``; usually a
            ``GleifClient``.
    """

    def __init__(self, client: _LeiRecordClient) -> None:
        self._client = client

    async def lookup(self, lei: str) -> LeiRegistryRecord | None:
        """Look up ``lei``.

        Returns:
            ``found=False`` on 404, a populated record on success and
            ``None`` when the registry could not be consulted.
        """
        normalized = normalize_lei(lei)
        try:
            payload = await self._client.fetch_lei_record(normalized)
        except LeiNotFound:
            logger.info("gleif.lookup.not_found", extra={"lei": normalized})
            return LeiRegistryRecord(lei=normalized, found=False)
        except LeiRegistryError as exc:
            logger.warning(
                "gleif.lookup.failed",
                extra={"lei": normalized, "error_code": exc.code, "error": exc.message},
            )
            return None

        if not isinstance(payload, Mapping):
            logger.warning("gleif.lookup.bad_payload", extra={"lei": normalized})
            return None
        try:
            record = map_gleif_record(normalized, payload)
        except LeiRegistryError as exc:
            logger.warning(
                "gleif.lookup.bad_payload", extra={"lei": normalized, "error": exc.message}
            )
            return None

        logger.info(
            "gleif.lookup.found",
            extra={"lei": normalized, "registration_status": record.registration_status},
        )
        return record


__all__ = ["GleifRegistryGateway"]
