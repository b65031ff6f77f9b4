# src/mica_ixbrl/adapters/mappers/gleif_record_mapper.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""GLEIF JSON:API payload → ``LeiRegistryRecord`` mapper.

Layer:
    adapters/mappers

Notes:
    Only ``data.attributes.registration.status`` and
    ``data.attributes.entity.legalName.name`` are read. A payload without a
    ``data.attributes`` object is rejected.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from mica_ixbrl.domain.entities.validation import LeiRegistryRecord
from mica_ixbrl.domain.exceptions.mica import LeiRegistryError


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def map_gleif_record(lei: str, payload: Mapping[str, Any]) -> LeiRegistryRecord:
    """Map one ``/lei-records/{lei}`` response body to a registry record.

    Raises:
        LeiRegistryError: If the payload carries no record attributes.
    """
    data = payload.get("data")
    if not isinstance(data, Mapping) or not isinstance(data.get("attributes"), Mapping):
        raise LeiRegistryError(
            "GLEIF payload has no data.attributes object.", details={"lei": lei}
        )
    attributes = data["attributes"]
    registration = _mapping(attributes.get("registration"))
    entity = _mapping(attributes.get("entity"))
    legal_name = _mapping(entity.get("legalName")).get("name")

    status = registration.get("status")
    return LeiRegistryRecord(
        lei=str(attributes.get("lei") or lei).upper(),
        found=True,
        registration_status=str(status) if status else None,
        legal_name=str(legal_name) if legal_name else None,
    )


__all__ = ["map_gleif_record"]
