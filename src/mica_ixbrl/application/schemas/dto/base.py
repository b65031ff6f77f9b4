# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""Base DTO (Application Layer).

Purpose:
    Canonical Pydantic base for all application-layer DTOs. The wire format
    is camelCase (as produced by the upstream extraction service); Python
    names are accepted as well.

Layer: application/schemas/dto
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseDTO(BaseModel):
    """Base class for application-layer DTOs.

    Notes:
        - Must not import transport-specific bases.
        - Enforces strict fields (``extra='forbid'``).
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
    )
