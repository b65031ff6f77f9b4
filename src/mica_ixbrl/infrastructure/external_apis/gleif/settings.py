# src/mica_ixbrl/infrastructure/external_apis/gleif/settings.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""GLEIF transport client settings.

Purpose:
    Provide Pydantic-based configuration for the GLEIF LEI registry client:
    base URL, optional API key and per-request timeout.

Layer:
    infrastructure

Notes:
    - Values are sourced from environment variables prefixed with ``GLEIF_``.
    - The API key is also accepted from ``LEI_API_KEY``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GleifSettings(BaseSettings):
    """Configuration for the GLEIF HTTP client.

    Environment variables:

    * ``GLEIF_API_URL``
    * ``GLEIF_API_KEY`` or ``LEI_API_KEY``
    * ``GLEIF_TIMEOUT_S``
    """

    api_url: str = Field(
        "https://api.gleif.org/api/v1",
        description="Base URL of the GLEIF REST API.",
    )
    api_key: SecretStr | None = Field(
        default=None,
        description="Optional bearer token sent with every lookup.",
        validation_alias=AliasChoices("GLEIF_API_KEY", "LEI_API_KEY"),
    )
    timeout_s: float = Field(
        5.0,
        gt=0,
        le=60.0,
        description="Per-request timeout in seconds. Lookups are never retried.",
    )

    model_config = SettingsConfigDict(
        env_prefix="GLEIF_",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_gleif_settings() -> GleifSettings:
    """Return a cached ``GleifSettings`` instance."""
    return GleifSettings()


__all__ = ["GleifSettings", "get_gleif_settings"]
