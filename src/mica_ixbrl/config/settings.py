# src/mica_ixbrl/config/settings.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""MiCA iXBRL Configuration (Pydantic Settings, v2).

Summary:
    Typed, validated configuration for the command-line tool and any host
    process embedding the use cases. Only the CLI and infrastructure read the
    process environment; use cases receive plain values.

Design:
    - Pydantic v2 ``BaseSettings`` with the ``MICA_`` prefix.
    - Environment enumeration for coarse behavior toggles.
    - Singleton accessor ``get_settings()`` with LRU cache.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mica_ixbrl.domain.taxonomy.languages import DEFAULT_LANGUAGE, is_supported_language


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application configuration.

    Environment variables:

    * ``MICA_ENVIRONMENT``
    * ``MICA_LOG_LEVEL``
    * ``MICA_DEFAULT_LANGUAGE``
    * ``MICA_CHECK_REGISTRY``
    """

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level for the JSON logger.",
    )
    default_language: str = Field(
        default=DEFAULT_LANGUAGE,
        min_length=2,
        max_length=2,
        description="Document language used when a record carries none.",
    )
    check_registry: bool = Field(
        default=False,
        description="Whether validation consults the GLEIF registry by default.",
    )

    model_config = SettingsConfigDict(
        env_prefix="MICA_",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    @field_validator("default_language")
    @classmethod
    def _supported_language(cls, value: str) -> str:
        lang = value.strip().lower()
        if not is_supported_language(lang):
            raise ValueError(f"unsupported default language: {value!r}")
        return lang


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton ``Settings`` instance."""
    return Settings()


__all__ = ["Environment", "Settings", "get_settings"]
