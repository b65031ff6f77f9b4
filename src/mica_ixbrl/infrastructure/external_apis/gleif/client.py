# src/mica_ixbrl/infrastructure/external_apis/gleif/client.py
# Copyright (c) MiCA iXBRL.
# SPDX-License-Identifier: MIT
"""GLEIF Transport Client (async, instrumented).

Endpoints:
    * fetch_lei_record: ``GET {api_url}/lei-records/{lei}``

Notes:
    * One attempt per lookup with a bounded timeout; no retries and no
      circuit breaker. Callers degrade to format-only validation on failure.
    * Caller-facing exceptions are always registry domain exceptions; httpx
      types never cross the boundary.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from contextlib import suppress
from typing import Any, Final

import httpx

from mica_ixbrl.domain.exceptions.mica import (
    LeiNotFound,
    LeiRegistryError,
    LeiRegistryUnavailable,
)
from mica_ixbrl.infrastructure.external_apis.gleif.settings import GleifSettings
from mica_ixbrl.infrastructure.logging.logger import get_run_id
from mica_ixbrl.infrastructure.observability.metrics import (
    get_registry_errors_total,
    get_registry_lookup_latency_seconds,
)

_DEFAULT_HEADERS: Final[dict[str, str]] = {
    "Accept": "application/vnd.api+json",
    "User-Agent": "mica-ixbrl/0.1",
}


class GleifClient:
    """Transport client for the GLEIF LEI registry."""

    def __init__(
        self,
        settings: GleifSettings,
        *,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Registry settings.
            http: Optional shared ``httpx.AsyncClient``. If omitted, a client
                is created and owned by this instance.
        """
        self._base_url = settings.api_url.rstrip("/")
        self._timeout = float(settings.timeout_s)

        headers = _DEFAULT_HEADERS.copy()
        if settings.api_key is not None and settings.api_key.get_secret_value():
            headers["Authorization"] = f"Bearer {settings.api_key.get_secret_value()}"

        self._owns_client = http is None
        self._client = http or httpx.AsyncClient(timeout=self._timeout)
        self._headers = headers

        self._latency = get_registry_lookup_latency_seconds()
        self._errors = get_registry_errors_total()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> GleifClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------ #
    # Public API                                                         #
    # ------------------------------------------------------------------ #

    async def fetch_lei_record(self, lei: str) -> Mapping[str, Any]:
        """Fetch the JSON:API document for one LEI.

        Args:
            lei: Normalized identifier.

        Returns:
            The decoded response body.

        Raises:
            LeiNotFound: On 404.
            LeiRegistryUnavailable: On timeout, transport failure, 429 or 5xx.
            LeiRegistryError: On other 4xx or a malformed body.
        """
        url = f"{self._base_url}/lei-records/{lei}"
        headers = dict(self._headers)
        run_id = get_run_id()
        if run_id:
            headers["X-Request-ID"] = run_id

        start = time.perf_counter()
        outcome = "error"
        try:
            response = await self._perform_request(url, headers=headers, lei=lei)
            payload = self._handle_response(response, lei=lei)
            outcome = "found"
            return payload
        except LeiNotFound:
            outcome = "not_found"
            raise
        except LeiRegistryError as exc:
            with suppress(Exception):
                self._errors.labels(reason=type(exc).__name__).inc()
            raise
        finally:
            with suppress(Exception):
                self._latency.labels(outcome=outcome).observe(time.perf_counter() - start)

    # ------------------------------------------------------------------ #
    # Internal helpers                                                   #
    # ------------------------------------------------------------------ #

    async def _perform_request(
        self, url: str, *, headers: Mapping[str, str], lei: str
    ) -> httpx.Response:
        """Execute a single GET and map transport errors."""
        try:
            return await self._client.get(url, headers=headers, timeout=self._timeout)
        except httpx.TimeoutException as exc:
            raise LeiRegistryUnavailable(
                "GLEIF lookup timed out.",
                details={"lei": lei, "timeout_s": self._timeout},
            ) from exc
        except httpx.RequestError as exc:
            raise LeiRegistryUnavailable(
                "GLEIF transport failure.",
                details={"lei": lei, "error": str(exc)},
            ) from exc

    @staticmethod
    def _handle_response(response: httpx.Response, *, lei: str) -> Mapping[str, Any]:
        """Map an HTTP response into a JSON object or registry error."""
        status = response.status_code
        if status == 404:
            raise LeiNotFound("LEI not found in GLEIF registry.", details={"lei": lei})
        if status == 429 or status >= 500:
            raise LeiRegistryUnavailable(
                f"GLEIF API returned {status}.", details={"lei": lei, "status": status}
            )
        if status >= 400:
            raise LeiRegistryError(
                f"GLEIF API returned {status}.", details={"lei": lei, "status": status}
            )

        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise LeiRegistryError(
                "GLEIF response was not valid JSON.",
                details={"lei": lei, "error": str(exc)},
            ) from exc

        if not isinstance(payload, Mapping):
            raise LeiRegistryError(
                "GLEIF JSON response must be an object.",
                details={"lei": lei, "type": type(payload).__name__},
            )
        return payload


__all__ = ["GleifClient"]
