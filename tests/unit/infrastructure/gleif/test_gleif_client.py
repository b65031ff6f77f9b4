from __future__ import annotations

import httpx
import pytest
import respx

from fixtures.leis import OFFEROR_LEI

from mica_ixbrl.domain.exceptions.mica import (
    LeiNotFound,
    LeiRegistryError,
    LeiRegistryUnavailable,
)
from mica_ixbrl.infrastructure.external_apis.gleif.client import GleifClient
from mica_ixbrl.infrastructure.external_apis.gleif.settings import GleifSettings
from mica_ixbrl.infrastructure.logging.logger import set_run_context

BASE_URL = "https://gleif.test/api/v1"
RECORD_URL = f"{BASE_URL}/lei-records/{OFFEROR_LEI}"


def _settings(**overrides: object) -> GleifSettings:
    return GleifSettings(api_url=f"{BASE_URL}/", **overrides)  # type: ignore[arg-type]


@pytest.mark.asyncio
@respx.mock
async def test_fetch_sends_headers_and_returns_body() -> None:
    set_run_context(run_id="run-123")
    body = {"data": {"id": OFFEROR_LEI, "attributes": {"lei": OFFEROR_LEI}}}
    route = respx.get(RECORD_URL).mock(return_value=httpx.Response(200, json=body))

    async with httpx.AsyncClient() as http:
        client = GleifClient(_settings(api_key="secret"), http=http)
        payload = await client.fetch_lei_record(OFFEROR_LEI)

    assert payload == body
    request = route.calls.last.request
    assert request.headers["Accept"] == "application/vnd.api+json"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["X-Request-ID"] == "run-123"


@pytest.mark.asyncio
@respx.mock
async def test_no_authorization_without_key() -> None:
    route = respx.get(RECORD_URL).mock(return_value=httpx.Response(200, json={"data": {}}))

    async with httpx.AsyncClient() as http:
        await GleifClient(_settings(api_key=None), http=http).fetch_lei_record(OFFEROR_LEI)

    assert "Authorization" not in route.calls.last.request.headers


@pytest.mark.asyncio
@respx.mock
async def test_404_maps_to_not_found() -> None:
    respx.get(RECORD_URL).mock(return_value=httpx.Response(404, json={"errors": []}))

    async with httpx.AsyncClient() as http:
        client = GleifClient(_settings(), http=http)
        with pytest.raises(LeiNotFound) as info:
            await client.fetch_lei_record(OFFEROR_LEI)

    assert info.value.details == {"lei": OFFEROR_LEI}


@pytest.mark.asyncio
@respx.mock
@pytest.mark.parametrize("status", [429, 500, 503])
async def test_throttling_and_server_errors_map_to_unavailable(status: int) -> None:
    respx.get(RECORD_URL).mock(return_value=httpx.Response(status))

    async with httpx.AsyncClient() as http:
        client = GleifClient(_settings(), http=http)
        with pytest.raises(LeiRegistryUnavailable) as info:
            await client.fetch_lei_record(OFFEROR_LEI)

    assert info.value.details["status"] == status


@pytest.mark.asyncio
@respx.mock
async def test_other_client_errors_map_to_registry_error() -> None:
    respx.get(RECORD_URL).mock(return_value=httpx.Response(400, json={"errors": []}))

    async with httpx.AsyncClient() as http:
        client = GleifClient(_settings(), http=http)
        with pytest.raises(LeiRegistryError) as info:
            await client.fetch_lei_record(OFFEROR_LEI)

    assert type(info.value) is LeiRegistryError


@pytest.mark.asyncio
@respx.mock
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, content=b"<html>maintenance</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
    ],
    ids=["not-json", "not-object"],
)
async def test_bad_bodies_map_to_registry_error(response: httpx.Response) -> None:
    respx.get(RECORD_URL).mock(return_value=response)

    async with httpx.AsyncClient() as http:
        client = GleifClient(_settings(), http=http)
        with pytest.raises(LeiRegistryError):
            await client.fetch_lei_record(OFFEROR_LEI)


@pytest.mark.asyncio
@respx.mock
async def test_timeout_maps_to_unavailable() -> None:
    respx.get(RECORD_URL).mock(side_effect=httpx.ReadTimeout("slow"))

    async with httpx.AsyncClient() as http:
        client = GleifClient(_settings(timeout_s=0.5), http=http)
        with pytest.raises(LeiRegistryUnavailable) as info:
            await client.fetch_lei_record(OFFEROR_LEI)

    assert info.value.details["timeout_s"] == 0.5


@pytest.mark.asyncio
@respx.mock
async def test_connection_failure_maps_to_unavailable() -> None:
    respx.get(RECORD_URL).mock(side_effect=httpx.ConnectError("refused"))

    async with GleifClient(_settings()) as client:
        with pytest.raises(LeiRegistryUnavailable):
            await client.fetch_lei_record(OFFEROR_LEI)


@pytest.mark.asyncio
async def test_shared_client_is_not_closed() -> None:
    async with httpx.AsyncClient() as http:
        async with GleifClient(_settings(), http=http):
            pass
        assert not http.is_closed
