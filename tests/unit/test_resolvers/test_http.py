"""Unit tests for the registry HTTP client."""

import asyncio
from typing import AsyncGenerator

import pytest
from aiohttp import ClientError
from aioresponses import aioresponses
from yarl import URL

from pypi_releases.hostrules import HostRule, HostRules
from pypi_releases.resolvers.http import RegistryHttpClient

URL_ = "https://customprivate.pypi.net/foo/azure-cli-monitor/json"


@pytest.fixture
async def http_client() -> AsyncGenerator[RegistryHttpClient, None]:
    """Return a client holding a token for customprivate.pypi.net."""
    client = RegistryHttpClient(
        host_rules=HostRules([HostRule(match_host="customprivate.pypi.net", token="123test")])
    )
    yield client
    await client.close()


@pytest.mark.asyncio
async def test_get_text_returns_body(http_client: RegistryHttpClient) -> None:
    """2xx responses return their body."""
    with aioresponses() as mock:
        mock.get(URL_, status=200, body='{"info": {}}')

        assert await http_client.get_text(URL_) == '{"info": {}}'


@pytest.mark.asyncio
async def test_get_text_sends_credentials(http_client: RegistryHttpClient) -> None:
    """Requests to a host with stored credentials carry an Authorization header."""
    with aioresponses() as mock:
        mock.get(URL_, status=200, body="{}")

        await http_client.get_text(URL_, accept="application/json")

        call = mock.requests[("GET", URL(URL_))][0]
        assert call.kwargs["headers"]["Authorization"] == "Bearer 123test"
        assert call.kwargs["headers"]["Accept"] == "application/json"


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [403, 404, 410, 500, 503])
async def test_get_text_non_success_status(http_client: RegistryHttpClient, status: int) -> None:
    """Non-2xx statuses are reported as None."""
    with aioresponses() as mock:
        mock.get(URL_, status=status)

        assert await http_client.get_text(URL_) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("exception", [ClientError("Network error"), asyncio.TimeoutError()])
async def test_get_text_transport_errors(
    http_client: RegistryHttpClient, exception: Exception
) -> None:
    """Transport failures are reported as None without retrying."""
    with aioresponses() as mock:
        mock.get(URL_, exception=exception)

        assert await http_client.get_text(URL_) is None
        assert len(mock.requests[("GET", URL(URL_))]) == 1


@pytest.mark.asyncio
async def test_close_is_idempotent() -> None:
    """Closing twice, or before any request, is harmless."""
    client = RegistryHttpClient()
    await client.close()
    async with client:
        with aioresponses() as mock:
            mock.get(URL_, status=200, body="ok")
            assert await client.get_text(URL_) == "ok"
    await client.close()
