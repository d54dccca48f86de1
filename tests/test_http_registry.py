from __future__ import annotations

import json
from typing import Any

import aiohttp
import pytest

from pyalpr.exceptions import AlprTransportError
from pyalpr.models import AlprStatus
from pyalpr.registry import AsyncLookupClient, HttpRegistry
from pyalpr.resolver import resolve


class _FakeResponse:
    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self._body = body

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def text(self) -> str:
        return self._body


class _FakeSession:
    """Stands in for ``aiohttp.ClientSession.get``."""

    def __init__(self, routes: dict[str, tuple[int, Any]] | None = None, error: Exception | None = None) -> None:
        self._routes = routes or {}
        self._error = error
        self.requests: list[tuple[str, dict[str, str] | None]] = []

    def get(self, url: str, *, params: dict[str, str] | None = None, timeout: Any = None) -> _FakeResponse:
        self.requests.append((url, params))
        if self._error is not None:
            raise self._error
        status, body = self._routes.get(url, (404, "not found"))
        text = body if isinstance(body, str) else json.dumps(body)
        return _FakeResponse(status, text)


def _registry(session: _FakeSession) -> HttpRegistry:
    return HttpRegistry("http://registry.local/api/", session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_plate_lookup_returns_object() -> None:
    session = _FakeSession({"http://registry.local/api/vehicles/STOLE1": (200, {"license_plate": "STOLE1", "is_stolen": 1})})

    row = await _registry(session).lookup_by_plate("STOLE1")

    assert row == {"license_plate": "STOLE1", "is_stolen": 1}


@pytest.mark.asyncio
async def test_unknown_plate_is_empty() -> None:
    row = await _registry(_FakeSession()).lookup_by_plate("NOPE")
    assert row == {}


@pytest.mark.asyncio
async def test_plate_is_url_quoted() -> None:
    session = _FakeSession()
    await _registry(session).lookup_by_plate("NO PLATE")
    assert session.requests[0][0] == "http://registry.local/api/vehicles/NO%20PLATE"


@pytest.mark.asyncio
async def test_owner_lookup_passes_query_params() -> None:
    session = _FakeSession({"http://registry.local/api/owners": (200, [{"first_name": "Tony"}, "junk"])})

    rows = await _registry(session).lookup_by_owner_name("Tony", "Soprano")

    assert rows == [{"first_name": "Tony"}]
    assert session.requests[0][1] == {"first_name": "Tony", "last_name": "Soprano"}


@pytest.mark.asyncio
async def test_server_error_raises_transport_error() -> None:
    session = _FakeSession({"http://registry.local/api/vehicles/ABC": (500, "boom")})

    with pytest.raises(AlprTransportError) as excinfo:
        await _registry(session).lookup_by_plate("ABC")

    assert excinfo.value.status_code == 500
    assert excinfo.value.endpoint == "/vehicles/ABC"
    assert excinfo.value.plate == "ABC"


@pytest.mark.asyncio
async def test_network_error_is_wrapped() -> None:
    session = _FakeSession(error=aiohttp.ClientConnectionError("refused"))

    with pytest.raises(AlprTransportError) as excinfo:
        await _registry(session).lookup_by_plate("ABC")

    assert isinstance(excinfo.value.__cause__, aiohttp.ClientConnectionError)


@pytest.mark.asyncio
async def test_invalid_json_raises() -> None:
    session = _FakeSession({"http://registry.local/api/vehicles/ABC": (200, "<html>")})

    with pytest.raises(AlprTransportError, match="Invalid JSON"):
        await _registry(session).lookup_by_plate("ABC")


@pytest.mark.asyncio
async def test_owner_endpoint_must_return_list() -> None:
    session = _FakeSession({"http://registry.local/api/owners": (200, {"first_name": "Tony"})})

    with pytest.raises(AlprTransportError):
        await _registry(session).lookup_by_owner_name("Tony", "Soprano")


@pytest.mark.asyncio
async def test_async_lookup_client_resolves_owner() -> None:
    session = _FakeSession(
        {
            "http://registry.local/api/vehicles/OWNED1": (
                200,
                {"license_plate": "OWNED1", "ped_id": 2, "first_name": "Tony", "last_name": "Soprano"},
            ),
            "http://registry.local/api/owners": (200, [{"first_name": "Tony", "last_name": "Soprano", "is_wanted": True}]),
        }
    )

    record = await AsyncLookupClient(_registry(session)).fetch("OWNED1")

    assert record is not None
    assert record.owner is not None
    assert resolve(record).status == AlprStatus.STOLEN
