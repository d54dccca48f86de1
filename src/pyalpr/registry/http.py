"""HTTP registry client."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import aiohttp

from pyalpr.exceptions import AlprTransportError

_logger = logging.getLogger(__name__)


class HttpRegistry:
    """Async registry backed by a JSON HTTP service.

    Endpoints::

        GET {base}/vehicles/{plate}                      -> object, 404 when unknown
        GET {base}/owners?first_name=..&last_name=..     -> list of objects

    The caller owns ``http_session`` and closes it.
    """

    def __init__(
        self,
        base_url: str,
        http_session: aiohttp.ClientSession,
        *,
        timeout: float = 2.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def _get_json(
        self,
        endpoint: str,
        *,
        params: dict[str, str] | None = None,
        plate: str = "",
        allow_missing: bool = False,
    ) -> Any:
        url = f"{self._base_url}{endpoint}"
        _logger.debug("GET %s", url)
        try:
            async with self._http.get(url, params=params, timeout=self._timeout) as resp:
                text = await resp.text()
                if resp.status == 404 and allow_missing:
                    return None
                if resp.status != 200:
                    raise AlprTransportError(
                        f"HTTP {resp.status} from {endpoint}: {text[:200]}",
                        plate=plate,
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except AlprTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise AlprTransportError(
                f"Request to {endpoint} failed: {exc}",
                plate=plate,
                endpoint=endpoint,
            ) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise AlprTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                plate=plate,
                endpoint=endpoint,
            ) from exc

    async def lookup_by_plate(self, plate: str) -> dict[str, Any]:
        endpoint = f"/vehicles/{quote(plate, safe='')}"
        body = await self._get_json(endpoint, plate=plate, allow_missing=True)
        if body is None:
            return {}
        if not isinstance(body, dict):
            raise AlprTransportError(
                f"Expected an object from {endpoint}, got {type(body).__name__}",
                plate=plate,
                endpoint=endpoint,
            )
        return body

    async def lookup_by_owner_name(self, first_name: str, last_name: str) -> list[dict[str, Any]]:
        endpoint = "/owners"
        body = await self._get_json(endpoint, params={"first_name": first_name, "last_name": last_name})
        if not isinstance(body, list):
            raise AlprTransportError(
                f"Expected a list from {endpoint}, got {type(body).__name__}",
                endpoint=endpoint,
            )
        return [row for row in body if isinstance(row, dict)]
