"""HTTP transport with session-cookie handling."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from http.cookies import SimpleCookie
from typing import Any, NamedTuple, Protocol

import aiohttp

from pyrazberry._redact import redact_for_log
from pyrazberry.config import RazberryConfig
from pyrazberry.exceptions import RazberryTransportError

_logger = logging.getLogger(__name__)


class TransportResponse(NamedTuple):
    status: int
    text: str
    cookies: dict[str, str]


class Transport(Protocol):
    """Structural transport interface used by :class:`RazberryClient`.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def get_text(self, path: str, *, cookies: Mapping[str, str]) -> TransportResponse: ...

    async def post_json(self, path: str, payload: Mapping[str, Any]) -> TransportResponse: ...


def _parse_set_cookies(headers: Any) -> dict[str, str]:
    """Extract name/value pairs from every Set-Cookie header."""
    cookies: dict[str, str] = {}
    for raw in headers.getall("Set-Cookie", []):
        cookie: SimpleCookie = SimpleCookie()
        cookie.load(raw)
        for key, morsel in cookie.items():
            cookies[key] = morsel.value
    return cookies


class HttpTransport:
    """aiohttp-backed transport talking to one gateway."""

    def __init__(self, config: RazberryConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str],
        body: str | None = None,
    ) -> TransportResponse:
        url = f"{self._config.base_url}{path}"
        _logger.debug("%s %s headers=%s", method, url, redact_for_log(headers))

        try:
            async with self._http.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                cookies = _parse_set_cookies(resp.headers)
                status = resp.status
        except aiohttp.ClientError as exc:
            raise RazberryTransportError(f"Request to {path} failed: {exc}", endpoint=path) from exc
        except asyncio.TimeoutError as exc:
            raise RazberryTransportError(f"Request to {path} timed out", endpoint=path) from exc

        _logger.debug("%s %s -> HTTP %s (%d bytes)", method, url, status, len(text))
        return TransportResponse(status=status, text=text, cookies=cookies)

    async def get_text(self, path: str, *, cookies: Mapping[str, str]) -> TransportResponse:
        headers = {"accept": "application/json"}
        if cookies:
            headers["cookie"] = "; ".join(f"{k}={v}" for k, v in cookies.items())
        return await self._request("GET", path, headers=headers)

    async def post_json(self, path: str, payload: Mapping[str, Any]) -> TransportResponse:
        headers = {
            "accept": "application/json",
            "content-type": "application/json; charset=UTF-8",
        }
        _logger.debug("POST %s payload=%s", path, redact_for_log(payload))
        return await self._request("POST", path, headers=headers, body=json.dumps(payload))
