"""High-level async client for the Z-Way gateway HTTP API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyrazberry._constants import DATA_ENDPOINT, LOGIN_ENDPOINT, SESSION_COOKIE_NAME
from pyrazberry._transport import HttpTransport, Transport, TransportResponse
from pyrazberry.config import RazberryConfig
from pyrazberry.exceptions import (
    RazberryAuthenticationError,
    RazberryError,
    RazberryRequestError,
)
from pyrazberry.models._base import Timestamp
from pyrazberry.state.gateway import GatewayState, MergeResult, PartialGatewayState
from pyrazberry.state.registry import DeviceRegistry

_logger = logging.getLogger(__name__)


def _raise_for_status(response: TransportResponse, endpoint: str) -> None:
    if response.status == 200:
        return
    if response.status == 401:
        raise RazberryAuthenticationError(
            f"Unauthorized at {endpoint}",
            status_code=response.status,
            endpoint=endpoint,
        )
    raise RazberryRequestError(
        f"HTTP {response.status} from {endpoint}: {response.text[:200]}",
        status_code=response.status,
        endpoint=endpoint,
    )


class RazberryClient:
    """Async client for a Razberry / Z-Way gateway.

    Usage::

        async with RazberryClient(config) as client:
            await client.login()
            state = await client.fetch_gateway_state()
            result, partial = await client.update_gateway_state(state)
    """

    def __init__(
        self,
        config: RazberryConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._owns_transport = transport is None
        self._session_token: str | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RazberryClient:
        if self._owns_transport:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if self._owns_transport:
            self._transport = None

    @property
    def config(self) -> RazberryConfig:
        return self._config

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    @property
    def session_token(self) -> str | None:
        return self._session_token

    @session_token.setter
    def session_token(self, token: str | None) -> None:
        self._session_token = token

    async def login(self) -> None:
        """Log in and store the session cookie for later requests."""
        transport = self._require_transport()
        payload = {
            "login": self._config.username,
            "password": self._config.password,
            "default_ui": 1,
            "form": True,
            "keepme": False,
        }
        response = await transport.post_json(LOGIN_ENDPOINT, payload)
        _raise_for_status(response, LOGIN_ENDPOINT)

        token = response.cookies.get(SESSION_COOKIE_NAME)
        if not token:
            raise RazberryAuthenticationError(
                f"Login succeeded without a {SESSION_COOKIE_NAME} cookie",
                status_code=response.status,
                endpoint=LOGIN_ENDPOINT,
            )
        self._session_token = token
        _logger.debug("Logged in to %s", self._config.base_url)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise RazberryError("Client not initialized. Use 'async with RazberryClient(...) as client:'")
        return self._transport

    async def _fetch_data(self, timestamp: Timestamp | None) -> str:
        endpoint = DATA_ENDPOINT if timestamp is None else f"{DATA_ENDPOINT}/{timestamp}"
        transport = self._require_transport()
        response = await transport.get_text(
            endpoint,
            cookies={SESSION_COOKIE_NAME: self._session_token or ""},
        )
        _raise_for_status(response, endpoint)
        return response.text

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    async def fetch_gateway_state(self) -> GatewayState:
        """Fetch a full snapshot of the gateway and all its devices."""
        return GatewayState.build(await self._fetch_data(None))

    async def fetch_partial_state(self, since: Timestamp) -> PartialGatewayState:
        """Fetch the changes reported after *since*."""
        return PartialGatewayState.build(await self._fetch_data(since), since)

    async def update_gateway_state(self, state: GatewayState) -> tuple[MergeResult, PartialGatewayState]:
        """Fetch changes since ``state.end_timestamp`` and merge them into *state*.

        The delta is returned too so callers can feed it to a
        :class:`DeviceRegistry`.
        """
        partial = await self.fetch_partial_state(state.end_timestamp)
        return state.merge(partial), partial

    async def load_devices(self, *, skip_invalid: bool | None = None) -> DeviceRegistry:
        """Fetch a full snapshot and decode its devices."""
        if skip_invalid is None:
            skip_invalid = self._config.skip_invalid_devices
        state = await self.fetch_gateway_state()
        return DeviceRegistry.from_snapshot(state, skip_invalid=skip_invalid)
