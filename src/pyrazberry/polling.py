"""Snapshot polling loop.

Owns the serial fetch -> merge -> sleep cycle for one gateway: a full
snapshot is fetched once, then deltas since the snapshot's end timestamp
are merged into it. A detected gap forces a full reload.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from pyrazberry.client import RazberryClient
from pyrazberry.exceptions import RazberryError, RazberryPossibleMissingEventsError
from pyrazberry.state.gateway import GatewayState, MergeOutcome, MergeResult
from pyrazberry.state.registry import DeviceRegistry

_logger = logging.getLogger(__name__)


class GatewayPoller:
    """Keeps one :class:`GatewayState` and :class:`DeviceRegistry` current.

    A poller is the single writer of its state; do not share it between
    concurrently running loops.
    """

    def __init__(
        self,
        client: RazberryClient,
        *,
        interval: float | None = None,
        skip_invalid_devices: bool | None = None,
    ) -> None:
        self._client = client
        self._interval = client.config.poll_interval if interval is None else interval
        self._skip_invalid = (
            client.config.skip_invalid_devices if skip_invalid_devices is None else skip_invalid_devices
        )
        self._state: GatewayState | None = None
        self._registry: DeviceRegistry | None = None
        self.reloads = 0

    @property
    def state(self) -> GatewayState:
        if self._state is None:
            raise RazberryError("Poller not started; call start() first")
        return self._state

    @property
    def registry(self) -> DeviceRegistry:
        if self._registry is None:
            raise RazberryError("Poller not started; call start() first")
        return self._registry

    async def start(self) -> None:
        """Fetch a full snapshot and rebuild the device registry."""
        state = await self._client.fetch_gateway_state()
        registry = DeviceRegistry.from_snapshot(state, skip_invalid=self._skip_invalid)
        self._state = state
        self._registry = registry

    async def poll_once(self) -> MergeResult | None:
        """Fetch and merge one delta.

        Returns ``None`` when a gap was detected and the full snapshot had
        to be reloaded instead.
        """
        state = self.state
        partial = await self._client.fetch_partial_state(state.end_timestamp)
        try:
            result = state.merge(partial)
        except RazberryPossibleMissingEventsError:
            _logger.warning("Possible missing events; reloading full snapshot")
            self.reloads += 1
            await self.start()
            return None

        if result.outcome is MergeOutcome.APPLIED:
            self.registry.apply_partial(partial)
        return result

    async def run(
        self,
        *,
        max_cycles: int | None = None,
        on_cycle: Callable[[GatewayPoller, MergeResult | None], None] | None = None,
    ) -> None:
        """Poll until cancelled (or for *max_cycles* cycles).

        Gateway and transport errors are logged and the next cycle runs
        after the regular interval.
        """
        if self._state is None:
            await self.start()

        cycles = 0
        while max_cycles is None or cycles < max_cycles:
            cycles += 1
            if self._interval > 0:
                await asyncio.sleep(self._interval)
            try:
                result = await self.poll_once()
            except RazberryError as exc:
                _logger.error("Poll cycle failed (%s): %s", type(exc).__name__, exc)
                continue
            if on_cycle is not None:
                on_cycle(self, result)
