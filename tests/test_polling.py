from __future__ import annotations

import json
from typing import Any

import pytest

from pyrazberry.config import RazberryConfig
from pyrazberry.exceptions import RazberryError, RazberryRequestError
from pyrazberry.models.command_class import CommandClassId
from pyrazberry.models.command_classes import Basic
from pyrazberry.polling import GatewayPoller
from pyrazberry.state.gateway import GatewayState, MergeOutcome, MergeResult, PartialGatewayState

SNAPSHOT_END = 1456036584


class FakeClient:
    """Serves canned snapshot and delta bodies in order."""

    def __init__(self, full_json: str, deltas: list[str | Exception]) -> None:
        self.config = RazberryConfig(hostname="gw", poll_interval=0)
        self.full_json = full_json
        self.deltas = deltas
        self.full_fetches = 0
        self.requested_since: list[int] = []

    async def fetch_gateway_state(self) -> GatewayState:
        self.full_fetches += 1
        return GatewayState.build(self.full_json)

    async def fetch_partial_state(self, since: int) -> PartialGatewayState:
        self.requested_since.append(since)
        body = self.deltas.pop(0)
        if isinstance(body, Exception):
            raise body
        return PartialGatewayState.build(body, since)


def _delta(data: dict[str, Any], end: int) -> str:
    return json.dumps({**data, "updateTime": end})


@pytest.mark.asyncio
async def test_poll_once_updates_state_and_registry(full_json: str, delta_json: str) -> None:
    client = FakeClient(full_json, [delta_json])
    poller = GatewayPoller(client)  # type: ignore[arg-type]
    await poller.start()

    result = await poller.poll_once()

    assert result is not None
    assert result.outcome is MergeOutcome.APPLIED
    assert client.requested_since == [SNAPSHOT_END]
    assert poller.state.end_timestamp == 1456036610
    device = poller.registry.get("1")
    assert device is not None
    basic = device.command_classes[CommandClassId.BASIC]
    assert isinstance(basic, Basic)
    assert basic.level == 255


@pytest.mark.asyncio
async def test_stale_delta_leaves_registry_alone(full_json: str) -> None:
    stale = _delta({"devices.1.instances.0.commandClasses.32.data.level": {"value": 9, "updateTime": 1}}, SNAPSHOT_END)
    client = FakeClient(full_json, [stale])
    poller = GatewayPoller(client)  # type: ignore[arg-type]
    await poller.start()

    result = await poller.poll_once()

    assert result is not None
    assert result.outcome is MergeOutcome.STALE
    device = poller.registry.get("1")
    assert device is not None
    basic = device.command_classes[CommandClassId.BASIC]
    assert isinstance(basic, Basic)
    assert basic.level == 0


@pytest.mark.asyncio
async def test_gap_triggers_reload(full_json: str) -> None:
    client = FakeClient(full_json, [])
    poller = GatewayPoller(client)  # type: ignore[arg-type]
    await poller.start()
    original = poller.state

    # Delta requested since a timestamp past the snapshot end.
    async def fetch_ahead(since: int) -> PartialGatewayState:
        return PartialGatewayState.build(_delta({}, since + 20), since + 10)

    client.fetch_partial_state = fetch_ahead  # type: ignore[method-assign]

    result = await poller.poll_once()

    assert result is None
    assert poller.reloads == 1
    assert client.full_fetches == 2
    assert poller.state is not original


@pytest.mark.asyncio
async def test_run_continues_after_errors(full_json: str, delta_json: str) -> None:
    client = FakeClient(
        full_json,
        [RazberryRequestError("HTTP 500", status_code=500), delta_json, _delta({}, 1456036620)],
    )
    poller = GatewayPoller(client)  # type: ignore[arg-type]
    seen: list[MergeResult | None] = []

    await poller.run(max_cycles=3, on_cycle=lambda _poller, result: seen.append(result))

    assert client.full_fetches == 1
    assert len(seen) == 2
    assert [result.end_timestamp for result in seen if result is not None] == [1456036610, 1456036620]
    assert client.requested_since == [SNAPSHOT_END, SNAPSHOT_END, 1456036610]


def test_not_started(full_json: str) -> None:
    poller = GatewayPoller(FakeClient(full_json, []))  # type: ignore[arg-type]
    with pytest.raises(RazberryError):
        _ = poller.state
    with pytest.raises(RazberryError):
        _ = poller.registry
