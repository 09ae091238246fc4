"""Full and partial gateway snapshots.

The gateway's ``/ZWaveAPI/Data`` endpoint returns the full device tree;
``/ZWaveAPI/Data/<timestamp>`` returns only what changed since
``<timestamp>``, flattened into dot-path keys. :class:`GatewayState` owns
the authoritative tree and is the only object allowed to merge a
:class:`PartialGatewayState` into it.

Merging is single-writer: callers polling from several tasks must
serialize access to one :class:`GatewayState` themselves.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import BaseModel, ConfigDict

from pyrazberry._constants import (
    BURGLAR_ALARM_PAYLOAD,
    DEVICES_KEY,
    GENERAL_PURPOSE_BINARY_PAYLOAD,
    UPDATE_TIME_KEY,
)
from pyrazberry.exceptions import (
    RazberryBadResponseError,
    RazberryMissingTimestampError,
    RazberryPossibleMissingEventsError,
)
from pyrazberry.models._base import Timestamp
from pyrazberry.models.command_class import CommandClassId
from pyrazberry.models.sensors import BurglarAlarmData, GeneralPurposeBinaryData
from pyrazberry.paths import DeviceUpdate, parse_updates, split_key
from pyrazberry.state.merge import merge_fields, walk_object
from pyrazberry.state.policy import MergeDecision, decide_merge
from pyrazberry.tree import TreeValue, parse_json

_logger = logging.getLogger(__name__)


class MergeOutcome(StrEnum):
    APPLIED = "applied"
    STALE = "stale"


class MergeResult(BaseModel):
    """Summary of a successful :meth:`GatewayState.merge`."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    outcome: MergeOutcome
    applied_keys: int = 0
    dropped_keys: tuple[str, ...] = ()
    """Delta keys whose path does not exist in the snapshot."""
    end_timestamp: Timestamp


def _read_update_time(root: TreeValue) -> Timestamp:
    node = root.find(UPDATE_TIME_KEY)
    timestamp = node.as_int() if node is not None else None
    if timestamp is None:
        raise RazberryMissingTimestampError(f"Top-level {UPDATE_TIME_KEY!r} missing or not an integer")
    return timestamp


def _sensor_key(device: int | str, instance: int | str, command_class: CommandClassId, payload: str) -> str:
    return f"devices.{device}.instances.{instance}.commandClasses.{int(command_class)}.data.{payload}"


class _SensorQueries:
    """Ad-hoc sensor lookups shared by full and partial snapshots."""

    def _find_payload(self, key: str) -> TreeValue | None:
        raise NotImplementedError

    def get_burglar_alarm(self, device: int | str, instance: int | str) -> BurglarAlarmData | None:
        """Get "burglar alarm" sensor data, if present."""
        node = self._find_payload(_sensor_key(device, instance, CommandClassId.ALARM, BURGLAR_ALARM_PAYLOAD))
        return BurglarAlarmData(node) if node is not None else None

    def get_general_purpose_binary(
        self,
        device: int | str,
        instance: int | str,
    ) -> GeneralPurposeBinaryData | None:
        """Get the general purpose (0x01) binary sensor (0x30) data, if present."""
        node = self._find_payload(
            _sensor_key(device, instance, CommandClassId.SENSOR_BINARY, GENERAL_PURPOSE_BINARY_PAYLOAD)
        )
        return GeneralPurposeBinaryData(node) if node is not None else None


class PartialGatewayState(_SensorQueries):
    """A delta: flat map of dot-path keys to leaf patches.

    ``start_timestamp`` is the timestamp the caller asked for updates
    since; ``end_timestamp`` is the gateway's ``updateTime`` for this
    document. Treated as immutable once built.
    """

    def __init__(self, tree: TreeValue, *, start_timestamp: Timestamp, end_timestamp: Timestamp) -> None:
        self._tree = tree
        self._start_timestamp = start_timestamp
        self._end_timestamp = end_timestamp

    @classmethod
    def build(cls, text: str | bytes, start_timestamp: Timestamp) -> PartialGatewayState:
        """Build from a ``/ZWaveAPI/Data/<start_timestamp>`` response body.

        Raises
        ------
        RazberryParseError
            If *text* is not valid JSON.
        RazberryMissingTimestampError
            If the top-level ``updateTime`` is absent or not an integer.
        """
        tree = parse_json(text)
        end_timestamp = _read_update_time(tree)
        return cls(tree, start_timestamp=start_timestamp, end_timestamp=end_timestamp)

    @property
    def tree(self) -> TreeValue:
        return self._tree

    @property
    def start_timestamp(self) -> Timestamp:
        return self._start_timestamp

    @property
    def end_timestamp(self) -> Timestamp:
        return self._end_timestamp

    @property
    def is_full_response(self) -> bool:
        return False

    def updates(self) -> dict[str, list[DeviceUpdate]]:
        """Device updates grouped by device id (see :func:`parse_updates`)."""
        return parse_updates(self._tree)

    def _find_payload(self, key: str) -> TreeValue | None:
        return self._tree.find(key)

    def __repr__(self) -> str:
        return f"PartialGatewayState(start={self._start_timestamp}, end={self._end_timestamp})"


class GatewayState(_SensorQueries):
    """The full device tree plus the gateway timestamp it reflects.

    ``end_timestamp`` never decreases; it only changes through a
    successful :meth:`merge`.
    """

    def __init__(self, tree: TreeValue, *, end_timestamp: Timestamp) -> None:
        self._tree = tree
        self._end_timestamp = end_timestamp

    @classmethod
    def build(cls, text: str | bytes) -> GatewayState:
        """Build from a ``/ZWaveAPI/Data`` response body.

        Raises
        ------
        RazberryParseError
            If *text* is not valid JSON.
        RazberryMissingTimestampError
            If the top-level ``updateTime`` is absent or not an integer.
        """
        tree = parse_json(text)
        return cls(tree, end_timestamp=_read_update_time(tree))

    @property
    def tree(self) -> TreeValue:
        return self._tree

    @property
    def end_timestamp(self) -> Timestamp:
        return self._end_timestamp

    @property
    def is_full_response(self) -> bool:
        return self._tree.find(DEVICES_KEY) is not None

    def _find_payload(self, key: str) -> TreeValue | None:
        return self._tree.find_path(split_key(key))

    def merge(self, partial: PartialGatewayState) -> MergeResult:
        """Patch *partial* into this snapshot.

        Each delta key is followed through the snapshot tree and the
        fields of its leaf overwrite the same fields of the node found
        there. Keys whose path does not exist in the snapshot (new devices,
        typos) are dropped. Merging the same delta twice is a no-op the
        second time.

        Raises
        ------
        RazberryBadResponseError
            If a delta that is neither stale nor gapped has a top level that
            is not an object. Nothing is modified.
        RazberryPossibleMissingEventsError
            If the delta was requested since a timestamp newer than this
            snapshot's ``end_timestamp``. Nothing is modified; reload a
            full snapshot.
        """
        decision = decide_merge(
            snapshot_end=self._end_timestamp,
            delta_start=partial.start_timestamp,
            delta_end=partial.end_timestamp,
        )
        if decision is MergeDecision.GAP:
            _logger.warning(
                "Delta requested since %s but snapshot ends at %s; events may be missing",
                partial.start_timestamp,
                self._end_timestamp,
            )
            raise RazberryPossibleMissingEventsError(
                f"Delta starts at {partial.start_timestamp}, after snapshot end {self._end_timestamp}",
                snapshot_end_timestamp=self._end_timestamp,
                requested_since=partial.start_timestamp,
            )
        if decision is MergeDecision.STALE:
            _logger.debug(
                "Ignoring stale delta ending at %s (snapshot at %s)",
                partial.end_timestamp,
                self._end_timestamp,
            )
            return MergeResult(outcome=MergeOutcome.STALE, end_timestamp=self._end_timestamp)

        delta_fields = partial.tree.as_object()
        if delta_fields is None:
            raise RazberryBadResponseError("Delta payload is not an object")

        applied = 0
        dropped: list[str] = []
        for key, leaf in delta_fields.items():
            if key == UPDATE_TIME_KEY:
                continue
            target = walk_object(self._tree, split_key(key))
            leaf_fields = leaf.as_object()
            if target is None or leaf_fields is None:
                _logger.debug("Dropping delta key %s: path not in snapshot", key)
                dropped.append(key)
                continue
            merge_fields(target, leaf_fields)
            applied += 1

        self._end_timestamp = partial.end_timestamp
        _logger.info(
            "Merged delta: %d keys applied, %d dropped, snapshot now at %s",
            applied,
            len(dropped),
            self._end_timestamp,
        )
        return MergeResult(
            outcome=MergeOutcome.APPLIED,
            applied_keys=applied,
            dropped_keys=tuple(dropped),
            end_timestamp=self._end_timestamp,
        )

    def __repr__(self) -> str:
        return f"GatewayState(end={self._end_timestamp})"


def build_snapshot(text: str | bytes) -> GatewayState:
    """Build a :class:`GatewayState` from a full snapshot body."""
    return GatewayState.build(text)


def build_partial(text: str | bytes, start_timestamp: Timestamp) -> PartialGatewayState:
    """Build a :class:`PartialGatewayState` from a delta body."""
    return PartialGatewayState.build(text, start_timestamp)
