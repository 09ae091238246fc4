"""Typed device registry kept in step with a gateway snapshot."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from pyrazberry._constants import DEVICES_KEY
from pyrazberry.exceptions import RazberryBadResponseError
from pyrazberry.models.device import Device, build_device
from pyrazberry.state.gateway import GatewayState, PartialGatewayState

_logger = logging.getLogger(__name__)


class DeviceRegistry:
    """Devices decoded from a full snapshot, updated from deltas.

    The registry is rebuilt with :meth:`from_snapshot` whenever the caller
    reloads a full snapshot, and updated incrementally with
    :meth:`apply_partial` from the same delta that was merged into the
    :class:`GatewayState`.
    """

    def __init__(self, devices: dict[str, Device] | None = None) -> None:
        self._devices: dict[str, Device] = dict(devices or {})
        self.load_errors: dict[str, RazberryBadResponseError] = {}

    @classmethod
    def from_snapshot(cls, state: GatewayState, *, skip_invalid: bool = False) -> DeviceRegistry:
        """Decode every device under ``devices`` of *state*.

        Parameters
        ----------
        skip_invalid
            When ``True`` a device that fails to decode is logged, recorded
            in :attr:`load_errors` and left out. Otherwise the error is
            raised and no registry is returned.

        Raises
        ------
        RazberryBadResponseError
            If ``devices`` is missing or not an object, or (unless
            *skip_invalid*) a device subtree is malformed.
        """
        devices_node = state.tree.find(DEVICES_KEY)
        device_fields = devices_node.as_object() if devices_node is not None else None
        if device_fields is None:
            raise RazberryBadResponseError(f"Snapshot has no {DEVICES_KEY!r} object")

        registry = cls()
        for device_id, subtree in device_fields.items():
            try:
                registry._devices[device_id] = build_device(device_id, subtree)
            except RazberryBadResponseError as exc:
                if not skip_invalid:
                    raise
                _logger.warning("Skipping device %s: %s", device_id, exc)
                registry.load_errors[device_id] = exc

        _logger.info("Loaded %d devices (%d skipped)", len(registry._devices), len(registry.load_errors))
        return registry

    def apply_partial(self, partial: PartialGatewayState) -> dict[str, RazberryBadResponseError]:
        """Apply the device updates carried by *partial*.

        Updates for device ids not in the registry are ignored. A device
        whose update fails keeps the updates applied before the failure;
        other devices are still updated.

        Returns
        -------
        dict
            Device id to the error that stopped its updates.

        Raises
        ------
        RazberryBadResponseError
            If the delta itself is malformed.
        """
        failures: dict[str, RazberryBadResponseError] = {}
        for device_id, updates in partial.updates().items():
            device = self._devices.get(device_id)
            if device is None:
                _logger.debug("Ignoring %d updates for unknown device %s", len(updates), device_id)
                continue
            try:
                device.process_updates(updates)
            except RazberryBadResponseError as exc:
                _logger.warning("Update for device %s failed: %s", device_id, exc)
                failures[device_id] = exc
        return failures

    def get(self, device_id: str) -> Device | None:
        return self._devices.get(device_id)

    @property
    def devices(self) -> list[Device]:
        return list(self._devices.values())

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._devices

    def __iter__(self) -> Iterator[Device]:
        return iter(self._devices.values())

    def __len__(self) -> int:
        return len(self._devices)
