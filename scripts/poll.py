#!/usr/bin/env python3
"""Poll a Razberry gateway and print two sensors as they change.

Usage
-----
Set environment variables and run::

    export RAZBERRY_HOSTNAME="192.168.1.20"
    export RAZBERRY_USERNAME="admin"
    export RAZBERRY_PASSWORD="your-password"
    python scripts/poll.py --alarm-device 4 --binary-device 5

Stop with Ctrl+C.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyrazberry import GatewayPoller, MergeResult, RazberryClient, RazberryConfig, RazberryError  # noqa: E402


def _print_sensors(poller: GatewayPoller, alarm_device: int, binary_device: int) -> None:
    state = poller.state
    print()
    print(f"Results as of: {state.end_timestamp}")

    alarm = state.get_burglar_alarm(alarm_device, 0)
    if alarm is None:
        print(f"Alarm: device {alarm_device} has no burglar alarm")
    else:
        print(f"Alarm status: {alarm.status} (activated: {alarm.activated()})")
        print(f"Alarm status updated: {alarm.status_updated}")

    binary = state.get_general_purpose_binary(binary_device, 0)
    if binary is None:
        print(f"Binary: device {binary_device} has no general purpose sensor")
    else:
        print(f"Binary status: {binary.status}")
        print(f"Binary status updated: {binary.status_updated}")


async def main() -> None:
    parser = argparse.ArgumentParser(description="Poll a Razberry gateway for sensor changes")
    parser.add_argument("--alarm-device", type=int, default=4, help="Device id of the burglar alarm")
    parser.add_argument("--binary-device", type=int, default=5, help="Device id of the binary sensor")
    parser.add_argument("--interval", type=float, help="Seconds between polls (default: RAZBERRY_POLL_INTERVAL)")
    parser.add_argument("--cycles", type=int, help="Stop after this many polls")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = RazberryConfig.from_env()
    except RazberryError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)

    async with RazberryClient(config) as client:
        await client.login()
        print(f"Session: {client.session_token}")

        poller = GatewayPoller(client, interval=args.interval)
        print("Fetching gateway state...")
        await poller.start()
        _print_sensors(poller, args.alarm_device, args.binary_device)

        def on_cycle(poller: GatewayPoller, result: MergeResult | None) -> None:
            if result is None:
                print("Snapshot reloaded after a gap")
            _print_sensors(poller, args.alarm_device, args.binary_device)

        await poller.run(max_cycles=args.cycles, on_cycle=on_cycle)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
