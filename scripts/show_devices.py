#!/usr/bin/env python3
"""Log in to a Razberry gateway and list its decoded devices.

Usage
-----
::

    export RAZBERRY_HOSTNAME="192.168.1.20"
    export RAZBERRY_USERNAME="admin"
    export RAZBERRY_PASSWORD="your-password"
    python scripts/show_devices.py [--json] [--skip-invalid]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyrazberry import RazberryClient, RazberryConfig, RazberryError  # noqa: E402


async def main() -> None:
    parser = argparse.ArgumentParser(description="List the devices known to a Razberry gateway")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--skip-invalid", action="store_true", help="Skip devices that fail to decode")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    try:
        config = RazberryConfig.from_env()
    except RazberryError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        sys.exit(1)

    async with RazberryClient(config) as client:
        await client.login()
        registry = await client.load_devices(skip_invalid=args.skip_invalid or None)

    if args.json_mode:
        print(json.dumps([device.model_dump(mode="json") for device in registry], indent=2, ensure_ascii=False))
        return

    print(f"Loaded devices: {len(registry)}")
    for device in registry:
        print(f"Device: {device}")
        print(f"\tLast contacted: {device.last_contacted_utc.isoformat()}")
        for command_class_id, command_class in device.command_classes.items():
            print(f"\tCommand class: {command_class_id.name} {command_class.model_dump()}")
    for device_id, error in registry.load_errors.items():
        print(f"Skipped device {device_id}: {error}", file=sys.stderr)


if __name__ == "__main__":
    asyncio.run(main())
