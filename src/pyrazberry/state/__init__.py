"""State layer.

This package is the single source of truth for how full snapshots and
timestamp-bounded deltas from the gateway are merged into one
authoritative in-memory tree, and how typed devices are kept in step
with it.
"""

from pyrazberry.state.gateway import (
    GatewayState,
    MergeOutcome,
    MergeResult,
    PartialGatewayState,
    build_partial,
    build_snapshot,
)
from pyrazberry.state.registry import DeviceRegistry

__all__ = [
    "DeviceRegistry",
    "GatewayState",
    "MergeOutcome",
    "MergeResult",
    "PartialGatewayState",
    "build_partial",
    "build_snapshot",
]
