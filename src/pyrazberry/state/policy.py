"""Timestamp ordering policy for snapshot merges.

This module contains *no* tree handling; it only decides, from the three
timestamps involved, whether a delta may be merged into a snapshot.
"""

from __future__ import annotations

from enum import StrEnum


class MergeDecision(StrEnum):
    APPLY = "apply"
    STALE = "stale"
    GAP = "gap"


def decide_merge(
    *,
    snapshot_end: int,
    delta_start: int,
    delta_end: int,
) -> MergeDecision:
    """Decide how a delta relates to the snapshot it would be merged into.

    Policy:
    - Requested since a point after the snapshot's end: events in between
      were never queried (``GAP``).
    - Delta ends at or before the snapshot's end: stale or duplicate
      (``STALE``).
    - Otherwise the delta is merged (``APPLY``).
    """
    if delta_start > snapshot_end:
        return MergeDecision.GAP
    if delta_end <= snapshot_end:
        return MergeDecision.STALE
    return MergeDecision.APPLY
