"""Custom exception hierarchy for pyrazberry."""

from __future__ import annotations


class RazberryError(Exception):
    """Base exception for all pyrazberry errors."""


class RazberryConfigError(RazberryError):
    """Invalid or missing configuration."""


class RazberryParseError(RazberryError):
    """Response body is not syntactically valid JSON."""


class RazberryMissingTimestampError(RazberryError):
    """Top-level ``updateTime`` is absent or not an integer."""


class RazberryBadResponseError(RazberryError):
    """A document is structurally wrong for what it claims to be.

    Raised when a delta's top-level value is not an object, or when a
    required field of a device or command-class subtree is missing or
    has the wrong type.
    """


class RazberryPossibleMissingEventsError(RazberryError):
    """A delta was requested since a timestamp newer than the snapshot.

    The interval between ``snapshot_end_timestamp`` and
    ``requested_since`` was never queried, so events in it may be lost.
    The snapshot is left untouched; callers must reload a full snapshot.
    """

    def __init__(
        self,
        message: str,
        *,
        snapshot_end_timestamp: int,
        requested_since: int,
    ) -> None:
        self.snapshot_end_timestamp = snapshot_end_timestamp
        self.requested_since = requested_since
        super().__init__(message)


class RazberryTransportError(RazberryError):
    """HTTP-level failure (network error, unexpected status)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class RazberryAuthenticationError(RazberryTransportError):
    """Login rejected or no session cookie returned."""


class RazberryRequestError(RazberryTransportError):
    """Gateway answered with a non-200, non-401 status."""
