"""Helpers for safe debug logging.

Login requests carry the account password and every data request carries
the session cookie. This module redacts those fields before request
headers and payloads reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "cookie",
        "set-cookie",
        "zwaysession",
        "authorization",
    }
)


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a redacted copy of a headers mapping or JSON payload."""
    if isinstance(value, str) and len(value) > max_string:
        return f"{value[:max_string]}…<truncated>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in _SENSITIVE_VALUE_KEYS:
                redacted[key] = "<redacted>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string)
        return redacted

    return value
