"""Client configuration for pyrazberry."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyrazberry._constants import DEFAULT_PORT
from pyrazberry.exceptions import RazberryConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_number(env_key: str, value: str, cast: type[int] | type[float]) -> int | float:
    try:
        return cast(value)
    except ValueError as exc:
        raise RazberryConfigError(f"{env_key} must be numeric, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class RazberryConfig:
    """Client configuration.

    Parameters
    ----------
    hostname : str
        Gateway hostname or IP address.
    port : int
        Gateway HTTP port. Defaults to ``8083``.
    username : str
        Z-Way user name used by :meth:`RazberryClient.login`.
    password : str
        Z-Way password.
    scheme : str
        URL scheme, ``"http"`` or ``"https"``.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    poll_interval : float
        Seconds to sleep between delta fetches in :class:`GatewayPoller`.
    skip_invalid_devices : bool
        Skip devices whose subtree cannot be decoded instead of failing
        the whole registry load.
    """

    hostname: str
    port: int = DEFAULT_PORT
    username: str = ""
    password: str = ""
    scheme: str = "http"
    request_timeout: float = 10.0
    poll_interval: float = 1.0
    skip_invalid_devices: bool = False

    def __post_init__(self) -> None:
        if not self.hostname or not self.hostname.strip():
            raise RazberryConfigError("hostname must be non-empty")
        if not 0 < int(self.port) < 65536:
            raise RazberryConfigError(f"port out of range: {self.port}")
        if self.scheme not in {"http", "https"}:
            raise RazberryConfigError(f"unsupported scheme: {self.scheme!r}")

    @property
    def base_url(self) -> str:
        """Base URL of the gateway, without a trailing slash."""
        return f"{self.scheme}://{self.hostname.strip()}:{self.port}"

    @classmethod
    def from_env(cls, **overrides: Any) -> RazberryConfig:
        """Create configuration from environment variables.

        Reads ``RAZBERRY_HOSTNAME`` plus the optional ``RAZBERRY_*``
        variables. Explicit keyword arguments override environment values.

        Raises
        ------
        RazberryConfigError
            If no hostname is available or a numeric variable is malformed.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "RAZBERRY_HOSTNAME": "hostname",
            "RAZBERRY_USERNAME": "username",
            "RAZBERRY_PASSWORD": "password",
            "RAZBERRY_SCHEME": "scheme",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        # numeric fields are validated separately
        _ENV_NUMERIC_MAP: dict[str, tuple[str, type[int] | type[float]]] = {
            "RAZBERRY_PORT": ("port", int),
            "RAZBERRY_REQUEST_TIMEOUT": ("request_timeout", float),
            "RAZBERRY_POLL_INTERVAL": ("poll_interval", float),
        }
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, cast)

        if "skip_invalid_devices" not in overrides:
            config_kwargs["skip_invalid_devices"] = _env_bool(
                env.get("RAZBERRY_SKIP_INVALID_DEVICES"),
                False,
            )

        config_kwargs.update(overrides)
        if "hostname" not in config_kwargs:
            raise RazberryConfigError("RAZBERRY_HOSTNAME is not set")

        return cls(**config_kwargs)
