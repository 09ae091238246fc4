"""pyrazberry - Async Python client for Razberry / Z-Way gateway state."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyrazberry")
except PackageNotFoundError:
    __version__ = "0+local"
from pyrazberry.client import RazberryClient
from pyrazberry.config import RazberryConfig
from pyrazberry.exceptions import (
    RazberryAuthenticationError,
    RazberryBadResponseError,
    RazberryConfigError,
    RazberryError,
    RazberryMissingTimestampError,
    RazberryParseError,
    RazberryPossibleMissingEventsError,
    RazberryRequestError,
    RazberryTransportError,
)
from pyrazberry.models import (
    BurglarAlarmData,
    CommandClassId,
    Device,
    GeneralPurposeBinaryData,
    SensorBinary,
    Timestamp,
    Unsupported,
    build_device,
)
from pyrazberry.paths import DeviceUpdate, parse_updates
from pyrazberry.polling import GatewayPoller
from pyrazberry.state import (
    DeviceRegistry,
    GatewayState,
    MergeOutcome,
    MergeResult,
    PartialGatewayState,
    build_partial,
    build_snapshot,
)
from pyrazberry.tree import TreeValue, parse_json

__all__ = [
    "__version__",
    "BurglarAlarmData",
    "CommandClassId",
    "Device",
    "DeviceRegistry",
    "DeviceUpdate",
    "GatewayPoller",
    "GatewayState",
    "GeneralPurposeBinaryData",
    "MergeOutcome",
    "MergeResult",
    "PartialGatewayState",
    "RazberryAuthenticationError",
    "RazberryBadResponseError",
    "RazberryClient",
    "RazberryConfig",
    "RazberryConfigError",
    "RazberryError",
    "RazberryMissingTimestampError",
    "RazberryParseError",
    "RazberryPossibleMissingEventsError",
    "RazberryRequestError",
    "RazberryTransportError",
    "SensorBinary",
    "Timestamp",
    "TreeValue",
    "Unsupported",
    "build_device",
    "build_partial",
    "build_snapshot",
    "parse_json",
    "parse_updates",
]
