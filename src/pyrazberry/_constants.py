"""Internal constants shared across the library."""

DEFAULT_PORT = 8083
SESSION_COOKIE_NAME = "ZWAYSession"

DATA_ENDPOINT = "/ZWaveAPI/Data"
LOGIN_ENDPOINT = "/ZAutomation/api/v1/login"

# Top-level key carrying the gateway timestamp in both document shapes.
UPDATE_TIME_KEY = "updateTime"
DEVICES_KEY = "devices"
DEVICES_PREFIX = "devices."

# Only the first device instance is decoded.
PRIMARY_INSTANCE = "0"

# Command class 0x71 (Alarm), payload 7 (burglar).
BURGLAR_ALARM_PAYLOAD = "7"
# Command class 0x30 (SensorBinary), payload 1 (general purpose).
GENERAL_PURPOSE_BINARY_PAYLOAD = "1"
