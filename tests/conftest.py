from __future__ import annotations

import copy
import json
from typing import Any

import pytest

# From hitting /ZWaveAPI/Data without a timestamp.
FULL_SNAPSHOT: dict[str, Any] = {
    "controller": {"data": {"nodeId": {"value": 1, "updateTime": 1455606541}}},
    "devices": {
        "1": {
            "data": {
                "givenName": {"value": "Hall sensor", "type": "string", "updateTime": 1455606542},
                "lastReceived": {"value": 0, "type": "int", "updateTime": 1456036000},
            },
            "instances": {
                "0": {
                    "commandClasses": {
                        "32": {
                            "name": "Basic",
                            "data": {"level": {"value": 0, "type": "int", "updateTime": 1456030000}},
                        },
                        "48": {
                            "name": "SensorBinary",
                            "data": {"1": {"level": {"value": False, "updateTime": 1465265727}}},
                        },
                        "49": {
                            "name": "SensorMultilevel",
                            "data": {
                                "interviewDone": {"value": True, "updateTime": 1455606542},
                                "1": {
                                    "sensorTypeString": {"value": "Temperature"},
                                    "val": {"value": 21.5, "updateTime": 1456036500},
                                    "scaleString": {"value": "°C"},
                                },
                                "3": {
                                    "sensorTypeString": {"value": "Luminiscence"},
                                    "val": {"value": 40, "updateTime": 1456036400},
                                    "scaleString": {"value": "Lux"},
                                },
                            },
                        },
                        "112": {"name": "Configuration", "data": {}},
                        "128": {
                            "name": "Battery",
                            "data": {"last": {"value": 88, "updateTime": 1456020000}},
                        },
                        "255": {"name": "Unknown", "data": {}},
                    }
                }
            },
        },
        "4": {
            "data": {
                "givenName": {"value": "Kitchen multisensor"},
                "lastReceived": {"value": 0, "updateTime": 1456014517},
            },
            "instances": {
                "0": {
                    "commandClasses": {
                        "113": {
                            "name": "Alarm",
                            "data": {
                                "7": {
                                    "value": None,
                                    "type": "empty",
                                    "typeString": {"value": "Burglar", "updateTime": 1455606542},
                                    "status": {
                                        "value": 0,
                                        "type": "int",
                                        "invalidateTime": 1455606541,
                                        "updateTime": 1456014517,
                                    },
                                    "eventMask": {"value": 128, "type": "int", "updateTime": 1455606542},
                                    "event": {"value": 7, "type": "int", "updateTime": 1456014517},
                                    "eventString": {"value": "Motion detected", "updateTime": 1456014517},
                                }
                            },
                        }
                    }
                }
            },
        },
        "5": {
            "data": {
                "givenName": {"value": "Front door"},
                "lastReceived": {"value": 0, "updateTime": 1456036584},
            },
            "instances": {
                "0": {
                    "commandClasses": {
                        "48": {
                            "name": "SensorBinary",
                            "data": {
                                "1": {
                                    "level": {"value": True, "type": "bool", "updateTime": 1456036584},
                                    "sensorTypeString": {"value": "General purpose"},
                                }
                            },
                        }
                    }
                }
            },
        },
    },
    "updateTime": 1456036584,
}

# From hitting /ZWaveAPI/Data/1456036584.
DELTA: dict[str, Any] = {
    "devices.1.instances.0.commandClasses.32.data.level": {"value": 255, "updateTime": 1456036600},
    "devices.1.data.lastReceived": {"value": 0, "updateTime": 1456036600},
    "devices.5.instances.0.commandClasses.48.data.1": {
        "level": {"value": False, "type": "bool", "updateTime": 1456036599}
    },
    "devices.4.instances.0.commandClasses.113.data.7": {
        "status": {"value": 255, "type": "int", "updateTime": 1456036598}
    },
    "devices.9.instances.0.commandClasses.48.data.1": {"level": {"value": True, "updateTime": 1456036601}},
    "updateTime": 1456036610,
}


@pytest.fixture
def full_snapshot() -> dict[str, Any]:
    return copy.deepcopy(FULL_SNAPSHOT)


@pytest.fixture
def full_json() -> str:
    return json.dumps(FULL_SNAPSHOT)


@pytest.fixture
def delta() -> dict[str, Any]:
    return copy.deepcopy(DELTA)


@pytest.fixture
def delta_json() -> str:
    return json.dumps(DELTA)
