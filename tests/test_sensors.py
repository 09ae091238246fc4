from __future__ import annotations

import pytest

from pyrazberry.models.sensors import BurglarAlarmData, GeneralPurposeBinaryData
from pyrazberry.tree import parse_json


def burglar_alarm(text: str) -> BurglarAlarmData:
    return BurglarAlarmData(parse_json(text))


def general_purpose(text: str) -> GeneralPurposeBinaryData:
    return GeneralPurposeBinaryData(parse_json(text))


class TestBurglarAlarm:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("{}", None),
            ('{"foo": 0}', None),
            ('{"eventMask": 0}', None),
            ('{"eventMask": {"value": 12}, "status": {"value": 255}}', None),
            # Aeotec Multisensor Gen5
            ('{"eventMask": {"value": 128}, "status": {"value": 0}}', False),
            ('{"eventMask": {"value": 128}, "status": {"value": 255}}', True),
            ('{"eventMask": {"value": 128}}', None),
            # Aeotec Multisensor Gen6
            ('{"eventMask": {"value": 264}, "event": {"value": 0}}', False),
            ('{"eventMask": {"value": 264}, "event": {"value": 254}}', False),
            ('{"eventMask": {"value": 264}, "event": {"value": 8}}', True),
            ('{"eventMask": {"value": 264}}', None),
        ],
    )
    def test_activated(self, text: str, expected: bool | None) -> None:
        assert burglar_alarm(text).activated() is expected

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ('{"status": {"value": 255}}', True),
            ('{"status": {"value": 0}}', False),
            ('{"status": {"value": true}}', None),
            ("{}", None),
            ('{"status": {}}', None),
        ],
    )
    def test_status(self, text: str, expected: bool | None) -> None:
        assert burglar_alarm(text).status is expected

    def test_event_fields(self) -> None:
        assert burglar_alarm("{}").event is None
        assert burglar_alarm('{"event": {"foo": 0}}').event is None
        assert burglar_alarm('{"event": {"value": true}}').event is None
        assert burglar_alarm('{"event": {"value": 255}}').event == 255
        assert burglar_alarm('{"event": {"value": true}}').event_updated is None
        assert burglar_alarm('{"event": {"updateTime": 1457816333}}').event_updated == 1457816333

    def test_event_mask_and_string(self) -> None:
        assert burglar_alarm('{"eventMask": {"value": true}}').event_mask is None
        assert burglar_alarm('{"eventMask": {"value": 0}}').event_mask == 0
        assert burglar_alarm('{"eventString": {"value": true}}').event_string is None
        assert burglar_alarm('{"eventString": {"value": ""}}').event_string == ""
        assert burglar_alarm('{"eventString": {"value": "test"}}').event_string == "test"

    def test_status_updated(self) -> None:
        assert burglar_alarm('{"status": {"updateTime": 1456014517}}').status_updated == 1456014517
        assert burglar_alarm('{"status": {"updateTime": "now"}}').status_updated is None

    def test_projection_is_a_copy(self) -> None:
        tree = parse_json('{"status": {"value": 0}}')
        alarm = BurglarAlarmData(tree)

        fields = tree.as_object()
        assert fields is not None
        fields.clear()

        assert alarm.status is False
        assert alarm.tree.to_python() == {"status": {"value": 0}}


class TestGeneralPurposeBinary:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ('{"level": {"value": true}}', True),
            ('{"level": {"value": false}}', False),
            ('{"level": {"value": 1}}', None),
            ("{}", None),
        ],
    )
    def test_status(self, text: str, expected: bool | None) -> None:
        assert general_purpose(text).status is expected

    def test_status_updated(self) -> None:
        assert general_purpose('{"level": {"updateTime": 1465265727}}').status_updated == 1465265727
        assert general_purpose('{"level": {"updateTime": 1.5}}').status_updated is None
