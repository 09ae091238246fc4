from __future__ import annotations

from pyrazberry._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "login": "admin",
        "password": "pw",
        "default_ui": 1,
        "headers": {"Cookie": "ZWAYSession=abc", "accept": "application/json"},
    }

    redacted = redact_for_log(payload)
    assert redacted["login"] == "admin"
    assert redacted["password"] == "<redacted>"
    assert redacted["default_ui"] == 1
    assert redacted["headers"]["Cookie"] == "<redacted>"
    assert redacted["headers"]["accept"] == "application/json"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_login_payload_and_request_headers() -> None:
    payload = {"login": "admin", "password": "pw", "default_ui": 1, "form": True, "keepme": False}
    assert redact_for_log(payload) == {
        "login": "admin",
        "password": "<redacted>",
        "default_ui": 1,
        "form": True,
        "keepme": False,
    }

    headers = {"accept": "application/json", "cookie": "ZWAYSession=abc"}
    assert redact_for_log(headers) == {"accept": "application/json", "cookie": "<redacted>"}
    # The input is left untouched.
    assert headers["cookie"] == "ZWAYSession=abc"
