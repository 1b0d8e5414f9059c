from __future__ import annotations

import pytest

from oltdash.core.errors import ConnectionValidationError
from oltdash.core.model import DeviceModel
from oltdash.core.validation import validate_connection


def test_valid_connection() -> None:
    connection = validate_connection(" 10.0.0.1 ", "161", "", "c320", "admin", "secret")
    assert connection.host == "10.0.0.1"
    assert connection.port == 161
    assert connection.community == "public"
    assert connection.model is DeviceModel.C320
    assert connection.credentials.username == "admin"


def test_each_connection_gets_a_new_identity() -> None:
    first = validate_connection("10.0.0.1", 161, "public", "C300", "admin", "secret")
    second = validate_connection("10.0.0.1", 161, "public", "C300", "admin", "secret")
    assert first.context_id != second.context_id


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"host": ""}, "IP address is required"),
        ({"port": "0"}, "Port must be between 1 and 65535"),
        ({"port": 70000}, "Port must be between 1 and 65535"),
        ({"port": "snmp"}, "Port must be between 1 and 65535"),
        ({"model": "C220"}, "Unsupported device model"),
        ({"username": ""}, "Username and password are required"),
        ({"password": None}, "Username and password are required"),
    ],
)
def test_rejected_connections(kwargs: dict[str, object], message: str) -> None:
    params: dict[str, object] = {
        "host": "10.0.0.1",
        "port": 161,
        "community": "public",
        "model": "C320",
        "username": "admin",
        "password": "secret",
    }
    params.update(kwargs)
    with pytest.raises(ConnectionValidationError, match=message):
        validate_connection(**params)  # type: ignore[arg-type]
