"""Connection parameter checks performed before any request is built."""

from __future__ import annotations

from oltdash.core.errors import ConnectionValidationError
from oltdash.core.model import ConnectionContext, Credentials, DeviceModel


def _parse_port(port: int | str) -> int:
    if isinstance(port, bool):
        raise ConnectionValidationError("Port must be between 1 and 65535")
    try:
        value = int(str(port).strip())
    except ValueError:
        raise ConnectionValidationError("Port must be between 1 and 65535") from None
    if value < 1 or value > 65535:
        raise ConnectionValidationError("Port must be between 1 and 65535")
    return value


def _parse_model(model: str | DeviceModel) -> DeviceModel:
    try:
        return DeviceModel(str(getattr(model, "value", model)).strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in DeviceModel)
        raise ConnectionValidationError(f"Unsupported device model '{model}'. Allowed: {allowed}") from None


def validate_connection(
    host: str | None,
    port: int | str,
    community: str | None,
    model: str | DeviceModel,
    username: str | None,
    password: str | None,
) -> ConnectionContext:
    """Turn raw connection form input into a ConnectionContext or raise ConnectionValidationError."""
    host = (host or "").strip()
    if not host:
        raise ConnectionValidationError("IP address is required")
    if not username or not password:
        raise ConnectionValidationError("Username and password are required")

    return ConnectionContext(
        host=host,
        port=_parse_port(port),
        community=(community or "").strip() or "public",
        model=_parse_model(model),
        credentials=Credentials(username=username, password=password),
    )
