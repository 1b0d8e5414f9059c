"""Core data models used across catalog, transport, session, and CLI."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DeviceModel(str, Enum):
    C300 = "C300"
    C320 = "C320"
    C600 = "C600"


@dataclass(frozen=True)
class QueryDescriptor:
    id: str
    display_name: str
    category: str
    requires_onu_id: bool = False
    requires_name: bool = False


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    queries: tuple[str, ...]


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class ConnectionContext:
    host: str
    port: int
    community: str
    model: DeviceModel
    credentials: Credentials
    context_id: str = field(default_factory=lambda: uuid.uuid4().hex, compare=False)


@dataclass(frozen=True)
class QueryRequest:
    ip: str
    port: int
    community: str
    model: str
    query: str
    credentials: Credentials = field(repr=False, compare=False)
    board: int = 1
    pon: int = 1
    onu_id: int | None = None
    name: str | None = None

    def to_payload(self) -> dict[str, Any]:
        """JSON body for the query endpoint; optional fields are omitted when unset."""
        payload: dict[str, Any] = {
            "ip": self.ip,
            "port": self.port,
            "community": self.community,
            "model": self.model,
            "query": self.query,
            "board": self.board,
            "pon": self.pon,
        }
        if self.onu_id is not None:
            payload["onu_id"] = self.onu_id
        if self.name is not None:
            payload["name"] = self.name
        return payload


@dataclass(frozen=True)
class QueryResult:
    query: str
    data: Any
    status: str | None = None
    timestamp: str | None = None
    duration: str | None = None
    summary: str | None = None


class HealthState(str, Enum):
    OK = "ok"
    UNKNOWN = "unknown"
