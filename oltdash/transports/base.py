"""Transport interfaces."""

from __future__ import annotations

from typing import Protocol

from oltdash.core.model import HealthState, QueryRequest, QueryResult


class QueryTransport(Protocol):
    async def execute(self, request: QueryRequest) -> QueryResult:
        """Run one query round trip and return the unwrapped result."""

    async def health(self) -> HealthState:
        """Probe API liveness; failures report HealthState.UNKNOWN."""
