"""Public entry points for scripts and frontends built on oltdash.

Everything exported here is kept stable across releases; modules under
`oltdash.core`, `oltdash.render` and `oltdash.transports` may change.
"""

from __future__ import annotations

import asyncio
from typing import Any

from oltdash.core.catalog import QueryCatalog
from oltdash.core.catalog_loader import load_catalog
from oltdash.core.config import Settings
from oltdash.core.errors import (
    ApiError,
    ApiUnreachableError,
    AuthenticationError,
    CatalogLoadError,
    CatalogValidationError,
    ConnectionValidationError,
    NotConnectedError,
    OltdashError,
    QueryFailedError,
    QueryInProgressError,
)
from oltdash.core.model import (
    Category,
    ConnectionContext,
    Credentials,
    DeviceModel,
    HealthState,
    QueryDescriptor,
    QueryRequest,
    QueryResult,
)
from oltdash.core.request_builder import build_request
from oltdash.core.session import DashboardSession, QueryOutcome
from oltdash.core.validation import validate_connection
from oltdash.render.strategies import ResultRenderer
from oltdash.render.views import Displayable
from oltdash.transports.base import QueryTransport
from oltdash.transports.http import HttpApiTransport

__all__ = [
    "OltdashError",
    "CatalogLoadError",
    "CatalogValidationError",
    "ConnectionValidationError",
    "NotConnectedError",
    "QueryInProgressError",
    "ApiError",
    "AuthenticationError",
    "ApiUnreachableError",
    "QueryFailedError",
    "Category",
    "ConnectionContext",
    "Credentials",
    "DeviceModel",
    "HealthState",
    "QueryDescriptor",
    "QueryRequest",
    "QueryResult",
    "QueryOutcome",
    "Settings",
    "DashboardSession",
    "HttpApiTransport",
    "validate_connection",
    "Client",
]


class Client:
    """Public client for querying an OLT through the stateless query API.

    A `Client` wraps catalog loading, request building, the HTTP transport,
    and result rendering behind one object intended for third-party tools
    (TUI/services/scripts).
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        transport: QueryTransport | None = None,
        renderer: ResultRenderer | None = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        loaded = load_catalog()
        self.catalog: QueryCatalog = loaded.catalog
        self.load_warnings = loaded.warnings
        self.transport = transport or HttpApiTransport(self.settings)
        self.renderer = renderer or ResultRenderer()

    def list_queries(self, category_id: str | None = None) -> list[QueryDescriptor]:
        if category_id is None:
            return list(self.catalog)
        return list(self.catalog.in_category(category_id))

    def lookup(self, query_id: str) -> QueryDescriptor | None:
        return self.catalog.lookup(query_id)

    def build_request(
        self,
        connection: ConnectionContext,
        query_id: str,
        **params: Any,
    ) -> QueryRequest:
        return build_request(connection, query_id, self.catalog, **params)

    async def execute(self, connection: ConnectionContext, query_id: str, **params: Any) -> QueryResult:
        return await self.transport.execute(self.build_request(connection, query_id, **params))

    def render(self, query_id: str, data: Any) -> Displayable:
        return self.renderer.render(query_id, data)

    def query(self, connection: ConnectionContext, query_id: str, **params: Any) -> QueryResult:
        """Blocking convenience wrapper around `execute`."""
        return asyncio.run(self.execute(connection, query_id, **params))

    def health(self) -> HealthState:
        return asyncio.run(self.transport.health())

    def session(self) -> DashboardSession:
        return DashboardSession(self.transport, self.catalog, renderer=self.renderer)
