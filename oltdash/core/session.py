"""Session layer used by the CLI dashboard and the public client.

A session owns two slots: the current connection and the current result.
Both are replaced wholesale, never mutated in place. A query outcome is
committed only if the connection it was issued under is still current and no
newer query has started since.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from oltdash.core.catalog import QueryCatalog
from oltdash.core.errors import NotConnectedError, OltdashError, QueryInProgressError
from oltdash.core.model import ConnectionContext, QueryDescriptor, QueryResult
from oltdash.core.request_builder import build_request
from oltdash.render.strategies import ResultRenderer
from oltdash.render.views import Displayable
from oltdash.transports.base import QueryTransport

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryOutcome:
    descriptor: QueryDescriptor
    result: QueryResult
    view: Displayable


class DashboardSession:
    def __init__(
        self,
        transport: QueryTransport,
        catalog: QueryCatalog,
        *,
        renderer: ResultRenderer | None = None,
    ) -> None:
        self.transport = transport
        self.catalog = catalog
        self.renderer = renderer or ResultRenderer()
        self._connection: ConnectionContext | None = None
        self._result: QueryOutcome | None = None
        self._sequence = 0
        self._in_flight: str | None = None

    @property
    def connection(self) -> ConnectionContext | None:
        return self._connection

    @property
    def result(self) -> QueryOutcome | None:
        return self._result

    @property
    def busy(self) -> bool:
        return self._connection is not None and self._in_flight == self._connection.context_id

    def connect(self, connection: ConnectionContext) -> None:
        self._connection = connection
        self._result = None
        LOGGER.info("Connected to %s:%s (%s)", connection.host, connection.port, connection.model.value)

    def disconnect(self) -> None:
        self._connection = None
        self._result = None
        LOGGER.info("Disconnected")

    def _is_current(self, connection: ConnectionContext, sequence: int) -> bool:
        return (
            self._connection is not None
            and self._connection.context_id == connection.context_id
            and self._sequence == sequence
        )

    async def run(
        self,
        query_id: str,
        *,
        board: int | None = None,
        pon: int | None = None,
        onu_id: int | None = None,
        name: str | None = None,
    ) -> QueryOutcome | None:
        """Execute one query; returns None when the outcome arrived for a stale context."""
        connection = self._connection
        if connection is None:
            raise NotConnectedError("Not connected. Connect to an OLT before running queries.")
        if self.busy:
            raise QueryInProgressError("A query is already running for this connection.")

        self._sequence += 1
        sequence = self._sequence
        self._result = None
        self._in_flight = connection.context_id

        descriptor = self.catalog.requirements_for(query_id)
        request = build_request(
            connection,
            query_id,
            self.catalog,
            board=board,
            pon=pon,
            onu_id=onu_id,
            name=name,
        )
        try:
            result = await self.transport.execute(request)
        except OltdashError as exc:
            if not self._is_current(connection, sequence):
                LOGGER.debug("Discarding stale error for %s (request %d): %s", query_id, sequence, exc)
                return None
            raise
        finally:
            if self._in_flight == connection.context_id:
                self._in_flight = None

        if not self._is_current(connection, sequence):
            LOGGER.debug("Discarding stale result for %s (request %d)", query_id, sequence)
            return None

        outcome = QueryOutcome(
            descriptor=descriptor,
            result=result,
            view=self.renderer.render(query_id, result.data),
        )
        self._result = outcome
        return outcome
