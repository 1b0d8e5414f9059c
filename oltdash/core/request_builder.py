"""Request envelope composition.

Inputs are assumed to have passed connection validation and the caller's own
numeric parsing; nothing here performs I/O or raises.
"""

from __future__ import annotations

from oltdash.core.catalog import QueryCatalog
from oltdash.core.model import ConnectionContext, QueryRequest

DEFAULT_ONU_ID = 1


def build_request(
    connection: ConnectionContext,
    query_id: str,
    catalog: QueryCatalog,
    *,
    board: int | None = None,
    pon: int | None = None,
    onu_id: int | None = None,
    name: str | None = None,
) -> QueryRequest:
    descriptor = catalog.requirements_for(query_id)

    if onu_id is None and descriptor.requires_onu_id:
        onu_id = DEFAULT_ONU_ID

    return QueryRequest(
        ip=connection.host,
        port=connection.port,
        community=connection.community,
        model=connection.model.value,
        query=query_id,
        credentials=connection.credentials,
        board=board if board is not None else 1,
        pon=pon if pon is not None else 1,
        onu_id=onu_id,
        name=name if descriptor.requires_name and name else None,
    )
