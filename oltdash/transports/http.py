"""HTTP transport for the stateless OLT query API, using httpx."""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx

from oltdash.core.config import Settings
from oltdash.core.errors import ApiUnreachableError, AuthenticationError, QueryFailedError
from oltdash.core.model import Credentials, HealthState, QueryRequest, QueryResult

QUERY_PATH = "/api/v1/query"
HEALTH_PATH = "/health"
LOGGER = logging.getLogger(__name__)


def basic_auth_header(credentials: Credentials) -> str:
    token = base64.b64encode(f"{credentials.username}:{credentials.password}".encode("utf-8"))
    return f"Basic {token.decode('ascii')}"


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)


class HttpApiTransport:
    """Issues one POST per query against `{api_url}/api/v1/query`.

    A fresh `httpx.AsyncClient` is opened for every call; `transport` lets
    tests substitute an `httpx.MockTransport`.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.settings.api_url,
            timeout=self.settings.timeout_s,
            transport=self._transport,
        )

    async def execute(self, request: QueryRequest) -> QueryResult:
        headers = {
            "Content-Type": "application/json",
            "Authorization": basic_auth_header(request.credentials),
        }
        LOGGER.debug(
            "Query %s on %s (board %s, pon %s)",
            request.query,
            request.ip,
            request.board,
            request.pon,
        )
        try:
            async with self._client() as client:
                response = await client.post(QUERY_PATH, json=request.to_payload(), headers=headers)
        except httpx.RequestError as exc:
            LOGGER.error("Query API request error: %s", exc)
            raise ApiUnreachableError(
                f"Cannot connect to API server at {self.settings.api_url}. Is it running?"
            ) from exc

        if response.status_code == 401:
            raise AuthenticationError("Unauthorized - invalid username or password")

        try:
            body = response.json()
        except ValueError as exc:
            raise QueryFailedError(f"Query failed (HTTP {response.status_code})") from exc
        if not isinstance(body, dict):
            raise QueryFailedError(f"Query failed (HTTP {response.status_code})")

        code = body.get("code")
        if code != 200:
            message = body.get("message") or "Query failed"
            LOGGER.warning("Query %s rejected with code %s: %s", request.query, code, message)
            raise QueryFailedError(str(message), code=code if isinstance(code, int) else None)

        payload = body.get("data")
        if not isinstance(payload, dict):
            return QueryResult(query=request.query, data=payload, status=_optional_str(body.get("status")))
        return QueryResult(
            query=str(payload.get("query") or request.query),
            data=payload.get("data"),
            status=_optional_str(body.get("status")),
            timestamp=_optional_str(payload.get("timestamp")),
            duration=_optional_str(payload.get("duration")),
            summary=_optional_str(payload.get("summary")),
        )

    async def health(self) -> HealthState:
        try:
            async with self._client() as client:
                response = await client.get(HEALTH_PATH)
        except httpx.RequestError as exc:
            LOGGER.debug("Health probe failed: %s", exc)
            return HealthState.UNKNOWN
        return HealthState.OK if response.is_success else HealthState.UNKNOWN
