"""HTTP client for a SPARQL 1.1 protocol endpoint."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from revsync.adapters.http_resilience import ResilientClient

from .schema import SparqlResponse

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable
    from types import TracebackType

    from revsync.config.http_resilience import ResilienceConfig
    from revsync.config.sparql import SparqlConfig

log = getLogger(__name__)

SPARQL_RESULTS_JSON = "application/sparql-results+json"
_ERROR_BODY_PREVIEW = 500


class SparqlError(RuntimeError):
    """Raised when the endpoint rejects a request or returns an unusable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SparqlClient:
    """Executes queries and updates against the configured endpoints.

    Use as an async context manager to share one connection pool across calls;
    outside of it every call opens and closes its own client.
    """

    def __init__(
        self,
        *,
        config: SparqlConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._shared: ResilientClient | None = None

    @property
    def graph(self) -> str:
        return self._config.graph

    async def __aenter__(self) -> SparqlClient:
        self._shared = self._client_factory(self._resilience)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        shared, self._shared = self._shared, None
        if shared is not None:
            await shared.aclose()

    async def query(self, text: str) -> SparqlResponse:
        response = await self._post(
            self._config.query_endpoint,
            data={"query": text},
            headers={"Accept": SPARQL_RESULTS_JSON},
        )
        try:
            payload = response.json()
        except ValueError as exc:
            raise SparqlError("SPARQL endpoint returned a non-JSON response") from exc
        if not isinstance(payload, dict):
            raise SparqlError("Unexpected SPARQL response payload")
        try:
            return SparqlResponse.model_validate(payload)
        except ValidationError as exc:
            raise SparqlError(f"Malformed SPARQL results: {exc}") from exc

    async def update(self, text: str) -> None:
        await self._post(
            self._config.update_endpoint,
            data={self._config.update_parameter: text},
            headers={"Accept": "application/json, */*;q=0.1"},
        )

    async def _post(
        self,
        url: str,
        *,
        data: dict[str, str],
        headers: dict[str, str],
    ) -> httpx.Response:
        async with self._session() as client:
            response = await client.post(url, data=data, headers=headers)
        if response.is_error:
            body = response.text[:_ERROR_BODY_PREVIEW]
            log.debug("SPARQL request failed with %s: %s", response.status_code, body)
            raise SparqlError(
                f"SPARQL endpoint answered {response.status_code}: {body}",
                status_code=response.status_code,
            )
        return response

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[ResilientClient]:
        if self._shared is not None:
            yield self._shared
            return
        async with self._client_factory(self._resilience) as client:
            yield client
