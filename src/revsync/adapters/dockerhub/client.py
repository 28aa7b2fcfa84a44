"""HTTP client for the Docker Hub tag listing API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

from pydantic import ValidationError

from revsync.adapters.http_resilience import ResilientClient

from .schema import DockerHubErrorResponse, DockerHubTagPage

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable
    from types import TracebackType

    import httpx

    from revsync.config.dockerhub import DockerHubConfig
    from revsync.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

MAX_PAGE_SIZE = 100


class DockerHubAPIError(RuntimeError):
    """Raised when Docker Hub returns an error or an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DockerHubClient:
    """Lists repository tags, most recently pushed first."""

    def __init__(
        self,
        *,
        config: DockerHubConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._shared: ResilientClient | None = None

    async def __aenter__(self) -> DockerHubClient:
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

    async def list_tags(
        self,
        namespace: str,
        name: str,
        *,
        page_size: int = MAX_PAGE_SIZE,
        page: int = 1,
    ) -> DockerHubTagPage:
        if not 0 < page_size <= MAX_PAGE_SIZE:
            raise ValueError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")
        if page < 1:
            raise ValueError("page must be positive")
        if self._resilience.base_url is None:
            raise DockerHubAPIError("Missing Docker Hub base_url in resilience configuration")

        path = f"repositories/{quote(namespace, safe='')}/{quote(name, safe='')}/tags"
        params = {"page_size": str(page_size), "page": str(page)}
        async with self._session() as client:
            response = await client.get(path, params=params)
        return self._parse_page(response, image=f"{namespace}/{name}")

    def _parse_page(self, response: httpx.Response, *, image: str) -> DockerHubTagPage:
        if response.status_code == 404:
            raise DockerHubAPIError(f"Repository {image} not found", status_code=404)
        if response.is_error:
            raise DockerHubAPIError(
                f"Docker Hub error for {image}: {_error_text(response)}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise DockerHubAPIError(f"Docker Hub returned non-JSON tags for {image}") from exc
        if not isinstance(payload, dict):
            raise DockerHubAPIError("Unexpected Docker Hub response payload")
        try:
            return DockerHubTagPage.model_validate(payload)
        except ValidationError as exc:
            raise DockerHubAPIError(f"Malformed Docker Hub tag page for {image}: {exc}") from exc

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[ResilientClient]:
        if self._shared is not None:
            yield self._shared
            return
        async with self._client_factory(self._resilience) as client:
            yield client


def _error_text(response: httpx.Response) -> str:
    try:
        return DockerHubErrorResponse.model_validate(response.json()).text
    except (ValueError, ValidationError):
        return f"HTTP {response.status_code}"
