"""Fetches service metadata files from GitHub raw content."""

from __future__ import annotations

from contextlib import asynccontextmanager
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from revsync.adapters.http_resilience import ResilientClient
from revsync.config.metadata import GITHUB_URL_PREFIX, RAW_CONTENT_URL_PREFIX

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Callable
    from types import TracebackType

    from revsync.config.http_resilience import ResilienceConfig
    from revsync.config.metadata import MetadataConfig
    from revsync.domain.model import Service

log = getLogger(__name__)


def raw_content_base(git_repository: str) -> str | None:
    """Map a ``https://github.com/owner/repo`` URL onto its raw content root."""

    url = git_repository.strip().removesuffix("/").removesuffix(".git")
    if not url.startswith(GITHUB_URL_PREFIX):
        return None
    path = url.removeprefix(GITHUB_URL_PREFIX)
    if path.count("/") != 1:
        return None
    return f"{RAW_CONTENT_URL_PREFIX}{path}"


class GitHubSnippetSource:
    """Reads ``<branch>/<name>`` from the repository of a service.

    Any HTTP failure is reported as a missing file so the caller falls back to
    its defaults.
    """

    def __init__(
        self,
        *,
        config: MetadataConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient
        self._shared: ResilientClient | None = None

    async def __aenter__(self) -> GitHubSnippetSource:
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

    async def fetch(self, service: Service, name: str) -> str | None:
        if not service.git_repository:
            return None
        base = raw_content_base(service.git_repository)
        if base is None:
            log.info("Unsupported repository URL for %s: %s", service.title, service.git_repository)
            return None

        url = f"{base}/{self._config.branch}/{name}"
        try:
            async with self._session() as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            log.info("Could not fetch %s: %s", url, exc)
            return None
        if response.is_error:
            log.debug("No %s for %s (HTTP %s)", name, service.title, response.status_code)
            return None
        return response.text

    @asynccontextmanager
    async def _session(self) -> AsyncIterator[ResilientClient]:
        if self._shared is not None:
            yield self._shared
            return
        async with self._client_factory(self._resilience) as client:
            yield client
