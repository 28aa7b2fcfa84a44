from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import pytest

from revsync.adapters.github import GitHubSnippetSource, raw_content_base
from revsync.adapters.http_resilience import ResilienceConfig
from revsync.config.metadata import MetadataConfig
from tests.helpers.http import make_client_factory
from tests.support.graph_store import make_service

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        (
            "https://github.com/mu-semtech/mu-login-service",
            "https://raw.githubusercontent.com/mu-semtech/mu-login-service",
        ),
        (
            "https://github.com/mu-semtech/mu-login-service.git",
            "https://raw.githubusercontent.com/mu-semtech/mu-login-service",
        ),
        (
            "https://github.com/mu-semtech/mu-login-service/",
            "https://raw.githubusercontent.com/mu-semtech/mu-login-service",
        ),
        ("https://gitlab.com/mu-semtech/mu-login-service", None),
        ("https://github.com/mu-semtech", None),
    ],
)
def test_raw_content_base(url: str, expected: str | None) -> None:
    assert raw_content_base(url) == expected


def _source(handler: Callable[[httpx.Request], httpx.Response]) -> GitHubSnippetSource:
    config = MetadataConfig(branch="wip", resilience=ResilienceConfig(name="github", cache=None))
    return GitHubSnippetSource(config=config, client_factory=make_client_factory(handler))


def test_fetch_reads_file_from_branch() -> None:
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, text="logs,docker logs,Show logs\n")

    service = make_service(git_repository="https://github.com/mu-semtech/auth-service")
    text = asyncio.run(_source(handler).fetch(service, "commands"))

    assert text == "logs,docker logs,Show logs\n"
    assert seen == ["https://raw.githubusercontent.com/mu-semtech/auth-service/wip/commands"]


def test_fetch_returns_none_for_missing_file() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        return httpx.Response(404, text="404: Not Found")

    service = make_service(git_repository="https://github.com/mu-semtech/auth-service")

    assert asyncio.run(_source(handler).fetch(service, "compose-snippet")) is None


def test_fetch_returns_none_on_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    service = make_service(git_repository="https://github.com/mu-semtech/auth-service")

    assert asyncio.run(_source(handler).fetch(service, "commands")) is None


def test_fetch_skips_unsupported_repositories() -> None:
    def handler(_: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    service = make_service(git_repository="https://bitbucket.org/mu-semtech/auth-service")

    assert asyncio.run(_source(handler).fetch(service, "commands")) is None
