"""Docker Hub configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

from .env import optional_env_var
from .errors import ConfigurationError
from .http_resilience import (
    DEFAULT_USER_AGENT,
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)

if TYPE_CHECKING:
    from typing import Literal

DEFAULT_DOCKERHUB_BASE_URL = "https://hub.docker.com/v2"
DOCKERHUB_TIMEOUT_SECONDS = 15.0
DOCKERHUB_CACHE_TTL_SECONDS = 300.0


@dataclass(frozen=True, slots=True)
class DockerHubConfig:
    resilience: ResilienceConfig


def get_dockerhub_config(*, resilience: ResilienceConfig | None = None) -> DockerHubConfig:
    base_url = optional_env_var("DOCKERHUB_BASE_URL", DEFAULT_DOCKERHUB_BASE_URL)
    backend = optional_env_var("REVSYNC_HTTP_CACHE", "memory")
    if backend not in {"memory", "sqlite"}:
        raise ConfigurationError(f"REVSYNC_HTTP_CACHE must be memory or sqlite, got {backend!r}")
    return DockerHubConfig(
        resilience=resilience
        or ResilienceConfig(
            name="dockerhub",
            base_url=base_url,
            timeout_seconds=DOCKERHUB_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            retry=RetryPolicy(total=4),
            cache=CacheConfig(
                enabled=True,
                backend=cast("Literal['memory', 'sqlite']", backend),
                default_ttl_seconds=DOCKERHUB_CACHE_TTL_SECONDS,
            ),
            user_agent=DEFAULT_USER_AGENT,
        )
    )
