"""Configuration for service metadata enrichment."""

from __future__ import annotations

from dataclasses import dataclass, field

from .env import optional_env_var
from .http_resilience import (
    DEFAULT_USER_AGENT,
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)

DEFAULT_METADATA_BRANCH = "wip"
DEFAULT_COMMAND_BASE_URI = "http://info.mu.semte.ch/microservice-commands/"
GITHUB_URL_PREFIX = "https://github.com/"
RAW_CONTENT_URL_PREFIX = "https://raw.githubusercontent.com/"

DEFAULT_SNIPPET = (
    "image: semtech/mu-javascript-template:1.3.5 \n"
    "links: \n"
    "  - db:database \n"
    "ports: \n"
    '  - "8888:80" \n'
    '  - "9229:9229" \n'
    "environment: \n"
    '  NODE_ENV: "development" \n'
    "volumes: \n"
    '  - "/tmp/tmp/test-js/:/app"'
)


def _default_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="github-raw",
        timeout_seconds=10.0,
        ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
        retry=RetryPolicy(total=2),
        cache=CacheConfig(enabled=True, backend="memory", default_ttl_seconds=600.0),
        user_agent=DEFAULT_USER_AGENT,
    )


@dataclass(frozen=True, slots=True)
class MetadataConfig:
    """Where service snippets live and what to store when they cannot be fetched."""

    branch: str = DEFAULT_METADATA_BRANCH
    command_base_uri: str = DEFAULT_COMMAND_BASE_URI
    default_commands: str = ""
    default_compose_snippet: str = DEFAULT_SNIPPET
    default_creation_snippet: str = DEFAULT_SNIPPET
    default_development_snippet: str = DEFAULT_SNIPPET
    resilience: ResilienceConfig = field(default_factory=_default_resilience)


def get_metadata_config() -> MetadataConfig:
    return MetadataConfig(
        branch=optional_env_var("REVSYNC_METADATA_BRANCH", DEFAULT_METADATA_BRANCH),
    )
