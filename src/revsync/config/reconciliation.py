"""Reconciliation run configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, positive_int_env_var
from .errors import ConfigurationError

DEFAULT_NAMESPACE = "semtech"
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_SIZE = 100
DEFAULT_MAX_CONCURRENCY = 8
DEFAULT_REVISION_BASE_URI = "http://info.mu.semte.ch/microservice-revisions/"


@dataclass(frozen=True, slots=True)
class ReconciliationConfig:
    """Parameters of one reconciliation run.

    ``namespace`` is the registry organisation the service titles are looked up
    under; ``namespace/title`` is also the image reference stored on each
    revision. Only page ``page`` of ``page_size`` tags is requested per service.
    """

    namespace: str = DEFAULT_NAMESPACE
    page_size: int = DEFAULT_PAGE_SIZE
    page: int = 1
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    revision_base_uri: str = DEFAULT_REVISION_BASE_URI

    def __post_init__(self) -> None:
        if not self.namespace.strip():
            raise ConfigurationError("Registry namespace must not be blank")
        if not 0 < self.page_size <= MAX_PAGE_SIZE:
            raise ConfigurationError(f"Page size must be between 1 and {MAX_PAGE_SIZE}")
        if self.page <= 0:
            raise ConfigurationError("Page number must be positive")
        if self.max_concurrency <= 0:
            raise ConfigurationError("Max concurrency must be positive")

    def image_for(self, title: str) -> str:
        return f"{self.namespace}/{title}"


def get_reconciliation_config() -> ReconciliationConfig:
    return ReconciliationConfig(
        namespace=optional_env_var("DOCKERHUB_NAMESPACE", DEFAULT_NAMESPACE),
        page_size=positive_int_env_var("REVSYNC_PAGE_SIZE", DEFAULT_PAGE_SIZE),
        max_concurrency=positive_int_env_var("REVSYNC_MAX_CONCURRENCY", DEFAULT_MAX_CONCURRENCY),
        revision_base_uri=optional_env_var("REVSYNC_REVISION_BASE_URI", DEFAULT_REVISION_BASE_URI),
    )
