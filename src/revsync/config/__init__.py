"""Application configuration helpers."""

from __future__ import annotations

from .dockerhub import DockerHubConfig, get_dockerhub_config
from .env import require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .metadata import MetadataConfig, get_metadata_config
from .reconciliation import ReconciliationConfig, get_reconciliation_config
from .sparql import SparqlConfig, get_sparql_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DockerHubConfig",
    "MetadataConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ReconciliationConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "SparqlConfig",
    "StorageConfig",
    "configure_logging",
    "get_dockerhub_config",
    "get_metadata_config",
    "get_reconciliation_config",
    "get_sparql_config",
    "get_storage_config",
    "require_env_vars",
]
