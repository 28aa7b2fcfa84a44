"""SPARQL endpoint configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import DEFAULT_USER_AGENT, IDEMPOTENT_METHODS, ResilienceConfig, RetryPolicy

DEFAULT_APPLICATION_GRAPH = "http://mu.semte.ch/application"
SPARQL_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class SparqlConfig:
    """Where to read from and write to in the triple store.

    Updates are posted form-encoded under ``update_parameter``; some stores
    (Virtuoso behind mu-authorization) expect ``query`` instead.
    """

    query_endpoint: str
    update_endpoint: str
    graph: str
    resilience: ResilienceConfig
    update_parameter: str = "update"


def get_sparql_config(*, resilience: ResilienceConfig | None = None) -> SparqlConfig:
    values = require_env_vars(("MU_SPARQL_ENDPOINT",))
    query_endpoint = values["MU_SPARQL_ENDPOINT"]
    update_endpoint = optional_env_var("MU_SPARQL_UPDATE_ENDPOINT", query_endpoint)
    graph = optional_env_var("MU_APPLICATION_GRAPH", DEFAULT_APPLICATION_GRAPH)
    update_parameter = optional_env_var("MU_SPARQL_UPDATE_PARAMETER", "update")

    # Never cache store responses: identity lookups must observe earlier inserts.
    return SparqlConfig(
        query_endpoint=query_endpoint,
        update_endpoint=update_endpoint,
        graph=graph,
        update_parameter=update_parameter,
        resilience=resilience
        or ResilienceConfig(
            name="sparql",
            timeout_seconds=SPARQL_TIMEOUT_SECONDS,
            # Reads and INSERT DATA updates are safe to repeat.
            retry=RetryPolicy(total=3, allowed_methods=IDEMPOTENT_METHODS | {"POST"}),
            cache=None,
            user_agent=DEFAULT_USER_AGENT,
        ),
    )
