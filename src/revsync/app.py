"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from revsync.adapters.dockerhub import DockerHubClient
from revsync.adapters.github import GitHubSnippetSource
from revsync.adapters.sparql import SparqlClient, SparqlRevisionStore
from revsync.config import (
    get_dockerhub_config,
    get_metadata_config,
    get_reconciliation_config,
    get_sparql_config,
)
from revsync.domain.metadata import MetadataEnricher, MetadataResult
from revsync.domain.reconciliation import ReconciliationEngine, RunResult

if TYPE_CHECKING:
    from revsync.config import (
        DockerHubConfig,
        MetadataConfig,
        ReconciliationConfig,
        SparqlConfig,
    )
    from revsync.domain.ports import RevisionStore, ServiceMetadataStore, SnippetSource, TagProvider

log = getLogger(__name__)


def reconcile_revisions(
    *,
    config: ReconciliationConfig | None = None,
    sparql_config: SparqlConfig | None = None,
    dockerhub_config: DockerHubConfig | None = None,
    store: RevisionStore | None = None,
    tag_provider: TagProvider | None = None,
) -> RunResult:
    """Run one reconciliation pass using the configured adapters."""

    effective_config = config or get_reconciliation_config()
    return asyncio.run(
        _reconcile_revisions(
            config=effective_config,
            sparql_config=sparql_config,
            dockerhub_config=dockerhub_config,
            store=store,
            tag_provider=tag_provider,
        )
    )


async def _reconcile_revisions(
    *,
    config: ReconciliationConfig,
    sparql_config: SparqlConfig | None,
    dockerhub_config: DockerHubConfig | None,
    store: RevisionStore | None,
    tag_provider: TagProvider | None,
) -> RunResult:
    log.info(
        "Starting revision reconciliation: namespace=%s, page_size=%s, max_concurrency=%s",
        config.namespace,
        config.page_size,
        config.max_concurrency,
    )
    if store is not None and tag_provider is not None:
        return await ReconciliationEngine(store=store, tags=tag_provider, config=config).run_async()

    async with (
        SparqlClient(config=sparql_config or get_sparql_config()) as sparql,
        DockerHubClient(config=dockerhub_config or get_dockerhub_config()) as hub,
    ):
        engine = ReconciliationEngine(
            store=store
            or SparqlRevisionStore(sparql, revision_base_uri=config.revision_base_uri),
            tags=tag_provider or hub,
            config=config,
        )
        return await engine.run_async()


def enrich_service_metadata(
    *,
    config: MetadataConfig | None = None,
    sparql_config: SparqlConfig | None = None,
    store: ServiceMetadataStore | None = None,
    source: SnippetSource | None = None,
) -> MetadataResult:
    """Refresh commands and snippets of all tracked services."""

    effective_config = config or get_metadata_config()
    return asyncio.run(
        _enrich_service_metadata(
            config=effective_config,
            sparql_config=sparql_config,
            store=store,
            source=source,
        )
    )


async def _enrich_service_metadata(
    *,
    config: MetadataConfig,
    sparql_config: SparqlConfig | None,
    store: ServiceMetadataStore | None,
    source: SnippetSource | None,
) -> MetadataResult:
    log.info("Starting service metadata enrichment from branch %s", config.branch)
    if store is not None and source is not None:
        return await MetadataEnricher(store=store, source=source, config=config).run_async()

    reconciliation = get_reconciliation_config()
    async with (
        SparqlClient(config=sparql_config or get_sparql_config()) as sparql,
        GitHubSnippetSource(config=config) as github,
    ):
        enricher = MetadataEnricher(
            store=store
            or SparqlRevisionStore(
                sparql,
                revision_base_uri=reconciliation.revision_base_uri,
                command_base_uri=config.command_base_uri,
            ),
            source=source or github,
            config=config,
        )
        return await enricher.run_async()
