"""Orchestrator for revision reconciliation.

One run discovers the tracked services, fetches one page of tags per service,
resolves a stable identifier per tag and writes the resulting facts. Services
and the tags of one service are processed concurrently; the run only returns
once every task has finished, successfully or with an isolated failure.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from revsync.config.reconciliation import ReconciliationConfig
from revsync.domain.errors import DiscoveryError, ReconciliationError, TagFetchError

from .contracts import (
    IdentifierFactory,
    ReconciliationFailure,
    RunResult,
    ServiceOutcome,
    new_identifier,
)
from .persist import FactWriter
from .resolve import IdentityResolver
from .tags import unwrap_tag_listing

if TYPE_CHECKING:
    from collections.abc import Sequence

    from revsync.domain.model import Service, VersionTag
    from revsync.domain.ports.fetching import TagProvider
    from revsync.domain.ports.persistence import RevisionStore

log = getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Reconcile tracked services in ``store`` with the tags served by ``tags``."""

    store: RevisionStore
    tags: TagProvider
    config: ReconciliationConfig = field(default_factory=ReconciliationConfig)
    identifier_factory: IdentifierFactory = new_identifier
    resolver: IdentityResolver = field(init=False)
    writer: FactWriter = field(init=False)

    def __post_init__(self) -> None:
        self.resolver = IdentityResolver(
            self.store,
            config=self.config,
            identifier_factory=self.identifier_factory,
        )
        self.writer = FactWriter(self.store, config=self.config)

    def run(self) -> RunResult:
        return asyncio.run(self.run_async())

    async def run_async(self) -> RunResult:
        services = await self._discover()
        result = RunResult(services_discovered=len(services))
        log.info(
            "Reconciling %s services against %s (page size %s)",
            len(services),
            self.config.namespace,
            self.config.page_size,
        )

        slots = asyncio.Semaphore(self.config.max_concurrency)
        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(self._reconcile_service(service, slots)) for service in services
            ]

        for task in tasks:
            result.absorb(task.result())

        log.info("Reconciliation finished: %s", result.summary())
        return result

    async def _discover(self) -> Sequence[Service]:
        try:
            services = await self.store.tracked_services()
        except Exception as exc:
            raise DiscoveryError(f"Could not read tracked services: {exc}") from exc
        return tuple(services)

    async def _reconcile_service(
        self,
        service: Service,
        slots: asyncio.Semaphore,
    ) -> ServiceOutcome:
        outcome = ServiceOutcome()
        try:
            async with slots:
                versions = await self._fetch_tags(service)
        except TagFetchError as exc:
            log.warning("Skipping %s: %s", service.title, exc)
            outcome.errors.append(ReconciliationFailure.from_error(exc))
            return outcome

        outcome.fetched = True
        log.debug("Fetched %s tags for %s", len(versions), service.title)

        async with asyncio.TaskGroup() as group:
            for version in versions:
                group.create_task(self._reconcile_version(service, version, slots, outcome))
        return outcome

    async def _fetch_tags(self, service: Service) -> tuple[VersionTag, ...]:
        try:
            listing = await self.tags.list_tags(
                self.config.namespace,
                service.title,
                page_size=self.config.page_size,
                page=self.config.page,
            )
            return unwrap_tag_listing(listing, limit=self.config.page_size)
        except Exception as exc:
            raise TagFetchError(
                f"Fetching tags of {self.config.image_for(service.title)} failed: {exc}",
                service=service,
            ) from exc

    async def _reconcile_version(
        self,
        service: Service,
        version: VersionTag,
        slots: asyncio.Semaphore,
        outcome: ServiceOutcome,
    ) -> None:
        try:
            async with slots:
                resolution = await self.resolver.resolve(service, version)
                await self.writer.write(service, resolution.identifier, version)
        except ReconciliationError as exc:
            log.warning("Could not record %s:%s: %s", service.title, version, exc)
            outcome.errors.append(ReconciliationFailure.from_error(exc))
            return

        outcome.versions_written += 1
        if resolution.minted:
            outcome.identifiers_minted += 1
