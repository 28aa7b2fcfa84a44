"""In-memory fakes for the store and registry ports."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from revsync.domain.model import Service, ServiceMetadata, VersionRecord

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from revsync.domain.ports.fetching import TagListing


class StoreUnavailableError(RuntimeError):
    pass


@dataclass
class InFlightGauge:
    """Counts calls that are suspended at the same time; each call sleeps for ``delay``."""

    delay: float = 0.0
    current: int = 0
    peak: int = 0
    completed: int = 0

    async def pause(self) -> None:
        self.current += 1
        self.peak = max(self.peak, self.current)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.current -= 1
            self.completed += 1


@dataclass
class InMemoryRevisionStore:
    """Keeps facts in sets so that re-asserting a fact is a no-op, like a triple store."""

    services: list[Service] = field(default_factory=list[Service])
    records: set[VersionRecord] = field(default_factory=set[VersionRecord])
    links: set[tuple[str, str]] = field(default_factory=set[tuple[str, str]])
    metadata: dict[str, tuple[ServiceMetadata, tuple[str, ...]]] = field(
        default_factory=dict[str, tuple[ServiceMetadata, tuple[str, ...]]]
    )
    fail_discovery: bool = False
    fail_lookup_for: set[str] = field(default_factory=set[str])
    fail_insert_for: set[str] = field(default_factory=set[str])
    fail_link_for: set[str] = field(default_factory=set[str])
    fail_metadata_for: set[str] = field(default_factory=set[str])
    lookups: int = 0
    updates: int = 0
    gauge: InFlightGauge = field(default_factory=InFlightGauge)

    async def tracked_services(self) -> Sequence[Service]:
        await self.gauge.pause()
        if self.fail_discovery:
            raise StoreUnavailableError("endpoint unreachable")
        return tuple(self.services)

    async def find_revision_identifiers(self, *, image: str, version: str) -> Sequence[str]:
        await self.gauge.pause()
        self.lookups += 1
        if version in self.fail_lookup_for:
            raise StoreUnavailableError("lookup timed out")
        return [
            record.identifier
            for record in self.records
            if record.image == image and record.version == version
        ]

    async def insert_revision(self, record: VersionRecord) -> None:
        await self.gauge.pause()
        if record.version in self.fail_insert_for:
            raise StoreUnavailableError("update rejected")
        self.updates += 1
        self.records.add(record)

    async def link_revision(self, service: Service, record: VersionRecord) -> None:
        await self.gauge.pause()
        if record.version in self.fail_link_for:
            raise StoreUnavailableError("link rejected")
        self.updates += 1
        self.links.add((service.id, record.identifier))

    async def replace_service_metadata(
        self,
        service: Service,
        metadata: ServiceMetadata,
        *,
        command_ids: Sequence[str],
    ) -> None:
        await self.gauge.pause()
        if service.title in self.fail_metadata_for:
            raise StoreUnavailableError("update rejected")
        self.metadata[service.id] = (metadata, tuple(command_ids))

    def records_for(self, image: str) -> set[VersionRecord]:
        return {record for record in self.records if record.image == image}


@dataclass
class FakeTagProvider:
    """Serves canned tag listings keyed by image name."""

    listings: Mapping[str, TagListing]
    failing: set[str] = field(default_factory=set[str])
    gauge: InFlightGauge = field(default_factory=InFlightGauge)
    calls: list[tuple[str, str, int, int]] = field(default_factory=list[tuple[str, str, int, int]])

    async def list_tags(
        self,
        namespace: str,
        name: str,
        *,
        page_size: int = 100,
        page: int = 1,
    ) -> TagListing:
        await self.gauge.pause()
        self.calls.append((namespace, name, page_size, page))
        if name in self.failing:
            raise StoreUnavailableError(f"registry refused {namespace}/{name}")
        return self.listings.get(name, [])


@dataclass
class FakeSnippetSource:
    files: Mapping[tuple[str, str], str]
    requested: list[tuple[str, str]] = field(default_factory=list[tuple[str, str]])

    async def fetch(self, service: Service, name: str) -> str | None:
        await asyncio.sleep(0)
        self.requested.append((service.title, name))
        return self.files.get((service.title, name))


def make_service(title: str = "auth-service", **kwargs: str | None) -> Service:
    return Service(id=f"http://example.com/services/{title}", title=title, **kwargs)


class SequentialIdentifiers:
    def __init__(self, prefix: str = "id") -> None:
        self._prefix = prefix
        self._counter = 0

    def __call__(self) -> str:
        self._counter += 1
        return f"{self._prefix}-{self._counter}"
