"""Ports for reading and asserting facts in the knowledge graph."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from revsync.domain.model import Service, VersionRecord


@runtime_checkable
class ServiceCatalog(Protocol):
    async def tracked_services(self) -> Sequence[Service]:
        """Return every service flagged for reconciliation that has a title."""
        ...


@runtime_checkable
class RevisionStore(ServiceCatalog, Protocol):
    """Store operations the reconciliation core relies on.

    Both insert operations must be idempotent: asserting a fact that is already
    present leaves the store unchanged.
    """

    async def find_revision_identifiers(self, *, image: str, version: str) -> Sequence[str]:
        """Return identifiers of records matching ``image`` and ``version`` exactly."""
        ...

    async def insert_revision(self, record: VersionRecord) -> None: ...

    async def link_revision(self, service: Service, record: VersionRecord) -> None: ...
