"""Fact application for resolved version records.

Each record is written as two unconditional inserts: the record itself and the
``service -> record`` link. This relies on the store treating a repeated insert
of an existing fact as a no-op. A store without set semantics needs an
existence check before the link insert.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from revsync.domain.errors import WriteError
from revsync.domain.model import ServiceVersionLink, VersionRecord

if TYPE_CHECKING:
    from revsync.config.reconciliation import ReconciliationConfig
    from revsync.domain.model import Service, VersionTag
    from revsync.domain.ports.persistence import RevisionStore


class FactWriter:
    def __init__(self, store: RevisionStore, *, config: ReconciliationConfig) -> None:
        self._store = store
        self._config = config

    async def write(
        self,
        service: Service,
        identifier: str,
        version: VersionTag,
    ) -> ServiceVersionLink:
        record = VersionRecord(
            identifier=identifier,
            image=self._config.image_for(service.title),
            version=version,
        )
        try:
            await self._store.insert_revision(record)
            await self._store.link_revision(service, record)
        except Exception as exc:
            raise WriteError(
                f"Writing {record.image}:{version} failed: {exc}",
                service=service,
                version=version,
            ) from exc
        return ServiceVersionLink(service=service, record=record)
