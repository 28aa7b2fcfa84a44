"""SPARQL implementation of the catalog persistence ports."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from revsync.domain.model import Service

from . import queries

if TYPE_CHECKING:
    from collections.abc import Sequence

    from revsync.domain.model import ServiceMetadata, VersionRecord

    from .client import SparqlClient

log = getLogger(__name__)


class SparqlRevisionStore:
    """Reads services and asserts revision and metadata facts through a :class:`SparqlClient`."""

    def __init__(
        self,
        client: SparqlClient,
        *,
        revision_base_uri: str,
        command_base_uri: str | None = None,
    ) -> None:
        self._client = client
        self._graph = client.graph
        self._revision_base_uri = revision_base_uri
        self._command_base_uri = command_base_uri

    def revision_uri(self, identifier: str) -> str:
        return f"{self._revision_base_uri}{identifier}"

    async def tracked_services(self) -> Sequence[Service]:
        response = await self._client.query(queries.tracked_services_query(self._graph))
        services: dict[str, Service] = {}
        for row in response.rows():
            uri = row.get("service")
            title = (row.get("title") or "").strip()
            if not uri or not title:
                continue
            if uri in services:
                # A service with several titles is tracked under the first one.
                continue
            services[uri] = Service(
                id=uri,
                title=title,
                uuid=row.get("uuid"),
                repository=row.get("repository"),
                git_repository=row.get("gitRepository"),
            )
        return tuple(services.values())

    async def find_revision_identifiers(self, *, image: str, version: str) -> Sequence[str]:
        response = await self._client.query(
            queries.revision_identifiers_query(self._graph, image=image, version=version)
        )
        return tuple(row["uuid"] for row in response.rows() if "uuid" in row)

    async def insert_revision(self, record: VersionRecord) -> None:
        await self._client.update(
            queries.insert_revision_update(
                self._graph,
                revision_uri=self.revision_uri(record.identifier),
                record=record,
            )
        )

    async def link_revision(self, service: Service, record: VersionRecord) -> None:
        await self._client.update(
            queries.link_revision_update(
                self._graph,
                service_uri=service.id,
                revision_uri=self.revision_uri(record.identifier),
            )
        )

    async def replace_service_metadata(
        self,
        service: Service,
        metadata: ServiceMetadata,
        *,
        command_ids: Sequence[str],
    ) -> None:
        if self._command_base_uri is None:
            raise RuntimeError("SparqlRevisionStore was built without a command base URI")
        if len(command_ids) != len(metadata.commands):
            raise ValueError("Expected one command id per command")

        await self._client.update(
            queries.replace_snippets_update(self._graph, service_uri=service.id, metadata=metadata)
        )
        await self._client.update(
            queries.delete_commands_update(self._graph, service_uri=service.id)
        )
        for command_id, command in zip(command_ids, metadata.commands, strict=True):
            await self._client.update(
                queries.insert_command_update(
                    self._graph,
                    service_uri=service.id,
                    command_uri=f"{self._command_base_uri}{command_id}",
                    command_id=command_id,
                    command=command,
                )
            )
        log.debug("Stored %s commands for %s", len(metadata.commands), service.title)
