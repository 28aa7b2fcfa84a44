"""Ports for service metadata enrichment."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .persistence import ServiceCatalog

if TYPE_CHECKING:
    from collections.abc import Sequence

    from revsync.domain.model import Service, ServiceMetadata


class SnippetSource(Protocol):
    async def fetch(self, service: Service, name: str) -> str | None:
        """Return the named snippet of ``service``, or ``None`` when unavailable."""
        ...


class ServiceMetadataStore(ServiceCatalog, Protocol):
    async def replace_service_metadata(
        self,
        service: Service,
        metadata: ServiceMetadata,
        *,
        command_ids: Sequence[str],
    ) -> None:
        """Drop the snippets and commands recorded for ``service`` and assert ``metadata``."""
        ...
