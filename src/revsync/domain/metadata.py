"""Domain services for service metadata enrichment.

Each tracked service repository may publish a list of shell commands and three
docker-compose snippets. Missing files fall back to configured defaults; the
previous metadata of the service is replaced as a whole.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from revsync.domain.model import ServiceCommand, ServiceMetadata
from revsync.domain.reconciliation.contracts import new_identifier

if TYPE_CHECKING:
    from revsync.config.metadata import MetadataConfig
    from revsync.domain.model import Service
    from revsync.domain.ports.enrichment import ServiceMetadataStore, SnippetSource
    from revsync.domain.reconciliation.contracts import IdentifierFactory

log = getLogger(__name__)

COMMANDS_FILE = "commands"
COMPOSE_SNIPPET_FILE = "compose-snippet"
CREATION_SNIPPET_FILE = "creation-snippet"
DEVELOPMENT_SNIPPET_FILE = "development-snippet"


@dataclass(slots=True)
class MetadataResult:
    services: int = 0
    updated: int = 0
    skipped: int = 0
    errors: list[str] = field(default_factory=list[str])


def parse_commands(text: str) -> tuple[ServiceCommand, ...]:
    """Parse ``title,shell command,description`` lines into commands.

    Blank lines are ignored. A line without a shell command is skipped; a
    missing description becomes an empty string.
    """

    commands: list[ServiceCommand] = []
    for line in text.strip().splitlines():
        if not line.strip():
            continue
        parts = [part.strip() for part in line.split(",", 2)]
        if len(parts) < 2 or not parts[0] or not parts[1]:
            log.debug("Ignoring malformed command line: %r", line)
            continue
        description = parts[2] if len(parts) == 3 else ""
        commands.append(
            ServiceCommand(title=parts[0], shell_command=parts[1], description=description)
        )
    return tuple(commands)


async def collect_metadata(
    service: Service,
    *,
    source: SnippetSource,
    config: MetadataConfig,
) -> ServiceMetadata:
    """Fetch the metadata files of ``service``, substituting defaults for missing ones."""

    async def fetch_or_default(name: str, default: str) -> str:
        text = await source.fetch(service, name)
        if text is None:
            return default
        return text.strip()

    commands, compose, creation, development = await asyncio.gather(
        fetch_or_default(COMMANDS_FILE, config.default_commands),
        fetch_or_default(COMPOSE_SNIPPET_FILE, config.default_compose_snippet),
        fetch_or_default(CREATION_SNIPPET_FILE, config.default_creation_snippet),
        fetch_or_default(DEVELOPMENT_SNIPPET_FILE, config.default_development_snippet),
    )
    return ServiceMetadata(
        compose_snippet=compose,
        creation_snippet=creation,
        development_snippet=development,
        commands=parse_commands(commands),
    )


@dataclass(slots=True)
class MetadataEnricher:
    """Refresh snippets and commands of every tracked service."""

    store: ServiceMetadataStore
    source: SnippetSource
    config: MetadataConfig
    identifier_factory: IdentifierFactory = new_identifier

    def run(self) -> MetadataResult:
        return asyncio.run(self.run_async())

    async def run_async(self) -> MetadataResult:
        services = tuple(await self.store.tracked_services())
        result = MetadataResult(services=len(services))
        outcomes = await asyncio.gather(
            *(self._enrich(service) for service in services),
            return_exceptions=True,
        )
        for service, outcome in zip(services, outcomes, strict=True):
            if isinstance(outcome, Exception):
                log.warning("Metadata update failed for %s: %s", service.title, outcome)
                result.errors.append(f"{service.title}: {outcome}")
            elif isinstance(outcome, BaseException):
                raise outcome
            elif outcome:
                result.updated += 1
            else:
                result.skipped += 1

        log.info(
            "Metadata enrichment finished: services=%s, updated=%s, skipped=%s, errors=%s",
            result.services,
            result.updated,
            result.skipped,
            len(result.errors),
        )
        return result

    async def _enrich(self, service: Service) -> bool:
        if not service.git_repository:
            log.debug("Service %s has no git repository, skipping metadata", service.title)
            return False
        metadata = await collect_metadata(service, source=self.source, config=self.config)
        command_ids = [self.identifier_factory() for _ in metadata.commands]
        await self.store.replace_service_metadata(service, metadata, command_ids=command_ids)
        return True
