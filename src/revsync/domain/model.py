"""Catalog values read from and written to the knowledge graph."""

from __future__ import annotations

from dataclasses import dataclass

type VersionTag = str


@dataclass(frozen=True, slots=True)
class Service:
    """A tracked microservice as recorded in the store.

    ``id`` is the store's identifier for the service (its URI) and ``title`` is
    the image name looked up in the registry. The remaining attributes are only
    read by metadata enrichment and may be absent.
    """

    id: str
    title: str
    uuid: str | None = None
    repository: str | None = None
    git_repository: str | None = None


@dataclass(frozen=True, slots=True)
class VersionRecord:
    """One observed (image, version) pairing."""

    identifier: str
    image: str
    version: VersionTag


@dataclass(frozen=True, slots=True)
class ServiceVersionLink:
    service: Service
    record: VersionRecord


@dataclass(frozen=True, slots=True)
class ServiceCommand:
    """A shell command advertised by a service repository."""

    title: str
    shell_command: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class ServiceMetadata:
    compose_snippet: str
    creation_snippet: str
    development_snippet: str
    commands: tuple[ServiceCommand, ...] = ()
