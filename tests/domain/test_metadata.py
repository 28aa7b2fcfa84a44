from __future__ import annotations

import asyncio

from revsync.config.metadata import DEFAULT_SNIPPET, MetadataConfig
from revsync.domain.metadata import MetadataEnricher, collect_metadata, parse_commands
from revsync.domain.model import ServiceCommand
from tests.support.graph_store import (
    FakeSnippetSource,
    InMemoryRevisionStore,
    SequentialIdentifiers,
    make_service,
)

REPO = "https://github.com/mu-semtech/auth-service"


def test_parse_commands_reads_one_command_per_line() -> None:
    text = """
    migrate,docker compose exec db migrate,Run pending migrations

    logs, docker compose logs -f
    broken line
    """

    assert parse_commands(text) == (
        ServiceCommand(
            title="migrate",
            shell_command="docker compose exec db migrate",
            description="Run pending migrations",
        ),
        ServiceCommand(title="logs", shell_command="docker compose logs -f", description=""),
    )


def test_parse_commands_keeps_commas_in_description() -> None:
    [command] = parse_commands("up,make up,Start it, then wait")

    assert command.description == "Start it, then wait"


def test_collect_metadata_falls_back_to_defaults() -> None:
    service = make_service(git_repository=REPO)
    source = FakeSnippetSource({("auth-service", "compose-snippet"): "image: x\n"})
    config = MetadataConfig(default_development_snippet="dev")

    metadata = asyncio.run(collect_metadata(service, source=source, config=config))

    assert metadata.compose_snippet == "image: x"
    assert metadata.creation_snippet == DEFAULT_SNIPPET
    assert metadata.development_snippet == "dev"
    assert metadata.commands == ()


def test_enricher_replaces_metadata_and_skips_services_without_repository() -> None:
    with_repo = make_service("auth-service", git_repository=REPO)
    without_repo = make_service("registry")
    store = InMemoryRevisionStore(services=[with_repo, without_repo])
    source = FakeSnippetSource({("auth-service", "commands"): "a,run a,first\nb,run b,second"})

    result = MetadataEnricher(
        store=store,
        source=source,
        config=MetadataConfig(),
        identifier_factory=SequentialIdentifiers("cmd"),
    ).run()

    assert result.services == 2
    assert result.updated == 1
    assert result.skipped == 1
    assert result.errors == []
    metadata, command_ids = store.metadata[with_repo.id]
    assert [command.title for command in metadata.commands] == ["a", "b"]
    assert command_ids == ("cmd-1", "cmd-2")
    assert without_repo.id not in store.metadata
    assert {title for title, _ in source.requested} == {"auth-service"}


def test_enricher_isolates_store_failures() -> None:
    failing = make_service("auth-service", git_repository=REPO)
    healthy = make_service("login-service", git_repository="https://github.com/mu-semtech/login")
    store = InMemoryRevisionStore(services=[failing, healthy], fail_metadata_for={"auth-service"})

    result = MetadataEnricher(
        store=store,
        source=FakeSnippetSource({}),
        config=MetadataConfig(),
    ).run()

    assert result.updated == 1
    assert len(result.errors) == 1
    assert result.errors[0].startswith("auth-service:")
    assert healthy.id in store.metadata
