from __future__ import annotations

import asyncio

import httpx
import pytest

from revsync.adapters.http_resilience import ResilienceConfig
from revsync.adapters.sparql import SparqlClient, SparqlError
from revsync.config.sparql import SparqlConfig
from tests.helpers.http import form_field, make_client_factory, sparql_results

ENDPOINT = "http://database:8890/sparql"


def _config(**overrides: str) -> SparqlConfig:
    values = {
        "query_endpoint": ENDPOINT,
        "update_endpoint": ENDPOINT,
        "graph": "http://mu.semte.ch/application",
    } | overrides
    return SparqlConfig(resilience=ResilienceConfig(name="sparql", cache=None), **values)


def test_query_posts_form_and_parses_bindings() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=sparql_results({"uuid": "abc"}, {"uuid": "def"}))

    client = SparqlClient(config=_config(), client_factory=make_client_factory(handler))

    response = asyncio.run(client.query("SELECT ?uuid WHERE { ?s ?p ?uuid }"))

    assert response.rows() == [{"uuid": "abc"}, {"uuid": "def"}]
    [request] = seen
    assert request.method == "POST"
    assert str(request.url) == ENDPOINT
    assert request.headers["Accept"] == "application/sparql-results+json"
    assert form_field(request, "query").startswith("SELECT ?uuid")


def test_update_uses_update_endpoint_and_parameter() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    config = _config(update_endpoint="http://database:8890/update", update_parameter="query")
    client = SparqlClient(config=config, client_factory=make_client_factory(handler))

    asyncio.run(client.update("INSERT DATA { <a> <b> <c> }"))

    [request] = seen
    assert str(request.url) == "http://database:8890/update"
    assert form_field(request, "query") == "INSERT DATA { <a> <b> <c> }"


def test_error_status_raises_sparql_error() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="Virtuoso 37000 Error SP030: SPARQL compiler")

    client = SparqlClient(config=_config(), client_factory=make_client_factory(handler))

    with pytest.raises(SparqlError) as excinfo:
        asyncio.run(client.query("SELECT nonsense"))

    assert excinfo.value.status_code == 400
    assert "SP030" in str(excinfo.value)


def test_non_json_results_raise_sparql_error() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>proxy error</html>")

    client = SparqlClient(config=_config(), client_factory=make_client_factory(handler))

    with pytest.raises(SparqlError):
        asyncio.run(client.query("SELECT * WHERE { ?s ?p ?o }"))


def test_shared_session_reuses_one_client() -> None:
    created: list[object] = []
    inner = make_client_factory(lambda _request: httpx.Response(200, json=sparql_results()))

    def factory(resilience: ResilienceConfig):  # noqa: ANN202
        client = inner(resilience)
        created.append(client)
        return client

    async def scenario() -> None:
        async with SparqlClient(config=_config(), client_factory=factory) as client:
            await client.query("SELECT * WHERE { ?s ?p ?o }")
            await client.query("SELECT * WHERE { ?s ?p ?o }")

    asyncio.run(scenario())

    assert len(created) == 1
