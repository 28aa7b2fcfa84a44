"""SPARQL text for the catalog vocabulary.

Every value interpolated into a query goes through :func:`literal` or
:func:`iri`, so tag names and titles read from remote systems cannot break out
of their term.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from revsync.domain.model import ServiceCommand, ServiceMetadata, VersionRecord

PREFIXES = """\
PREFIX dct: <http://purl.org/dc/terms/>
PREFIX ext: <http://mu.semte.ch/vocabularies/ext/>
PREFIX mu: <http://mu.semte.ch/vocabularies/core/>
PREFIX xsd: <http://www.w3.org/2001/XMLSchema#>
"""

_LITERAL_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}
_INVALID_IRI_CHARS = re.compile(r'[\x00-\x20<>"{}|^`\\]')


class InvalidTermError(ValueError):
    """Raised when a value cannot be written as the requested SPARQL term."""


def literal(value: str) -> str:
    """Return ``value`` as a quoted SPARQL string literal."""

    return '"' + "".join(_LITERAL_ESCAPES.get(char, char) for char in value) + '"'


def iri(value: str) -> str:
    if not value or _INVALID_IRI_CHARS.search(value):
        raise InvalidTermError(f"Not a valid IRI: {value!r}")
    return f"<{value}>"


def tracked_services_query(graph: str) -> str:
    return f"""{PREFIXES}
SELECT DISTINCT ?service ?title ?uuid ?repository ?gitRepository
WHERE {{
  GRAPH {iri(graph)} {{
    ?service a ext:Microservice ;
      dct:title ?title ;
      ext:isCoreMicroservice "true"^^xsd:boolean .
    OPTIONAL {{ ?service mu:uuid ?uuid . }}
    OPTIONAL {{ ?service ext:repository ?repository . }}
    OPTIONAL {{ ?service ext:gitRepository ?gitRepository . }}
  }}
}}"""


def revision_identifiers_query(graph: str, *, image: str, version: str) -> str:
    return f"""{PREFIXES}
SELECT DISTINCT ?uuid
WHERE {{
  GRAPH {iri(graph)} {{
    ?revision a ext:MicroserviceRevision ;
      mu:uuid ?uuid ;
      ext:microserviceRevision {literal(image)} ;
      ext:microserviceVersion {literal(version)} .
  }}
}}"""


def insert_revision_update(graph: str, *, revision_uri: str, record: VersionRecord) -> str:
    return f"""{PREFIXES}
INSERT DATA {{
  GRAPH {iri(graph)} {{
    {iri(revision_uri)} a ext:MicroserviceRevision ;
      mu:uuid {literal(record.identifier)} ;
      ext:microserviceRevision {literal(record.image)} ;
      ext:microserviceVersion {literal(record.version)} .
  }}
}}"""


def link_revision_update(graph: str, *, service_uri: str, revision_uri: str) -> str:
    return f"""{PREFIXES}
INSERT DATA {{
  GRAPH {iri(graph)} {{
    {iri(service_uri)} ext:hasRevision {iri(revision_uri)} .
  }}
}}"""


def replace_snippets_update(graph: str, *, service_uri: str, metadata: ServiceMetadata) -> str:
    service = iri(service_uri)
    graph_term = iri(graph)
    deletes = ";\n".join(
        f"""DELETE WHERE {{
  GRAPH {graph_term} {{
    {service} ext:{predicate} ?value .
  }}
}}"""
        for predicate in ("composeSnippet", "creationSnippet", "developmentSnippet")
    )
    return f"""{PREFIXES}
{deletes};
INSERT DATA {{
  GRAPH {graph_term} {{
    {service} ext:composeSnippet {literal(metadata.compose_snippet)} ;
      ext:creationSnippet {literal(metadata.creation_snippet)} ;
      ext:developmentSnippet {literal(metadata.development_snippet)} .
  }}
}}"""


def delete_commands_update(graph: str, *, service_uri: str) -> str:
    return f"""{PREFIXES}
DELETE {{
  GRAPH {iri(graph)} {{
    {iri(service_uri)} ext:hasCommand ?command .
    ?command ?p ?o .
  }}
}}
WHERE {{
  GRAPH {iri(graph)} {{
    {iri(service_uri)} ext:hasCommand ?command .
    ?command ?p ?o .
  }}
}}"""


def insert_command_update(
    graph: str,
    *,
    service_uri: str,
    command_uri: str,
    command_id: str,
    command: ServiceCommand,
) -> str:
    return f"""{PREFIXES}
INSERT DATA {{
  GRAPH {iri(graph)} {{
    {iri(service_uri)} ext:hasCommand {iri(command_uri)} .
    {iri(command_uri)} a ext:MicroserviceCommand ;
      mu:uuid {literal(command_id)} ;
      ext:commandTitle {literal(command.title)} ;
      ext:shellCommand {literal(command.shell_command)} ;
      dct:description {literal(command.description)} .
  }}
}}"""
