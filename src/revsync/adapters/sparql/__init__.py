"""SPARQL triple store adapter."""

from __future__ import annotations

from .client import SparqlClient, SparqlError
from .queries import InvalidTermError, iri, literal
from .schema import SparqlResponse, SparqlTerm
from .store import SparqlRevisionStore

__all__ = [
    "InvalidTermError",
    "SparqlClient",
    "SparqlError",
    "SparqlResponse",
    "SparqlRevisionStore",
    "SparqlTerm",
    "iri",
    "literal",
]
