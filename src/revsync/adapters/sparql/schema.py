"""SPARQL 1.1 JSON result schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SparqlBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class SparqlTerm(SparqlBaseModel):
    type: Literal["uri", "literal", "typed-literal", "bnode"]
    value: str
    datatype: str | None = None
    language: str | None = Field(default=None, alias="xml:lang")


class SparqlHead(SparqlBaseModel):
    vars: list[str] = Field(default_factory=list)
    link: list[str] | None = None


class SparqlResults(SparqlBaseModel):
    bindings: list[dict[str, SparqlTerm]] = Field(default_factory=list)


class SparqlResponse(SparqlBaseModel):
    head: SparqlHead = Field(default_factory=SparqlHead)
    results: SparqlResults | None = None
    boolean: bool | None = None

    def rows(self) -> list[dict[str, str]]:
        """Return the bindings as plain ``variable -> value`` mappings.

        Unbound optional variables are absent from their row.
        """

        if self.results is None:
            return []
        return [
            {name: term.value for name, term in binding.items()}
            for binding in self.results.bindings
        ]
