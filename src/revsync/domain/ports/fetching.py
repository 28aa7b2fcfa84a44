"""Ports for fetching published version tags."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class NamedTag(Protocol):
    @property
    def name(self) -> str: ...


@runtime_checkable
class PagedEnvelope(Protocol):
    """A page of tags wrapped in a ``results`` container."""

    @property
    def results(self) -> Sequence[object]: ...


type TagItem = str | NamedTag | Mapping[str, object]
type TagListing = Sequence[TagItem] | PagedEnvelope | Mapping[str, object]


@runtime_checkable
class TagProvider(Protocol):
    """Lists the most recent published tags of one image."""

    async def list_tags(
        self,
        namespace: str,
        name: str,
        *,
        page_size: int = 100,
        page: int = 1,
    ) -> TagListing: ...


__all__ = ["NamedTag", "PagedEnvelope", "TagItem", "TagListing", "TagProvider"]
