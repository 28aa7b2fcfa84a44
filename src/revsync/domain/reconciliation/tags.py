"""Normalisation of tag listings returned by a :class:`TagProvider`.

Providers answer either with a bare sequence or with an envelope carrying the
sequence under ``results``; items are plain strings or records with a ``name``.
Everything downstream sees an ordered tuple of distinct version strings.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from revsync.domain.ports.fetching import NamedTag, PagedEnvelope

if TYPE_CHECKING:
    from revsync.domain.model import VersionTag
    from revsync.domain.ports.fetching import TagListing


class TagListingError(ValueError):
    """Raised when a provider response has no recognisable tag list."""


def unwrap_tag_listing(listing: TagListing, *, limit: int | None = None) -> tuple[VersionTag, ...]:
    """Return the distinct tag names of ``listing`` in provider order.

    At most ``limit`` tags are returned. Names are kept verbatim; blank ones are
    dropped.
    """

    items = _listing_items(listing)
    tags: list[VersionTag] = []
    seen: set[VersionTag] = set()
    for item in items:
        name = _tag_name(item)
        if not name.strip() or name in seen:
            continue
        seen.add(name)
        tags.append(name)
        if limit is not None and len(tags) >= limit:
            break
    return tuple(tags)


def _listing_items(listing: object) -> Sequence[object]:
    if isinstance(listing, str | bytes):
        raise TagListingError("Tag listing must be a sequence, not a string")
    if isinstance(listing, Mapping):
        results = listing.get("results")  # pyright: ignore[reportUnknownMemberType]
        if results is None:
            raise TagListingError("Tag envelope has no 'results'")
        return _listing_items(results)
    if isinstance(listing, Sequence):
        return listing
    if isinstance(listing, PagedEnvelope):
        return _listing_items(listing.results)
    raise TagListingError(f"Unsupported tag listing type: {type(listing).__name__}")


def _tag_name(item: object) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping):
        name = item.get("name")  # pyright: ignore[reportUnknownMemberType]
        if isinstance(name, str):
            return name
    elif isinstance(item, NamedTag) and isinstance(item.name, str):
        return item.name
    raise TagListingError(f"Tag entry has no name: {item!r}")
