"""Domain port definitions for adapters."""

from __future__ import annotations

from .enrichment import ServiceMetadataStore, SnippetSource
from .fetching import PagedEnvelope, TagListing, TagProvider
from .persistence import RevisionStore, ServiceCatalog

__all__ = [
    "PagedEnvelope",
    "RevisionStore",
    "ServiceCatalog",
    "ServiceMetadataStore",
    "SnippetSource",
    "TagListing",
    "TagProvider",
]
