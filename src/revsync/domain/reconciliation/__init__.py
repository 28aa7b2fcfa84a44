"""Reconciliation core for service revisions.

Flow of one run:
1) discover tracked services in the store
2) fetch one page of published tags per service
3) resolve a stable identifier per (service, version)
4) write the version record and the service link
"""

from __future__ import annotations

from .contracts import (
    FailureStage,
    IdentifierFactory,
    ReconciliationFailure,
    Resolution,
    RunResult,
    new_identifier,
)
from .engine import ReconciliationEngine
from .persist import FactWriter
from .resolve import IdentityResolver
from .tags import TagListingError, unwrap_tag_listing

__all__ = [
    "FactWriter",
    "FailureStage",
    "IdentifierFactory",
    "IdentityResolver",
    "ReconciliationEngine",
    "ReconciliationFailure",
    "Resolution",
    "RunResult",
    "TagListingError",
    "new_identifier",
    "unwrap_tag_listing",
]
