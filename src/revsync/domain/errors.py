"""Errors raised by the reconciliation core.

Only :class:`DiscoveryError` aborts a run. The others are isolated to one
service or one (service, version) pair and collected into the run result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import Service


class ReconciliationError(RuntimeError):
    """Base class for reconciliation failures."""

    def __init__(
        self,
        message: str,
        *,
        service: Service | None = None,
        version: str | None = None,
    ) -> None:
        super().__init__(message)
        self.service = service
        self.version = version


class DiscoveryError(ReconciliationError):
    """The tracked services could not be read; nothing is known, nothing is written."""


class TagFetchError(ReconciliationError):
    """Tags for one service could not be retrieved."""


class IdentityLookupError(ReconciliationError):
    """The store could not answer whether a version record already exists."""


class WriteError(ReconciliationError):
    """Persisting a version record or its link failed."""
