"""Stable identity resolution for (service, version) pairs.

Resolution only reads from the store. An identifier is minted only after the
store answered definitively that no record exists; a failed lookup surfaces as
:class:`IdentityLookupError` instead of being mistaken for "not found", which
would mint a duplicate.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from revsync.domain.errors import IdentityLookupError

from .contracts import IdentifierFactory, Resolution, new_identifier

if TYPE_CHECKING:
    from revsync.config.reconciliation import ReconciliationConfig
    from revsync.domain.model import Service, VersionTag
    from revsync.domain.ports.persistence import RevisionStore

log = getLogger(__name__)


class IdentityResolver:
    def __init__(
        self,
        store: RevisionStore,
        *,
        config: ReconciliationConfig,
        identifier_factory: IdentifierFactory = new_identifier,
    ) -> None:
        self._store = store
        self._config = config
        self._identifier_factory = identifier_factory

    async def resolve(self, service: Service, version: VersionTag) -> Resolution:
        """Return the recorded identifier of ``version`` for ``service`` or a fresh one."""

        image = self._config.image_for(service.title)
        try:
            existing = await self._store.find_revision_identifiers(image=image, version=version)
        except Exception as exc:
            raise IdentityLookupError(
                f"Lookup of {image}:{version} failed: {exc}",
                service=service,
                version=version,
            ) from exc

        identifiers = sorted(set(existing))
        if not identifiers:
            return Resolution(identifier=self._identifier_factory(), minted=True)
        if len(identifiers) > 1:
            log.warning(
                "Found %s identifiers for %s:%s, reusing %s",
                len(identifiers),
                image,
                version,
                identifiers[0],
            )
        return Resolution(identifier=identifiers[0], minted=False)
