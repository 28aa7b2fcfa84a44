"""Result types shared by the reconciliation stages."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from uuid import uuid4

from revsync.domain.errors import (
    IdentityLookupError,
    ReconciliationError,
    TagFetchError,
    WriteError,
)

type IdentifierFactory = Callable[[], str]


def new_identifier() -> str:
    return str(uuid4())


class FailureStage(StrEnum):
    DISCOVERY = "discovery"
    TAG_FETCH = "tag_fetch"
    IDENTITY_LOOKUP = "identity_lookup"
    WRITE = "write"


_STAGE_BY_ERROR: dict[type[ReconciliationError], FailureStage] = {
    TagFetchError: FailureStage.TAG_FETCH,
    IdentityLookupError: FailureStage.IDENTITY_LOOKUP,
    WriteError: FailureStage.WRITE,
}


@dataclass(slots=True, frozen=True, kw_only=True)
class ReconciliationFailure:
    """One isolated failure recorded during a run."""

    stage: FailureStage
    message: str
    service_id: str | None = None
    service_title: str | None = None
    version: str | None = None

    @classmethod
    def from_error(cls, error: ReconciliationError) -> ReconciliationFailure:
        stage = next(
            (stage for kind, stage in _STAGE_BY_ERROR.items() if isinstance(error, kind)),
            FailureStage.DISCOVERY,
        )
        service = error.service
        return cls(
            stage=stage,
            message=str(error),
            service_id=service.id if service else None,
            service_title=service.title if service else None,
            version=error.version,
        )

    def describe(self) -> str:
        subject = self.service_title or self.service_id or "<unknown service>"
        if self.version is not None:
            subject = f"{subject}:{self.version}"
        return f"[{self.stage}] {subject}: {self.message}"


@dataclass(slots=True, frozen=True)
class Resolution:
    """Identifier chosen for a (service, version) pair."""

    identifier: str
    minted: bool


@dataclass(slots=True)
class ServiceOutcome:
    """Work done for a single service, merged into :class:`RunResult`."""

    fetched: bool = False
    versions_written: int = 0
    identifiers_minted: int = 0
    errors: list[ReconciliationFailure] = field(default_factory=list["ReconciliationFailure"])


@dataclass(slots=True)
class RunResult:
    """Summary of one reconciliation run, including partial failures."""

    services_discovered: int = 0
    services_processed: int = 0
    versions_written: int = 0
    identifiers_minted: int = 0
    errors: list[ReconciliationFailure] = field(default_factory=list["ReconciliationFailure"])

    @property
    def succeeded(self) -> bool:
        return not self.errors

    def absorb(self, outcome: ServiceOutcome) -> None:
        if outcome.fetched:
            self.services_processed += 1
        self.versions_written += outcome.versions_written
        self.identifiers_minted += outcome.identifiers_minted
        self.errors.extend(outcome.errors)

    def summary(self) -> str:
        return (
            f"services discovered={self.services_discovered}, "
            f"processed={self.services_processed}, "
            f"versions written={self.versions_written}, "
            f"new identifiers={self.identifiers_minted}, "
            f"errors={len(self.errors)}"
        )
