from __future__ import annotations

import pytest

from revsync.config.reconciliation import ReconciliationConfig
from tests.support.graph_store import InMemoryRevisionStore, SequentialIdentifiers, make_service


@pytest.fixture
def reconciliation_config() -> ReconciliationConfig:
    return ReconciliationConfig(namespace="semtech", page_size=100, max_concurrency=4)


@pytest.fixture
def store() -> InMemoryRevisionStore:
    return InMemoryRevisionStore(services=[make_service("auth-service")])


@pytest.fixture
def identifiers() -> SequentialIdentifiers:
    return SequentialIdentifiers()
