from __future__ import annotations

import pytest

from burrow.core.config import RuntimeConfig
from burrow.core.history import NavigationHistory
from burrow.core.state import SessionStateStore
from tests.helpers import FakeGateway, ResourceRecorder


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def store() -> SessionStateStore:
    return SessionStateStore()


@pytest.fixture
def history() -> NavigationHistory:
    return NavigationHistory()


@pytest.fixture
def config() -> RuntimeConfig:
    return RuntimeConfig(
        log_level="info",
        log_format="json",
        default_sort="date",
        history_limit=200,
        suggestion_limit=50,
    )


@pytest.fixture
def resources():
    recorder = ResourceRecorder()
    yield recorder
    for resource in recorder.created:
        resource.release()
