"""Service test fixtures — in-memory store with a fake clock + FastAPI test client.

Invariants:
    - Every test gets a fresh InMemoryInstanceStore
    - Time only moves when a test calls clock.advance()
    - get_store dependency overridden to use the test store

Design Decisions:
    - In-memory store over a live Redis: same contract, no external dependency
    - ScriptedAllocator pins candidate ids so collisions are forced, not hoped for
"""

import pytest
from httpx import ASGITransport, AsyncClient

from instance_api.infrastructure.instance_store import get_store
from instance_api.infrastructure.memory_store import InMemoryInstanceStore
from instance_api.main import app
from instance_api.services.instance_lifecycle import InstanceLifecycle
from tests.services.fakes import FakeClock, ScriptedAllocator


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return InMemoryInstanceStore(clock=clock)


@pytest.fixture
def allocator():
    return ScriptedAllocator("482913")


@pytest.fixture
def lifecycle(store, allocator):
    return InstanceLifecycle(store, allocator=allocator)


@pytest.fixture
async def client(store):
    """FastAPI test client with the store dependency overridden."""
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
