"""
Pytest fixtures for the API client and event stores.

API tests run over InMemoryEventStore by overriding the get_event_store
dependency, so no database is needed. SQL store tests build their own
in-memory SQLite engine (see test_sqlalchemy_store.py).
"""

from datetime import datetime, timezone, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from eventlist.main import app
from eventlist.api.deps import get_event_store
from eventlist.seed import seed_events
from eventlist.stores.memory_store import InMemoryEventStore


class TickingClock:
    """Each call is one minute after the previous, so creation order is unambiguous."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(minutes=1)
        return self.now


@pytest.fixture
def store() -> InMemoryEventStore:
    return InMemoryEventStore(clock=TickingClock(datetime(2024, 1, 1, tzinfo=timezone.utc)))


@pytest_asyncio.fixture
async def seeded_store(store: InMemoryEventStore) -> InMemoryEventStore:
    """The ten sample events, created in SAMPLE_EVENTS order."""
    await seed_events(store)
    return store


@pytest_asyncio.fixture
async def client(store: InMemoryEventStore) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests all share the ``store`` fixture."""
    app.dependency_overrides[get_event_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def future_event_body() -> dict:
    return {
        "title": "Python Meetup",
        "description": "Lightning talks and pizza",
        "datetime": (datetime.now(timezone.utc) + timedelta(days=30)).isoformat(),
        "location": "Community Hall",
        "capacity": 40,
        "pricePerPerson": 1500,
    }


@pytest_asyncio.fixture
async def test_event(client: AsyncClient, future_event_body: dict) -> dict:
    """An event created through the API; returns its JSON."""
    response = await client.post("/api/v1/events/", json=future_event_body)
    assert response.status_code == 201
    return response.json()
