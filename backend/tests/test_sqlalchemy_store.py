"""
Tests for SqlAlchemyEventStore against an in-memory SQLite database.
"""

import dataclasses
import uuid
from datetime import datetime, timezone, timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from eventlist.core.errors import ErrorCode, EventNotFoundError, QueryValidationError, StoreError
from eventlist.db.base import Base
from eventlist.domain.models import NewEvent
from eventlist.models.event import Event as EventRow
from eventlist.search.executor import EventQueryExecutor
from eventlist.search.normalizer import MAX_PAGE, normalize_query
from eventlist.search.predicates import LISTING_ORDER
from eventlist.seed import SAMPLE_EVENTS, seed_events
from eventlist.stores.sqlalchemy_store import SqlAlchemyEventStore

CREATED_BASE = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def session() -> AsyncGenerator[AsyncSession, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def sql_store(session: AsyncSession) -> SqlAlchemyEventStore:
    """Sample events inserted with created_at one minute apart, in SAMPLE_EVENTS order."""
    for minute, sample in enumerate(SAMPLE_EVENTS, start=1):
        session.add(EventRow(
            created_at=CREATED_BASE + timedelta(minutes=minute),
            **dataclasses.asdict(sample),
        ))
    await session.flush()
    return SqlAlchemyEventStore(session)


def future_event(**overrides) -> NewEvent:
    fields = dict(
        title="Board Game Night",
        description="Bring a friend",
        starts_at=datetime.now(timezone.utc) + timedelta(days=7),
        location="Corner Cafe",
        capacity=12,
        price_per_person=800,
    )
    fields.update(overrides)
    return NewEvent(**fields)


async def search_titles(store, **params) -> list[str]:
    result = await EventQueryExecutor(store).execute(normalize_query(params))
    return [event.title for event in result.items]


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [
    {},
    {"limit": "3", "page": "2"},
    {"location": "studio"},
    {"q": "WINE"},
    {"q": "workshop", "maxPrice": "80"},
    {"minPrice": "20", "maxPrice": "45"},
    {"dateFrom": "2024-02-20", "dateTo": "2024-02-25"},
    {"dateFrom": "2024-02-20T19:00:00Z", "dateTo": "2024-02-25T10:00:00Z"},
    {"maxPrice": "0"},
    {"dateFrom": "0001-01-01", "dateTo": "9999-12-31"},
    {"dateFrom": "0001-01-01T00:00:00-01:00", "dateTo": "9999-12-31T23:00:00+05:00"},
    {"page": "4", "limit": "3"},
])
async def test_sql_and_memory_stores_agree(sql_store, seeded_store, params):
    assert await search_titles(sql_store, **params) == await search_titles(seeded_store, **params)


@pytest.mark.asyncio
async def test_last_representable_page_is_empty(sql_store):
    query = normalize_query({"page": str(MAX_PAGE), "limit": "100"})
    result = await EventQueryExecutor(sql_store).execute(query)
    assert result.items == []
    assert result.total == 10
    assert result.page_info.has_prev is True


@pytest.mark.asyncio
async def test_twenty_digit_page_is_rejected_before_querying(sql_store):
    with pytest.raises(QueryValidationError) as exc_info:
        await EventQueryExecutor(sql_store).execute(normalize_query({"page": "99999999999999999999"}))
    assert exc_info.value.codes == [ErrorCode.INVALID_PAGE]


@pytest.mark.asyncio
async def test_listing_is_newest_first(sql_store):
    titles = await search_titles(sql_store, limit="100")
    assert titles[0] == "Craft Beer Brewing Workshop"
    assert titles[-1] == "Italian Cooking Masterclass"
    assert len(titles) == 10


@pytest.mark.asyncio
async def test_find_returns_total_of_all_matches(sql_store):
    result = await EventQueryExecutor(sql_store).execute(normalize_query({"q": "workshop", "limit": "1"}))
    assert len(result.items) == 1
    assert result.total == 3
    assert result.page_info.total_pages == 3


@pytest.mark.asyncio
async def test_like_wildcards_in_text_are_literal(sql_store):
    assert await search_titles(sql_store, q="%") == []
    assert await search_titles(sql_store, q="_") == []


@pytest.mark.asyncio
async def test_returned_datetimes_are_utc(sql_store):
    events, _ = await sql_store.find([], LISTING_ORDER, 0, 1)
    assert events[0].created_at == CREATED_BASE + timedelta(minutes=10)
    assert events[0].starts_at.tzinfo is not None


@pytest.mark.asyncio
async def test_create_and_find_by_id(session):
    store = SqlAlchemyEventStore(session)
    event = await store.create(future_event())
    assert isinstance(event.id, uuid.UUID)
    assert event.created_at.tzinfo is not None
    assert await store.find_by_id(event.id) == event


@pytest.mark.asyncio
async def test_find_by_id_missing(sql_store):
    assert await sql_store.find_by_id(uuid.uuid4()) is None


@pytest.mark.asyncio
async def test_update_changes_only_given_fields(session):
    store = SqlAlchemyEventStore(session)
    event = await store.create(future_event())
    updated = await store.update(event.id, {"capacity": 30, "description": None})
    assert updated.capacity == 30
    assert updated.description is None
    assert updated.title == event.title
    assert updated.created_at == event.created_at


@pytest.mark.asyncio
async def test_update_missing_event(sql_store):
    with pytest.raises(EventNotFoundError):
        await sql_store.update(uuid.uuid4(), {"capacity": 5})


@pytest.mark.asyncio
async def test_delete_returns_removed_event(session):
    store = SqlAlchemyEventStore(session)
    event = await store.create(future_event())
    assert await store.delete(event.id) == event
    assert await store.find_by_id(event.id) is None
    with pytest.raises(EventNotFoundError):
        await store.delete(event.id)


@pytest.mark.asyncio
async def test_delete_all(sql_store):
    assert await sql_store.delete_all() == 10
    _, total = await sql_store.find([], LISTING_ORDER, 0, 10)
    assert total == 0


@pytest.mark.asyncio
async def test_seed_replaces_existing_rows(sql_store):
    await sql_store.create(future_event())
    assert await seed_events(sql_store) == len(SAMPLE_EVENTS)
    _, total = await sql_store.find([], LISTING_ORDER, 0, 10)
    assert total == len(SAMPLE_EVENTS)


@pytest.mark.asyncio
async def test_constraint_violation_is_store_error(session):
    store = SqlAlchemyEventStore(session)
    with pytest.raises(StoreError) as exc_info:
        await store.create(future_event(capacity=0))
    assert exc_info.value.operation == "create"
    assert "capacity" not in exc_info.value.message
