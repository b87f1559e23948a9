"""SQLAlchemy implementation of the EventStore.

Predicates are translated into one WHERE clause shared by the page query and
the count query, so `total` always describes the same rows the page was cut
from. Driver and SQL failures surface as StoreError; nothing is retried.
"""

import dataclasses
import functools
import time
from datetime import timezone
from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from eventlist.core.errors import EventNotFoundError, StoreError
from eventlist.core.logging import get_logger
from eventlist.core.metrics import record_store_operation
from eventlist.domain.models import Event, EventField, NewEvent
from eventlist.models.event import Event as EventRow
from eventlist.search.predicates import Ordering, Predicate, RangeMax, RangeMin, SortDirection, TextMatch
from eventlist.stores.interfaces import EventStore

logger = get_logger(__name__)


def _store_call(operation: str):
    """Time the call, record it, and wrap SQLAlchemy failures in StoreError."""

    def decorator(method):
        @functools.wraps(method)
        async def wrapper(self, *args, **kwargs):
            start = time.perf_counter()
            try:
                result = await method(self, *args, **kwargs)
            except SQLAlchemyError as exc:
                record_store_operation(operation, ok=False, duration=time.perf_counter() - start)
                logger.error("store_operation_failed", operation=operation, error=str(exc))
                raise StoreError(operation) from exc
            record_store_operation(operation, ok=True, duration=time.perf_counter() - start)
            return result

        return wrapper

    return decorator


def _column(field: EventField):
    return getattr(EventRow, field.value)


def _clause(predicate: Predicate) -> ColumnElement[bool]:
    if isinstance(predicate, TextMatch):
        return or_(*(_column(field).icontains(predicate.term, autoescape=True) for field in predicate.fields))
    if isinstance(predicate, RangeMin):
        return _column(predicate.field) >= predicate.value
    if isinstance(predicate, RangeMax):
        return _column(predicate.field) <= predicate.value
    raise TypeError(f"unsupported predicate: {predicate!r}")


def _to_domain(row: EventRow) -> Event:
    def aware(value):
        # SQLite hands back naive datetimes; everything is stored in UTC
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    return Event(
        id=row.id,
        title=row.title,
        description=row.description,
        starts_at=aware(row.starts_at),
        location=row.location,
        capacity=row.capacity,
        price_per_person=row.price_per_person,
        created_at=aware(row.created_at),
    )


class SqlAlchemyEventStore(EventStore):
    """Relational event store working inside the caller's AsyncSession.

    Writes are flushed but not committed; the session owner (get_db) commits
    or rolls back the whole request.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @_store_call("create")
    async def create(self, fields: NewEvent) -> Event:
        row = EventRow(**dataclasses.asdict(fields))
        self._session.add(row)
        await self._session.flush()
        await self._session.refresh(row)
        return _to_domain(row)

    @_store_call("find_by_id")
    async def find_by_id(self, event_id: UUID) -> Optional[Event]:
        row = await self._session.get(EventRow, event_id)
        return _to_domain(row) if row else None

    @_store_call("find")
    async def find(
        self,
        predicates: Sequence[Predicate],
        order: Ordering,
        offset: int,
        limit: int,
    ) -> tuple[list[Event], int]:
        where = [_clause(predicate) for predicate in predicates]

        count_query = select(func.count()).select_from(EventRow).where(*where)
        total = (await self._session.execute(count_query)).scalar_one()

        column = _column(order.field)
        sort = column.desc() if order.direction is SortDirection.DESC else column.asc()
        page_query = (
            select(EventRow)
            .where(*where)
            .order_by(sort, EventRow.id)  # id breaks ties so pages never overlap
            .offset(offset)
            .limit(limit)
        )
        rows = (await self._session.execute(page_query)).scalars().all()
        return [_to_domain(row) for row in rows], total

    @_store_call("update")
    async def update(self, event_id: UUID, changes: Mapping[str, Any]) -> Event:
        row = await self._session.get(EventRow, event_id)
        if row is None:
            raise EventNotFoundError(str(event_id))
        for key, value in changes.items():
            setattr(row, key, value)
        await self._session.flush()
        await self._session.refresh(row)
        return _to_domain(row)

    @_store_call("delete")
    async def delete(self, event_id: UUID) -> Event:
        row = await self._session.get(EventRow, event_id)
        if row is None:
            raise EventNotFoundError(str(event_id))
        event = _to_domain(row)
        await self._session.delete(row)
        await self._session.flush()
        return event

    @_store_call("delete_all")
    async def delete_all(self) -> int:
        result = await self._session.execute(delete(EventRow))
        return result.rowcount
