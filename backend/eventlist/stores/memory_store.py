"""In-process EventStore backed by a dict.

Used by the test-suite and for running the API without a database. Each
method completes without awaiting, so concurrent requests see whole
operations only.
"""

import dataclasses
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Sequence
from uuid import UUID

from eventlist.core.errors import EventNotFoundError
from eventlist.domain.models import Event, NewEvent
from eventlist.search.predicates import Ordering, Predicate, SortDirection, matches_all
from eventlist.stores.interfaces import EventStore


class InMemoryEventStore(EventStore):
    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._events: dict[UUID, Event] = {}
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def create(self, fields: NewEvent) -> Event:
        event = Event(id=uuid.uuid4(), created_at=self._clock(), **dataclasses.asdict(fields))
        self._events[event.id] = event
        return event

    async def find_by_id(self, event_id: UUID) -> Optional[Event]:
        return self._events.get(event_id)

    async def find(
        self,
        predicates: Sequence[Predicate],
        order: Ordering,
        offset: int,
        limit: int,
    ) -> tuple[list[Event], int]:
        matching = [event for event in self._events.values() if matches_all(predicates, event)]
        matching.sort(key=order.sort_key, reverse=order.direction is SortDirection.DESC)
        return matching[offset:offset + limit], len(matching)

    async def update(self, event_id: UUID, changes: Mapping[str, Any]) -> Event:
        current = self._events.get(event_id)
        if current is None:
            raise EventNotFoundError(str(event_id))
        updated = dataclasses.replace(current, **changes)
        self._events[event_id] = updated
        return updated

    async def delete(self, event_id: UUID) -> Event:
        event = self._events.pop(event_id, None)
        if event is None:
            raise EventNotFoundError(str(event_id))
        return event

    async def delete_all(self) -> int:
        count = len(self._events)
        self._events.clear()
        return count
