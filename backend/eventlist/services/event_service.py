"""
Event service: CRUD plus listing/search over an injected EventStore.

Services:
- Depend only on the EventStore interface
- Apply event policy (past-date rejection) and parse identifiers
- Raise domain errors; HTTP mapping happens in eventlist.main
"""

from datetime import datetime, timezone
from typing import Mapping, Optional
from uuid import UUID

from eventlist.core.errors import EventInPastError, EventNotFoundError, InvalidEventIdError, QueryValidationError
from eventlist.core.logging import get_logger
from eventlist.core.metrics import record_query, record_validation_failure
from eventlist.domain.models import Event, NewEvent
from eventlist.schemas.event import EventCreate, EventUpdate
from eventlist.search.executor import EventQueryExecutor, SearchResult
from eventlist.search.normalizer import EventQuery, normalize_query
from eventlist.stores.interfaces import EventStore

logger = get_logger(__name__)

# Columns that may not be cleared with an explicit null in an update body
_REQUIRED_FIELDS = frozenset({"title", "starts_at", "location", "capacity", "price_per_person"})


def _utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_event_id(event_id: str) -> UUID:
    try:
        return UUID(event_id)
    except ValueError:
        raise InvalidEventIdError(event_id) from None


class EventService:
    """Service for event catalog operations."""

    def __init__(self, store: EventStore, reject_past_dates: bool = True) -> None:
        self._store = store
        self._executor = EventQueryExecutor(store)
        self._reject_past_dates = reject_past_dates

    def _check_starts_at(self, starts_at: datetime) -> datetime:
        starts_at = _utc(starts_at)
        if self._reject_past_dates and starts_at <= datetime.now(timezone.utc):
            raise EventInPastError()
        return starts_at

    def parse_query(self, raw: Mapping[str, Optional[str]]) -> EventQuery:
        """Normalize raw query-string values, counting each rejected field."""
        try:
            return normalize_query(raw)
        except QueryValidationError as exc:
            for error in exc.errors:
                record_validation_failure(error.code.value)
            logger.info("event_query_rejected", errors=[error.as_dict() for error in exc.errors])
            raise

    async def list_events(self, raw: Mapping[str, Optional[str]]) -> SearchResult:
        """Paginated listing; with filters present it behaves as a search."""
        query = self.parse_query(raw)
        record_query("search" if query.has_filters else "list")
        return await self._executor.execute(query)

    async def search_events(self, raw: Mapping[str, Optional[str]]) -> tuple[EventQuery, SearchResult]:
        """Search events, returning the normalized query alongside the page."""
        query = self.parse_query(raw)
        record_query("search")
        result = await self._executor.execute(query)
        logger.info("events_searched", query=query.to_params(), total=result.total)
        return query, result

    async def get_event(self, event_id: str) -> Event:
        """Return an event by ID.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = await self._store.find_by_id(_parse_event_id(event_id))
        if event is None:
            logger.info("event_not_found", event_id=event_id)
            raise EventNotFoundError(event_id)
        return event

    async def create_event(self, data: EventCreate) -> Event:
        """Create a new event.

        Raises:
            EventInPastError: If past dates are rejected and starts_at is not in the future.
        """
        fields = NewEvent(
            title=data.title,
            description=data.description,
            starts_at=self._check_starts_at(data.starts_at),
            location=data.location,
            capacity=data.capacity,
            price_per_person=data.price_per_person,
        )
        event = await self._store.create(fields)
        logger.info(
            "event_created",
            event_id=str(event.id),
            title=event.title,
            capacity=event.capacity,
            price_per_person=event.price_per_person,
        )
        return event

    async def update_event(self, event_id: str, data: EventUpdate) -> Event:
        """Apply the fields present in ``data`` to an existing event.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
            EventInPastError: If a new starts_at is rejected by the past-date policy.
        """
        parsed_id = _parse_event_id(event_id)
        changes = {
            key: value
            for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key not in _REQUIRED_FIELDS
        }
        if "starts_at" in changes:
            changes["starts_at"] = self._check_starts_at(changes["starts_at"])

        if not changes:
            return await self.get_event(event_id)

        event = await self._store.update(parsed_id, changes)
        logger.info("event_updated", event_id=event_id, fields=sorted(changes))
        return event

    async def delete_event(self, event_id: str) -> Event:
        """Delete an event and return it.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            EventNotFoundError: If the event does not exist.
        """
        event = await self._store.delete(_parse_event_id(event_id))
        logger.info("event_deleted", event_id=event_id, title=event.title)
        return event
