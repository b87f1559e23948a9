"""Store interface (repository pattern).

Stores must be swappable and return domain models. They receive already
validated values; policy checks belong to EventService.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

from eventlist.domain.models import Event, NewEvent
from eventlist.search.predicates import Ordering, Predicate


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    async def create(self, fields: NewEvent) -> Event:
        """Persist a new event, assigning its id and created_at."""
        ...

    @abstractmethod
    async def find_by_id(self, event_id: UUID) -> Optional[Event]:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    async def find(
        self,
        predicates: Sequence[Predicate],
        order: Ordering,
        offset: int,
        limit: int,
    ) -> tuple[list[Event], int]:
        """Return one window of matching events plus the count of all matches.

        Predicates are AND-combined; the total ignores offset and limit.
        """
        ...

    @abstractmethod
    async def update(self, event_id: UUID, changes: Mapping[str, Any]) -> Event:
        """Apply a partial update and return the new state.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        ...

    @abstractmethod
    async def delete(self, event_id: UUID) -> Event:
        """Remove an event and return it as it was.

        Raises:
            EventNotFoundError: If the event does not exist.
        """
        ...

    @abstractmethod
    async def delete_all(self) -> int:
        """Remove every event, returning how many were removed."""
        ...
