"""Domain models returned by every EventStore implementation.

These are plain frozen values with no persistence or API rules. The ORM
model lives in eventlist/models/event.py and the wire schemas in
eventlist/schemas/event.py.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID


class EventField(str, Enum):
    """Event attributes that predicates and orderings may refer to."""

    TITLE = "title"
    DESCRIPTION = "description"
    STARTS_AT = "starts_at"
    LOCATION = "location"
    CAPACITY = "capacity"
    PRICE_PER_PERSON = "price_per_person"
    CREATED_AT = "created_at"


@dataclass(frozen=True)
class NewEvent:
    """Fields supplied when creating an event; id and created_at are assigned by the store."""

    title: str
    starts_at: datetime
    location: str
    capacity: int
    price_per_person: int
    description: Optional[str] = None


@dataclass(frozen=True)
class Event:
    """Domain representation of a persisted Event.

    price_per_person is in cents.
    """

    id: UUID
    title: str
    description: Optional[str]
    starts_at: datetime
    location: str
    capacity: int
    price_per_person: int
    created_at: datetime
