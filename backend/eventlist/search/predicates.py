"""
Typed filter predicates and orderings understood by every EventStore.

A query becomes an ordered list of these values; stores translate them to
SQL (SqlAlchemyEventStore) or evaluate them directly (InMemoryEventStore).
Each variant knows how to test a single event so both stores agree on
semantics.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Sequence, Union

from eventlist.domain.models import Event, EventField

Bound = Union[int, datetime]


@dataclass(frozen=True)
class TextMatch:
    """Case-insensitive substring match on any of ``fields``."""

    fields: tuple[EventField, ...]
    term: str

    def matches(self, event: Event) -> bool:
        needle = self.term.lower()
        for field in self.fields:
            value = getattr(event, field.value)
            if value is not None and needle in value.lower():
                return True
        return False


@dataclass(frozen=True)
class RangeMin:
    """Inclusive lower bound: ``field >= value``."""

    field: EventField
    value: Bound

    def matches(self, event: Event) -> bool:
        return getattr(event, self.field.value) >= self.value


@dataclass(frozen=True)
class RangeMax:
    """Inclusive upper bound: ``field <= value``."""

    field: EventField
    value: Bound

    def matches(self, event: Event) -> bool:
        return getattr(event, self.field.value) <= self.value


Predicate = Union[TextMatch, RangeMin, RangeMax]


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Ordering:
    field: EventField
    direction: SortDirection

    def sort_key(self, event: Event) -> Any:
        return getattr(event, self.field.value)


# Listing shows the newest additions first; searching shows the soonest events first.
LISTING_ORDER = Ordering(EventField.CREATED_AT, SortDirection.DESC)
SEARCH_ORDER = Ordering(EventField.STARTS_AT, SortDirection.ASC)


def matches_all(predicates: Sequence[Predicate], event: Event) -> bool:
    """AND-combine predicates; an empty list matches every event."""
    return all(predicate.matches(event) for predicate in predicates)
