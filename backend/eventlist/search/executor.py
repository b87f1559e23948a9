"""
Query execution: EventQuery -> predicates + ordering -> one page of events.

The executor holds no state beyond the store it was given, so a fresh one
per request (or a shared one) behaves the same.
"""

from dataclasses import dataclass
from typing import Sequence

from eventlist.core.logging import get_logger
from eventlist.domain.models import Event, EventField
from eventlist.search.normalizer import EventQuery
from eventlist.search.pagination import PageInfo
from eventlist.search.predicates import (
    LISTING_ORDER,
    SEARCH_ORDER,
    Ordering,
    Predicate,
    RangeMax,
    RangeMin,
    TextMatch,
)
from eventlist.stores.interfaces import EventStore

logger = get_logger(__name__)


def build_predicates(query: EventQuery) -> list[Predicate]:
    """One predicate per criterion present on the query, always in the same order."""
    predicates: list[Predicate] = []
    if query.q is not None:
        predicates.append(TextMatch((EventField.TITLE, EventField.DESCRIPTION), query.q))
    if query.location is not None:
        predicates.append(TextMatch((EventField.LOCATION,), query.location))
    if query.date_from is not None:
        predicates.append(RangeMin(EventField.STARTS_AT, query.date_from))
    if query.date_to is not None:
        predicates.append(RangeMax(EventField.STARTS_AT, query.date_to))
    if query.min_price is not None:
        predicates.append(RangeMin(EventField.PRICE_PER_PERSON, query.min_price))
    if query.max_price is not None:
        predicates.append(RangeMax(EventField.PRICE_PER_PERSON, query.max_price))
    return predicates


def choose_ordering(predicates: Sequence[Predicate]) -> Ordering:
    return SEARCH_ORDER if predicates else LISTING_ORDER


@dataclass(frozen=True)
class SearchResult:
    items: list[Event]
    page_info: PageInfo

    @property
    def total(self) -> int:
        return self.page_info.total


class EventQueryExecutor:
    def __init__(self, store: EventStore) -> None:
        self._store = store

    async def execute(self, query: EventQuery) -> SearchResult:
        """Fetch the page of events selected by ``query``.

        Raises:
            StoreError: If the store fails; nothing is retried.
        """
        predicates = build_predicates(query)
        order = choose_ordering(predicates)

        items, total = await self._store.find(predicates, order, query.offset, query.limit)
        page_info = PageInfo(page=query.page, limit=query.limit, total=total)

        logger.info(
            "events_queried",
            filters=len(predicates),
            order=f"{order.field.value} {order.direction.value}",
            page=query.page,
            limit=query.limit,
            total=total,
            returned=len(items),
        )
        return SearchResult(items=items, page_info=page_info)
