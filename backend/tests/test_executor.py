"""
Tests for predicate construction and query execution over the in-memory store.
"""

from datetime import datetime, timezone

import pytest

from eventlist.core.errors import QueryValidationError, StoreError
from eventlist.domain.models import EventField
from eventlist.search.executor import EventQueryExecutor, build_predicates, choose_ordering
from eventlist.search.normalizer import MAX_PAGE, normalize_query
from eventlist.search.predicates import (
    LISTING_ORDER,
    SEARCH_ORDER,
    RangeMax,
    RangeMin,
    SortDirection,
    TextMatch,
)
from eventlist.stores.memory_store import InMemoryEventStore


def titles(events) -> list[str]:
    return [event.title for event in events]


async def run(store, **params):
    return await EventQueryExecutor(store).execute(normalize_query(params))


class TestBuildPredicates:
    def test_no_filters_no_predicates(self):
        assert build_predicates(normalize_query({"page": "3"})) == []

    def test_every_filter_in_fixed_order(self):
        query = normalize_query({
            "maxPrice": "50",
            "q": "wine",
            "dateTo": "2024-02-28",
            "location": "cellar",
            "minPrice": "10",
            "dateFrom": "2024-02-01",
        })
        assert build_predicates(query) == [
            TextMatch((EventField.TITLE, EventField.DESCRIPTION), "wine"),
            TextMatch((EventField.LOCATION,), "cellar"),
            RangeMin(EventField.STARTS_AT, datetime(2024, 2, 1, tzinfo=timezone.utc)),
            RangeMax(EventField.STARTS_AT, datetime(2024, 2, 28, 23, 59, 59, 999999, tzinfo=timezone.utc)),
            RangeMin(EventField.PRICE_PER_PERSON, 1000),
            RangeMax(EventField.PRICE_PER_PERSON, 5000),
        ]

    def test_zero_price_bound_is_a_filter(self):
        assert build_predicates(normalize_query({"maxPrice": "0"})) == [
            RangeMax(EventField.PRICE_PER_PERSON, 0),
        ]

    def test_listing_and_search_order_differ(self):
        assert choose_ordering([]) == LISTING_ORDER
        assert LISTING_ORDER.field is EventField.CREATED_AT
        assert LISTING_ORDER.direction is SortDirection.DESC

        predicates = build_predicates(normalize_query({"location": "Park"}))
        assert choose_ordering(predicates) == SEARCH_ORDER
        assert SEARCH_ORDER.field is EventField.STARTS_AT
        assert SEARCH_ORDER.direction is SortDirection.ASC


@pytest.mark.asyncio
class TestExecute:
    async def test_no_filters_lists_everything_newest_first(self, seeded_store):
        result = await run(seeded_store, limit="100")
        assert result.total == 10
        assert titles(result.items)[:3] == [
            "Craft Beer Brewing Workshop",
            "Urban Sketching Adventure",
            "Salsa Dancing Lessons",
        ]
        assert titles(result.items)[-1] == "Italian Cooking Masterclass"

    async def test_location_filter_is_case_insensitive_and_sorted_by_date(self, seeded_store):
        result = await run(seeded_store, location="studio")
        assert titles(result.items) == [
            "Morning Yoga & Meditation",
            "Italian Cooking Masterclass",
            "Salsa Dancing Lessons",
            "Pottery Making Workshop",
        ]

    async def test_single_location_match(self, seeded_store):
        result = await run(seeded_store, location="Park")
        assert titles(result.items) == ["Photography Workshop: Golden Hour"]
        assert result.page_info.total_pages == 1

    async def test_text_matches_title_or_description(self, seeded_store):
        result = await run(seeded_store, q="WINE")
        assert titles(result.items) == [
            "Italian Cooking Masterclass",
            "Wine & Cheese Tasting Evening",
        ]

    async def test_price_range_in_dollars(self, seeded_store):
        result = await run(seeded_store, minPrice="20", maxPrice="45")
        assert titles(result.items) == [
            "Morning Yoga & Meditation",
            "Salsa Dancing Lessons",
            "Rock Climbing for Beginners",
            "Urban Sketching Adventure",
        ]

    async def test_date_range_includes_whole_last_day(self, seeded_store):
        result = await run(seeded_store, dateFrom="2024-02-20", dateTo="2024-02-25")
        assert titles(result.items) == [
            "Wine & Cheese Tasting Evening",
            "Salsa Dancing Lessons",
            "Rock Climbing for Beginners",
        ]

    async def test_filters_are_combined(self, seeded_store):
        result = await run(seeded_store, q="workshop", maxPrice="80")
        assert titles(result.items) == [
            "Photography Workshop: Golden Hour",
            "Pottery Making Workshop",
        ]

    async def test_no_match(self, seeded_store):
        result = await run(seeded_store, q="quantum")
        assert result.items == []
        assert result.page_info.total_pages == 0
        assert result.page_info.has_next is False

    async def test_pages_partition_the_listing(self, seeded_store):
        pages = [await run(seeded_store, page=str(page), limit="3") for page in (1, 2, 3, 4)]
        seen = [title for result in pages for title in titles(result.items)]
        assert len(seen) == 10
        assert len(set(seen)) == 10
        assert [len(result.items) for result in pages] == [3, 3, 3, 1]
        assert pages[0].page_info.total_pages == 4
        assert pages[3].page_info.has_next is False
        assert pages[3].page_info.has_prev is True

    async def test_page_past_the_end_is_empty(self, seeded_store):
        result = await run(seeded_store, page="5", limit="3")
        assert result.items == []
        assert result.total == 10
        assert result.page_info.has_next is False
        assert result.page_info.has_prev is True

    async def test_last_representable_page_is_empty(self, seeded_store):
        result = await run(seeded_store, page=str(MAX_PAGE), limit="100")
        assert result.items == []
        assert result.total == 10
        assert result.page_info.has_next is False

    async def test_page_beyond_offset_range_never_reaches_store(self):
        calls = []

        class RecordingStore(InMemoryEventStore):
            async def find(self, predicates, order, offset, limit):
                calls.append(offset)
                return [], 0

        with pytest.raises(QueryValidationError):
            await run(RecordingStore(), page="99999999999999999999")
        assert calls == []

    async def test_store_failure_propagates(self):
        class BrokenStore(InMemoryEventStore):
            async def find(self, predicates, order, offset, limit):
                raise StoreError("find")

        with pytest.raises(StoreError) as exc_info:
            await run(BrokenStore(), q="anything")
        assert exc_info.value.operation == "find"

    async def test_store_receives_window_and_order(self):
        calls = []

        class RecordingStore(InMemoryEventStore):
            async def find(self, predicates, order, offset, limit):
                calls.append((list(predicates), order, offset, limit))
                return [], 0

        await run(RecordingStore(), page="3", limit="20")
        assert calls == [([], LISTING_ORDER, 40, 20)]
