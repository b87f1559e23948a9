"""
FastAPI dependencies wiring a request's session into its store and service.

Tests override get_event_store to run the API over InMemoryEventStore.
"""

from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from eventlist.core.config import get_settings
from eventlist.db.session import get_db
from eventlist.services.event_service import EventService
from eventlist.stores.interfaces import EventStore
from eventlist.stores.sqlalchemy_store import SqlAlchemyEventStore


def get_event_store(db: AsyncSession = Depends(get_db)) -> EventStore:
    return SqlAlchemyEventStore(db)


def get_event_service(store: EventStore = Depends(get_event_store)) -> EventService:
    return EventService(store, reject_past_dates=get_settings().REJECT_PAST_EVENT_DATES)


def raw_event_query(
    q: Optional[str] = Query(None, description="Text to find in title or description"),
    location: Optional[str] = Query(None, description="Substring of the location"),
    date_from: Optional[str] = Query(None, alias="dateFrom", description="Earliest date, e.g. 2024-02-10"),
    date_to: Optional[str] = Query(None, alias="dateTo", description="Latest date (inclusive)"),
    min_price: Optional[str] = Query(None, alias="minPrice", description="Minimum price in dollars"),
    max_price: Optional[str] = Query(None, alias="maxPrice", description="Maximum price in dollars"),
    page: Optional[str] = Query(None, description="Page number, from 1"),
    limit: Optional[str] = Query(None, description="Page size, 1-100"),
) -> dict[str, Optional[str]]:
    """Collect query-string values untouched; EventService does the validation."""
    return {
        "q": q,
        "location": location,
        "dateFrom": date_from,
        "dateTo": date_to,
        "minPrice": min_price,
        "maxPrice": max_price,
        "page": page,
        "limit": limit,
    }
