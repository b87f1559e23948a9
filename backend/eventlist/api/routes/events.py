"""
Event endpoints: paginated listing, search, and CRUD.

Domain errors raised by EventService are turned into responses by the
exception handlers registered in eventlist.main.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from eventlist.api.deps import get_event_service, raw_event_query
from eventlist.schemas.event import (
    ErrorResponse,
    EventCreate,
    EventPage,
    EventResponse,
    EventSearchResponse,
    EventUpdate,
)
from eventlist.services.event_service import EventService

router = APIRouter(prefix="/events", tags=["Events"])

_query_errors = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
_lookup_errors = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
}


@router.get("/", response_model=EventPage, responses=_query_errors)
async def list_events_endpoint(
    raw: dict[str, Optional[str]] = Depends(raw_event_query),
    service: EventService = Depends(get_event_service),
):
    """
    List events, newest first, one page at a time.
    Any search parameter switches ordering to soonest event first.
    """
    result = await service.list_events(raw)
    return EventPage.from_result(result)


@router.get("/search", response_model=EventSearchResponse, responses=_query_errors)
async def search_events_endpoint(
    raw: dict[str, Optional[str]] = Depends(raw_event_query),
    service: EventService = Depends(get_event_service),
):
    """
    Search events by text, location, date range and price range.
    Every invalid parameter is reported in one 400 response.
    """
    query, result = await service.search_events(raw)
    return EventSearchResponse.from_result(result, query=query.to_params())


@router.post(
    "/",
    response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
async def create_event_endpoint(
    event_data: EventCreate,
    service: EventService = Depends(get_event_service),
):
    """Create a new event. Prices are integer cents."""
    event = await service.create_event(event_data)
    return EventResponse.model_validate(event)


@router.get("/{event_id}", response_model=EventResponse, responses=_lookup_errors)
async def get_event_endpoint(
    event_id: str,
    service: EventService = Depends(get_event_service),
):
    event = await service.get_event(event_id)
    return EventResponse.model_validate(event)


@router.put("/{event_id}", response_model=EventResponse, responses=_lookup_errors)
async def update_event_endpoint(
    event_id: str,
    event_data: EventUpdate,
    service: EventService = Depends(get_event_service),
):
    """Update the fields present in the body; omitted fields keep their values."""
    event = await service.update_event(event_id, event_data)
    return EventResponse.model_validate(event)


@router.delete("/{event_id}", response_model=EventResponse, responses=_lookup_errors)
async def delete_event_endpoint(
    event_id: str,
    service: EventService = Depends(get_event_service),
):
    """Delete an event and return it as it was."""
    event = await service.delete_event(event_id)
    return EventResponse.model_validate(event)
