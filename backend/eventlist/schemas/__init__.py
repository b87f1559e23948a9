from eventlist.schemas.event import (
    EventCreate, EventUpdate, EventResponse, EventPage, EventSearchResponse, ErrorResponse,
)

__all__ = [
    "EventCreate", "EventUpdate", "EventResponse",
    "EventPage", "EventSearchResponse", "ErrorResponse",
]
