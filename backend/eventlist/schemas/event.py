"""
Pydantic schemas for event-related request/response validation.

JSON uses camelCase (pricePerPerson, createdAt, totalPages); request bodies
also accept the snake_case names. The event time is called "datetime" on the
wire and starts_at everywhere else.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from eventlist.search.executor import SearchResult


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EventCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    starts_at: datetime = Field(..., alias="datetime")
    location: str = Field(..., min_length=1, max_length=255)
    capacity: int = Field(..., gt=0, strict=True)
    price_per_person: int = Field(..., ge=0, strict=True)


class EventUpdate(CamelModel):
    """Partial update: only the fields present in the body are changed."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    starts_at: Optional[datetime] = Field(None, alias="datetime")
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    capacity: Optional[int] = Field(None, gt=0, strict=True)
    price_per_person: Optional[int] = Field(None, ge=0, strict=True)


class EventResponse(CamelModel):
    id: UUID
    title: str
    description: Optional[str]
    starts_at: datetime = Field(..., alias="datetime")
    location: str
    capacity: int
    price_per_person: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EventPage(CamelModel):
    items: list[EventResponse]
    total: int
    page: int
    limit: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def from_result(cls, result: SearchResult, **extra) -> "EventPage":
        info = result.page_info
        return cls(
            items=[EventResponse.model_validate(event) for event in result.items],
            total=info.total,
            page=info.page,
            limit=info.limit,
            total_pages=info.total_pages,
            has_next=info.has_next,
            has_prev=info.has_prev,
            **extra,
        )


class EventSearchResponse(EventPage):
    query: dict


class ErrorDetail(BaseModel):
    field: Optional[str]
    code: str
    message: str


class ErrorResponse(BaseModel):
    error: str
    code: str
    details: list[ErrorDetail] = []
