"""
Query normalization: untyped query-string values -> validated EventQuery.

Every field is checked independently and all failures are reported together.
The dateFrom/dateTo ordering rule runs only once each field is valid on its
own (pydantic skips "after" model validators when a field failed).

Price bounds arrive as dollar strings ("25.50") and are kept as integer
cents. Date bounds accept a calendar date or an ISO-8601 date-time; naive
values are taken as UTC and a bare dateTo date covers that whole day.
"""

from datetime import date, datetime, time, timezone
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

from eventlist.core.errors import ErrorCode, FieldError, QueryValidationError
from eventlist.utils.money import dollars_to_cents

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# price_per_person is a 32-bit INTEGER column
MAX_PRICE_CENTS = 2**31 - 1
# OFFSET is a signed 64-bit integer: (page - 1) * MAX_LIMIT must fit
MAX_PAGE = (2**63 - 1) // MAX_LIMIT + 1

QUERY_PARAMS = ("q", "location", "dateFrom", "dateTo", "minPrice", "maxPrice", "page", "limit")


def _invalid(code: ErrorCode, message: str) -> PydanticCustomError:
    return PydanticCustomError(code.value, message)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _parse_date_bound(value: Any, param: str, end_of_day: bool) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time.max if end_of_day else time.min, tzinfo=timezone.utc)
    elif isinstance(value, str):
        text = value.strip()
        try:
            day = date.fromisoformat(text)
        except ValueError:
            pass
        else:
            return _parse_date_bound(day, param, end_of_day)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            parsed = None
    else:
        parsed = None

    if parsed is not None:
        try:
            return _as_utc(parsed)
        except OverflowError:
            # representable locally but not in UTC, e.g. 9999-12-31T23:00:00-05:00
            pass
    raise _invalid(ErrorCode.INVALID_DATE, f"Invalid date format for {param}")


def _parse_count(value: Any) -> Optional[int]:
    """Whole non-negative number from an int or a string of ASCII digits."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            return int(text)
    return None


def _parse_price(value: Any, param: str) -> Optional[int]:
    # Strings are dollar amounts from the query string; ints are already cents.
    if value is None:
        return None
    cents = None
    if isinstance(value, int) and not isinstance(value, bool):
        cents = value
    elif isinstance(value, str):
        try:
            cents = dollars_to_cents(value)
        except ValueError:
            pass
    if cents is not None and 0 <= cents <= MAX_PRICE_CENTS:
        return cents
    raise _invalid(ErrorCode.INVALID_NUMBER, f"{param} must be a non-negative number")


class EventQuery(BaseModel):
    """Validated search/listing criteria plus the pagination window.

    Built once per request and never mutated. Field aliases are the
    query-string parameter names.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    q: Optional[str] = None
    location: Optional[str] = None
    date_from: Optional[datetime] = Field(default=None, alias="dateFrom")
    date_to: Optional[datetime] = Field(default=None, alias="dateTo")
    min_price: Optional[int] = Field(default=None, alias="minPrice")
    max_price: Optional[int] = Field(default=None, alias="maxPrice")
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @field_validator("q", "location", mode="before")
    @classmethod
    def _blank_text_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("date_from", mode="before")
    @classmethod
    def _parse_date_from(cls, value: Any) -> Optional[datetime]:
        return _parse_date_bound(value, "dateFrom", end_of_day=False)

    @field_validator("date_to", mode="before")
    @classmethod
    def _parse_date_to(cls, value: Any) -> Optional[datetime]:
        return _parse_date_bound(value, "dateTo", end_of_day=True)

    @field_validator("min_price", mode="before")
    @classmethod
    def _parse_min_price(cls, value: Any) -> Optional[int]:
        return _parse_price(value, "minPrice")

    @field_validator("max_price", mode="before")
    @classmethod
    def _parse_max_price(cls, value: Any) -> Optional[int]:
        return _parse_price(value, "maxPrice")

    @field_validator("page", mode="before")
    @classmethod
    def _parse_page(cls, value: Any) -> int:
        page = _parse_count(value)
        if page is None or not 1 <= page <= MAX_PAGE:
            raise _invalid(ErrorCode.INVALID_PAGE, "Page must be a positive integer")
        return page

    @field_validator("limit", mode="before")
    @classmethod
    def _parse_limit(cls, value: Any) -> int:
        limit = _parse_count(value)
        if limit is None or not 1 <= limit <= MAX_LIMIT:
            raise _invalid(ErrorCode.INVALID_LIMIT, f"Limit must be between 1 and {MAX_LIMIT}")
        return limit

    @model_validator(mode="after")
    def _check_date_range(self) -> "EventQuery":
        if self.date_from is not None and self.date_to is not None and self.date_from > self.date_to:
            raise _invalid(ErrorCode.DATE_RANGE_INVERTED, "dateFrom must be before or equal to dateTo")
        return self

    @property
    def has_filters(self) -> bool:
        """True when any search criterion is set, i.e. this is a search rather than a listing."""
        return any(
            value is not None
            for value in (self.q, self.location, self.date_from, self.date_to, self.min_price, self.max_price)
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def to_params(self) -> dict:
        """The normalized query as JSON-ready query-string names and values."""
        return self.model_dump(mode="json", by_alias=True)


def _to_field_error(error: Mapping[str, Any]) -> FieldError:
    loc = error["loc"]
    return FieldError(
        field=str(loc[0]) if loc else None,
        code=ErrorCode(error["type"]),
        message=error["msg"],
    )


def normalize_query(raw: Mapping[str, Optional[str]]) -> EventQuery:
    """Validate raw query-string values into an EventQuery.

    Unknown keys are ignored; missing, None and blank values are absent.

    Raises:
        QueryValidationError: carrying every offending field, or a single
            DateRangeInverted error when only the cross-field rule failed.
    """
    present = {}
    for param in QUERY_PARAMS:
        value = raw.get(param)
        if value is not None and not (isinstance(value, str) and not value.strip()):
            present[param] = value

    try:
        return EventQuery.model_validate(present)
    except ValidationError as exc:
        raise QueryValidationError(tuple(_to_field_error(error) for error in exc.errors())) from None
