"""
Event Listing API - Main Application Entry Point

Browse, search, create, edit and delete events:
- Paginated listing (newest first) and filtered search (soonest first)
- Query-string validation that reports every bad parameter at once
- Structured logging with request correlation
- Prometheus metrics for queries and store calls
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from eventlist.core.config import get_settings
from eventlist.core.errors import (
    DomainError,
    EventInPastError,
    EventNotFoundError,
    InvalidEventIdError,
    QueryValidationError,
    StoreError,
)
from eventlist.core.logging import setup_logging, get_logger
from eventlist.core.metrics import metrics_endpoint
from eventlist.api.router import api_router
from eventlist.api.middleware import RequestLoggingMiddleware
from eventlist.db.session import engine

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: startup and shutdown hooks."""
    setup_logging()

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        reject_past_event_dates=settings.REJECT_PAST_EVENT_DATES,
    )

    yield

    await engine.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Event listing API with validated search and pagination",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)


def _error_response(status_code: int, exc: DomainError, details: list | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.message, "code": exc.code.value, "details": details or []},
    )


@app.exception_handler(QueryValidationError)
async def query_validation_handler(request: Request, exc: QueryValidationError):
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        exc,
        details=[error.as_dict() for error in exc.errors],
    )


@app.exception_handler(InvalidEventIdError)
@app.exception_handler(EventInPastError)
async def bad_request_handler(request: Request, exc: DomainError):
    return _error_response(status.HTTP_400_BAD_REQUEST, exc)


@app.exception_handler(EventNotFoundError)
async def not_found_handler(request: Request, exc: EventNotFoundError):
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("store_error", operation=exc.operation, cause=repr(exc.__cause__))
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for Docker and load balancers."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
async def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
