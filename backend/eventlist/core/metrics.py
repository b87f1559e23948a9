"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Query metrics
event_queries = Counter(
    'event_queries_total',
    'Event list/search queries executed',
    ['kind']  # list, search
)

query_validation_failures = Counter(
    'event_query_validation_failures_total',
    'Rejected query fields by error code',
    ['code']  # InvalidDate, InvalidNumber, ...
)

# Store metrics
store_operations = Counter(
    'event_store_operations_total',
    'Event store operations',
    ['operation', 'result']  # create/find/..., ok/error
)

store_latency = Histogram(
    'event_store_latency_seconds',
    'Event store call latency',
    ['operation'],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_query(kind: str):
    """Record an executed query. Kind: list, search"""
    event_queries.labels(kind=kind).inc()


def record_validation_failure(code: str):
    query_validation_failures.labels(code=code).inc()


def record_store_operation(operation: str, ok: bool, duration: float):
    """Record one store call and how long it took."""
    result = "ok" if ok else "error"
    store_operations.labels(operation=operation, result=result).inc()
    store_latency.labels(operation=operation).observe(duration)
