"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Gauge, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

db_operations = Counter(
    'concert_db_operations_total',
    'Firebase Realtime Database operations',
    ['operation', 'status']  # status: success, error, invalid
)

concert_links_pushed = Counter(
    'concert_links_pushed_total',
    'Concert links appended to concerts/links'
)

firebase_app_initialized = Gauge(
    'firebase_app_initialized',
    'Firebase Admin app state (1=initialized, 0=not initialized)'
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_db_operation(operation: str, status: str = "success"):
    """Record database operation. Status: success, error, invalid"""
    db_operations.labels(operation=operation, status=status).inc()


def record_links_pushed(count: int = 1):
    concert_links_pushed.inc(count)
