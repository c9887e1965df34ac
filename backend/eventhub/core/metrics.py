"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Booking metrics
booking_attempts = Counter(
    'eventhub_booking_attempts_total',
    'Total booking attempts',
    ['status']  # created, event_not_found, price_mismatch, sold_out
)

booking_latency = Histogram(
    'eventhub_booking_latency_seconds',
    'Booking admission latency, including time spent waiting for the event lock',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

booking_lock_wait = Histogram(
    'eventhub_booking_lock_wait_seconds',
    'Time spent waiting for the per-event booking lock',
    buckets=[0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1]
)

booking_cancellations = Counter(
    'eventhub_booking_cancellations_total',
    'Bookings cancelled'
)

# Auth metrics
auth_attempts = Counter(
    'eventhub_auth_attempts_total',
    'Login attempts',
    ['result']  # success, failure
)


def metrics_endpoint() -> Response:
    """
    Prometheus metrics endpoint.

    Usage:
        @app.get("/metrics")
        def metrics():
            return metrics_endpoint()
    """
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def record_booking_attempt(status: str):
    """Record booking attempt. Status: created, event_not_found, price_mismatch, sold_out"""
    booking_attempts.labels(status=status).inc()


def record_auth_attempt(success: bool):
    result = "success" if success else "failure"
    auth_attempts.labels(result=result).inc()
