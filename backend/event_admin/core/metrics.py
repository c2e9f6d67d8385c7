"""
Metrics instrumentation for observability.
Exposes Prometheus-compatible metrics at /metrics endpoint.
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from fastapi import Response

# Registration metrics
registration_attempts = Counter(
    'registration_attempts_total',
    'Total registration attempts',
    ['outcome']  # created, existing, unreconciled, error
)

registration_latency = Histogram(
    'registration_latency_seconds',
    'Registration write latency, including any reconciliation read',
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)

# Event writer metrics
event_writes = Counter(
    'event_writes_total',
    'Event create/update operations',
    ['operation', 'status']  # create/update, success/error
)

# Admin editor metrics
config_submissions = Counter(
    'typeform_config_submissions_total',
    'Admin typeform config submissions',
    ['result']  # success, input_error, error
)


def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


# Convenience functions for instrumentation
def record_registration(outcome: str):
    """Record registration outcome. Outcome: created, existing, unreconciled, error"""
    registration_attempts.labels(outcome=outcome).inc()


def record_event_write(operation: str, success: bool):
    """Record event writer call."""
    status = "success" if success else "error"
    event_writes.labels(operation=operation, status=status).inc()


def record_config_submission(result: str):
    """Record admin config submission. Result: success, input_error, error"""
    config_submissions.labels(result=result).inc()
