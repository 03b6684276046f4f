# metrics.py
"""Prometheus counters for the access-log pipeline."""

from prometheus_client import CollectorRegistry, Counter

REGISTRY = CollectorRegistry()

ACCESS_LOG_RECORDS = Counter(
    "access_log_records_total",
    "Access-log records handed to the pipeline.",
    registry=REGISTRY,
)
SINK_ERRORS = Counter(
    "access_log_sink_errors_total",
    "Events a sink failed to write.",
    ["sink"],
    registry=REGISTRY,
)
EMIT_FAILURES = Counter(
    "access_log_emit_failures_total",
    "Access-log records that could not be emitted at all.",
    registry=REGISTRY,
)
