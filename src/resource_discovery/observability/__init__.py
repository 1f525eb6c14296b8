"""Observability for discovery: structured logging, OpenTelemetry spans and Prometheus metrics."""

from resource_discovery.observability.context import bind_context, bound_context, current_context
from resource_discovery.observability.logging import JsonFormatter, configure_from_settings, configure_logging
from resource_discovery.observability.metrics import (
    CORPUS_SIZE,
    DISCOVERY_LATENCY,
    DISCOVERY_QUERIES,
    DISCOVERY_RESULTS,
    get_metrics,
    get_metrics_content_type,
    track_latency,
)
from resource_discovery.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "CORPUS_SIZE",
    "DISCOVERY_LATENCY",
    "DISCOVERY_QUERIES",
    "DISCOVERY_RESULTS",
    "JsonFormatter",
    "bind_context",
    "bound_context",
    "configure_from_settings",
    "configure_logging",
    "create_span",
    "current_context",
    "get_metrics",
    "get_metrics_content_type",
    "get_tracer",
    "init_tracing",
    "track_latency",
]
