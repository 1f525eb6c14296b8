"""OpenTelemetry spans around discovery operations."""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import SpanProcessor, TracerProvider
from opentelemetry.trace import SpanKind, Status, StatusCode

from resource_discovery.observability.context import ids_from_span, set_span_id


if TYPE_CHECKING:
    from collections.abc import Generator, Sequence

    from opentelemetry.trace import Span, Tracer

logger = logging.getLogger(__name__)

_tracer_holder: dict[str, Tracer | None] = {"tracer": None}


def init_tracing(
    service_name: str = "resource-discovery",
    resource_attributes: dict[str, str] | None = None,
    span_processors: Sequence[SpanProcessor] = (),
) -> TracerProvider:
    """Install an SDK tracer provider unless one is already active.

    The global provider can only be set once per process; later calls reuse
    it and just attach the extra span processors.
    """
    provider = trace.get_tracer_provider()
    if not isinstance(provider, TracerProvider):
        attributes = {"service.name": service_name, **(resource_attributes or {})}
        provider = TracerProvider(resource=Resource.create(attributes))
        trace.set_tracer_provider(provider)
        logger.debug("Tracer provider installed for %s", service_name)
    for processor in span_processors:
        provider.add_span_processor(processor)
    _tracer_holder["tracer"] = provider.get_tracer("resource_discovery")
    return provider


def get_tracer() -> Tracer:
    """Return the package tracer; a proxy of the global provider until :func:`init_tracing` runs."""
    tracer = _tracer_holder["tracer"]
    if tracer is None:
        tracer = trace.get_tracer("resource_discovery")
        _tracer_holder["tracer"] = tracer
    return tracer


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
) -> Generator[Span, None, None]:
    """Start a span, publish its id to the log context, and mark it failed on error."""
    with get_tracer().start_as_current_span(
        name, kind=kind, record_exception=False, set_status_on_exception=False
    ) as span:
        for key, value in (attributes or {}).items():
            if value is not None:
                span.set_attribute(key, value)

        if span.get_span_context().is_valid:
            set_span_id(ids_from_span(span)["span_id"])

        try:
            yield span
        except Exception as exc:
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            span.record_exception(exc)
            raise
