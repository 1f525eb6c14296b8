"""Per-call correlation identifiers shared by logs and spans.

A :class:`Correlation` is immutable; binding a new one is the only way to
change what the current thread or task sees, so a discovery call can layer
its query id and search mode on top of the active trace and drop them again
on exit.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING
from uuid import uuid4


if TYPE_CHECKING:
    from opentelemetry.trace import Span


@dataclass(frozen=True)
class Correlation:
    trace_id: str
    span_id: str
    fields: tuple[tuple[str, object], ...] = ()

    @classmethod
    def fresh(cls) -> Correlation:
        # OpenTelemetry widths: 32 hex chars for traces, 16 for spans
        return cls(trace_id=uuid4().hex, span_id=uuid4().hex[:16])

    def with_span(self, span_id: str) -> Correlation:
        return replace(self, span_id=span_id)

    def with_fields(self, **extra: object) -> Correlation:
        merged = {**dict(self.fields), **extra}
        return replace(self, fields=tuple(merged.items()))

    def as_dict(self) -> dict:
        return {"trace_id": self.trace_id, "span_id": self.span_id, **dict(self.fields)}


_active: ContextVar[Correlation | None] = ContextVar("resource_discovery_correlation", default=None)


def active_correlation() -> Correlation:
    """The bound correlation; a fresh trace is started and bound when there is none."""
    correlation = _active.get()
    if correlation is None:
        correlation = Correlation.fresh()
        _active.set(correlation)
    return correlation


def current_context() -> dict:
    return active_correlation().as_dict()


def bind_context(trace_id: str, span_id: str, **extra: object) -> None:
    _active.set(Correlation(trace_id, span_id).with_fields(**extra))


def set_span_id(span_id: str) -> None:
    _active.set(active_correlation().with_span(span_id))


@contextmanager
def bound_context(**extra: object) -> Iterator[dict]:
    """Add fields (a query id, a search mode) for the duration of a block."""
    correlation = active_correlation().with_fields(**extra)
    token = _active.set(correlation)
    try:
        yield correlation.as_dict()
    finally:
        _active.reset(token)


def ids_from_span(span: Span) -> dict:
    span_context = span.get_span_context()
    return Correlation(format(span_context.trace_id, "032x"), format(span_context.span_id, "016x")).as_dict()
