"""Prometheus metrics for discovery traffic, mirrored to OpenTelemetry instruments."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING, Any

from opentelemetry import metrics as otel_metrics
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


class _BoundMetric:
    def __init__(self, bridge: MetricBridge, labels: dict[str, str]) -> None:
        self._bridge = bridge
        self._labels = labels

    def inc(self, amount: float = 1.0) -> None:
        self._bridge.inc(self._labels, amount)

    def observe(self, value: float) -> None:
        self._bridge.observe(self._labels, value)

    def set(self, value: float) -> None:
        self._bridge.set(self._labels, value)


class MetricBridge:
    """Records into a Prometheus metric and the matching instrument of the global OTel meter.

    The OTel side is a no-op until an SDK meter provider is installed.
    """

    _KINDS = ("counter", "histogram", "gauge")

    def __init__(self, prom_metric: Counter | Histogram | Gauge, *, name: str, description: str, kind: str) -> None:
        if kind not in self._KINDS:
            raise ValueError(f"Unknown metric kind: {kind}")
        self.prom_metric = prom_metric
        self.name = name
        self.description = description
        self.kind = kind
        self._instrument: Any = None
        self._last_values: dict[tuple[tuple[str, str], ...], float] = {}

    def labels(self, **labels: str) -> _BoundMetric:
        return _BoundMetric(self, labels)

    def _otel(self) -> Any:
        if self._instrument is None:
            meter = otel_metrics.get_meter("resource_discovery")
            if self.kind == "counter":
                self._instrument = meter.create_counter(self.name, description=self.description)
            elif self.kind == "histogram":
                self._instrument = meter.create_histogram(self.name, description=self.description)
            else:
                self._instrument = meter.create_up_down_counter(self.name, description=self.description)
        return self._instrument

    def inc(self, labels: dict[str, str], amount: float) -> None:
        self.prom_metric.labels(**labels).inc(amount)
        self._otel().add(amount, labels)

    def observe(self, labels: dict[str, str], value: float) -> None:
        self.prom_metric.labels(**labels).observe(value)
        self._otel().record(value, labels)

    def set(self, labels: dict[str, str], value: float) -> None:
        self.prom_metric.labels(**labels).set(value)
        key = tuple(sorted(labels.items()))
        delta = value - self._last_values.get(key, 0.0)
        if delta:
            self._otel().add(delta, labels)
        self._last_values[key] = value


_DISCOVERY_QUERIES_PROM = Counter(
    "resource_discovery_queries_total",
    "Discovery calls by entry point and resolved mode",
    ["operation", "mode"],
)

_DISCOVERY_LATENCY_PROM = Histogram(
    "resource_discovery_latency_seconds",
    "Discovery call latency",
    ["operation"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)

_DISCOVERY_RESULTS_PROM = Histogram(
    "resource_discovery_results",
    "Results returned per discovery call",
    ["mode"],
    buckets=(0, 1, 3, 5, 10, 15, 25),
)

_CORPUS_SIZE_PROM = Gauge(
    "resource_discovery_corpus_size",
    "Resources held by a vault",
    ["vault"],
)

DISCOVERY_QUERIES = MetricBridge(
    _DISCOVERY_QUERIES_PROM,
    name="resource_discovery_queries_total",
    description="Discovery calls by entry point and resolved mode",
    kind="counter",
)

DISCOVERY_LATENCY = MetricBridge(
    _DISCOVERY_LATENCY_PROM,
    name="resource_discovery_latency_seconds",
    description="Discovery call latency",
    kind="histogram",
)

DISCOVERY_RESULTS = MetricBridge(
    _DISCOVERY_RESULTS_PROM,
    name="resource_discovery_results",
    description="Results returned per discovery call",
    kind="histogram",
)

CORPUS_SIZE = MetricBridge(
    _CORPUS_SIZE_PROM,
    name="resource_discovery_corpus_size",
    description="Resources held by a vault",
    kind="gauge",
)


@contextmanager
def track_latency(histogram: MetricBridge, **labels: str) -> Generator[None, None, None]:
    """Observe the wall-clock duration of the block, even when it raises."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    return generate_latest()


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
