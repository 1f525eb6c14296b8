"""Domain-agnostic search value objects.

These types form the generic search contract: any engine that can rank items
of some type ``T`` accepts a :class:`SearchContext` and returns a
:class:`SearchResult`. They carry no knowledge of learning resources.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, Protocol, TypeVar


T = TypeVar("T")
V = TypeVar("V")

DEFAULT_MAX_RESULTS = 15


class SearchMode(str, Enum):
    """Classified shape of a user's query."""

    SPECIFIC = "specific"
    VAGUE = "vague"
    EXPLORATORY = "exploratory"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _MODE_DESCRIPTIONS[self]

    @classmethod
    def from_string(cls, value: str | None) -> SearchMode:
        if value is None or not value.strip():
            raise ValueError("SearchMode value must not be empty")
        normalized = value.strip().lower()
        for mode in cls:
            if normalized in (mode.value, mode.name.lower()):
                return mode
        raise ValueError(f"Unknown search mode: '{value}'. Valid values: specific, vague, exploratory")


_MODE_DESCRIPTIONS = {
    SearchMode.SPECIFIC: "Exact match - user knows exactly what they want",
    SearchMode.VAGUE: "Topic match - user knows the area but not the resource",
    SearchMode.EXPLORATORY: "Explore - user wants guidance and curated recommendations",
}


class ScoreBreakdown:
    """Insertion-ordered record of how many points each component contributed.

    Diagnostic only: the total is the sum of the component values.
    """

    __slots__ = ("_components", "_total")

    def __init__(self, components: Mapping[str, int] | None = None) -> None:
        ordered = dict(components or {})
        self._components: Mapping[str, int] = MappingProxyType(ordered)
        self._total = sum(ordered.values())

    @classmethod
    def of(cls, *pairs: tuple[str, int]) -> ScoreBreakdown:
        builder = cls.builder()
        for name, points in pairs:
            builder.add(name, points)
        return builder.build()

    @classmethod
    def builder(cls) -> ScoreBreakdownBuilder:
        return ScoreBreakdownBuilder()

    @property
    def total(self) -> int:
        return self._total

    @property
    def components(self) -> Mapping[str, int]:
        return self._components

    def get(self, name: str) -> int:
        return self._components.get(name, 0)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScoreBreakdown):
            return NotImplemented
        return list(self._components.items()) == list(other._components.items())

    def __hash__(self) -> int:
        return hash(tuple(self._components.items()))

    def __repr__(self) -> str:
        parts = " ".join(f"{name}={points}" for name, points in self._components.items())
        return f"ScoreBreakdown(total={self._total}: {parts})"


class ScoreBreakdownBuilder:
    """Mutable accumulator for :class:`ScoreBreakdown`; zero entries are skipped."""

    def __init__(self) -> None:
        self._components: dict[str, int] = {}

    def add(self, name: str, points: int) -> ScoreBreakdownBuilder:
        if not name:
            raise ValueError("Component name must not be empty")
        if points:
            self._components[name] = self._components.get(name, 0) + points
        return self

    @property
    def current_total(self) -> int:
        return sum(self._components.values())

    def build(self) -> ScoreBreakdown:
        return ScoreBreakdown(self._components)


@dataclass(frozen=True)
class ScoredItem(Generic[T]):
    """An item paired with its non-negative relevance score."""

    item: T
    score: int
    breakdown: ScoreBreakdown | None = None

    def __post_init__(self) -> None:
        if self.item is None:
            raise ValueError("item must not be None")
        if self.score < 0:
            object.__setattr__(self, "score", 0)

    @property
    def has_score(self) -> bool:
        return self.score > 0

    @property
    def has_breakdown(self) -> bool:
        return self.breakdown is not None

    def with_boost(self, boost: int, component: str = "boost") -> ScoredItem[T]:
        """Shift the score; a breakdown gains ``component`` so it still sums to the score."""
        score = max(0, self.score + boost)
        breakdown = self.breakdown
        if breakdown is not None and score != self.score:
            components = dict(breakdown.components)
            components[component] = components.get(component, 0) + score - self.score
            breakdown = ScoreBreakdown(components)
        return ScoredItem(self.item, score, breakdown)

    def without_breakdown(self) -> ScoredItem[T]:
        return ScoredItem(self.item, self.score)


@dataclass(frozen=True)
class SearchContext:
    """Immutable search request.

    ``max_results`` values of zero or below fall back to
    :data:`DEFAULT_MAX_RESULTS` so every context carries a usable ceiling.
    """

    raw_input: str
    forced_mode: SearchMode | None = None
    filters: Mapping[str, Any] = field(default_factory=dict)
    max_results: int = DEFAULT_MAX_RESULTS

    def __post_init__(self) -> None:
        if self.raw_input is None:
            raise ValueError("raw_input must not be None")
        object.__setattr__(self, "filters", MappingProxyType(dict(self.filters or {})))
        if self.max_results <= 0:
            object.__setattr__(self, "max_results", DEFAULT_MAX_RESULTS)

    @classmethod
    def of(
        cls,
        raw_input: str,
        forced_mode: SearchMode | None = None,
        max_results: int = DEFAULT_MAX_RESULTS,
        **filters: Any,
    ) -> SearchContext:
        return cls(raw_input, forced_mode, filters, max_results)

    @property
    def normalized_input(self) -> str:
        return self.raw_input.strip().lower()

    @property
    def has_forced_mode(self) -> bool:
        return self.forced_mode is not None

    def get_filter(self, key: str, expected_type: type[V]) -> V | None:
        """Return the filter value when it is an instance of ``expected_type``."""
        if not isinstance(expected_type, type):
            raise TypeError(f"expected_type must be a type, got {expected_type!r}")
        value = self.filters.get(key)
        return value if isinstance(value, expected_type) else None

    def with_filters(self, **filters: Any) -> SearchContext:
        merged = {**self.filters, **filters}
        return SearchContext(self.raw_input, self.forced_mode, merged, self.max_results)


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """Immutable search response; items are sorted by descending score."""

    mode: SearchMode
    items: tuple[ScoredItem[T], ...] = ()
    suggestions: tuple[str, ...] = ()
    summary: str = ""

    def __post_init__(self) -> None:
        if self.mode is None:
            raise ValueError("mode must not be None")
        if self.summary is None:
            raise ValueError("summary must not be None")
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "suggestions", tuple(self.suggestions))

    @classmethod
    def empty(cls, mode: SearchMode, summary: str, suggestions: tuple[str, ...] = ()) -> SearchResult[T]:
        return cls(mode, (), suggestions, summary)

    def is_empty(self) -> bool:
        return not self.items

    def count(self) -> int:
        return len(self.items)

    def top_score(self) -> int:
        return max((scored.score for scored in self.items), default=0)


class SearchEngine(Protocol[T]):
    """Generic search contract: ``search`` accepts a context or a raw query string."""

    def search(self, query: SearchContext | str) -> SearchResult[T]:  # pragma: no cover - interface definition
        ...
