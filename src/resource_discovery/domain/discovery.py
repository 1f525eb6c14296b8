"""Discovery results as returned by :class:`~resource_discovery.services.discovery.ResourceDiscovery`."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from resource_discovery.domain.model import LearningResource
from resource_discovery.search.models import ScoredItem, SearchMode


class QueryType(str, Enum):
    """Intent of a discovery query, mirrored one-to-one by :class:`SearchMode`."""

    SPECIFIC = "specific"
    VAGUE = "vague"
    EXPLORATORY = "exploratory"

    @property
    def search_mode(self) -> SearchMode:
        return SearchMode(self.value)

    @classmethod
    def from_search_mode(cls, mode: SearchMode) -> QueryType:
        return cls(mode.value)


ScoredResource = ScoredItem[LearningResource]


@dataclass(frozen=True)
class DiscoveryResult:
    """Ranked resources plus follow-up suggestions and a one-paragraph summary."""

    query_type: QueryType
    results: tuple[ScoredResource, ...] = ()
    suggestions: tuple[str, ...] = ()
    summary: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", tuple(self.results))
        object.__setattr__(self, "suggestions", tuple(self.suggestions))

    def is_empty(self) -> bool:
        return not self.results

    def count(self) -> int:
        return len(self.results)

    def resources(self) -> list[LearningResource]:
        return [scored.item for scored in self.results]
