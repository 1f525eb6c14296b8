"""Exposes :class:`ResourceDiscovery` through the generic search contract."""

from __future__ import annotations

import logging

from resource_discovery.domain.discovery import DiscoveryResult, QueryType
from resource_discovery.domain.model import (
    ConceptArea,
    ConceptDomain,
    DifficultyLevel,
    LearningResource,
    ResourceCategory,
)
from resource_discovery.search.models import ScoredItem, SearchContext, SearchResult
from resource_discovery.services.discovery import ResourceDiscovery
from resource_discovery.services.resource_vault import ResourceVault


logger = logging.getLogger(__name__)


class LearningSearchEngine:
    """``SearchEngine[LearningResource]`` backed by intent-aware discovery.

    A forced generic mode on the context is passed through as the matching
    :class:`QueryType`. Breakdowns are dropped from the returned items, and
    the result is cut to the context's ``max_results``.
    """

    def __init__(self, source: ResourceVault | ResourceDiscovery) -> None:
        if source is None:
            raise ValueError("source must not be None")
        if isinstance(source, ResourceDiscovery):
            self.discovery = source
        else:
            self.discovery = ResourceDiscovery(source)
            logger.info("LearningSearchEngine initialised with vault (%d resources)", source.size())

    def search(self, query: SearchContext | str) -> SearchResult[LearningResource]:
        if query is None:
            raise ValueError("query must not be None")
        context = query if isinstance(query, SearchContext) else SearchContext(query)
        mode = QueryType.from_search_mode(context.forced_mode) if context.has_forced_mode else None
        return self._to_generic(self.discovery.discover(context.raw_input, mode), context)

    def discover_by_concept(
        self,
        concept: ConceptArea,
        min_difficulty: DifficultyLevel | None = None,
        max_difficulty: DifficultyLevel | None = None,
    ) -> DiscoveryResult:
        return self.discovery.discover_by_concept(concept, min_difficulty, max_difficulty)

    def discover_by_domain(
        self,
        domain: ConceptDomain,
        min_difficulty: DifficultyLevel | None = None,
        max_difficulty: DifficultyLevel | None = None,
    ) -> DiscoveryResult:
        return self.discovery.discover_by_domain(domain, min_difficulty, max_difficulty)

    def explore_category(self, category: ResourceCategory) -> DiscoveryResult:
        return self.discovery.explore_category(category)

    @staticmethod
    def _to_generic(result: DiscoveryResult, context: SearchContext) -> SearchResult[LearningResource]:
        items = tuple(ScoredItem(scored.item, scored.score) for scored in result.results[: context.max_results])
        return SearchResult(
            mode=result.query_type.search_mode,
            items=items,
            suggestions=result.suggestions,
            summary=result.summary,
        )
