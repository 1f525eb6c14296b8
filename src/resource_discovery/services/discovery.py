"""Intent-aware resource discovery.

:class:`ResourceDiscovery` turns a free-text query into a ranked
:class:`DiscoveryResult`:

1. classify the query as SPECIFIC, VAGUE or EXPLORATORY
2. infer structured filters (concepts, categories, difficulty) from keywords
3. score every candidate with the matching relevance profile
4. drop zero scores (SPECIFIC and VAGUE only), sort by score then id, and
   keep the top ``max_results``
5. attach suggestions and a human-readable summary

Blank queries skip classification and return general recommendations.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging

from resource_discovery.config import Settings, get_settings
from resource_discovery.domain.discovery import DiscoveryResult, QueryType, ScoredResource
from resource_discovery.domain.model import (
    ConceptArea,
    ConceptDomain,
    DifficultyLevel,
    LearningResource,
    ResourceCategory,
    ResourceQuery,
)
from resource_discovery.observability.context import bound_context
from resource_discovery.observability.metrics import (
    DISCOVERY_LATENCY,
    DISCOVERY_QUERIES,
    DISCOVERY_RESULTS,
    track_latency,
)
from resource_discovery.observability.tracing import create_span
from resource_discovery.search.classifier import QueryClassifier
from resource_discovery.search.models import ScoredItem, SearchContext
from resource_discovery.search.ranking import ScoreRanker
from resource_discovery.services import keyword_index
from resource_discovery.services.relevance import (
    ConceptProfile,
    ExplorationProfile,
    RelevanceProfile,
    SpecificProfile,
    VagueProfile,
)
from resource_discovery.services.resource_vault import ResourceVault


logger = logging.getLogger(__name__)

DEFAULT_SUMMARY = "Showing top recommended resources across all categories"
DEFAULT_SUGGESTIONS = ("Try searching for a specific topic, category, or concept",)

EXPLORATORY_SUGGESTIONS = (
    "Try 'browse java' to explore Java resources",
    "Try 'official docs' to see official documentation",
    "Try 'system design' for architecture resources",
    "Try 'testing' for testing resources",
)

FALLBACK_SUGGESTIONS = (
    "Try broader terms (e.g., 'java', 'testing', 'design patterns')",
    "Use 'list_categories' to see all available categories",
)

_WEB_RELATED = (
    "Also explore: security, devops",
    "Concept: try 'web-security' or 'api-design'",
)

RELATED_CATEGORY_SUGGESTIONS: dict[ResourceCategory, tuple[str, ...]] = {
    ResourceCategory.JAVA: (
        "Also explore: software-engineering, testing",
        "Concept: try 'concurrency' or 'design-patterns'",
    ),
    ResourceCategory.WEB: _WEB_RELATED,
    ResourceCategory.JAVASCRIPT: _WEB_RELATED,
    ResourceCategory.PYTHON: (
        "Also explore: ai-ml, data",
        "Concept: try 'machine-learning' or 'testing'",
    ),
    ResourceCategory.DEVOPS: (
        "Also explore: software-engineering",
        "Concept: try 'containers' or 'ci-cd'",
    ),
}
DEFAULT_RELATED_SUGGESTIONS = ("Try searching for a specific concept area",)


class ResourceDiscovery:
    """Discovery orchestrator over a :class:`ResourceVault`.

    Args:
        vault: Corpus to search; read on every call, so later additions are
            visible immediately.
        settings: Result cap, relevance weights and classifier limits;
            defaults to :func:`get_settings`.
        classifier: Overrides the keyword classifier built from the
            learning-resource vocabulary.
    """

    def __init__(
        self,
        vault: ResourceVault,
        settings: Settings | None = None,
        classifier: QueryClassifier | None = None,
    ) -> None:
        if vault is None:
            raise ValueError("vault must not be None")
        self.vault = vault
        self.settings = settings or get_settings()
        self.max_results = self.settings.max_results
        self.classifier = classifier or keyword_index.build_classifier(self.settings.exploratory_word_limit)

        weights = self.settings.relevance
        self._specific = SpecificProfile(weights)
        self._vague = VagueProfile(weights)
        self._concept = ConceptProfile(weights)
        self._exploration = ExplorationProfile(weights)
        self._ranker: ScoreRanker[LearningResource] = ScoreRanker(lambda resource: resource.id)

    # Classification and inference

    def classify(self, query: str | None) -> QueryType:
        normalized = (query or "").strip().lower()
        if not normalized:
            return QueryType.EXPLORATORY
        return QueryType.from_search_mode(self.classifier.classify(normalized))

    def infer_concepts(self, query: str | None) -> list[ConceptArea]:
        return keyword_index.CONCEPTS.infer(query)

    def infer_categories(self, query: str | None) -> list[ResourceCategory]:
        return keyword_index.CATEGORIES.infer(query)

    # Entry points

    def discover(self, query: str | None, mode: QueryType | None = None) -> DiscoveryResult:
        """Classify ``query`` (unless ``mode`` forces a type) and run the matching handler."""
        normalized = (query or "").strip().lower()
        with create_span("discovery.discover", attributes={"discovery.query": normalized}) as span:
            with track_latency(DISCOVERY_LATENCY, operation="discover"):
                if not normalized:
                    result = self._explore_default()
                else:
                    query_type = mode or self.classify(normalized)
                    logger.debug("Query classified as %s for input '%s'", query_type.value, normalized)
                    with bound_context(search_mode=query_type.value):
                        if query_type is QueryType.SPECIFIC:
                            result = self._handle_specific(normalized)
                        elif query_type is QueryType.VAGUE:
                            result = self._handle_vague(normalized)
                        else:
                            result = self._handle_exploratory(normalized)
            self._record("discover", result, span)
        return result

    def discover_by_concept(
        self,
        concept: ConceptArea,
        min_difficulty: DifficultyLevel | None = None,
        max_difficulty: DifficultyLevel | None = None,
    ) -> DiscoveryResult:
        """Rank resources covering ``concept``; open difficulty bounds mean beginner..expert."""
        if concept is None:
            raise ValueError("concept must not be None")
        with create_span("discovery.by_concept", attributes={"discovery.concept": concept.value}) as span:
            with track_latency(DISCOVERY_LATENCY, operation="by_concept"):
                context = self._context(
                    concept.value,
                    concept=concept,
                    min_difficulty=min_difficulty,
                    max_difficulty=max_difficulty,
                )
                scored = self._rank(self.vault.search(ResourceQuery.by_concept(concept)), self._concept, context)
                result = DiscoveryResult(QueryType.SPECIFIC, scored, (), f"Resources for concept: {concept.name}")
            self._record("by_concept", result, span)
        return result

    def discover_by_domain(
        self,
        domain: ConceptDomain,
        min_difficulty: DifficultyLevel | None = None,
        max_difficulty: DifficultyLevel | None = None,
    ) -> DiscoveryResult:
        """Rank resources covering any concept of ``domain`` with the concept profile."""
        if domain is None:
            raise ValueError("domain must not be None")
        with create_span("discovery.by_domain", attributes={"discovery.domain": domain.value}) as span:
            with track_latency(DISCOVERY_LATENCY, operation="by_domain"):
                context = self._context(domain.value, min_difficulty=min_difficulty, max_difficulty=max_difficulty)
                scored = self._rank(self.vault.search(ResourceQuery.by_domain(domain)), self._concept, context)
                concepts = ", ".join(area.value for area in ConceptArea.in_domain(domain))
                result = DiscoveryResult(
                    QueryType.SPECIFIC,
                    scored,
                    (f"Narrow down with a concept: {concepts}",),
                    f"Resources for domain: {domain.display_name}",
                )
            self._record("by_domain", result, span)
        return result

    def explore_category(self, category: ResourceCategory) -> DiscoveryResult:
        """Beginner-first exploration of one category, with related-category suggestions."""
        if category is None:
            raise ValueError("category must not be None")
        with create_span("discovery.explore_category", attributes={"discovery.category": category.value}) as span:
            with track_latency(DISCOVERY_LATENCY, operation="explore_category"):
                context = self._context(category.value, target_difficulty=DifficultyLevel.BEGINNER)
                scored = self._rank(
                    self.vault.search(ResourceQuery.by_category(category)),
                    self._exploration,
                    context,
                )
                result = DiscoveryResult(
                    QueryType.EXPLORATORY,
                    scored,
                    self.related_category_suggestions(category),
                    f"Explore {category.display_name} - starting with beginner-friendly resources",
                )
            self._record("explore_category", result, span)
        return result

    # Handlers

    def _handle_specific(self, query: str) -> DiscoveryResult:
        scored = self._rank(self.vault.list_all(), self._specific, self._context(query), drop_zero=True)
        if not scored:
            return DiscoveryResult(
                QueryType.SPECIFIC, (), self.did_you_mean(query), f"No exact matches found for: '{query}'"
            )
        return DiscoveryResult(QueryType.SPECIFIC, scored, (), f"Found {len(scored)} matching resources")

    def _handle_vague(self, query: str) -> DiscoveryResult:
        concepts = self.infer_concepts(query)
        categories = self.infer_categories(query)
        context = self._context(query, concepts=frozenset(concepts), categories=frozenset(categories))
        scored = self._rank(self.vault.list_all(), self._vague, context, drop_zero=True)
        suggestions = () if scored else self.did_you_mean(query)
        return DiscoveryResult(
            QueryType.VAGUE, scored, suggestions, _vague_summary(query, concepts, categories, len(scored))
        )

    def _handle_exploratory(self, query: str) -> DiscoveryResult:
        target = keyword_index.DIFFICULTIES.first_match(query) or DifficultyLevel.BEGINNER
        category = keyword_index.CATEGORIES.first_match(query)
        candidates = self.vault.list_all()
        if category is not None:
            candidates = [resource for resource in candidates if resource.has_category(category)]
        scored = self._rank(candidates, self._exploration, self._context(query, target_difficulty=target))
        return DiscoveryResult(
            QueryType.EXPLORATORY,
            scored,
            EXPLORATORY_SUGGESTIONS,
            f"Here are recommended resources for {target.display_name} level learners",
        )

    def _explore_default(self) -> DiscoveryResult:
        context = self._context("", target_difficulty=DifficultyLevel.BEGINNER)
        scored = self._rank(self.vault.list_all(), self._exploration, context)
        return DiscoveryResult(QueryType.EXPLORATORY, scored, DEFAULT_SUGGESTIONS, DEFAULT_SUMMARY)

    # Suggestions

    def did_you_mean(self, query: str) -> tuple[str, ...]:
        """Category and concept names overlapping the query, else generic guidance."""
        needle = query.strip().lower()
        suggestions: list[str] = []
        if needle:
            for category in ResourceCategory:
                name = category.display_name.lower()
                if needle in name or name in needle:
                    suggestions.append(f"Browse category: {category.display_name}")
            for concept in ConceptArea:
                name = concept.name.lower().replace("_", " ")
                if needle in name or name in needle:
                    suggestions.append(f"Search concept: {concept.name}")
        return tuple(suggestions) or FALLBACK_SUGGESTIONS

    @staticmethod
    def related_category_suggestions(category: ResourceCategory) -> tuple[str, ...]:
        return RELATED_CATEGORY_SUGGESTIONS.get(category, DEFAULT_RELATED_SUGGESTIONS)

    # Internals

    def _context(self, query: str, **filters: object) -> SearchContext:
        present = {key: value for key, value in filters.items() if value is not None}
        return SearchContext(query, filters=present, max_results=self.max_results)

    def _rank(
        self,
        candidates: Iterable[LearningResource],
        profile: RelevanceProfile,
        context: SearchContext,
        *,
        drop_zero: bool = False,
    ) -> list[ScoredResource]:
        scored = []
        for resource in candidates:
            breakdown = profile.breakdown(resource, context)
            if drop_zero and breakdown.total <= 0:
                continue
            scored.append(ScoredItem(resource, breakdown.total, breakdown))
        return self._ranker.rank(scored, context)[: self.max_results]

    @staticmethod
    def _record(operation: str, result: DiscoveryResult, span) -> None:
        mode = result.query_type.value
        span.set_attribute("discovery.mode", mode)
        span.set_attribute("discovery.result_count", result.count())
        DISCOVERY_QUERIES.labels(operation=operation, mode=mode).inc()
        DISCOVERY_RESULTS.labels(mode=mode).observe(result.count())
        logger.debug("%s returned %d %s results", operation, result.count(), mode)


def _vague_summary(
    query: str,
    concepts: Sequence[ConceptArea],
    categories: Sequence[ResourceCategory],
    count: int,
) -> str:
    lines = [f"Found {count} resources for '{query}'"]
    if concepts:
        lines.append("Inferred concepts: " + ", ".join(concept.name for concept in concepts))
    if categories:
        lines.append("Inferred categories: " + ", ".join(category.display_name for category in categories))
    return "\n".join(lines)
