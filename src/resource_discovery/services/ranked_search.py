"""Learning-resource searches assembled from the generic scoring library.

:class:`RankedResourceSearch` wires text, tag and BM25 scorers into one
composite per search mode and ranks with a recency boost.
:func:`build_official_docs_engine` is a narrower engine that only ever
returns official documentation.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging

from resource_discovery.config import Settings, get_settings
from resource_discovery.domain.model import DifficultyLevel, LearningResource, ResourceCategory
from resource_discovery.search.analyzers import DefaultTokenizer
from resource_discovery.search.engine import ConfigurableSearchEngine
from resource_discovery.search.models import ScoredItem, SearchContext, SearchMode, SearchResult
from resource_discovery.search.ranking import RecencyBoostRanker, ScoreRanker
from resource_discovery.search.scoring import (
    BM25Scorer,
    CompositeScorer,
    ScoreWeights,
    TagScorer,
    TextMatchScorer,
)
from resource_discovery.search.stats import CorpusStats
from resource_discovery.services import keyword_index
from resource_discovery.services.resource_vault import ResourceVault


logger = logging.getLogger(__name__)

OFFICIAL_DOCS_MAX_RESULTS = 8

NO_MATCH_SUGGESTIONS = (
    "Try broader terms (e.g., 'java', 'testing', 'design patterns')",
    "Use 'list_categories' to see all available categories",
)


def _title(resource: LearningResource) -> str:
    return resource.title


def _description(resource: LearningResource) -> str:
    return resource.description


def _tags(resource: LearningResource) -> tuple[str, ...]:
    return resource.tags


def _document(resource: LearningResource) -> str:
    return " ".join((resource.title, resource.description, " ".join(resource.tags)))


def _resource_id(resource: LearningResource) -> str:
    return resource.id


def resource_filter(resource: LearningResource, context: SearchContext) -> bool:
    """Apply the optional ``category``, ``difficulty``, ``free_only`` and ``official_only`` filters."""
    category = context.get_filter("category", ResourceCategory)
    if category is not None and not resource.has_category(category):
        return False
    difficulty = context.get_filter("difficulty", DifficultyLevel)
    if difficulty is not None and resource.difficulty is not difficulty:
        return False
    if context.get_filter("free_only", bool) and not resource.free:
        return False
    if context.get_filter("official_only", bool) and not resource.official:
        return False
    return True


def _suggest_when_empty(
    context: SearchContext, mode: SearchMode, items: Sequence[ScoredItem[LearningResource]]
) -> Sequence[str]:
    return () if items else NO_MATCH_SUGGESTIONS


class RankedResourceSearch:
    """Composite-scored search over a vault.

    BM25 statistics are a snapshot of the corpus; call
    :meth:`refresh_statistics` after adding or removing resources. Searching
    before statistics exist raises
    :class:`~resource_discovery.search.stats.StatsNotReadyError` for modes
    that use BM25.
    """

    def __init__(self, vault: ResourceVault, settings: Settings | None = None) -> None:
        if vault is None:
            raise ValueError("vault must not be None")
        self.vault = vault
        settings = settings or get_settings()

        self._bm25: BM25Scorer[LearningResource] = BM25Scorer(
            text=_document,
            tokenizer=DefaultTokenizer(settings.min_token_length),
            k1=settings.bm25_k1,
            b=settings.bm25_b,
            scale=settings.bm25_scale,
        )
        text = TextMatchScorer(
            title=_title,
            body=_description,
            tags=_tags,
            weights=ScoreWeights.preset(settings.score_weights_preset),
            fuzzy_min_word_length=settings.fuzzy_min_word_length,
            fuzzy_prefix_length=settings.fuzzy_prefix_length,
        )
        tags = TagScorer(tags=_tags)

        scorers = {
            SearchMode.SPECIFIC: CompositeScorer.builder().add(text, 1.0).add(tags, 0.5).build(),
            SearchMode.VAGUE: CompositeScorer.builder().add(self._bm25, 1.0).add(text, 0.5).add(tags, 1.0).build(),
            SearchMode.EXPLORATORY: CompositeScorer.builder().add(self._bm25, 0.5).add(tags, 1.0).build(),
        }
        ranker = RecencyBoostRanker(
            lambda resource: resource.added_at,
            fresh_days=settings.recency_fresh_days,
            stale_days=settings.recency_stale_days,
            fresh_bonus=settings.recency_bonus,
            tie_break=_resource_id,
        )
        self.engine: ConfigurableSearchEngine[LearningResource] = ConfigurableSearchEngine(
            source=vault.snapshot,
            classifier=keyword_index.build_classifier(settings.exploratory_word_limit),
            scorers=scorers,
            item_filter=resource_filter,
            ranker=ranker,
            max_results=settings.max_results,
            suggestions=_suggest_when_empty,
        )

    @property
    def is_ready(self) -> bool:
        return self._bm25.is_ready

    def refresh_statistics(self) -> CorpusStats:
        stats = self._bm25.compute_stats(self.vault.snapshot())
        logger.info("Ranked search statistics refreshed over %d resources", stats.total_documents)
        return stats

    def search(self, query: SearchContext | str) -> SearchResult[LearningResource]:
        return self.engine.search(query)


def build_ranked_search_engine(
    vault: ResourceVault,
    settings: Settings | None = None,
    *,
    compute_stats: bool = True,
) -> RankedResourceSearch:
    """Create a :class:`RankedResourceSearch` and, by default, compute its statistics right away."""
    search = RankedResourceSearch(vault, settings)
    if compute_stats:
        search.refresh_statistics()
    return search


def build_official_docs_engine(
    vault: ResourceVault,
    settings: Settings | None = None,
) -> ConfigurableSearchEngine[LearningResource]:
    """Title-weighted search restricted to official documentation, capped at eight results."""
    settings = settings or get_settings()
    scorer = TextMatchScorer(
        title=_title,
        body=_description,
        weights=ScoreWeights.title_heavy(),
        fuzzy_min_word_length=settings.fuzzy_min_word_length,
        fuzzy_prefix_length=settings.fuzzy_prefix_length,
    )

    def summary(context: SearchContext, mode: SearchMode, items: Sequence[ScoredItem[LearningResource]]) -> str:
        return f"{len(items)} official doc(s) for '{context.normalized_input}'"

    def suggestions(
        context: SearchContext, mode: SearchMode, items: Sequence[ScoredItem[LearningResource]]
    ) -> Sequence[str]:
        if items:
            return ()
        return (
            f'No official documentation matched "{context.normalized_input}".',
            "Tip: try searching without the 'official' qualifier for broader results.",
        )

    return ConfigurableSearchEngine(
        source=vault.snapshot,
        classifier=keyword_index.build_classifier(settings.exploratory_word_limit),
        scorers={mode: scorer for mode in SearchMode},
        item_filter=lambda resource, context: resource.official,
        ranker=ScoreRanker(_resource_id),
        max_results=OFFICIAL_DOCS_MAX_RESULTS,
        summary=summary,
        suggestions=suggestions,
    )
