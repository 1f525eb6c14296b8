"""Configurable, type-agnostic search pipeline.

The engine wires together the pieces defined elsewhere in this package:

    items -> filter -> classify -> score (per mode) -> rank -> trim

Nothing here knows what ``T`` is; callers inject accessors for everything.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
import logging
from typing import Generic, TypeVar

from resource_discovery.search.classifier import QueryClassifier
from resource_discovery.search.models import (
    DEFAULT_MAX_RESULTS,
    ScoredItem,
    SearchContext,
    SearchMode,
    SearchResult,
)
from resource_discovery.search.ranking import RankingStrategy, ScoreRanker
from resource_discovery.search.scoring import ScoringStrategy, ZeroScorer


logger = logging.getLogger(__name__)

T = TypeVar("T")

ItemSource = Callable[[], Iterable[T]]
ItemFilter = Callable[[T, SearchContext], bool]
SummaryBuilder = Callable[[SearchContext, SearchMode, Sequence[ScoredItem[T]]], str]
SuggestionProvider = Callable[[SearchContext, SearchMode, Sequence[ScoredItem[T]]], Sequence[str]]


def _accept_all(_item: object, _context: SearchContext) -> bool:
    return True


def default_summary(context: SearchContext, mode: SearchMode, items: Sequence[ScoredItem[T]]) -> str:
    count = len(items)
    noun = "result" if count == 1 else "results"
    return f"{count} {noun} for '{context.raw_input.strip()}'"


def no_suggestions(context: SearchContext, mode: SearchMode, items: Sequence[ScoredItem[T]]) -> Sequence[str]:
    return ()


class ConfigurableSearchEngine(Generic[T]):
    """Generic :class:`~resource_discovery.search.models.SearchEngine` implementation.

    Args:
        source: Callable returning the current candidate items. It is invoked
            on every search, so the engine always sees the live corpus.
        classifier: Decides the mode when the context does not force one.
        scorers: Per-mode scoring strategies; modes without an entry score
            everything 0 and therefore return nothing.
        item_filter: Predicate applied before scoring.
        ranker: Orders scored items; defaults to :class:`ScoreRanker`.
        max_results: Engine-wide ceiling; the effective limit is the smaller
            of this and the context's ``max_results``.
        summary: Builds the human-readable summary line.
        suggestions: Produces follow-up suggestions.
    """

    def __init__(
        self,
        *,
        source: ItemSource[T],
        classifier: QueryClassifier,
        scorers: Mapping[SearchMode, ScoringStrategy[T]],
        item_filter: ItemFilter[T] = _accept_all,
        ranker: RankingStrategy[T] | None = None,
        max_results: int = DEFAULT_MAX_RESULTS,
        summary: SummaryBuilder[T] = default_summary,
        suggestions: SuggestionProvider[T] = no_suggestions,
    ) -> None:
        if source is None:
            raise ValueError("source must not be None")
        if classifier is None:
            raise ValueError("classifier must not be None")
        if max_results <= 0:
            raise ValueError(f"max_results must be > 0, got {max_results}")
        self._source = source
        self._classifier = classifier
        self._scorers = dict(scorers)
        self._filter = item_filter
        self._ranker: RankingStrategy[T] = ranker or ScoreRanker()
        self.max_results = max_results
        self._summary = summary
        self._suggestions = suggestions

    def resolve_mode(self, context: SearchContext) -> SearchMode:
        if context.forced_mode is not None:
            return context.forced_mode
        return self._classifier.classify(context.normalized_input)

    def scorer_for(self, mode: SearchMode) -> ScoringStrategy[T]:
        return self._scorers.get(mode, ZeroScorer())

    def search(self, query: SearchContext | str) -> SearchResult[T]:
        context = query if isinstance(query, SearchContext) else SearchContext(query)
        mode = self.resolve_mode(context)
        scorer = self.scorer_for(mode)

        scored: list[ScoredItem[T]] = []
        for item in self._source():
            if not self._filter(item, context):
                continue
            points = scorer.score(item, context)
            if points > 0:
                scored.append(ScoredItem(item, points))

        ranked = self._ranker.rank(scored, context)
        limit = min(self.max_results, context.max_results)
        top = ranked[:limit]

        logger.debug(
            "Search '%s' mode=%s candidates=%d returned=%d",
            context.normalized_input,
            mode.value,
            len(scored),
            len(top),
        )
        return SearchResult(
            mode=mode,
            items=tuple(top),
            suggestions=tuple(self._suggestions(context, mode, top)),
            summary=self._summary(context, mode, top),
        )
