"""Per-intent relevance profiles for learning resources.

Each profile is a :class:`~resource_discovery.search.scoring.ScoringStrategy`
over :class:`LearningResource` and also explains itself through
:meth:`breakdown`; ``score`` is always ``breakdown(...).total``.

Profiles read their inferred inputs from the search context filters:

==========================  =======================  =====================
filter                      type                     used by
==========================  =======================  =====================
``concepts``                frozenset[ConceptArea]   VagueProfile
``categories``              frozenset[ResourceCat.]  VagueProfile
``min_difficulty``          DifficultyLevel          ConceptProfile
``max_difficulty``          DifficultyLevel          ConceptProfile
``target_difficulty``       DifficultyLevel          ExplorationProfile
==========================  =======================  =====================
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from resource_discovery.domain.model import ConceptArea, DifficultyLevel, LearningResource
from resource_discovery.search.models import ScoreBreakdown, ScoreBreakdownBuilder, SearchContext


MIN_WORD_LENGTH = 3


class RelevanceWeights(BaseModel):
    """Points awarded by the relevance profiles."""

    model_config = ConfigDict(frozen=True)

    exact_title: int = Field(default=100, ge=0, description="Title equals the query")
    partial_title: int = Field(default=40, ge=0, description="Title or id contains the query")
    description: int = Field(default=20, ge=0, description="Searchable text contains the query")
    tag: int = Field(default=15, ge=0, description="Per query word found in title, tags or text")
    concept: int = Field(default=25, ge=0, description="Resource covers an inferred or requested concept")
    category: int = Field(default=20, ge=0, description="Resource belongs to an inferred category")
    official: int = Field(default=15, ge=0, description="Resource is official documentation")
    freshness: int = Field(default=10, ge=0, description="Resource is actively maintained")
    difficulty_fit: int = Field(default=10, ge=0, description="Difficulty within the requested range")
    free_access: int = Field(default=5, ge=0, description="Resource is free to access")


class RelevanceProfile:
    """Base profile: validates arguments and collects subclass contributions into a breakdown."""

    def __init__(self, weights: RelevanceWeights | None = None) -> None:
        self.weights = weights or RelevanceWeights()

    def score(self, item: LearningResource, context: SearchContext) -> int:
        return self.breakdown(item, context).total

    def breakdown(self, item: LearningResource, context: SearchContext) -> ScoreBreakdown:
        if item is None:
            raise ValueError("item must not be None")
        if context is None:
            raise ValueError("context must not be None")
        builder = ScoreBreakdown.builder()
        self._contribute(builder, item, context)
        return builder.build()

    def _contribute(self, builder: ScoreBreakdownBuilder, item: LearningResource, context: SearchContext) -> None:
        raise NotImplementedError

    def _quality(self, builder: ScoreBreakdownBuilder, item: LearningResource, official_multiplier: int = 1) -> None:
        if item.official:
            builder.add("official", self.weights.official * official_multiplier)
        if item.is_actively_maintained:
            builder.add("freshness", self.weights.freshness)


def _query_words(query: str) -> list[str]:
    return [word for word in query.split() if len(word) >= MIN_WORD_LENGTH]


class SpecificProfile(RelevanceProfile):
    """Precision matching for queries that name a resource."""

    def _contribute(self, builder: ScoreBreakdownBuilder, item: LearningResource, context: SearchContext) -> None:
        query = context.normalized_input
        if not query:
            return
        w = self.weights
        title = item.title.lower()
        searchable = item.searchable_text()
        tags = [tag.lower() for tag in item.tags]

        if title == query:
            builder.add("exact_title", w.exact_title)
        elif query in title:
            builder.add("partial_title", w.partial_title)
        if query in item.id.lower():
            builder.add("id", w.partial_title)
        if query in searchable:
            builder.add("text", w.description)

        for word in _query_words(query):
            if word in title:
                builder.add("title_word", w.tag)
            if any(word in tag for tag in tags):
                builder.add("tag", w.tag)

        if item.official:
            builder.add("official", w.official)


class VagueProfile(RelevanceProfile):
    """Topic matching driven by inferred concepts and categories."""

    def _contribute(self, builder: ScoreBreakdownBuilder, item: LearningResource, context: SearchContext) -> None:
        w = self.weights
        searchable = item.searchable_text()
        for word in _query_words(context.normalized_input):
            if word in searchable:
                builder.add("text", w.tag)

        concepts = context.get_filter("concepts", frozenset) or frozenset()
        for concept in concepts:
            if item.has_concept(concept):
                builder.add("concept", w.concept)

        categories = context.get_filter("categories", frozenset) or frozenset()
        for category in categories:
            if item.has_category(category):
                builder.add("category", w.category)

        self._quality(builder, item)


class ConceptProfile(RelevanceProfile):
    """Ranks resources already known to cover a concept; open difficulty bounds default to the full range."""

    def _contribute(self, builder: ScoreBreakdownBuilder, item: LearningResource, context: SearchContext) -> None:
        w = self.weights
        builder.add("concept", w.concept)
        self._quality(builder, item)
        minimum = context.get_filter("min_difficulty", DifficultyLevel) or DifficultyLevel.BEGINNER
        maximum = context.get_filter("max_difficulty", DifficultyLevel) or DifficultyLevel.EXPERT
        if item.is_difficulty_in_range(minimum, maximum):
            builder.add("difficulty_fit", w.difficulty_fit)


class ExplorationProfile(RelevanceProfile):
    """Beginner-friendly curation; scores are only meaningful relative to each other."""

    def _contribute(self, builder: ScoreBreakdownBuilder, item: LearningResource, context: SearchContext) -> None:
        w = self.weights
        target = context.get_filter("target_difficulty", DifficultyLevel) or DifficultyLevel.BEGINNER
        if item.difficulty is target:
            builder.add("difficulty_fit", w.difficulty_fit * 2)
        elif item.difficulty.level <= target.level + 1:
            builder.add("difficulty_fit", w.difficulty_fit)

        if item.has_concept(ConceptArea.GETTING_STARTED):
            builder.add("getting_started", w.concept)

        self._quality(builder, item, official_multiplier=2)
        if item.free:
            builder.add("free", w.free_access)
