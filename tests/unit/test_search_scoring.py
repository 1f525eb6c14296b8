"""Unit tests for the scoring strategies."""

from dataclasses import dataclass, field

import pytest

from resource_discovery.search.models import SearchContext
from resource_discovery.search.scoring import (
    BM25Scorer,
    CompositeScorer,
    ScoreWeights,
    TagScorer,
    TextMatchScorer,
    ZeroScorer,
)
from resource_discovery.search.stats import CorpusStats, StatsNotReady, StatsNotReadyError


@dataclass(frozen=True)
class Doc:
    title: str
    body: str = ""
    tags: tuple[str, ...] = field(default_factory=tuple)


class FixedScorer:
    def __init__(self, points):
        self.points = points
        self.calls = 0

    def score(self, item, context):
        self.calls += 1
        return self.points


def text_scorer(weights=None):
    return TextMatchScorer(
        title=lambda doc: doc.title,
        body=lambda doc: doc.body,
        tags=lambda doc: doc.tags,
        weights=weights,
    )


def bm25_scorer(**kwargs):
    return BM25Scorer(text=lambda doc: f"{doc.title} {doc.body}", **kwargs)


CORPUS = [
    Doc("Java Concurrency", "threads and locks in java"),
    Doc("Python Basics", "first steps with python"),
    Doc("Rust Ownership", "borrowing and lifetimes"),
    Doc("Go Channels", "goroutines and channels"),
]


@pytest.mark.unit
class TestZeroScorer:
    def test_always_zero(self):
        assert ZeroScorer().score(Doc("x"), SearchContext("anything")) == 0

    def test_validates_arguments(self):
        with pytest.raises(ValueError):
            ZeroScorer().score(None, SearchContext("q"))
        with pytest.raises(ValueError):
            ZeroScorer().score(Doc("x"), None)


@pytest.mark.unit
class TestScoreWeights:
    def test_presets(self):
        assert ScoreWeights.preset("balanced") == ScoreWeights.balanced()
        assert ScoreWeights.preset("Title_Heavy") == ScoreWeights.title_heavy()
        assert ScoreWeights.preset("full-text") == ScoreWeights.full_text()

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown score weight preset"):
            ScoreWeights.preset("loud")

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError):
            ScoreWeights(1, 1, 1, 1, 1, -1)


@pytest.mark.unit
class TestTextMatchScorer:
    """Tests for the tiered text matcher."""

    def test_exact_title(self):
        weights = ScoreWeights.balanced()
        score = text_scorer().score(Doc("Java Concurrency"), SearchContext("java concurrency"))
        # exact title + two words found in the title
        assert score == weights.exact_title_match + 2 * weights.word_in_title_match

    def test_partial_title_and_body(self):
        weights = ScoreWeights.balanced()
        doc = Doc("Java Concurrency in Practice", "the java concurrency classic")
        score = text_scorer().score(doc, SearchContext("java concurrency"))
        assert score == weights.partial_title_match + weights.body_match + 2 * weights.word_in_title_match

    def test_fuzzy_prefix_counts_when_word_missing(self):
        weights = ScoreWeights.balanced()
        score = text_scorer().score(Doc("Concurrency Patterns"), SearchContext("concurrent"))
        assert score == weights.fuzzy_match

    def test_tags_counted_independently(self):
        weights = ScoreWeights.balanced()
        score = text_scorer().score(Doc("Effective Java", tags=("java",)), SearchContext("java"))
        assert score == weights.partial_title_match + weights.word_in_title_match + weights.tag_match

    def test_blank_query_scores_zero(self):
        assert text_scorer().score(Doc("Java"), SearchContext("   ")) == 0

    def test_no_match(self):
        assert text_scorer().score(Doc("Python Basics"), SearchContext("kotlin")) == 0


@pytest.mark.unit
class TestTagScorer:
    def test_partial_and_whole_tag(self):
        scorer = TagScorer(tags=lambda doc: doc.tags)
        doc = Doc("x", tags=("java", "javadoc"))
        # "java" hits the first tag exactly; counted once
        assert scorer.score(doc, SearchContext("java")) == 25
        assert scorer.score(doc, SearchContext("jav")) == 15

    def test_short_words_ignored(self):
        scorer = TagScorer(tags=lambda doc: doc.tags)
        assert scorer.score(Doc("x", tags=("go",)), SearchContext("go")) == 0

    def test_no_tags(self):
        assert TagScorer(tags=lambda doc: doc.tags).score(Doc("x"), SearchContext("java")) == 0

    def test_negative_points_rejected(self):
        with pytest.raises(ValueError):
            TagScorer(hit_points=-1)


@pytest.mark.unit
class TestBM25Scorer:
    """Tests for BM25Scorer readiness and ranking behaviour."""

    def test_not_ready_until_stats_computed(self):
        scorer = bm25_scorer()
        assert not scorer.is_ready
        assert isinstance(scorer.stats, StatsNotReady)
        with pytest.raises(StatsNotReadyError):
            scorer.score(CORPUS[0], SearchContext("java"))

    def test_compute_stats_publishes_snapshot(self):
        scorer = bm25_scorer()
        stats = scorer.compute_stats(CORPUS)
        assert scorer.is_ready
        assert isinstance(stats, CorpusStats)
        assert scorer.stats is stats
        assert stats.total_documents == len(CORPUS)

    def test_matching_document_scores_positive(self):
        scorer = bm25_scorer()
        scorer.compute_stats(CORPUS)
        context = SearchContext("java threads")
        assert scorer.score(CORPUS[0], context) > 0
        assert scorer.score(CORPUS[1], context) == 0

    def test_score_is_scaled_truncation(self):
        scorer = bm25_scorer(scale=10)
        scorer.compute_stats(CORPUS)
        context = SearchContext("java")
        assert scorer.score(CORPUS[0], context) == int(scorer.raw_score(CORPUS[0], context) * 10)

    def test_more_occurrences_never_score_lower(self):
        corpus = [
            Doc("java", "intro"),
            Doc("java java", "intro"),
            Doc("java java java", "intro"),
            Doc("python", "intro"),
        ]
        scorer = bm25_scorer(b=0.0)
        scorer.compute_stats(corpus)
        context = SearchContext("java")
        scores = [scorer.raw_score(doc, context) for doc in corpus[:3]]
        assert scores == sorted(scores)

    def test_stopword_only_query_scores_zero(self):
        scorer = bm25_scorer()
        scorer.compute_stats(CORPUS)
        assert scorer.score(CORPUS[0], SearchContext("the and of")) == 0

    def test_invalid_parameters(self):
        with pytest.raises(ValueError):
            BM25Scorer(k1=-1)
        with pytest.raises(ValueError):
            BM25Scorer(b=1.5)
        with pytest.raises(ValueError):
            BM25Scorer(scale=0)

    def test_compute_stats_rejects_none(self):
        with pytest.raises(ValueError):
            bm25_scorer().compute_stats(None)


@pytest.mark.unit
class TestCompositeScorer:
    """Tests for CompositeScorer and its builder."""

    def test_weighted_sum(self):
        scorer = CompositeScorer.builder().add(FixedScorer(10), 2.0).add(FixedScorer(20), 1.0).build()
        assert scorer.score(Doc("x"), SearchContext("q")) == 40

    def test_result_is_truncated(self):
        scorer = CompositeScorer.builder().add(FixedScorer(5), 0.5).add(FixedScorer(5), 0.5).build()
        # 2.5 + 2.5 == 5.0
        assert scorer.score(Doc("x"), SearchContext("q")) == 5
        single = CompositeScorer.builder().add(FixedScorer(5), 0.5).build()
        assert single.score(Doc("x"), SearchContext("q")) == 2

    def test_zero_children_do_not_contribute(self):
        scorer = CompositeScorer.builder().add(FixedScorer(0), 100.0).add(FixedScorer(3), 1.0).build()
        assert scorer.score(Doc("x"), SearchContext("q")) == 3

    def test_empty_builder_yields_zero_scorer(self):
        scorer = CompositeScorer.builder().build()
        assert isinstance(scorer, ZeroScorer)
        assert scorer.score(Doc("x"), SearchContext("q")) == 0

    @pytest.mark.parametrize("weight", [0, -1.5])
    def test_non_positive_weight_rejected(self, weight):
        with pytest.raises(ValueError, match="Weight must be > 0"):
            CompositeScorer.builder().add(FixedScorer(1), weight)

    def test_none_strategy_rejected(self):
        with pytest.raises(ValueError):
            CompositeScorer.builder().add(None)

    def test_strategy_count(self):
        scorer = CompositeScorer.builder().add(FixedScorer(1)).add(FixedScorer(2)).build()
        assert scorer.strategy_count == 2

    def test_validates_arguments(self):
        scorer = CompositeScorer.builder().add(FixedScorer(1)).build()
        with pytest.raises(ValueError):
            scorer.score(None, SearchContext("q"))
