"""Unit tests for the generic search value objects."""

import pytest

from resource_discovery.search.models import (
    DEFAULT_MAX_RESULTS,
    ScoreBreakdown,
    ScoredItem,
    SearchContext,
    SearchMode,
    SearchResult,
)


@pytest.mark.unit
class TestSearchMode:
    def test_from_string_accepts_values_and_names(self):
        assert SearchMode.from_string("vague") is SearchMode.VAGUE
        assert SearchMode.from_string("  SPECIFIC ") is SearchMode.SPECIFIC

    def test_from_string_rejects_unknown(self):
        with pytest.raises(ValueError, match="Unknown search mode"):
            SearchMode.from_string("fuzzy")

    def test_from_string_rejects_blank(self):
        with pytest.raises(ValueError):
            SearchMode.from_string("  ")
        with pytest.raises(ValueError):
            SearchMode.from_string(None)

    def test_every_mode_is_described(self):
        for mode in SearchMode:
            assert mode.description
            assert mode.display_name == mode.value


@pytest.mark.unit
class TestScoreBreakdown:
    """Tests for ScoreBreakdown and its builder."""

    def test_total_is_sum_of_components(self):
        breakdown = ScoreBreakdown.of(("title", 40), ("tag", 15), ("official", 15))
        assert breakdown.total == 70
        assert list(breakdown.components) == ["title", "tag", "official"]

    def test_builder_accumulates_repeated_components(self):
        breakdown = ScoreBreakdown.builder().add("tag", 15).add("tag", 15).build()
        assert breakdown.get("tag") == 30
        assert breakdown.get("missing") == 0

    def test_builder_skips_zero_points(self):
        builder = ScoreBreakdown.builder().add("title", 0).add("tag", 5)
        assert builder.current_total == 5
        assert "title" not in builder.build().components

    def test_builder_rejects_empty_name(self):
        with pytest.raises(ValueError):
            ScoreBreakdown.builder().add("", 10)

    def test_components_are_read_only(self):
        breakdown = ScoreBreakdown.of(("title", 10))
        with pytest.raises(TypeError):
            breakdown.components["title"] = 99  # type: ignore[index]

    def test_equality_respects_order(self):
        assert ScoreBreakdown.of(("a", 1), ("b", 2)) == ScoreBreakdown.of(("a", 1), ("b", 2))
        assert ScoreBreakdown.of(("a", 1), ("b", 2)) != ScoreBreakdown.of(("b", 2), ("a", 1))

    def test_repr_lists_components(self):
        assert "total=3" in repr(ScoreBreakdown.of(("a", 1), ("b", 2)))


@pytest.mark.unit
class TestScoredItem:
    def test_negative_score_is_clamped(self):
        assert ScoredItem("x", -5).score == 0

    def test_none_item_rejected(self):
        with pytest.raises(ValueError):
            ScoredItem(None, 1)

    def test_with_boost_records_the_boost_in_the_breakdown(self):
        breakdown = ScoreBreakdown.of(("title", 10))
        boosted = ScoredItem("x", 10, breakdown).with_boost(5, "recency")
        assert boosted.score == 15
        assert dict(boosted.breakdown.components) == {"title": 10, "recency": 5}
        assert boosted.breakdown.total == boosted.score
        assert breakdown.total == 10

    def test_with_boost_clamped_breakdown_matches_score(self):
        boosted = ScoredItem("x", 3, ScoreBreakdown.of(("title", 3))).with_boost(-10)
        assert boosted.score == 0
        assert boosted.breakdown.total == 0
        assert boosted.breakdown.get("boost") == -3

    def test_with_boost_without_breakdown(self):
        assert ScoredItem("x", 3).with_boost(4).breakdown is None

    def test_with_negative_boost_floors_at_zero(self):
        assert ScoredItem("x", 3).with_boost(-10).score == 0

    def test_without_breakdown(self):
        scored = ScoredItem("x", 3, ScoreBreakdown.of(("a", 3)))
        assert scored.has_breakdown
        assert not scored.without_breakdown().has_breakdown


@pytest.mark.unit
class TestSearchContext:
    """Tests for SearchContext."""

    def test_normalized_input(self):
        assert SearchContext("  Java Streams ").normalized_input == "java streams"

    def test_non_positive_max_results_falls_back(self):
        assert SearchContext("q", max_results=0).max_results == DEFAULT_MAX_RESULTS
        assert SearchContext("q", max_results=-4).max_results == DEFAULT_MAX_RESULTS
        assert SearchContext("q", max_results=3).max_results == 3

    def test_none_raw_input_rejected(self):
        with pytest.raises(ValueError):
            SearchContext(None)  # type: ignore[arg-type]

    def test_filters_are_immutable_copies(self):
        source = {"category": "java"}
        context = SearchContext("q", filters=source)
        source["category"] = "python"
        assert context.filters["category"] == "java"
        with pytest.raises(TypeError):
            context.filters["category"] = "web"  # type: ignore[index]

    def test_get_filter_checks_type(self):
        context = SearchContext.of("q", limit=5, official=True)
        assert context.get_filter("limit", int) == 5
        assert context.get_filter("limit", str) is None
        assert context.get_filter("missing", int) is None

    def test_get_filter_rejects_non_type(self):
        with pytest.raises(TypeError):
            SearchContext("q").get_filter("limit", "int")  # type: ignore[arg-type]

    def test_with_filters_merges(self):
        context = SearchContext.of("q", SearchMode.VAGUE, 4, a=1).with_filters(b=2)
        assert dict(context.filters) == {"a": 1, "b": 2}
        assert context.forced_mode is SearchMode.VAGUE
        assert context.max_results == 4
        assert context.has_forced_mode


@pytest.mark.unit
class TestSearchResult:
    def test_empty(self):
        result = SearchResult.empty(SearchMode.VAGUE, "nothing", ("try again",))
        assert result.is_empty()
        assert result.count() == 0
        assert result.top_score() == 0
        assert result.suggestions == ("try again",)

    def test_collections_become_tuples(self):
        result = SearchResult(SearchMode.SPECIFIC, [ScoredItem("a", 3), ScoredItem("b", 7)], ["s"], "two")
        assert isinstance(result.items, tuple)
        assert isinstance(result.suggestions, tuple)
        assert result.top_score() == 7

    def test_mode_required(self):
        with pytest.raises(ValueError):
            SearchResult(None, (), (), "x")  # type: ignore[arg-type]
