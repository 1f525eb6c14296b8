"""Unit tests for intent-aware resource discovery."""

import pytest

from resource_discovery.config import Settings
from resource_discovery.domain.discovery import QueryType
from resource_discovery.domain.model import (
    ConceptArea,
    ConceptDomain,
    DifficultyLevel,
    ResourceCategory,
)
from resource_discovery.search.models import SearchMode
from resource_discovery.services.discovery import (
    DEFAULT_RELATED_SUGGESTIONS,
    DEFAULT_SUGGESTIONS,
    DEFAULT_SUMMARY,
    EXPLORATORY_SUGGESTIONS,
    FALLBACK_SUGGESTIONS,
    RELATED_CATEGORY_SUGGESTIONS,
    ResourceDiscovery,
)
from resource_discovery.services.resource_vault import ResourceVault
from tests.fixtures.sample_catalog import resource


def ids(result):
    return [scored.item.id for scored in result.results]


class FixedClassifier:
    def __init__(self, mode):
        self.mode = mode

    def classify(self, normalized_input):
        return self.mode


@pytest.mark.unit
class TestClassification:
    def test_blank_is_exploratory(self, discovery):
        assert discovery.classify(None) is QueryType.EXPLORATORY
        assert discovery.classify("   ") is QueryType.EXPLORATORY

    def test_named_resource_is_specific(self, discovery):
        assert discovery.classify("JUnit 5 User Guide") is QueryType.SPECIFIC

    def test_anchored_topic_is_vague(self, discovery):
        assert discovery.classify("java concurrency beginner") is QueryType.VAGUE

    def test_inference(self, discovery):
        assert discovery.infer_concepts("java concurrency beginner") == [
            ConceptArea.CONCURRENCY,
            ConceptArea.GETTING_STARTED,
        ]
        assert discovery.infer_categories("java concurrency beginner") == [ResourceCategory.JAVA]
        assert discovery.infer_concepts(None) == []

    def test_custom_classifier(self, vault, settings):
        discovery = ResourceDiscovery(vault, settings, classifier=FixedClassifier(SearchMode.SPECIFIC))
        assert discovery.classify("anything at all") is QueryType.SPECIFIC

    def test_vault_required(self, settings):
        with pytest.raises(ValueError):
            ResourceDiscovery(None, settings)


@pytest.mark.unit
class TestDiscover:
    """End-to-end discovery over the sample catalog."""

    def test_specific_query_finds_named_resource(self, discovery):
        result = discovery.discover("JUnit 5 User Guide")
        assert result.query_type is QueryType.SPECIFIC
        assert ids(result)[0] == "junit-user-guide"
        assert result.results[0].score == 195
        assert result.summary == f"Found {result.count()} matching resources"
        assert result.suggestions == ()

    def test_results_carry_breakdowns(self, discovery):
        top = discovery.discover("JUnit 5 User Guide").results[0]
        assert top.has_breakdown
        assert top.breakdown.total == top.score
        assert top.breakdown.get("exact_title") == 100

    def test_vague_query_ranks_by_inferred_topic(self, discovery):
        result = discovery.discover("java concurrency beginner")
        assert result.query_type is QueryType.VAGUE
        assert ids(result)[:2] == ["java-concurrency-basics", "java-concurrency-in-practice"]
        assert result.results[0].score == 115
        assert result.results[1].score == 75
        assert result.summary == (
            f"Found {result.count()} resources for 'java concurrency beginner'\n"
            "Inferred concepts: CONCURRENCY, GETTING_STARTED\n"
            "Inferred categories: java"
        )

    def test_vague_drops_zero_scores(self, discovery):
        result = discovery.discover("java concurrency beginner")
        assert all(scored.score > 0 for scored in result.results)
        assert "sicp" not in ids(result)

    def test_blank_query_returns_recommendations(self, discovery, vault):
        result = discovery.discover("   ")
        assert result.query_type is QueryType.EXPLORATORY
        assert result.summary == DEFAULT_SUMMARY
        assert result.suggestions == DEFAULT_SUGGESTIONS
        assert result.count() == vault.size()
        assert ids(result)[:2] == ["docker-getting-started", "python-tutorial"]

    def test_none_query_behaves_like_blank(self, discovery):
        assert discovery.discover(None).summary == DEFAULT_SUMMARY

    def test_exploratory_query_narrows_to_named_category(self, discovery):
        result = discovery.discover("help me learn python")
        assert result.query_type is QueryType.EXPLORATORY
        assert ids(result) == ["python-tutorial"]
        assert result.summary == "Here are recommended resources for beginner level learners"
        assert result.suggestions == EXPLORATORY_SUGGESTIONS

    def test_exploratory_query_reads_target_difficulty(self, discovery):
        result = discovery.discover("intermediate overview")
        assert result.summary == "Here are recommended resources for intermediate level learners"
        fits = {scored.item.id: scored.breakdown.get("difficulty_fit") for scored in result.results}
        assert fits["junit-user-guide"] == 20
        assert fits["python-tutorial"] == 10
        assert fits["sicp"] == 0

    def test_forced_mode_overrides_classifier(self, discovery):
        result = discovery.discover("java concurrency beginner", QueryType.EXPLORATORY)
        assert result.query_type is QueryType.EXPLORATORY
        # exploratory results are never filtered on score
        assert "sicp" not in ids(result)
        assert set(ids(result)) == {"junit-user-guide", "java-concurrency-in-practice", "java-concurrency-basics"}

    def test_results_are_capped(self, vault):
        discovery = ResourceDiscovery(vault, Settings(_env_file=None, max_results=3))
        assert discovery.discover("").count() == 3

    def test_ties_are_broken_by_id(self, settings):
        vault = ResourceVault(
            [
                resource(id="b-guide", title="Git Guide", tags=("git",)),
                resource(id="a-guide", title="Git Guide", tags=("git",)),
            ]
        )
        result = ResourceDiscovery(vault, settings).discover("git guide", QueryType.SPECIFIC)
        assert ids(result) == ["a-guide", "b-guide"]
        assert result.results[0].score == result.results[1].score

    def test_later_additions_are_visible(self, discovery, vault):
        assert "rust-book" not in ids(discovery.discover("rust book", QueryType.SPECIFIC))
        vault.add(resource(id="rust-book", title="The Rust Book", tags=("rust",)))
        assert ids(discovery.discover("rust book", QueryType.SPECIFIC))[0] == "rust-book"


@pytest.mark.unit
class TestDidYouMean:
    """Fallback suggestions when nothing matches."""

    @pytest.fixture
    def unofficial(self, settings):
        vault = ResourceVault(
            [
                resource(
                    id="java-concurrency-in-practice",
                    title="Java Concurrency in Practice",
                    tags=("concurrency", "threads", "java"),
                )
            ]
        )
        return ResourceDiscovery(vault, settings)

    def test_specific_miss_suggests_overlapping_names(self, unofficial):
        result = unofficial.discover("docs for testing")
        assert result.query_type is QueryType.SPECIFIC
        assert result.is_empty()
        assert result.summary == "No exact matches found for: 'docs for testing'"
        assert result.suggestions == ("Browse category: testing", "Search concept: TESTING")

    def test_vague_miss_uses_fallback(self, unofficial):
        result = unofficial.discover("quantum entanglement basics")
        assert result.query_type is QueryType.VAGUE
        assert result.is_empty()
        assert result.suggestions == FALLBACK_SUGGESTIONS

    def test_concept_names_match_with_spaces(self, discovery):
        assert "Search concept: DESIGN_PATTERNS" in discovery.did_you_mean("design patterns")

    def test_generic_guidance_when_nothing_overlaps(self, discovery):
        assert discovery.did_you_mean("zzqx") == FALLBACK_SUGGESTIONS
        assert discovery.did_you_mean("  ") == FALLBACK_SUGGESTIONS


@pytest.mark.unit
class TestSpecializedEntryPoints:
    """Tests for concept, domain and category discovery."""

    def test_by_concept(self, discovery):
        result = discovery.discover_by_concept(ConceptArea.CONCURRENCY)
        assert result.query_type is QueryType.SPECIFIC
        assert result.summary == "Resources for concept: CONCURRENCY"
        assert ids(result) == ["java-concurrency-basics", "java-concurrency-in-practice"]
        assert [scored.score for scored in result.results] == [35, 35]

    def test_by_concept_with_difficulty_bounds(self, discovery):
        result = discovery.discover_by_concept(ConceptArea.CONCURRENCY, max_difficulty=DifficultyLevel.BEGINNER)
        assert [(scored.item.id, scored.score) for scored in result.results] == [
            ("java-concurrency-basics", 35),
            ("java-concurrency-in-practice", 25),
        ]

    def test_by_concept_requires_concept(self, discovery):
        with pytest.raises(ValueError):
            discovery.discover_by_concept(None)

    def test_by_domain(self, discovery):
        result = discovery.discover_by_domain(ConceptDomain.DEVOPS_TOOLING)
        assert result.summary == "Resources for domain: DevOps & Tooling"
        assert ids(result) == ["docker-getting-started", "kubernetes-patterns"]
        assert result.suggestions == (
            "Narrow down with a concept: ci-cd, containers, version-control, build-tools, "
            "infrastructure, observability",
        )

    def test_by_domain_requires_domain(self, discovery):
        with pytest.raises(ValueError):
            discovery.discover_by_domain(None)

    def test_explore_category(self, discovery):
        result = discovery.explore_category(ResourceCategory.JAVA)
        assert result.query_type is QueryType.EXPLORATORY
        assert result.summary == "Explore java - starting with beginner-friendly resources"
        assert ids(result) == ["junit-user-guide", "java-concurrency-basics", "java-concurrency-in-practice"]
        # zero scores are kept for exploration
        assert result.results[-1].score == 0
        assert result.suggestions == RELATED_CATEGORY_SUGGESTIONS[ResourceCategory.JAVA]

    def test_explore_category_without_related_entries(self, discovery):
        result = discovery.explore_category(ResourceCategory.GENERAL)
        assert ids(result) == ["sicp"]
        assert result.suggestions == DEFAULT_RELATED_SUGGESTIONS

    def test_explore_category_requires_category(self, discovery):
        with pytest.raises(ValueError):
            discovery.explore_category(None)
