"""Unit tests for BM25 statistics helpers."""

import math

import pytest

from resource_discovery.search.stats import (
    CorpusStats,
    StatsNotReady,
    bm25_term_weight,
    calculate_idf,
)


@pytest.mark.unit
class TestCalculateIdf:
    def test_matches_smoothed_formula(self):
        assert calculate_idf(2, 10) == pytest.approx(math.log((10 - 2 + 0.5) / (2 + 0.5) + 1))

    def test_always_positive(self):
        for df in range(0, 11):
            assert calculate_idf(df, 10) > 0

    def test_rarer_terms_weigh_more(self):
        assert calculate_idf(1, 100) > calculate_idf(50, 100)

    def test_clamps_out_of_range_inputs(self):
        assert calculate_idf(20, 10) == calculate_idf(10, 10)
        assert calculate_idf(-3, 10) == calculate_idf(0, 10)
        assert calculate_idf(0, 0) == calculate_idf(0, 1)


@pytest.mark.unit
class TestBm25TermWeight:
    def test_zero_frequency(self):
        assert bm25_term_weight(0, 10, 10.0) == 0.0

    def test_average_length_document(self):
        # |D| == avgdl reduces the denominator to tf + k1
        assert bm25_term_weight(1, 10, 10.0) == pytest.approx(2.5 / 2.5)
        assert bm25_term_weight(2, 10, 10.0) == pytest.approx(5.0 / 3.5)

    def test_saturates_with_frequency(self):
        weights = [bm25_term_weight(tf, 10, 10.0) for tf in (1, 2, 4, 8, 16)]
        assert weights == sorted(weights)
        assert weights[-1] < 1.5 + 1

    def test_longer_documents_score_lower(self):
        assert bm25_term_weight(1, 40, 10.0) < bm25_term_weight(1, 5, 10.0)

    def test_zero_average_is_treated_as_one(self):
        assert bm25_term_weight(1, 1, 0.0) == pytest.approx(bm25_term_weight(1, 1, 1.0))

    def test_b_zero_ignores_length(self):
        assert bm25_term_weight(1, 100, 10.0, b=0.0) == pytest.approx(bm25_term_weight(1, 1, 10.0, b=0.0))


@pytest.mark.unit
class TestCorpusStats:
    """Tests for the statistics snapshot."""

    def test_from_token_lists(self):
        stats = CorpusStats.from_token_lists([["java", "java", "threads"], ["python"]])
        assert stats.total_documents == 2
        assert stats.average_document_length == pytest.approx(2.0)
        assert stats.document_frequency("java") == 1
        assert stats.document_frequency("python") == 1
        assert stats.document_frequency("rust") == 0
        assert stats.is_ready

    def test_empty_corpus(self):
        stats = CorpusStats.from_token_lists([])
        assert stats.total_documents == 0
        assert stats.average_document_length == 1.0

    def test_frequencies_are_read_only(self):
        stats = CorpusStats.from_token_lists([["java"]])
        with pytest.raises(TypeError):
            stats.document_frequencies["java"] = 5  # type: ignore[index]

    def test_not_ready_state(self):
        assert StatsNotReady().is_ready is False
