"""Statistical helpers for BM25 scoring.

The functions here stay independent of any item type so they can be unit
tested in isolation. Corpus statistics are held in an immutable snapshot
that is swapped in as a whole; the absence of a snapshot is modelled by
:class:`StatsNotReady` rather than by zeroed defaults.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
import math
from types import MappingProxyType


class StatsNotReadyError(RuntimeError):
    """Raised when BM25 scoring is attempted before corpus statistics exist."""


@dataclass(frozen=True)
class StatsNotReady:
    """State of a BM25 scorer whose statistics pass has not run yet."""

    is_ready: bool = field(default=False, init=False)


@dataclass(frozen=True)
class CorpusStats:
    """Immutable corpus snapshot: document frequencies and length statistics."""

    document_frequencies: Mapping[str, int]
    total_documents: int
    average_document_length: float
    is_ready: bool = field(default=True, init=False)

    def document_frequency(self, term: str) -> int:
        return self.document_frequencies.get(term, 0)

    @classmethod
    def from_token_lists(cls, documents: Iterable[list[str]]) -> CorpusStats:
        """Build a snapshot from already-tokenized documents.

        Each distinct term contributes at most 1 to the document frequency of
        a document, and the average length counts every token.
        """
        frequencies: dict[str, int] = {}
        total_tokens = 0
        total_documents = 0
        for tokens in documents:
            total_documents += 1
            total_tokens += len(tokens)
            for term in set(tokens):
                frequencies[term] = frequencies.get(term, 0) + 1

        average = total_tokens / total_documents if total_documents else 1.0
        return cls(
            document_frequencies=MappingProxyType(frequencies),
            total_documents=total_documents,
            average_document_length=average,
        )


StatsState = CorpusStats | StatsNotReady


def calculate_idf(doc_freq: int, total_docs: int) -> float:
    """Return the +1-smoothed Robertson/Sparck Jones IDF.

    ``ln((N - df + 0.5) / (df + 0.5) + 1)`` is strictly positive for any
    ``0 <= df <= N``, so common terms never push a score negative.
    """
    n = max(total_docs, 1)
    df = max(0, min(doc_freq, n))
    return math.log((n - df + 0.5) / (df + 0.5) + 1.0)


def bm25_term_weight(tf: int, doc_length: int, avg_doc_length: float, *, k1: float = 1.5, b: float = 0.75) -> float:
    """Compute the BM25 term-frequency component (without IDF)."""
    if tf <= 0:
        return 0.0
    effective_avg = avg_doc_length if avg_doc_length > 0 else 1.0
    denominator = tf + k1 * (1 - b + b * doc_length / effective_avg)
    return (tf * (k1 + 1)) / denominator
