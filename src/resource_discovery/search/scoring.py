"""Pluggable relevance functions.

Every strategy maps ``(item, context)`` to a non-negative integer and is safe
to call concurrently: scorers hold only immutable configuration, and the
BM25 scorer's corpus statistics live behind a single reference that is
replaced wholesale by :meth:`BM25Scorer.compute_stats`.

Field access is configured with extractor callables so the same scorer works
for any item type.
"""

from __future__ import annotations

from collections.abc import Callable, Collection, Iterable
from dataclasses import dataclass
import logging
from typing import Generic, Protocol, TypeVar

from resource_discovery.search import fuzzy
from resource_discovery.search.analyzers import DefaultTokenizer, Tokenizer
from resource_discovery.search.models import SearchContext
from resource_discovery.search.stats import (
    CorpusStats,
    StatsNotReady,
    StatsNotReadyError,
    StatsState,
    bm25_term_weight,
    calculate_idf,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)

TextExtractor = Callable[[T], str]
TagsExtractor = Callable[[T], Collection[str]]


class ScoringStrategy(Protocol[T_contra]):
    """Scores one item against a search context."""

    def score(self, item: T_contra, context: SearchContext) -> int:  # pragma: no cover - interface definition
        ...


def _require(item: object, context: object) -> None:
    if item is None:
        raise ValueError("item must not be None")
    if context is None:
        raise ValueError("context must not be None")


def _empty_text(_item: object) -> str:
    return ""


def _no_tags(_item: object) -> Collection[str]:
    return ()


class ZeroScorer:
    """Strategy that always returns 0."""

    def score(self, item: object, context: SearchContext) -> int:
        _require(item, context)
        return 0


@dataclass(frozen=True)
class ScoreWeights:
    """Point values awarded by :class:`TextMatchScorer` for each match tier."""

    exact_title_match: int
    partial_title_match: int
    body_match: int
    word_in_title_match: int
    tag_match: int
    fuzzy_match: int

    def __post_init__(self) -> None:
        for name, value in vars(self).items():
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")

    @classmethod
    def balanced(cls) -> ScoreWeights:
        return cls(100, 40, 20, 12, 15, 8)

    @classmethod
    def title_heavy(cls) -> ScoreWeights:
        return cls(150, 60, 15, 18, 12, 5)

    @classmethod
    def full_text(cls) -> ScoreWeights:
        return cls(80, 35, 35, 10, 10, 5)

    @classmethod
    def preset(cls, name: str) -> ScoreWeights:
        factories = {
            "balanced": cls.balanced,
            "title-heavy": cls.title_heavy,
            "full-text": cls.full_text,
        }
        normalized = name.strip().lower().replace("_", "-")
        if normalized not in factories:
            msg = f"Unknown score weight preset '{name}'. Available: {sorted(factories)}"
            raise ValueError(msg)
        return factories[normalized]()


class TextMatchScorer(Generic[T]):
    """Multi-tier title/body/tag matcher.

    Tiers stack within one pass:

    1. full query equals the title (else title contains the full query)
    2. body contains the full query
    3. per query word of 2+ characters: a title hit (else a fuzzy prefix
       hit on the title) and, checked independently, a tag hit
    """

    MIN_WORD_LENGTH = 2

    def __init__(
        self,
        *,
        title: TextExtractor[T] = _empty_text,
        body: TextExtractor[T] = _empty_text,
        tags: TagsExtractor[T] = _no_tags,
        weights: ScoreWeights | None = None,
        fuzzy_min_word_length: int = fuzzy.DEFAULT_MIN_WORD_LENGTH,
        fuzzy_prefix_length: int = fuzzy.DEFAULT_PREFIX_LENGTH,
    ) -> None:
        self._title = title
        self._body = body
        self._tags = tags
        self.weights = weights or ScoreWeights.balanced()
        self.fuzzy_min_word_length = fuzzy_min_word_length
        self.fuzzy_prefix_length = fuzzy_prefix_length

    def score(self, item: T, context: SearchContext) -> int:
        _require(item, context)
        query = context.normalized_input
        if not query:
            return 0

        weights = self.weights
        title = (self._title(item) or "").lower()
        body = (self._body(item) or "").lower()
        tags = [tag.lower() for tag in self._tags(item) or ()]

        total = 0
        if title == query:
            total += weights.exact_title_match
        elif fuzzy.contains(title, query):
            total += weights.partial_title_match

        if fuzzy.contains(body, query):
            total += weights.body_match

        for word in query.split():
            if len(word) < self.MIN_WORD_LENGTH:
                continue
            if word in title:
                total += weights.word_in_title_match
            elif fuzzy.has_prefix_match(word, title, self.fuzzy_min_word_length, self.fuzzy_prefix_length):
                total += weights.fuzzy_match
            if any(word in tag for tag in tags):
                total += weights.tag_match

        return total


class TagScorer(Generic[T]):
    """Awards points per query word found in the item's tags.

    A word is counted once even when several tags contain it; an exact tag
    equality adds ``whole_tag_bonus`` on top of ``hit_points``.
    """

    MIN_WORD_LENGTH = 3

    def __init__(self, *, tags: TagsExtractor[T] = _no_tags, hit_points: int = 15, whole_tag_bonus: int = 10) -> None:
        if hit_points < 0 or whole_tag_bonus < 0:
            raise ValueError("Tag points must be >= 0")
        self._tags = tags
        self.hit_points = hit_points
        self.whole_tag_bonus = whole_tag_bonus

    def score(self, item: T, context: SearchContext) -> int:
        _require(item, context)
        query = context.normalized_input
        if not query:
            return 0
        tags = [tag.lower() for tag in self._tags(item) or ()]
        if not tags:
            return 0

        total = 0
        for word in query.split():
            if len(word) < self.MIN_WORD_LENGTH:
                continue
            for tag in tags:
                if word in tag:
                    total += self.hit_points
                    if tag == word:
                        total += self.whole_tag_bonus
                    break
        return total


class BM25Scorer(Generic[T]):
    """Okapi BM25 over a single text field.

    ``compute_stats`` must run over the corpus before scoring; until then
    :attr:`stats` is :class:`StatsNotReady` and :meth:`score` raises
    :class:`StatsNotReadyError`. The float BM25 value is multiplied by
    ``scale`` and truncated.
    """

    DEFAULT_K1 = 1.5
    DEFAULT_B = 0.75
    DEFAULT_SCALE = 10

    def __init__(
        self,
        *,
        text: TextExtractor[T] = _empty_text,
        tokenizer: Tokenizer | None = None,
        k1: float = DEFAULT_K1,
        b: float = DEFAULT_B,
        scale: int = DEFAULT_SCALE,
    ) -> None:
        if k1 < 0:
            raise ValueError(f"k1 must be >= 0, got {k1}")
        if not 0 <= b <= 1:
            raise ValueError(f"b must be in [0, 1], got {b}")
        if scale <= 0:
            raise ValueError(f"scale must be > 0, got {scale}")
        self._text = text
        self.tokenizer = tokenizer or DefaultTokenizer()
        self.k1 = k1
        self.b = b
        self.scale = scale
        self._stats: StatsState = StatsNotReady()

    @property
    def stats(self) -> StatsState:
        return self._stats

    @property
    def is_ready(self) -> bool:
        return self._stats.is_ready

    def compute_stats(self, corpus: Iterable[T]) -> CorpusStats:
        """Recompute corpus statistics and publish them as one snapshot."""
        if corpus is None:
            raise ValueError("corpus must not be None")
        snapshot = CorpusStats.from_token_lists(self.tokenizer.tokenize(self._text(item)) for item in corpus)
        self._stats = snapshot
        logger.debug(
            "BM25 statistics computed: %d documents, avgdl=%.2f, %d terms",
            snapshot.total_documents,
            snapshot.average_document_length,
            len(snapshot.document_frequencies),
        )
        return snapshot

    def raw_score(self, item: T, context: SearchContext) -> float:
        _require(item, context)
        stats = self._stats
        if not isinstance(stats, CorpusStats):
            raise StatsNotReadyError("BM25 statistics have not been computed; call compute_stats() first")

        query_terms = self.tokenizer.tokenize(context.normalized_input)
        if not query_terms:
            return 0.0
        doc_text = (self._text(item) or "").lower()
        doc_length = len(self.tokenizer.tokenize(doc_text))
        if doc_length == 0:
            return 0.0

        total = 0.0
        for term in query_terms:
            tf = fuzzy.term_frequency(term, doc_text)
            if tf == 0:
                continue
            idf = calculate_idf(stats.document_frequency(term), stats.total_documents)
            total += idf * bm25_term_weight(tf, doc_length, stats.average_document_length, k1=self.k1, b=self.b)
        return total

    def score(self, item: T, context: SearchContext) -> int:
        return int(self.raw_score(item, context) * self.scale)


@dataclass(frozen=True)
class _WeightedStrategy(Generic[T]):
    strategy: ScoringStrategy[T]
    weight: float


class CompositeScorer(Generic[T]):
    """Weighted linear combination of child strategies.

    ``total = int(sum(weight_i * child_i.score))``; children scoring 0 are
    skipped. Build instances with :meth:`builder`.
    """

    def __init__(self, strategies: Iterable[_WeightedStrategy[T]]) -> None:
        self._strategies = tuple(strategies)

    @classmethod
    def builder(cls) -> CompositeScorerBuilder[T]:
        return CompositeScorerBuilder()

    @property
    def strategy_count(self) -> int:
        return len(self._strategies)

    def score(self, item: T, context: SearchContext) -> int:
        _require(item, context)
        total = 0.0
        for weighted in self._strategies:
            raw = weighted.strategy.score(item, context)
            if raw > 0:
                total += raw * weighted.weight
        return int(total)


class CompositeScorerBuilder(Generic[T]):
    """Collects ``(strategy, weight)`` pairs; an empty builder yields :class:`ZeroScorer`."""

    def __init__(self) -> None:
        self._strategies: list[_WeightedStrategy[T]] = []

    def add(self, strategy: ScoringStrategy[T], weight: float = 1.0) -> CompositeScorerBuilder[T]:
        if strategy is None:
            raise ValueError("strategy must not be None")
        if weight <= 0:
            raise ValueError(f"Weight must be > 0, got: {weight}")
        self._strategies.append(_WeightedStrategy(strategy, weight))
        return self

    def build(self) -> CompositeScorer[T] | ZeroScorer:
        if not self._strategies:
            return ZeroScorer()
        return CompositeScorer(self._strategies)
