"""Tokenizer utilities shared by every scorer.

Text flows through a small composable pipeline: a regex tokenizer splits on
non-word characters, then filters lowercase, drop short terms and drop stop
words. The public entry point is :class:`DefaultTokenizer`, which returns the
surviving terms as plain strings in their original order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
import re
from typing import Protocol


DEFAULT_MIN_TOKEN_LENGTH = 2

DEFAULT_STOPWORDS: frozenset[str] = frozenset(
    {
        "a",
        "about",
        "all",
        "also",
        "an",
        "and",
        "any",
        "are",
        "as",
        "at",
        "be",
        "been",
        "being",
        "but",
        "by",
        "can",
        "could",
        "did",
        "do",
        "does",
        "for",
        "from",
        "get",
        "had",
        "has",
        "have",
        "he",
        "how",
        "i",
        "if",
        "in",
        "into",
        "is",
        "it",
        "its",
        "just",
        "like",
        "may",
        "might",
        "more",
        "my",
        "new",
        "no",
        "not",
        "of",
        "on",
        "or",
        "other",
        "our",
        "shall",
        "she",
        "should",
        "so",
        "some",
        "than",
        "that",
        "the",
        "their",
        "then",
        "these",
        "they",
        "this",
        "those",
        "to",
        "up",
        "use",
        "used",
        "using",
        "very",
        "was",
        "we",
        "well",
        "were",
        "what",
        "when",
        "where",
        "which",
        "who",
        "will",
        "with",
        "would",
        "you",
        "your",
    }
)


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def tokenize(self, text: str | None) -> list[str]:  # pragma: no cover - interface definition
        ...


class TermFilter(Protocol):
    """Protocol implemented by term filters."""

    def __call__(self, terms: Iterable[str]) -> Iterator[str]:  # pragma: no cover - interface definition
        ...


class RegexSplitter:
    """Splits text on runs of non-word characters (underscores included)."""

    def __init__(self, pattern: str = r"[\W_]+") -> None:
        self.pattern = re.compile(pattern, re.UNICODE)

    def __call__(self, text: str) -> Iterator[str]:
        for piece in self.pattern.split(text):
            if piece:
                yield piece


class LowercaseFilter:
    """Filter that lowercases terms."""

    def __call__(self, terms: Iterable[str]) -> Iterator[str]:
        for term in terms:
            yield term if term.islower() else term.lower()


class MinLengthFilter:
    """Drops terms shorter than ``min_length`` characters."""

    def __init__(self, min_length: int = DEFAULT_MIN_TOKEN_LENGTH) -> None:
        self.min_length = max(1, min_length)

    def __call__(self, terms: Iterable[str]) -> Iterator[str]:
        for term in terms:
            if len(term) >= self.min_length:
                yield term


class StopFilter:
    """Removes stopwords from the stream."""

    def __init__(self, stopwords: Iterable[str] | None = None) -> None:
        vocab = stopwords if stopwords is not None else DEFAULT_STOPWORDS
        self.stopwords = frozenset(word.lower() for word in vocab)

    def __call__(self, terms: Iterable[str]) -> Iterator[str]:
        for term in terms:
            if term not in self.stopwords:
                yield term


class AnalyzerPipeline:
    """Composable analyzer pipeline (splitter + filters)."""

    def __init__(self, splitter: RegexSplitter, filters: Sequence[TermFilter] | None = None) -> None:
        self.splitter = splitter
        self.filters = list(filters or [])

    def __call__(self, text: str) -> list[str]:
        stream: Iterable[str] = self.splitter(text)
        for term_filter in self.filters:
            stream = term_filter(stream)
        return list(stream)


class DefaultTokenizer:
    """Lowercasing, stopword-removing tokenizer.

    Output is deterministic and stable under re-tokenization: feeding
    ``" ".join(tokenize(text))`` back in yields the same terms.
    """

    def __init__(
        self,
        min_token_length: int = DEFAULT_MIN_TOKEN_LENGTH,
        *,
        stopwords: Iterable[str] | None = None,
    ) -> None:
        self._stop_filter = StopFilter(stopwords)
        self.min_token_length = max(1, min_token_length)
        self.pipeline = AnalyzerPipeline(
            RegexSplitter(),
            [LowercaseFilter(), MinLengthFilter(self.min_token_length), self._stop_filter],
        )

    @property
    def stopwords(self) -> frozenset[str]:
        return self._stop_filter.stopwords

    def tokenize(self, text: str | None) -> list[str]:
        if not text or not text.strip():
            return []
        return self.pipeline(text)

    def __call__(self, text: str | None) -> list[str]:
        return self.tokenize(text)
