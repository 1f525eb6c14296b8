"""Keyword-driven query intent classification."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from resource_discovery.search.keyword_registry import KeywordRegistry
from resource_discovery.search.models import SearchMode


class QueryClassifier(Protocol):
    """Maps a normalized query string to exactly one :class:`SearchMode`."""

    def classify(self, normalized_input: str) -> SearchMode:  # pragma: no cover - interface definition
        ...


class KeywordQueryClassifier:
    """Rule-based classifier; a total, deterministic function of its input.

    Rules, first match wins:

    1. blank input is EXPLORATORY
    2. a quote, ``http`` or a specific phrase ("docs for", "official", ...)
       makes the query SPECIFIC
    3. a short query (``exploratory_word_limit`` words or fewer) containing
       an exploratory phrase is EXPLORATORY, unless every exploratory phrase
       it contains is only a difficulty level ("beginner") and the query is
       topic-anchored: after those phrases are cut out, every anchor
       registry still resolves at least one of the remaining words
    4. a query of one or two words that no anchor registry resolves, as a
       whole or word by word, is EXPLORATORY
    5. everything else is VAGUE

    Intent phrases such as "learn", "recommend" or "help me" always keep a
    short query exploratory.
    """

    def __init__(
        self,
        *,
        specific_phrases: Sequence[str] = (),
        exploratory_phrases: Sequence[str] = (),
        anchors: Sequence[KeywordRegistry[Any]] = (),
        difficulty: KeywordRegistry[Any] | None = None,
        exploratory_word_limit: int = 5,
    ) -> None:
        if exploratory_word_limit < 1:
            raise ValueError(f"exploratory_word_limit must be >= 1, got {exploratory_word_limit}")
        self.specific_phrases = tuple(phrase.lower() for phrase in specific_phrases)
        # Longest first so "getting started" is cut before "start".
        self.exploratory_phrases = tuple(
            sorted((phrase.lower() for phrase in exploratory_phrases), key=lambda phrase: (-len(phrase), phrase))
        )
        self.anchors = tuple(anchors)
        self.difficulty = difficulty
        self.exploratory_word_limit = exploratory_word_limit

    def classify(self, normalized_input: str | None) -> SearchMode:
        text = (normalized_input or "").strip().lower()
        if not text:
            return SearchMode.EXPLORATORY

        if '"' in text or "http" in text or any(phrase in text for phrase in self.specific_phrases):
            return SearchMode.SPECIFIC

        words = text.split()
        found = [phrase for phrase in self.exploratory_phrases if phrase in text]
        if len(words) <= self.exploratory_word_limit and found and not self._yields_to_topic(text, found):
            return SearchMode.EXPLORATORY

        if len(words) <= 2 and not any(anchor.resolves(text) for anchor in self.anchors):
            return SearchMode.EXPLORATORY

        return SearchMode.VAGUE

    def _yields_to_topic(self, text: str, found: Sequence[str]) -> bool:
        if self.difficulty is None or not self.anchors:
            return False
        if any(self.difficulty.lookup(phrase) is None for phrase in found):
            return False
        remainder = text
        for phrase in found:
            remainder = remainder.replace(phrase, " ")
        words = remainder.split()
        if not words:
            return False
        return all(any(anchor.lookup(word) is not None for word in words) for anchor in self.anchors)
