"""Immutable keyword-to-value lookup with query inference helpers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import re
from types import MappingProxyType
from typing import Generic, TypeVar


V = TypeVar("V")


def _normalize(keyword: str) -> str:
    return keyword.strip().lower()


class KeywordRegistry(Generic[V]):
    """Maps lowercase keywords and phrases to structured values.

    Several keywords may fold onto the same value. Inference never returns a
    value twice: results accumulate in insertion order with duplicates
    suppressed.
    """

    def __init__(self, entries: Mapping[str, V] | Iterable[tuple[str, V]]) -> None:
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        table: dict[str, V] = {}
        for keyword, value in pairs:
            if keyword is None or not keyword.strip():
                raise ValueError("keyword must not be empty")
            if value is None:
                raise ValueError(f"value for keyword '{keyword}' must not be None")
            table[_normalize(keyword)] = value
        self._table: Mapping[str, V] = MappingProxyType(table)
        self._patterns = {
            keyword: re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)") for keyword in sorted(table)
        }

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, keyword: object) -> bool:
        return isinstance(keyword, str) and _normalize(keyword) in self._table

    def lookup(self, keyword: str | None) -> V | None:
        if keyword is None:
            return None
        return self._table.get(_normalize(keyword))

    def keywords(self) -> frozenset[str]:
        return frozenset(self._table)

    def as_mapping(self) -> Mapping[str, V]:
        return self._table

    def infer(self, query: str | None) -> list[V]:
        """Resolve every value the query mentions.

        Pass one looks up each whitespace-delimited word; pass two scans for
        every keyword (multi-word phrases included) as a whole-word match
        anywhere in the query. Values found by both passes appear once.
        """
        if not query or not query.strip():
            return []
        normalized = _normalize(query)
        found: dict[V, None] = {}
        for word in normalized.split():
            value = self._table.get(word)
            if value is not None:
                found.setdefault(value)
        for keyword, pattern in self._patterns.items():
            if pattern.search(normalized):
                found.setdefault(self._table[keyword])
        return list(found)

    def resolves(self, query: str | None) -> bool:
        """Return True when the whole query or any single word is a known keyword."""
        if not query or not query.strip():
            return False
        normalized = _normalize(query)
        if normalized in self._table:
            return True
        return any(word in self._table for word in normalized.split())

    def first_match(self, query: str | None) -> V | None:
        """Return the value of the keyword that occurs earliest in the query.

        Keywords match as substrings, so ``"intro"`` is found inside
        ``"introduction"``. Ties on position go to the longer keyword, then to
        alphabetical order, so the result never depends on table iteration.
        """
        if not query or not query.strip():
            return None
        normalized = _normalize(query)
        best: tuple[int, int, str] | None = None
        for keyword in self._table:
            position = normalized.find(keyword)
            if position == -1:
                continue
            rank = (position, -len(keyword), keyword)
            if best is None or rank < best:
                best = rank
        return self._table[best[2]] if best is not None else None
