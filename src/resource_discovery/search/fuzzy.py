"""Approximate text matching used as fallback scoring tiers.

All helpers are stateless and never raise: ``None`` or blank inputs simply
produce "no match" (``False``) or ``0``.

Matching tiers, strongest first:
- exact containment of the query word in the target text
- prefix match: the first ``prefix_length`` characters of a query word of at
  least ``min_word_length`` characters start some word of the target
- substring match: some target word contains the query word (min 3 chars)
"""

from __future__ import annotations

import re


DEFAULT_MIN_WORD_LENGTH = 4
DEFAULT_PREFIX_LENGTH = 3
MIN_SUBSTRING_LENGTH = 3

_WORD_SPLIT = re.compile(r"\W+", re.UNICODE)


def _target_words(target: str) -> list[str]:
    return [word for word in _WORD_SPLIT.split(target) if word]


def contains(target: str | None, phrase: str | None) -> bool:
    """Return True when ``phrase`` occurs verbatim inside ``target``."""
    if not target or not phrase:
        return False
    return phrase in target


def has_prefix_match(
    query_word: str | None,
    target: str | None,
    min_word_length: int = DEFAULT_MIN_WORD_LENGTH,
    prefix_length: int = DEFAULT_PREFIX_LENGTH,
) -> bool:
    """Check whether the query word shares its leading characters with a target word.

    Examples:
        >>> has_prefix_match("concurrent", "java concurrency in practice")
        True
        >>> has_prefix_match("con", "java concurrency")
        False
    """
    if not query_word or len(query_word) < min_word_length:
        return False
    if not target or not target.strip():
        return False
    prefix = query_word[:prefix_length]
    return any(len(word) >= prefix_length and word.startswith(prefix) for word in _target_words(target))


def has_substring_match(query_word: str | None, target: str | None) -> bool:
    """Check whether any word of ``target`` contains ``query_word``."""
    if not query_word or len(query_word) < MIN_SUBSTRING_LENGTH:
        return False
    if not target or not target.strip():
        return False
    return any(query_word in word for word in _target_words(target))


def score_word(
    query_word: str | None,
    target: str | None,
    exact_points: int,
    prefix_points: int,
    fuzzy_points: int,
) -> int:
    """Return the points of the strongest tier that matches, or 0."""
    if not query_word or len(query_word) < 2 or target is None:
        return 0
    if query_word in target:
        return exact_points
    if has_prefix_match(query_word, target):
        return prefix_points
    if has_substring_match(query_word, target):
        return fuzzy_points
    return 0


def term_frequency(term: str | None, text: str | None) -> int:
    """Count non-overlapping literal occurrences of ``term`` in ``text``.

    Examples:
        >>> term_frequency("aa", "aaaa")
        2
        >>> term_frequency("java", "")
        0
    """
    if not term or not text or not term.strip() or not text.strip():
        return 0
    count = 0
    start = text.find(term)
    while start != -1:
        count += 1
        start = text.find(term, start + len(term))
    return count
