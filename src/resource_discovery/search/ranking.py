"""Ranking strategies applied after scoring."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any, Generic, Protocol, TypeVar

from resource_discovery.search.models import ScoredItem, SearchContext


T = TypeVar("T")


class RankingStrategy(Protocol[T]):
    """Orders scored items for presentation."""

    def rank(
        self, items: Sequence[ScoredItem[T]], context: SearchContext
    ) -> list[ScoredItem[T]]:  # pragma: no cover - interface definition
        ...


def _no_tie_break(_item: Any) -> str:
    return ""


class ScoreRanker(Generic[T]):
    """Sorts by descending score, breaking ties with ``tie_break(item)`` ascending.

    Python's sort is stable, so with the default tie-break equal scores keep
    their input order.
    """

    def __init__(self, tie_break: Callable[[T], Any] = _no_tie_break) -> None:
        self.tie_break = tie_break

    def rank(self, items: Sequence[ScoredItem[T]], context: SearchContext | None = None) -> list[ScoredItem[T]]:
        return sorted(items, key=lambda scored: (-scored.score, self.tie_break(scored.item)))


class RecencyBoostRanker(Generic[T]):
    """Adds a freshness bonus that decays linearly with item age, then re-sorts.

    Items newer than ``fresh_days`` get the full ``fresh_bonus``; items older
    than ``stale_days`` get nothing.
    """

    def __init__(
        self,
        timestamp: Callable[[T], datetime | None],
        *,
        fresh_days: int = 30,
        stale_days: int = 365,
        fresh_bonus: int = 20,
        tie_break: Callable[[T], Any] = _no_tie_break,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if fresh_days < 0 or stale_days <= fresh_days:
            raise ValueError("stale_days must be > fresh_days >= 0")
        self._timestamp = timestamp
        self.fresh_days = fresh_days
        self.stale_days = stale_days
        self.fresh_bonus = max(0, fresh_bonus)
        self._ranker: ScoreRanker[T] = ScoreRanker(tie_break)
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def bonus_for(self, stamp: datetime | None, now: datetime) -> int:
        if stamp is None:
            return 0
        if stamp.tzinfo is None:
            stamp = stamp.replace(tzinfo=timezone.utc)
        age_days = (now - stamp).days
        if age_days <= self.fresh_days:
            return self.fresh_bonus
        if age_days >= self.stale_days:
            return 0
        decay = (age_days - self.fresh_days) / (self.stale_days - self.fresh_days)
        return int(self.fresh_bonus * (1.0 - decay))

    def rank(self, items: Sequence[ScoredItem[T]], context: SearchContext | None = None) -> list[ScoredItem[T]]:
        now = self._clock()
        boosted = []
        for scored in items:
            bonus = self.bonus_for(self._timestamp(scored.item), now)
            boosted.append(scored.with_boost(bonus, "recency") if bonus > 0 else scored)
        return self._ranker.rank(boosted, context)
