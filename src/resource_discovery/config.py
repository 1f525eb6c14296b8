"""Centralized configuration for resource-discovery using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from resource_discovery.services.relevance import RelevanceWeights


class Settings(BaseSettings):
    """Strictly typed configuration loaded from environment variables.

    Every variable carries the ``RESOURCE_DISCOVERY_`` prefix; nested
    relevance weights use a double underscore, e.g.
    ``RESOURCE_DISCOVERY_RELEVANCE__OFFICIAL=30``.
    """

    model_config = SettingsConfigDict(
        env_prefix="RESOURCE_DISCOVERY_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Result shaping
    max_results: int = Field(default=15, ge=1, description="Maximum results returned by a discovery call")

    # Tokenizer and fuzzy matching
    min_token_length: int = Field(default=2, ge=1, description="Shortest token kept by the default tokenizer")
    fuzzy_min_word_length: int = Field(
        default=4, ge=1, description="Shortest query word eligible for fuzzy prefix matching"
    )
    fuzzy_prefix_length: int = Field(default=3, ge=1, description="Prefix length compared by fuzzy matching")

    # Classification
    exploratory_word_limit: int = Field(
        default=5, ge=1, description="Queries longer than this are never classified exploratory by phrase"
    )

    # BM25
    bm25_k1: float = Field(default=1.5, ge=0.0, description="BM25 term-frequency saturation")
    bm25_b: float = Field(default=0.75, ge=0.0, le=1.0, description="BM25 document-length normalization")
    bm25_scale: int = Field(default=10, ge=1, description="Multiplier applied before truncating BM25 scores")

    # Ranked search
    score_weights_preset: Literal["balanced", "title-heavy", "full-text"] = Field(
        default="balanced", description="Text-match weight preset used by the ranked search engine"
    )
    recency_fresh_days: int = Field(default=30, ge=0, description="Age in days that still earns the full bonus")
    recency_stale_days: int = Field(default=365, ge=1, description="Age in days after which no bonus applies")
    recency_bonus: int = Field(default=20, ge=0, description="Bonus points for the freshest resources")

    # Relevance profiles
    relevance: RelevanceWeights = Field(default_factory=RelevanceWeights)

    # Logging
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", description="Root log level"
    )
    log_json: bool = Field(default=False, description="Emit structured JSON log lines")

    @model_validator(mode="after")
    def _check_recency_window(self) -> "Settings":
        if self.recency_stale_days <= self.recency_fresh_days:
            raise ValueError(
                f"recency_stale_days ({self.recency_stale_days}) must be greater than "
                f"recency_fresh_days ({self.recency_fresh_days})"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read from the environment once."""
    return Settings()
