"""
Generic search library.

This package knows nothing about learning resources:
- analyzers: Tokenizer pipeline (split, lowercase, min length, stop words)
- fuzzy: Substring, prefix and term-frequency primitives
- stats: BM25 corpus statistics and the explicit not-ready state
- models: SearchMode, SearchContext, ScoredItem, ScoreBreakdown, SearchResult
- scoring: Text, tag, BM25 and weighted composite scoring strategies
- keyword_registry: Keyword-to-value lookup with query inference
- classifier: Rule-based query intent classification
- ranking: Score and recency-boost rankers
- engine: Configurable filter/score/rank pipeline
"""
