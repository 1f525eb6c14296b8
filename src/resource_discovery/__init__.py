"""In-process discovery and relevance ranking of curated learning resources."""
