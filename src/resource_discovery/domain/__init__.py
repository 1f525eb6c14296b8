"""Domain layer: learning-resource value objects and discovery results.

Everything here is immutable and free of infrastructure concerns.
"""

from resource_discovery.domain.discovery import DiscoveryResult, QueryType, ScoredResource
from resource_discovery.domain.model import (
    ConceptArea,
    ConceptDomain,
    ContentFreshness,
    DifficultyLevel,
    LearningResource,
    ResourceCategory,
    ResourceQuery,
    ResourceType,
)


__all__ = [
    "ConceptArea",
    "ConceptDomain",
    "ContentFreshness",
    "DifficultyLevel",
    "DiscoveryResult",
    "LearningResource",
    "QueryType",
    "ResourceCategory",
    "ResourceQuery",
    "ResourceType",
    "ScoredResource",
]
