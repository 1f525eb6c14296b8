"""Thread-safe in-memory store of learning resources."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
import threading
from typing import Protocol

from resource_discovery.domain.model import LearningResource, ResourceCategory, ResourceQuery
from resource_discovery.observability.metrics import CORPUS_SIZE


logger = logging.getLogger(__name__)


class ResourceProvider(Protocol):
    """Supplies a batch of resources, typically one curated catalog per topic."""

    def resources(self) -> Sequence[LearningResource]:  # pragma: no cover - interface definition
        ...


def _sort_key(resource: LearningResource) -> tuple[str, str]:
    return resource.title.casefold(), resource.id


def _matches_text(resource: LearningResource, needle: str) -> bool:
    return (
        needle in resource.title.lower()
        or needle in resource.description.lower()
        or any(needle in tag.lower() for tag in resource.tags)
        or needle in resource.author.lower()
    )


def _matches(resource: LearningResource, query: ResourceQuery, needle: str) -> bool:
    if needle and not _matches_text(resource, needle):
        return False
    if query.type is not None and resource.type is not query.type:
        return False
    if query.category is not None and not resource.has_category(query.category):
        return False
    if query.concept is not None and not resource.has_concept(query.concept):
        return False
    if query.domain is not None and not any(concept.domain is query.domain for concept in resource.concepts):
        return False
    if query.difficulty is not None and resource.difficulty is not query.difficulty:
        return False
    if query.tags and not all(resource.has_tag(tag) for tag in query.tags):
        return False
    if query.free_only and not resource.free:
        return False
    return True


class ResourceVault:
    """Keyed resource store; ``add`` replaces any resource with the same id.

    Every read returns a snapshot taken under the lock, so callers can
    iterate results while other threads add or remove resources.
    """

    def __init__(self, resources: Iterable[LearningResource] = (), *, name: str = "default") -> None:
        self.name = name
        self._resources: dict[str, LearningResource] = {}
        self._lock = threading.RLock()
        self.add_all(resources)

    def _publish_size(self) -> None:
        CORPUS_SIZE.labels(vault=self.name).set(len(self._resources))

    def add(self, resource: LearningResource) -> None:
        if resource is None:
            raise ValueError("resource must not be None")
        with self._lock:
            self._resources[resource.id] = resource
            self._publish_size()
        logger.debug("Added resource: %s", resource.id)

    def add_all(self, resources: Iterable[LearningResource]) -> int:
        batch = list(resources)
        if any(resource is None for resource in batch):
            raise ValueError("resources must not contain None")
        with self._lock:
            for resource in batch:
                self._resources[resource.id] = resource
            self._publish_size()
        return len(batch)

    def load(self, providers: Iterable[ResourceProvider]) -> ResourceVault:
        """Add every provider's resources; returns ``self`` for chaining."""
        loaded = 0
        for provider in providers:
            loaded += self.add_all(provider.resources())
        logger.info("Loaded %d learning resources into vault '%s' (%d unique)", loaded, self.name, self.size())
        return self

    def find_by_id(self, resource_id: str) -> LearningResource | None:
        with self._lock:
            return self._resources.get(resource_id)

    def remove(self, resource_id: str) -> bool:
        with self._lock:
            removed = self._resources.pop(resource_id, None) is not None
            if removed:
                self._publish_size()
        return removed

    def snapshot(self) -> list[LearningResource]:
        with self._lock:
            return list(self._resources.values())

    def search(self, query: ResourceQuery) -> list[LearningResource]:
        """Filter the vault, sort by title (case-insensitive) then id, then apply ``max_results``."""
        if query is None:
            raise ValueError("query must not be None")
        needle = query.search_text.strip().lower()
        matched = [resource for resource in self.snapshot() if _matches(resource, query, needle)]
        matched.sort(key=_sort_key)
        if query.max_results > 0:
            return matched[: query.max_results]
        return matched

    def list_all(self) -> list[LearningResource]:
        return self.search(ResourceQuery.all())

    def size(self) -> int:
        with self._lock:
            return len(self._resources)

    def __len__(self) -> int:
        return self.size()

    def available_categories(self) -> list[ResourceCategory]:
        """Categories with at least one resource, in declaration order."""
        present = {category for resource in self.snapshot() for category in resource.categories}
        return [category for category in ResourceCategory if category in present]
