"""Learning-resource domain model.

Value objects only: every model is frozen, and the enums carry the
vocabulary shared by the keyword index, the vault and the relevance
profiles. Enum parsing is tolerant (case, spaces and underscores are
normalized) so values coming from user input or configuration can be fed
straight into the models.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _slug(value: str) -> str:
    return value.strip().lower().replace("_", "-").replace(" ", "-")


class _SlugEnum(str, Enum):
    """String enum whose values are lowercase slugs; lookups ignore case and separators."""

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def _missing_(cls, value: object) -> _SlugEnum | None:
        if not isinstance(value, str):
            return None
        slug = _slug(value)
        for member in cls:
            if slug in (member.value, _slug(member.name)):
                return member
        return None

    @classmethod
    def from_string(cls, value: str | None):
        if value is None or not value.strip():
            raise ValueError(f"{cls.__name__} value must not be empty")
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ValueError(f"Unknown {cls.__name__}: '{value}'. Valid values: {valid}") from None


class ResourceType(_SlugEnum):
    DOCUMENTATION = "documentation"
    TUTORIAL = "tutorial"
    BLOG = "blog"
    ARTICLE = "article"
    VIDEO = "video"
    VIDEO_COURSE = "video-course"
    BOOK = "book"
    INTERACTIVE = "interactive"
    COURSE = "course"
    API_REFERENCE = "api-reference"
    CHEAT_SHEET = "cheat-sheet"
    REPOSITORY = "repository"


class ResourceCategory(_SlugEnum):
    JAVA = "java"
    PYTHON = "python"
    JAVASCRIPT = "javascript"
    WEB = "web"
    DATABASE = "database"
    DEVOPS = "devops"
    CLOUD = "cloud"
    ALGORITHMS = "algorithms"
    SOFTWARE_ENGINEERING = "software-engineering"
    TESTING = "testing"
    SECURITY = "security"
    AI_ML = "ai-ml"
    TOOLS = "tools"
    PRODUCTIVITY = "productivity"
    SYSTEMS = "systems"
    GENERAL = "general"


class ConceptDomain(str, Enum):
    """Top-level grouping of concept areas."""

    PROGRAMMING_FUNDAMENTALS = "programming-fundamentals"
    CORE_CS = "core-cs"
    SOFTWARE_ENGINEERING = "software-engineering"
    SYSTEM_DESIGN = "system-design"
    DEVOPS_TOOLING = "devops-tooling"
    SECURITY = "security"
    AI_DATA = "ai-data"
    CAREER_META = "career-meta"

    @property
    def display_name(self) -> str:
        return _DOMAIN_DISPLAY_NAMES[self]

    @classmethod
    def from_string(cls, value: str | None) -> ConceptDomain:
        """Parse a domain from its slug, enum name or display name.

        Falls back to a partial display-name match, so ``"devops"`` resolves to
        :attr:`DEVOPS_TOOLING`.
        """
        if value is None or not value.strip():
            raise ValueError("ConceptDomain value must not be empty")
        raw = value.strip().lower()
        slug = _slug(raw.replace("&", "")).replace("--", "-")
        for domain in cls:
            if slug in (domain.value, _slug(domain.name)) or raw == domain.display_name.lower():
                return domain
        for domain in cls:
            if raw in domain.display_name.lower():
                return domain
        raise ValueError(f"Unknown ConceptDomain: '{value}'")


_DOMAIN_DISPLAY_NAMES = {
    ConceptDomain.PROGRAMMING_FUNDAMENTALS: "Programming Fundamentals",
    ConceptDomain.CORE_CS: "Core CS",
    ConceptDomain.SOFTWARE_ENGINEERING: "Software Engineering",
    ConceptDomain.SYSTEM_DESIGN: "System Design & Infrastructure",
    ConceptDomain.DEVOPS_TOOLING: "DevOps & Tooling",
    ConceptDomain.SECURITY: "Security",
    ConceptDomain.AI_DATA: "AI & Data",
    ConceptDomain.CAREER_META: "Career & Meta",
}


class ConceptArea(_SlugEnum):
    """Technical concept a resource teaches; each belongs to one :class:`ConceptDomain`."""

    LANGUAGE_BASICS = "language-basics"
    OOP = "oop"
    FUNCTIONAL_PROGRAMMING = "functional-programming"
    LANGUAGE_FEATURES = "language-features"
    GENERICS = "generics"
    CONCURRENCY = "concurrency"
    DATA_STRUCTURES = "data-structures"
    ALGORITHMS = "algorithms"
    MATHEMATICS = "mathematics"
    COMPLEXITY_ANALYSIS = "complexity-analysis"
    MEMORY_MANAGEMENT = "memory-management"
    DESIGN_PATTERNS = "design-patterns"
    CLEAN_CODE = "clean-code"
    TESTING = "testing"
    API_DESIGN = "api-design"
    ARCHITECTURE = "architecture"
    SYSTEM_DESIGN = "system-design"
    DATABASES = "databases"
    DISTRIBUTED_SYSTEMS = "distributed-systems"
    NETWORKING = "networking"
    OPERATING_SYSTEMS = "operating-systems"
    CI_CD = "ci-cd"
    CONTAINERS = "containers"
    VERSION_CONTROL = "version-control"
    BUILD_TOOLS = "build-tools"
    INFRASTRUCTURE = "infrastructure"
    OBSERVABILITY = "observability"
    WEB_SECURITY = "web-security"
    CRYPTOGRAPHY = "cryptography"
    MACHINE_LEARNING = "machine-learning"
    DEEP_LEARNING = "deep-learning"
    LLM_AND_PROMPTING = "llm-and-prompting"
    INTERVIEW_PREP = "interview-prep"
    CAREER_DEVELOPMENT = "career-development"
    GETTING_STARTED = "getting-started"
    KNOWLEDGE_MANAGEMENT = "knowledge-management"

    @property
    def domain(self) -> ConceptDomain:
        return _CONCEPT_DOMAINS[self]

    @classmethod
    def in_domain(cls, domain: ConceptDomain) -> tuple[ConceptArea, ...]:
        return tuple(area for area in cls if area.domain is domain)


_D = ConceptDomain
_A = ConceptArea
_CONCEPT_DOMAINS = {
    _A.LANGUAGE_BASICS: _D.PROGRAMMING_FUNDAMENTALS,
    _A.OOP: _D.PROGRAMMING_FUNDAMENTALS,
    _A.FUNCTIONAL_PROGRAMMING: _D.PROGRAMMING_FUNDAMENTALS,
    _A.LANGUAGE_FEATURES: _D.PROGRAMMING_FUNDAMENTALS,
    _A.GENERICS: _D.PROGRAMMING_FUNDAMENTALS,
    _A.CONCURRENCY: _D.CORE_CS,
    _A.DATA_STRUCTURES: _D.CORE_CS,
    _A.ALGORITHMS: _D.CORE_CS,
    _A.MATHEMATICS: _D.CORE_CS,
    _A.COMPLEXITY_ANALYSIS: _D.CORE_CS,
    _A.MEMORY_MANAGEMENT: _D.CORE_CS,
    _A.DESIGN_PATTERNS: _D.SOFTWARE_ENGINEERING,
    _A.CLEAN_CODE: _D.SOFTWARE_ENGINEERING,
    _A.TESTING: _D.SOFTWARE_ENGINEERING,
    _A.API_DESIGN: _D.SOFTWARE_ENGINEERING,
    _A.ARCHITECTURE: _D.SOFTWARE_ENGINEERING,
    _A.SYSTEM_DESIGN: _D.SYSTEM_DESIGN,
    _A.DATABASES: _D.SYSTEM_DESIGN,
    _A.DISTRIBUTED_SYSTEMS: _D.SYSTEM_DESIGN,
    _A.NETWORKING: _D.SYSTEM_DESIGN,
    _A.OPERATING_SYSTEMS: _D.SYSTEM_DESIGN,
    _A.CI_CD: _D.DEVOPS_TOOLING,
    _A.CONTAINERS: _D.DEVOPS_TOOLING,
    _A.VERSION_CONTROL: _D.DEVOPS_TOOLING,
    _A.BUILD_TOOLS: _D.DEVOPS_TOOLING,
    _A.INFRASTRUCTURE: _D.DEVOPS_TOOLING,
    _A.OBSERVABILITY: _D.DEVOPS_TOOLING,
    _A.WEB_SECURITY: _D.SECURITY,
    _A.CRYPTOGRAPHY: _D.SECURITY,
    _A.MACHINE_LEARNING: _D.AI_DATA,
    _A.DEEP_LEARNING: _D.AI_DATA,
    _A.LLM_AND_PROMPTING: _D.AI_DATA,
    _A.INTERVIEW_PREP: _D.CAREER_META,
    _A.CAREER_DEVELOPMENT: _D.CAREER_META,
    _A.GETTING_STARTED: _D.CAREER_META,
    _A.KNOWLEDGE_MANAGEMENT: _D.CAREER_META,
}
del _D, _A


class DifficultyLevel(_SlugEnum):
    """Skill level ordered from 1 (beginner) to 4 (expert)."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"

    @property
    def level(self) -> int:
        return _DIFFICULTY_ORDER.index(self) + 1


_DIFFICULTY_ORDER = tuple(DifficultyLevel)


class ContentFreshness(_SlugEnum):
    """Maintenance status of a resource's content."""

    EVERGREEN = "evergreen"
    ACTIVELY_MAINTAINED = "actively-maintained"
    PERIODIC = "periodic"
    ARCHIVED = "archived"


class LearningResource(BaseModel):
    """A curated learning resource.

    Identity is ``id``; two resources with the same id are the same entry in
    the vault even when their other fields differ.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    url: str
    description: str = ""
    type: ResourceType = ResourceType.DOCUMENTATION
    categories: tuple[ResourceCategory, ...] = ()
    concepts: tuple[ConceptArea, ...] = ()
    tags: tuple[str, ...] = ()
    author: str = ""
    difficulty: DifficultyLevel = DifficultyLevel.BEGINNER
    freshness: ContentFreshness = ContentFreshness.EVERGREEN
    official: bool = False
    free: bool = True
    added_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("id", "title", "url")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    def has_category(self, category: ResourceCategory) -> bool:
        return category in self.categories

    def has_concept(self, concept: ConceptArea) -> bool:
        return concept in self.concepts

    def has_tag(self, tag: str) -> bool:
        wanted = tag.strip().lower()
        return any(existing.lower() == wanted for existing in self.tags)

    def is_difficulty_in_range(self, minimum: DifficultyLevel, maximum: DifficultyLevel) -> bool:
        return minimum.level <= self.difficulty.level <= maximum.level

    @property
    def is_actively_maintained(self) -> bool:
        return self.freshness is ContentFreshness.ACTIVELY_MAINTAINED

    def searchable_text(self) -> str:
        """Lowercased concatenation of every free-text field, used for containment checks."""
        parts = [self.title, self.description, self.author, *self.tags]
        parts.extend(concept.value for concept in self.concepts)
        return " ".join(part for part in parts if part).lower()


class ResourceQuery(BaseModel):
    """Composite filter over the vault; ``max_results`` of 0 means no cap."""

    model_config = ConfigDict(frozen=True)

    search_text: str = ""
    type: ResourceType | None = None
    category: ResourceCategory | None = None
    concept: ConceptArea | None = None
    domain: ConceptDomain | None = None
    difficulty: DifficultyLevel | None = None
    tags: tuple[str, ...] = ()
    free_only: bool = False
    max_results: int = Field(default=0, ge=0)

    @classmethod
    def all(cls) -> ResourceQuery:
        return cls()

    @classmethod
    def by_text(cls, search_text: str) -> ResourceQuery:
        return cls(search_text=search_text)

    @classmethod
    def by_category(cls, category: ResourceCategory) -> ResourceQuery:
        return cls(category=category)

    @classmethod
    def by_concept(cls, concept: ConceptArea) -> ResourceQuery:
        return cls(concept=concept)

    @classmethod
    def by_domain(cls, domain: ConceptDomain) -> ResourceQuery:
        return cls(domain=domain)

    @classmethod
    def by_type(cls, resource_type: ResourceType) -> ResourceQuery:
        return cls(type=resource_type)

    @property
    def has_filters(self) -> bool:
        return bool(
            self.search_text.strip()
            or self.type
            or self.category
            or self.concept
            or self.domain
            or self.difficulty
            or self.tags
            or self.free_only
        )
