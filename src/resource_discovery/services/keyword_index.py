"""Keyword intent index.

Static lookup tables that turn natural-language keywords into structured
filters: concept areas, resource categories and difficulty levels. Several
phrases fold onto the same value ("threads", "async" and "virtual threads"
all mean :attr:`ConceptArea.CONCURRENCY`). The tables are read-only for the
lifetime of the process.

The phrase lists at the bottom drive query classification.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from resource_discovery.domain.model import ConceptArea, DifficultyLevel, ResourceCategory
from resource_discovery.search.classifier import KeywordQueryClassifier
from resource_discovery.search.keyword_registry import KeywordRegistry


_C = ConceptArea

CONCEPT_KEYWORDS: Mapping[str, ConceptArea] = MappingProxyType(
    {
        # Programming fundamentals
        "oop": _C.OOP,
        "object-oriented": _C.OOP,
        "classes": _C.OOP,
        "inheritance": _C.OOP,
        "polymorphism": _C.OOP,
        "encapsulation": _C.OOP,
        "functional": _C.FUNCTIONAL_PROGRAMMING,
        "lambda": _C.FUNCTIONAL_PROGRAMMING,
        "lambdas": _C.FUNCTIONAL_PROGRAMMING,
        "streams": _C.FUNCTIONAL_PROGRAMMING,
        "generics": _C.GENERICS,
        "type-system": _C.GENERICS,
        "wildcards": _C.GENERICS,
        # Core CS
        "concurrency": _C.CONCURRENCY,
        "threads": _C.CONCURRENCY,
        "async": _C.CONCURRENCY,
        "parallel": _C.CONCURRENCY,
        "virtual threads": _C.CONCURRENCY,
        "synchronization": _C.CONCURRENCY,
        "data structures": _C.DATA_STRUCTURES,
        "collections": _C.DATA_STRUCTURES,
        "list": _C.DATA_STRUCTURES,
        "map": _C.DATA_STRUCTURES,
        "algorithms": _C.ALGORITHMS,
        "sorting": _C.ALGORITHMS,
        "searching": _C.ALGORITHMS,
        "dynamic programming": _C.ALGORITHMS,
        "big-o": _C.COMPLEXITY_ANALYSIS,
        "complexity": _C.COMPLEXITY_ANALYSIS,
        "time complexity": _C.COMPLEXITY_ANALYSIS,
        "memory": _C.MEMORY_MANAGEMENT,
        "garbage collection": _C.MEMORY_MANAGEMENT,
        "jvm": _C.MEMORY_MANAGEMENT,
        "heap": _C.MEMORY_MANAGEMENT,
        # Software engineering
        "design patterns": _C.DESIGN_PATTERNS,
        "patterns": _C.DESIGN_PATTERNS,
        "singleton": _C.DESIGN_PATTERNS,
        "factory": _C.DESIGN_PATTERNS,
        "observer": _C.DESIGN_PATTERNS,
        "strategy": _C.DESIGN_PATTERNS,
        "clean code": _C.CLEAN_CODE,
        "refactoring": _C.CLEAN_CODE,
        "best practices": _C.CLEAN_CODE,
        "solid": _C.CLEAN_CODE,
        "testing": _C.TESTING,
        "unit test": _C.TESTING,
        "tdd": _C.TESTING,
        "junit": _C.TESTING,
        "mocking": _C.TESTING,
        "api": _C.API_DESIGN,
        "rest": _C.API_DESIGN,
        "graphql": _C.API_DESIGN,
        "architecture": _C.ARCHITECTURE,
        "microservices": _C.ARCHITECTURE,
        "hexagonal": _C.ARCHITECTURE,
        # System design and infrastructure
        "system design": _C.SYSTEM_DESIGN,
        "scalability": _C.SYSTEM_DESIGN,
        "load balancing": _C.SYSTEM_DESIGN,
        "database": _C.DATABASES,
        "sql": _C.DATABASES,
        "postgresql": _C.DATABASES,
        "indexing": _C.DATABASES,
        "distributed": _C.DISTRIBUTED_SYSTEMS,
        "consensus": _C.DISTRIBUTED_SYSTEMS,
        "networking": _C.NETWORKING,
        "http": _C.NETWORKING,
        "tcp": _C.NETWORKING,
        "dns": _C.NETWORKING,
        "operating systems": _C.OPERATING_SYSTEMS,
        "processes": _C.OPERATING_SYSTEMS,
        # DevOps and tooling
        "ci/cd": _C.CI_CD,
        "ci-cd": _C.CI_CD,
        "pipeline": _C.CI_CD,
        "github actions": _C.CI_CD,
        "docker": _C.CONTAINERS,
        "kubernetes": _C.CONTAINERS,
        "containers": _C.CONTAINERS,
        "k8s": _C.CONTAINERS,
        "git": _C.VERSION_CONTROL,
        "version control": _C.VERSION_CONTROL,
        "branching": _C.VERSION_CONTROL,
        "gradle": _C.BUILD_TOOLS,
        "maven": _C.BUILD_TOOLS,
        "build": _C.BUILD_TOOLS,
        "monitoring": _C.OBSERVABILITY,
        "logging": _C.OBSERVABILITY,
        "tracing": _C.OBSERVABILITY,
        # Security
        "security": _C.WEB_SECURITY,
        "owasp": _C.WEB_SECURITY,
        "xss": _C.WEB_SECURITY,
        "injection": _C.WEB_SECURITY,
        "authentication": _C.WEB_SECURITY,
        "cryptography": _C.CRYPTOGRAPHY,
        "encryption": _C.CRYPTOGRAPHY,
        "hashing": _C.CRYPTOGRAPHY,
        # AI and data
        "machine learning": _C.MACHINE_LEARNING,
        "deep learning": _C.MACHINE_LEARNING,
        "neural": _C.MACHINE_LEARNING,
        "ai": _C.MACHINE_LEARNING,
        "llm": _C.LLM_AND_PROMPTING,
        "prompt": _C.LLM_AND_PROMPTING,
        "gpt": _C.LLM_AND_PROMPTING,
        "rag": _C.LLM_AND_PROMPTING,
        # Career and meta
        "interview": _C.INTERVIEW_PREP,
        "leetcode": _C.INTERVIEW_PREP,
        "career": _C.CAREER_DEVELOPMENT,
        "roadmap": _C.CAREER_DEVELOPMENT,
        "getting started": _C.GETTING_STARTED,
        "beginner": _C.GETTING_STARTED,
        "hello world": _C.GETTING_STARTED,
    }
)

_R = ResourceCategory

CATEGORY_KEYWORDS: Mapping[str, ResourceCategory] = MappingProxyType(
    {
        "java": _R.JAVA,
        "spring": _R.JAVA,
        "jdk": _R.JAVA,
        "jvm": _R.JAVA,
        "python": _R.PYTHON,
        "django": _R.PYTHON,
        "flask": _R.PYTHON,
        "javascript": _R.JAVASCRIPT,
        "typescript": _R.JAVASCRIPT,
        "node": _R.JAVASCRIPT,
        "react": _R.JAVASCRIPT,
        "web": _R.WEB,
        "html": _R.WEB,
        "css": _R.WEB,
        "frontend": _R.WEB,
        "devops": _R.DEVOPS,
        "docker": _R.DEVOPS,
        "kubernetes": _R.DEVOPS,
        "security": _R.SECURITY,
        "owasp": _R.SECURITY,
        "data": _R.DATABASE,
        "database": _R.DATABASE,
        "sql": _R.DATABASE,
        "ai": _R.AI_ML,
        "ml": _R.AI_ML,
        "machine learning": _R.AI_ML,
        "deep learning": _R.AI_ML,
        "algorithm": _R.ALGORITHMS,
        "algorithms": _R.ALGORITHMS,
        "testing": _R.TESTING,
        "junit": _R.TESTING,
        "engineering": _R.SOFTWARE_ENGINEERING,
    }
)

_L = DifficultyLevel

DIFFICULTY_KEYWORDS: Mapping[str, DifficultyLevel] = MappingProxyType(
    {
        "beginner": _L.BEGINNER,
        "new": _L.BEGINNER,
        "start": _L.BEGINNER,
        "easy": _L.BEGINNER,
        "intro": _L.BEGINNER,
        "basic": _L.BEGINNER,
        "intermediate": _L.INTERMEDIATE,
        "moderate": _L.INTERMEDIATE,
        "mid": _L.INTERMEDIATE,
        "advanced": _L.ADVANCED,
        "deep": _L.ADVANCED,
        "hard": _L.ADVANCED,
        "expert": _L.EXPERT,
        "master": _L.EXPERT,
    }
)

del _C, _R, _L

CONCEPTS: KeywordRegistry[ConceptArea] = KeywordRegistry(CONCEPT_KEYWORDS)
CATEGORIES: KeywordRegistry[ResourceCategory] = KeywordRegistry(CATEGORY_KEYWORDS)
DIFFICULTIES: KeywordRegistry[DifficultyLevel] = KeywordRegistry(DIFFICULTY_KEYWORDS)

# Phrases that signal the user is after one known resource.
SPECIFIC_PHRASES: tuple[str, ...] = (
    "docs for",
    "reference for",
    "official",
    "documentation",
    "user guide",
    "reference guide",
    "api reference",
    "javadoc",
    "manual",
    "handbook",
    "specification",
)

# Phrases that signal the user wants guidance rather than a match.
EXPLORATORY_PHRASES: tuple[str, ...] = (
    "learn",
    "start",
    "beginner",
    "getting started",
    "new to",
    "don't know",
    "where to begin",
    "recommend",
    "suggest",
    "what should",
    "help me",
    "explore",
    "overview",
    "introduction",
)


def build_classifier(exploratory_word_limit: int = 5) -> KeywordQueryClassifier:
    """Classifier over the learning-resource vocabulary, anchored on concepts and categories.

    Difficulty keywords ("beginner") are the only exploratory phrases an
    anchored topic overrides.
    """
    return KeywordQueryClassifier(
        specific_phrases=SPECIFIC_PHRASES,
        exploratory_phrases=EXPLORATORY_PHRASES,
        anchors=(CONCEPTS, CATEGORIES),
        difficulty=DIFFICULTIES,
        exploratory_word_limit=exploratory_word_limit,
    )
