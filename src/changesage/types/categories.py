"""Types for sentence categorization results."""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple


class Category(str, Enum):
    """The fixed set of change categories, in tie-breaking order."""

    BREAKING_CHANGE = "breaking_change"
    FEATURE = "feature"
    FIX = "fix"
    DEPRECATION = "deprecation"
    SECURITY = "security"
    DOCUMENTATION = "documentation"
    PERFORMANCE = "performance"
    REFACTOR = "refactor"
    CHORE = "chore"


MISCELLANEOUS = "miscellaneous"
UNCATEGORIZED = "uncategorized"

# Results key order: categories first, then the two synthetic buckets
BUCKETS: Tuple[str, ...] = tuple(c.value for c in Category) + (MISCELLANEOUS, UNCATEGORIZED)


@dataclass(frozen=True)
class ScoredMatch:
    """Best category found so far for a sentence."""

    category: Optional[Category] = None
    confidence: float = 0.0


@dataclass(frozen=True)
class CategorizationOutcome:
    """Final decision for a single sentence."""

    category: Optional[Category] = None
    confidence: float = 0.0
    is_miscellaneous: bool = False

    @property
    def accepted(self) -> bool:
        return self.category is not None

    @property
    def uncategorized(self) -> bool:
        return self.category is None and not self.is_miscellaneous

    @property
    def bucket(self) -> str:
        """Name of the results bucket this outcome lands in."""
        if self.category is not None:
            return self.category.value
        if self.is_miscellaneous:
            return MISCELLANEOUS
        return UNCATEGORIZED


@dataclass
class CategorizedResults:
    """Sentences grouped by bucket. Field order matches BUCKETS."""

    breaking_change: List[str] = field(default_factory=list)
    feature: List[str] = field(default_factory=list)
    fix: List[str] = field(default_factory=list)
    deprecation: List[str] = field(default_factory=list)
    security: List[str] = field(default_factory=list)
    documentation: List[str] = field(default_factory=list)
    performance: List[str] = field(default_factory=list)
    refactor: List[str] = field(default_factory=list)
    chore: List[str] = field(default_factory=list)
    miscellaneous: List[str] = field(default_factory=list)
    uncategorized: List[str] = field(default_factory=list)

    def bucket(self, name: str) -> List[str]:
        if name not in BUCKETS:
            raise KeyError(f"Unknown bucket: {name}")
        return getattr(self, name)

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        for f in fields(self):
            yield f.name, getattr(self, f.name)

    def count(self) -> int:
        return sum(len(sentences) for _, sentences in self.items())

    def to_dict(self) -> Dict[str, List[str]]:
        return {name: list(sentences) for name, sentences in self.items()}
