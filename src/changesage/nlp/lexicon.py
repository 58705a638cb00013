"""Word to tag lexicon and tag hierarchy used for tag-based category detection."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Tuple

from changesage.types.categories import Category

# Dedicated tag per category
CATEGORY_TAGS: Mapping[Category, str] = MappingProxyType(
    {
        Category.BREAKING_CHANGE: "BreakingChange",
        Category.FEATURE: "Feature",
        Category.FIX: "Fix",
        Category.DEPRECATION: "Deprecation",
        Category.SECURITY: "Security",
        Category.DOCUMENTATION: "Documentation",
        Category.PERFORMANCE: "Performance",
        Category.REFACTOR: "Refactor",
        Category.CHORE: "Chore",
    }
)

VERB_TAGS: Mapping[Category, str] = MappingProxyType(
    {
        Category.BREAKING_CHANGE: "BreakingVerb",
        Category.FEATURE: "FeatureVerb",
        Category.FIX: "FixVerb",
    }
)

TAG_HIERARCHY: Dict[str, Tuple[str, ...]] = {
    "Category": ("Noun",),
    "BreakingChange": ("Category",),
    "Feature": ("Category",),
    "Fix": ("Category",),
    "Deprecation": ("Category",),
    "Security": ("Category",),
    "Documentation": ("Category",),
    "Performance": ("Category",),
    "Refactor": ("Category",),
    "Chore": ("Category",),
    # Action tags for verb matching
    "BreakingVerb": ("Verb",),
    "FeatureVerb": ("Verb",),
    "FixVerb": ("Verb",),
    # Severity modifiers
    "Critical": ("Adjective",),
    "Major": ("Adjective",),
    "Minor": ("Adjective",),
}

WORD_TAGS: Dict[str, Tuple[str, ...]] = {
    # Breaking change indicators
    "breaking": ("BreakingChange", "BreakingVerb"),
    "break": ("BreakingChange", "BreakingVerb"),
    "breaks": ("BreakingChange", "BreakingVerb"),
    "broke": ("BreakingChange", "BreakingVerb"),
    "broken": ("BreakingChange",),
    "incompatible": ("BreakingChange", "Critical"),
    "discontinued": ("BreakingChange", "BreakingVerb"),
    "removed": ("BreakingVerb",),
    "removes": ("BreakingVerb",),
    "remove": ("BreakingVerb",),
    "dropped": ("BreakingVerb",),
    "drops": ("BreakingVerb",),
    # Deprecation indicators
    "deprecated": ("Deprecation",),
    "deprecate": ("Deprecation",),
    "deprecates": ("Deprecation",),
    "deprecation": ("Deprecation",),
    "deprecations": ("Deprecation",),
    "obsolete": ("Deprecation",),
    "legacy": ("Deprecation",),
    # Feature indicators
    "added": ("Feature", "FeatureVerb"),
    "adds": ("Feature", "FeatureVerb"),
    "add": ("Feature", "FeatureVerb"),
    "new": ("Feature",),
    "introduced": ("Feature", "FeatureVerb"),
    "introduces": ("Feature", "FeatureVerb"),
    "implemented": ("Feature", "FeatureVerb"),
    "implements": ("Feature", "FeatureVerb"),
    "feature": ("Feature",),
    "features": ("Feature",),
    "enhancement": ("Feature",),
    "enhancements": ("Feature",),
    "support": ("Feature",),
    "supports": ("Feature", "FeatureVerb"),
    # Fix indicators
    "fix": ("Fix", "FixVerb"),
    "fixes": ("Fix", "FixVerb"),
    "fixed": ("Fix", "FixVerb"),
    "patch": ("Fix", "FixVerb"),
    "patches": ("Fix", "FixVerb"),
    "patched": ("Fix", "FixVerb"),
    "resolved": ("Fix", "FixVerb"),
    "resolves": ("Fix", "FixVerb"),
    "corrected": ("Fix", "FixVerb"),
    "corrects": ("Fix", "FixVerb"),
    "bug": ("Fix",),
    "bugs": ("Fix",),
    "bugfix": ("Fix",),
    "bugfixes": ("Fix",),
    "issue": ("Fix",),
    "issues": ("Fix",),
    "regression": ("Fix",),
    # Security indicators
    "vulnerability": ("Security",),
    "vulnerabilities": ("Security",),
    "vulnerable": ("Security",),
    "security": ("Security",),
    "cve": ("Security",),
    "exploit": ("Security",),
    "injection": ("Security",),
    "xss": ("Security",),
    "csrf": ("Security",),
    "authentication": ("Security",),
    "authorization": ("Security",),
    "encryption": ("Security",),
    # Performance indicators
    "performance": ("Performance",),
    "optimization": ("Performance",),
    "optimizations": ("Performance",),
    "optimized": ("Performance",),
    "optimize": ("Performance",),
    "faster": ("Performance",),
    "slower": ("Performance",),
    "speed": ("Performance",),
    "latency": ("Performance",),
    "memory": ("Performance",),
    "cpu": ("Performance",),
    # Refactor indicators
    "refactor": ("Refactor",),
    "refactors": ("Refactor",),
    "refactored": ("Refactor",),
    "refactoring": ("Refactor",),
    "restructure": ("Refactor",),
    "restructured": ("Refactor",),
    "cleanup": ("Refactor",),
    "simplify": ("Refactor",),
    "simplified": ("Refactor",),
    # Chore indicators
    "chore": ("Chore",),
    "chores": ("Chore",),
    "dependency": ("Chore",),
    "dependencies": ("Chore",),
    "upgrade": ("Chore",),
    "upgraded": ("Chore",),
    "bump": ("Chore",),
    "bumped": ("Chore",),
    "ci": ("Chore",),
    "cd": ("Chore",),
    "pipeline": ("Chore",),
    "workflow": ("Chore",),
    # Documentation indicators
    "docs": ("Documentation",),
    "documentation": ("Documentation",),
    "readme": ("Documentation",),
    "api-docs": ("Documentation",),
    "javadoc": ("Documentation",),
    "jsdoc": ("Documentation",),
    "example": ("Documentation",),
    "examples": ("Documentation",),
    "tutorial": ("Documentation",),
    "typo": ("Documentation",),
    "typos": ("Documentation",),
    # Severity modifiers
    "major": ("Major",),
    "minor": ("Minor",),
    "critical": ("Critical",),
    "important": ("Critical",),
    "urgent": ("Critical",),
}


@dataclass(frozen=True)
class Lexicon:
    """Read-only word lookup plus an is-a hierarchy between tags."""

    words: Mapping[str, FrozenSet[str]]
    hierarchy: Mapping[str, FrozenSet[str]]

    def ancestors(self, tag: str) -> FrozenSet[str]:
        """All tags that `tag` is-a, transitively."""
        found = set()
        pending: List[str] = list(self.hierarchy.get(tag, ()))
        while pending:
            parent = pending.pop()
            if parent in found:
                continue
            found.add(parent)
            pending.extend(self.hierarchy.get(parent, ()))
        return frozenset(found)

    def is_a(self, tag: str, parent: str) -> bool:
        return tag == parent or parent in self.ancestors(tag)

    def tags_for(self, tokens: Iterable[str]) -> FrozenSet[str]:
        """Tags carried by the tokens, including every ancestor tag.

        Unknown words contribute nothing.
        """
        tags = set()
        for token in tokens:
            for tag in self.words.get(token, ()):
                tags.add(tag)
                tags.update(self.ancestors(tag))
        return frozenset(tags)


def build_lexicon(
    words: Mapping[str, Iterable[str]], hierarchy: Mapping[str, Iterable[str]]
) -> Lexicon:
    """Freeze word and hierarchy tables into a Lexicon."""
    return Lexicon(
        words=MappingProxyType({word.lower(): frozenset(tags) for word, tags in words.items()}),
        hierarchy=MappingProxyType({tag: frozenset(parents) for tag, parents in hierarchy.items()}),
    )


def build_default_lexicon() -> Lexicon:
    """Build the release note lexicon."""
    return build_lexicon(WORD_TAGS, TAG_HIERARCHY)


DEFAULT_LEXICON = build_default_lexicon()
