"""Weighted pattern bank for release note categorization.

Every category owns three tiers of case-insensitive regular expressions. A
pattern matches when it occurs anywhere in the normalized text; nothing is
anchored to the whole sentence. Context patterns are a separate, weaker set
used during tag-based detection, and the breaking change detector has its own
higher-precision phrase list.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Pattern, Tuple

from changesage.types.categories import Category


class PatternTier(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


TIER_WEIGHTS: Mapping[PatternTier, int] = MappingProxyType(
    {PatternTier.HIGH: 10, PatternTier.MEDIUM: 5, PatternTier.LOW: 2}
)
CONTEXT_PATTERN_WEIGHT = 5
SECTION_BONUS = 3
SCORE_DIVISOR = 15


def _compile(patterns: Iterable[str]) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


@dataclass(frozen=True)
class CategoryPatternSet:
    """High, medium and low confidence patterns for one category."""

    high: Tuple[Pattern[str], ...] = field(default_factory=tuple)
    medium: Tuple[Pattern[str], ...] = field(default_factory=tuple)
    low: Tuple[Pattern[str], ...] = field(default_factory=tuple)

    @classmethod
    def from_strings(
        cls, high: Iterable[str] = (), medium: Iterable[str] = (), low: Iterable[str] = ()
    ) -> "CategoryPatternSet":
        return cls(high=_compile(high), medium=_compile(medium), low=_compile(low))

    def tier(self, tier: PatternTier) -> Tuple[Pattern[str], ...]:
        return getattr(self, tier.value)


CATEGORY_PATTERNS: Mapping[Category, CategoryPatternSet] = MappingProxyType(
    {
        Category.BREAKING_CHANGE: CategoryPatternSet.from_strings(
            high=[
                r"breaking[\s-]?change",
                r"\bremoved?\s+\w+\s+(api|method|function|class)",
                r"no\s+longer\s+support",
                r"incompatible\s+with",
                r"requires?\s+migration",
                r"must\s+update",
                r"discontinued",
                r"\bapi\s+break",
            ],
            medium=[
                r"\b(drop|delete)s?\s+support",
                r"legacy\s+\w+\s+removed",
                r"renamed?\s+(from|to)",
                r"moved?\s+(from|to)",
                r"replaced?\s+with",
                r"deprecate.*remove",
            ],
            low=[
                r"significant\s+change",
                r"major\s+update",
                r"not\s+backwards?\s+compatible",
            ],
        ),
        Category.FEATURE: CategoryPatternSet.from_strings(
            high=[
                r"\b(add|adds|added)\s+\w+\s+(feature|support|functionality)",
                r"new\s+(feature|functionality|capability)",
                r"introduce[ds]?\s+\w+",
                r"implement[eds]?\s+\w+",
                r"now\s+supports?",
            ],
            medium=[
                r"enhance[ds]?\s+\w+",
                r"improve[ds]?\s+\w+",
                r"extend[eds]?\s+support",
                r"enable[ds]?\s+\w+",
            ],
            low=[
                r"support\s+for\s+\w+",
                r"allows?\s+\w+\s+to",
                r"provides?\s+\w+",
            ],
        ),
        Category.FIX: CategoryPatternSet.from_strings(
            high=[
                r"fix(es|ed)?\s+\w+\s+(bug|issue|problem)",
                r"resolve[ds]?\s+\w+\s+issue",
                r"patch(es|ed)?\s+\w+",
                r"correct(s|ed)?\s+\w+",
                r"fix(es|ed)?\s+(crash|memory\s+leak)",
            ],
            medium=[
                r"address(es|ed)?\s+\w+\s+issue",
                r"handle[ds]?\s+\w+\s+correctly",
                r"prevent[ds]?\s+\w+\s+error",
            ],
            low=[
                r"regression\s+fix",
                r"bug\s*fix",
                r"issue\s+#\d+",
            ],
        ),
        Category.DEPRECATION: CategoryPatternSet.from_strings(
            high=[
                r"\b(is|are|been|now)\s+deprecated",
                r"\bdeprecate[ds]?\s+(the\s+)?\S+\s+in\s+favou?r\s+of",
                r"\bdeprecation\s+(warning|notice)",
                r"\bwill\s+be\s+removed\s+in\s+(a\s+|the\s+)?(future|next|upcoming|v?\d)",
            ],
            medium=[
                r"\bdeprecated\b",
                r"\bobsolete\b",
                r"\bin\s+favou?r\s+of\b",
                r"\bscheduled\s+for\s+removal",
            ],
            low=[
                r"\blegacy\b",
                r"\bno\s+longer\s+recommended",
            ],
        ),
        Category.SECURITY: CategoryPatternSet.from_strings(
            high=[
                r"\bcve-\d{4}-\d+",
                r"\bsecurity\s+(fix|patch|vulnerability|issue|advisory|update)",
                r"\b(fix|fixes|fixed|patch|patches|patched)\s+(an?\s+)?(\w+\s+)?vulnerabilit",
                r"\b(xss|csrf|xxe|ssrf)\b",
                r"\b(sql|command|code|header)\s+injection",
                r"\bprototype\s+pollution",
            ],
            medium=[
                r"\bvulnerabilit(y|ies)\b",
                r"\bsecurity\b",
                r"\b(sanitiz|escap)\w*\s+\w+",
                r"\bdenial\s+of\s+service|\bredos\b",
            ],
            low=[
                r"\bauth(entication|orization)\b",
                r"\bencrypt\w*",
                r"\bharden\w*",
            ],
        ),
        Category.DOCUMENTATION: CategoryPatternSet.from_strings(
            high=[
                r"\b(update[ds]?|add(s|ed)?|improve[ds]?|fix(es|ed)?|clarif(y|ies|ied))\s+(the\s+)?(docs|documentation|readme)",
                r"\bdocumentation\s+(for|of|on|about)\b",
                r"\breadme\b",
            ],
            medium=[
                r"\b(docs|documentation)\b",
                r"\b(examples?|tutorials?)\b",
                r"\btypos?\b",
            ],
            low=[
                r"\b(jsdoc|tsdoc|docstrings?)\b",
                r"\bcomments?\b",
                r"\bchangelog\b",
            ],
        ),
        Category.PERFORMANCE: CategoryPatternSet.from_strings(
            high=[
                r"\b(improve[ds]?|boost(s|ed)?|increase[ds]?)\s+(\w+\s+)?(performance|speed|throughput)",
                r"\b(\d+(\.\d+)?x|\d+%)\s+faster",
                r"\breduce[ds]?\s+(\w+\s+)?(memory|cpu|latency|bundle\s+size)",
                r"\bperformance\s+(improvement|boost|optimi[sz]ation)",
                r"\bmemory\s+(usage|footprint)",
            ],
            medium=[
                r"\boptimi[sz](e|es|ed|ation)\b",
                r"\bfaster\b",
                r"\bperformance\b",
                r"\blazy\s+load|\blazily\s+load",
                r"\bcach(e|es|ed|ing)\b",
            ],
            low=[
                r"\bspeed\b",
                r"\befficien(t|cy)\b",
                r"\blatency\b",
            ],
        ),
        Category.REFACTOR: CategoryPatternSet.from_strings(
            high=[
                r"\brefactor(s|ed|ing)?\b",
                r"\b(restructur|reorganiz|rewr[io]t)\w*\s+(the\s+)?\w+",
                r"\bcode\s+clean\s?up\b",
                r"\binternal\s+(changes?|refactor\w*|restructur\w*)",
            ],
            medium=[
                r"\bclean(ed|s)?\s*up\b",
                r"\bsimplif(y|ies|ied)\b",
                r"\bextract(s|ed)?\s+\w+\s+(into|to)\b",
                r"\b(migrat|convert)(e|es|ed)?\s+(\w+\s+)?to\s+typescript",
            ],
            low=[
                r"\binternal\b",
                r"\brenamed?\b",
            ],
        ),
        Category.CHORE: CategoryPatternSet.from_strings(
            high=[
                r"\bbump(s|ed)?\s+\S+\s+(from|to)\b",
                r"\b(upgrade[ds]?|update[ds]?|bump(s|ed)?)\s+(\w+\s+)?(dependency|dependencies|deps|devdependencies)",
                r"\b(ci|build)\s+(pipeline|workflow|config|configuration)",
                r"\bgithub\s+actions?\b",
            ],
            medium=[
                r"\b(dependency|dependencies|deps)\b",
                r"\b(ci|cd)\b",
                r"\b(lint|linting|eslint|prettier)\b",
                r"\btooling\b",
            ],
            low=[
                r"\bchores?\b",
                r"\bbuild\b",
                r"\bpackage(-lock)?\.json\b",
            ],
        ),
    }
)

# Phrase patterns for tag-based detection, weighted by CONTEXT_PATTERN_WEIGHT
CONTEXT_PATTERNS: Mapping[Category, Tuple[Pattern[str], ...]] = MappingProxyType(
    {
        Category.BREAKING_CHANGE: _compile(
            [
                r"\bapi\s+(break|change|update)",
                r"\binterface\s+(change|update|modification)",
                r"\bcontract\s+(change|modification)",
                r"\bsignature\s+(change|update)",
                r"\b(remove|drop|delete)\w*\s(.*\s)?(api|method|function|class|interface)\b",
                r"\bno\s+longer\s+(available|supported|exists)",
                r"\bmigration\s+(required|needed|guide)",
                r"\bupgrade\s+(required|needed)",
                r"\bmust\s+(update|upgrade)\s+to\b",
                r"\bnot\s+(compatible|backwards-compatible)",
                r"\bbreaks?\s+(compatibility|existing)",
                r"\bincompatible\s+(change|update|with)",
                r"\brename\w*\s+(from|to)\b",
                r"\bmove\w*\s+(from|to)\b",
                r"\breplace\w*\s+(by|with)\b",
            ]
        ),
        Category.FEATURE: _compile(
            [
                r"\b(add|introduce|implement)\w*\s(.*\s)?(feature|functionality|capability)",
                r"\bnew\s+(feature|functionality|api|method|option)",
                r"\bnow\s+(supports?|includes?|provides?)",
                r"\benhanced?\s+(with|to\s+include)",
                r"\bextends?\s+(support|functionality)",
                r"\benable\w*\s(.*\s)?(feature|support|functionality)",
                r"\ballow\w*\s(.*\s)?to\b",
                r"\bprovides?\s(.*\s)?(capability|ability)",
                r"\badds?\s+support\s+(for|to)\b",
                r"\bsupports?\s+(for|now)\b",
                r"\bcompatible\s+with\b",
            ]
        ),
        Category.FIX: _compile(
            [
                r"\bfix\w*\s(.*\s)?(bug|issue|problem|error)s?\b",
                r"\bresolve\w*\s(.*\s)?(issue|problem|error)s?\b",
                r"\bcorrect\w*\s(.*\s)?(behavior|behaviour|issue|problem)s?\b",
                r"\bfix\w*\s+(crash|memory\s+leak|regression)",
                r"\bpatch\w*\s(.*\s)?(vulnerability|issue|bug)",
                r"\baddress\w*\s(.*\s)?(issue|concern|problem)s?\b",
                r"\bprevent\w*\s(.*\s)?(error|crash|issue)s?\b",
                r"\bavoid\w*\s(.*\s)?(error|crash|issue)s?\b",
                r"\bhandle\w*\s(.*\s)?(correctly|properly)\b",
            ]
        ),
        Category.DEPRECATION: _compile(
            [
                r"\b(is|are|been|now)\s+deprecated",
                r"\bdeprecat\w*\s(.*\s)?in\s+favou?r\s+of\b",
                r"\bwill\s+be\s+removed\b",
                r"\bscheduled\s+for\s+removal",
                r"\bdeprecation\s+(warning|notice)",
            ]
        ),
        Category.SECURITY: _compile(
            [
                r"\bfix\w*\s(.*\s)?vulnerabilit",
                r"\bpatch\w*\s(.*\s)?(security|vulnerabilit)",
                r"\baddress\w*\s(.*\s)?(security|vulnerabilit)",
                r"\bimprove\w*\s(.*\s)?security\b",
                r"\benhance\w*\s(.*\s)?(security|protection)\b",
                r"\bharden\w*\s+against\b",
                r"\b(prevent|fix|patch)\w*\s(.*\s)?(injection|xss|csrf|xxe)\b",
                r"\bsecure\w*\s(.*\s)?(endpoint|api|data)\b",
                r"\bencrypt\w*\s(.*\s)?(data|communication)\b",
            ]
        ),
        Category.DOCUMENTATION: _compile(
            [
                r"\b(update|add|improve|fix|clarif)\w*\s(.*\s)?(docs|documentation|readme|guide)\b",
                r"\b(typo|typos)\s+in\b",
                r"\bmigration\s+guide\b",
                r"\bapi\s+reference\b",
            ]
        ),
        Category.PERFORMANCE: _compile(
            [
                r"\b(improve|enhance|boost)\w*\s(.*\s)?(performance|speed)\b",
                r"\bfaster\s(.*\s)?(execution|processing|loading)\b",
                r"\breduce\w*\s(.*\s)?(latency|time|overhead)\b",
                r"\boptimi[sz]e\w*\s(.*\s)?(memory|cpu|resource)s?\b",
                r"\breduce\w*\s(.*\s)?(memory|cpu)\s+usage\b",
                r"\bmore\s+efficient\b",
                r"\b(add|improve)\w*\s(.*\s)?caching\b",
                r"\bcache\w*\s(.*\s)?(results|data)\b",
            ]
        ),
        Category.REFACTOR: _compile(
            [
                r"\b(refactor|restructure|reorganize)\w*\s(.*\s)?(code|internals|module|logic)\b",
                r"\bclean\w*\s+up\s(.*\s)?(code|internals)\b",
                r"\bno\s+(functional|behaviou?r)\s+changes?\b",
                r"\bsimplif\w*\s(.*\s)?(logic|implementation|code)\b",
            ]
        ),
        Category.CHORE: _compile(
            [
                r"\b(bump|upgrade|update)\w*\s(.*\s)?(dependency|dependencies|deps)\b",
                r"\b(ci|build|release)\s+(pipeline|workflow|scripts?|config|configuration|process)\b",
                r"\bci\s+(runs?|jobs?|builds?|checks?)\b",
                r"\b(dev|peer)\s*dependenc(y|ies)\b",
            ]
        ),
    }
)

# Higher-precision phrases that always signal a breaking change
BREAKING_PATTERNS: Tuple[Pattern[str], ...] = _compile(
    [
        r"\b(remov(e|es|ed|ing)|drop(s|ped|ping)?|delet(e|es|ed|ing))\s+(the\s+|an?\s+)?\w+",
        r"\bno\s+longer\s+(support|supports|supported|work|works)\b",
        r"\bwill\s+(break|fail|stop)\b",
        r"\brequires?\s+migration\b",
        r"\bincompatible\s+with\b",
        r"\bmust\s+(update|upgrade|change)\b",
        r"\blegacy\s(.*\s)?(removed|dropped)\b",
        r"\bdeprecat\w*\s+and\s+remov\w*",
        r"\bbreak\w*\s+(backwards?\s+)?compatibility\b",
        r"\bbreaking[\s-]?changes?\b",
        r"\bapi\s+(change|changes|changed)\b",
        r"\brenamed?\s+(from|to)\b",
        r"\breplaced?\s+with\b",
    ]
)

# Plain keywords looked for in section headings
SECTION_KEYWORDS: Mapping[Category, Tuple[str, ...]] = MappingProxyType(
    {
        Category.BREAKING_CHANGE: ("breaking", "incompatible", "migration"),
        Category.FEATURE: ("feature", "new", "added", "enhancement"),
        Category.FIX: ("fix", "bug", "patch", "resolved"),
        Category.SECURITY: ("security", "vulnerability", "cve"),
        Category.PERFORMANCE: ("performance", "optimization", "speed"),
        Category.DEPRECATION: ("deprecated", "deprecation", "obsolete"),
        Category.DOCUMENTATION: ("docs", "documentation", "readme"),
        Category.REFACTOR: ("refactor", "cleanup", "internal"),
        Category.CHORE: ("chore", "dependency", "build", "ci"),
    }
)


def matches_any(patterns: Iterable[Pattern[str]], text: str) -> bool:
    """Check whether any pattern occurs anywhere in the text."""
    return any(pattern.search(text) for pattern in patterns)


def count_matches(patterns: Iterable[Pattern[str]], text: str) -> int:
    """Count how many of the patterns occur in the text."""
    return sum(1 for pattern in patterns if pattern.search(text))


def section_matches_category(section: str, category: Category) -> bool:
    """Check if a section heading mentions one of the category's keywords."""
    section_lower = section.lower()
    return any(keyword in section_lower for keyword in SECTION_KEYWORDS.get(category, ()))


def tier_scores(text: str) -> Dict[Category, int]:
    """Weighted tier points for every category against the text."""
    scores: Dict[Category, int] = {}
    for category, pattern_set in CATEGORY_PATTERNS.items():
        scores[category] = sum(
            TIER_WEIGHTS[tier] * count_matches(pattern_set.tier(tier), text) for tier in PatternTier
        )
    return scores


def all_patterns() -> List[Pattern[str]]:
    """Every compiled pattern in the bank."""
    patterns: List[Pattern[str]] = list(BREAKING_PATTERNS)
    for pattern_set in CATEGORY_PATTERNS.values():
        for tier in PatternTier:
            patterns.extend(pattern_set.tier(tier))
    for context in CONTEXT_PATTERNS.values():
        patterns.extend(context)
    return patterns
