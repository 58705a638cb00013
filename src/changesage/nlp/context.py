"""Normalized sentence wrapper and the tag-based matchers that run over it."""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Optional, Pattern, Tuple

from changesage.nlp.lexicon import CATEGORY_TAGS, DEFAULT_LEXICON, VERB_TAGS, Lexicon
from changesage.nlp.normalize import normalize_text, tokenize
from changesage.nlp.patterns import BREAKING_PATTERNS, CONTEXT_PATTERN_WEIGHT, CONTEXT_PATTERNS, count_matches, matches_any
from changesage.types.categories import Category

CATEGORY_TAG_WEIGHT = 10
VERB_TAG_WEIGHT = 8

BREAKING_TAGS = ("BreakingChange", "BreakingVerb")


@dataclass(frozen=True)
class SentenceContext:
    """A sentence (or heading) after normalization and tagging."""

    raw: str
    text: str
    tokens: Tuple[str, ...]
    tags: FrozenSet[str]

    @classmethod
    def build(cls, raw: str, lexicon: Lexicon = DEFAULT_LEXICON) -> "SentenceContext":
        text = normalize_text(raw or "")
        tokens = tuple(tokenize(text))
        return cls(raw=raw or "", text=text, tokens=tokens, tags=lexicon.tags_for(tokens))

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags

    def matches(self, patterns: Iterable[Pattern[str]]) -> bool:
        return matches_any(patterns, self.text)


def category_tag_scores(context: SentenceContext) -> Dict[Category, int]:
    """Score every category whose dedicated tag is present."""
    scores: Dict[Category, int] = {}
    if not context.has_tag("Category"):
        return scores

    for category in Category:
        if not context.has_tag(CATEGORY_TAGS[category]):
            continue
        score = CATEGORY_TAG_WEIGHT
        verb_tag = VERB_TAGS.get(category)
        if verb_tag and context.has_tag(verb_tag):
            score += VERB_TAG_WEIGHT
        score += CONTEXT_PATTERN_WEIGHT * count_matches(CONTEXT_PATTERNS.get(category, ()), context.text)
        scores[category] = score
    return scores


def detect_category(context: SentenceContext) -> Optional[Category]:
    """Pick the best tagged category, earlier categories winning ties."""
    best: Optional[Category] = None
    best_score = 0
    for category, score in category_tag_scores(context).items():
        if score > best_score:
            best, best_score = category, score
    return best


def has_breaking_change(context: SentenceContext) -> bool:
    """Detect breaking changes from their tags or from the dedicated phrase list."""
    if any(context.has_tag(tag) for tag in BREAKING_TAGS):
        return True
    return context.matches(BREAKING_PATTERNS)
