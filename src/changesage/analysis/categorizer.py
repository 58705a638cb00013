"""Multi-pass sentence categorization with confidence scoring.

Pass 1 looks for lexicon tags in the sentence, pass 1.5 folds in what the
section heading says, pass 2 scores the weighted pattern tiers and pass 3 lets
the breaking change detector override anything short of 0.9. The numbers
below are tuned together; changing one shifts classification outcomes.
"""

from dataclasses import replace

from loguru import logger

from changesage.nlp.context import SentenceContext, detect_category, has_breaking_change
from changesage.nlp.lexicon import CATEGORY_TAGS, DEFAULT_LEXICON, Lexicon
from changesage.nlp.patterns import CATEGORY_PATTERNS, SCORE_DIVISOR, SECTION_BONUS, section_matches_category, tier_scores
from changesage.types.categories import CategorizationOutcome, Category, ScoredMatch

TAG_MATCH_CONFIDENCE = 0.8
SECTION_ONLY_CONFIDENCE = 0.4
SECTION_AGREEMENT_BOOST = 0.2
SECTION_PATTERN_CONFIDENCE = 0.35
SECTION_PATTERN_BOOST = 0.15
BREAKING_OVERRIDE_CONFIDENCE = 0.9

ACCEPT_THRESHOLD = 0.5
MISCELLANEOUS_THRESHOLD = 0.2


def _boost(match: ScoredMatch, amount: float) -> ScoredMatch:
    return replace(match, confidence=min(match.confidence + amount, 1.0))


def resolve_outcome(match: ScoredMatch) -> CategorizationOutcome:
    """Turn the best match into an accepted, miscellaneous or uncategorized outcome."""
    if match.category is not None and match.confidence >= ACCEPT_THRESHOLD:
        return CategorizationOutcome(category=match.category, confidence=match.confidence)
    if match.confidence > MISCELLANEOUS_THRESHOLD:
        return CategorizationOutcome(confidence=match.confidence, is_miscellaneous=True)
    return CategorizationOutcome(confidence=match.confidence)


def categorize_sentence(sentence: str, section: str, lexicon: Lexicon = DEFAULT_LEXICON) -> CategorizationOutcome:
    """Categorize a single sentence using its section heading as context."""
    doc = SentenceContext.build(sentence, lexicon)
    section_doc = SentenceContext.build(section, lexicon)

    best_match = ScoredMatch()

    # Pass 1: tag-based detection
    tag_category = detect_category(doc)
    if tag_category:
        best_match = ScoredMatch(tag_category, TAG_MATCH_CONFIDENCE)

    # Pass 1.5: section heading context
    section_category = detect_category(section_doc)
    if section_category and not tag_category:
        best_match = ScoredMatch(section_category, SECTION_ONLY_CONFIDENCE)
    elif section_category and section_category == tag_category:
        best_match = _boost(best_match, SECTION_AGREEMENT_BOOST)

    for category, patterns in CATEGORY_PATTERNS.items():
        for pattern in patterns.high:
            if not pattern.search(section_doc.text):
                continue
            if best_match.category == category:
                best_match = _boost(best_match, SECTION_PATTERN_BOOST)
            elif best_match.category is None:
                best_match = ScoredMatch(category, SECTION_PATTERN_CONFIDENCE)

    logger.trace(f"After tag and section passes: {best_match} for '{sentence}'")

    # Pass 2: weighted pattern scoring
    scores = tier_scores(doc.text)
    for category in Category:
        category_score = scores[category]
        if section_matches_category(section, category) or section_doc.has_tag(CATEGORY_TAGS[category]):
            category_score += SECTION_BONUS

        confidence = min(category_score / SCORE_DIVISOR, 1.0)
        if confidence > best_match.confidence:
            best_match = ScoredMatch(category, confidence)

    # Pass 3: breaking change override
    if has_breaking_change(doc) and best_match.confidence < BREAKING_OVERRIDE_CONFIDENCE:
        best_match = ScoredMatch(Category.BREAKING_CHANGE, BREAKING_OVERRIDE_CONFIDENCE)

    outcome = resolve_outcome(best_match)
    logger.trace(f"Categorized '{sentence}' under '{section}' as {outcome.bucket} ({best_match.confidence:.3f})")
    return outcome

