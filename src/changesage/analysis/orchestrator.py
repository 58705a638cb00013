"""Batch categorization of every sentence in a package's parsed release notes."""

from typing import Any, Dict, Mapping, Optional

from loguru import logger

from changesage.analysis.categorizer import categorize_sentence
from changesage.analysis.post_process import post_process_results
from changesage.nlp.lexicon import DEFAULT_LEXICON, Lexicon
from changesage.types.categories import CategorizedResults


class CategorizationError(ValueError):
    """Raised when parsed sections are not usable at all."""


def extract_sentence(item: Any) -> str:
    """Get the sentence text from a bare string, a {"text": ...} mapping or an object with .text."""
    if isinstance(item, str):
        return item
    if isinstance(item, Mapping):
        text = item.get("text")
    else:
        text = getattr(item, "text", None)
    return text if isinstance(text, str) else ""


def analyze_log_categorization(
    parsed_sections: Mapping[str, Any],
    lexicon: Lexicon = DEFAULT_LEXICON,
    package_name: Optional[str] = None,
) -> CategorizedResults:
    """Categorize all sentences of all sections and post-process the results.

    Sections and items are processed in their given order. A malformed
    section or item is logged and skipped; it never aborts the batch.
    """
    label = package_name or "unknown package"
    if not isinstance(parsed_sections, Mapping):
        raise CategorizationError(
            f"{label}: expected parsed sections as a mapping, got {type(parsed_sections).__name__}"
        )

    results = CategorizedResults()
    # Keyed by sentence text; the first recorded confidence wins
    confidence_scores: Dict[str, float] = {}

    for section, items in parsed_sections.items():
        if not isinstance(items, (list, tuple)) or len(items) == 0:
            logger.warning(f"No sentences to analyze in section: {section}")
            continue

        for item in items:
            sentence = extract_sentence(item)
            try:
                outcome = categorize_sentence(sentence, str(section), lexicon)
            except Exception as e:
                logger.error(f"{label}: failed to categorize '{sentence}' in section {section}: {str(e)}")
                continue

            results.bucket(outcome.bucket).append(sentence)
            if outcome.accepted:
                confidence_scores.setdefault(sentence, outcome.confidence)

    post_process_results(results, confidence_scores)

    logger.debug(f"{label}: categorized {results.count()} sentences")
    return results
