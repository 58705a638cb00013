"""Second pass over categorized results to reduce false positives."""

from typing import Dict, Set

from loguru import logger

from changesage.types.categories import BUCKETS, CategorizedResults

BREAKING_RECHECK_THRESHOLD = 0.7


def demote_weak_breaking_changes(results: CategorizedResults, confidence_scores: Dict[str, float]) -> None:
    """Move breaking changes recorded below the recheck bar into miscellaneous."""
    kept = []
    for sentence in results.breaking_change:
        if confidence_scores.get(sentence, 0.0) < BREAKING_RECHECK_THRESHOLD:
            logger.debug(f"Demoting low confidence breaking change: {sentence}")
            results.miscellaneous.append(sentence)
        else:
            kept.append(sentence)
    results.breaking_change = kept


def deduplicate(results: CategorizedResults) -> None:
    """Keep each sentence only in the first bucket (in BUCKETS order) holding it."""
    seen: Set[str] = set()
    for name in BUCKETS:
        unique = []
        for sentence in results.bucket(name):
            if sentence in seen:
                continue
            seen.add(sentence)
            unique.append(sentence)
        setattr(results, name, unique)


def post_process_results(results: CategorizedResults, confidence_scores: Dict[str, float]) -> None:
    """Apply the breaking change recheck, then global de-duplication."""
    demote_weak_breaking_changes(results, confidence_scores)
    deduplicate(results)
