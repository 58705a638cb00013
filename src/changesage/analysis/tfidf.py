"""Rank the most salient terms in parsed release notes with TF-IDF."""

import re
from typing import AbstractSet, Any, List, Mapping

from loguru import logger
from sklearn.feature_extraction.text import TfidfVectorizer

from changesage.analysis.orchestrator import extract_sentence
from changesage.types.packages import TermRanking

DEFAULT_STOPWORDS = frozenset(
    {
        "the", "and", "is", "in", "to", "of", "for", "with", "on", "at", "by",
        "an", "it", "as", "be", "from", "or", "this", "that", "which", "was",
        "are", "these", "those", "can", "will", "a",
    }
)

URL_PATTERN = re.compile(r"https?://\S+")
NON_ALPHANUMERIC = re.compile(r"[^a-zA-Z0-9\s]")


def preprocess_document(text: str) -> str:
    """Drop URLs and special characters, then lower-case."""
    if not text or not isinstance(text, str):
        return ""
    text = URL_PATTERN.sub("", text)
    text = NON_ALPHANUMERIC.sub("", text)
    return text.strip().lower()


def _section_documents(parsed_sections: Mapping[str, Any]) -> List[str]:
    documents = []
    for items in parsed_sections.values():
        if not isinstance(items, (list, tuple)):
            continue
        parts = [preprocess_document(extract_sentence(item)) for item in items]
        document = " ".join(part for part in parts if part)
        if document:
            documents.append(document)
    return documents


def compute_tfidf_rankings(
    parsed_sections: Mapping[str, Any],
    stopwords: AbstractSet[str] = DEFAULT_STOPWORDS,
    term_limit: int = 10,
) -> List[TermRanking]:
    """Compute the top terms across all sections.

    Each non-empty section is one document. A term's score is the sum of its
    TF-IDF weights over the sections, rounded to four places. Results are
    ordered by descending score, then alphabetically.
    """
    if not parsed_sections:
        logger.warning("No parsed sections, skipping TF-IDF computation.")
        return []

    documents = _section_documents(parsed_sections)
    if not documents:
        logger.warning("Empty combined document, skipping TF-IDF computation.")
        return []

    vectorizer = TfidfVectorizer(lowercase=False, stop_words=sorted(stopwords))
    try:
        matrix = vectorizer.fit_transform(documents)
    except ValueError as e:
        logger.warning(f"No terms left for TF-IDF computation: {str(e)}")
        return []

    totals = matrix.sum(axis=0).tolist()[0]
    rankings = [
        TermRanking(term=term, score=round(float(score), 4))
        for term, score in zip(vectorizer.get_feature_names_out(), totals)
    ]
    rankings.sort(key=lambda ranking: (-ranking.score, ranking.term))

    logger.debug(f"TF-IDF rankings: {rankings[:term_limit]}")
    return rankings[:term_limit]
