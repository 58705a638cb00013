"""Tests for TF-IDF term ranking."""

from changesage.analysis.tfidf import DEFAULT_STOPWORDS, compute_tfidf_rankings, preprocess_document

SECTIONS = {
    "Features": ["Added plugin support", "plugin hooks"],
    "Fixes": ["Fixed plugin crash"],
}


def test_preprocess_document():
    assert preprocess_document("See https://example.com/x for *Details*!") == "see  for details"
    assert preprocess_document(None) == ""


def test_rankings_order_and_limit():
    rankings = compute_tfidf_rankings(SECTIONS, term_limit=3)
    assert [r.term for r in rankings] == ["plugin", "crash", "fixed"]
    assert rankings[1].score == rankings[2].score


def test_scores_are_rounded():
    for ranking in compute_tfidf_rankings(SECTIONS):
        assert round(ranking.score, 4) == ranking.score


def test_stopwords_and_urls_are_dropped():
    rankings = compute_tfidf_rankings({"Notes": ["See https://example.com/foo for the details"]})
    assert {r.term for r in rankings} == {"see", "details"}
    assert not DEFAULT_STOPWORDS & {r.term for r in rankings}


def test_empty_input(log_records):
    assert compute_tfidf_rankings({}) == []
    assert compute_tfidf_rankings({"Notes": []}) == []
    assert len(log_records.at("WARNING")) == 2


def test_only_stopwords(log_records):
    assert compute_tfidf_rankings({"Notes": ["the and is"]}) == []
    assert log_records.at("WARNING")
