"""Tests for SentenceContext and the tag-based matchers."""

from changesage.nlp.context import SentenceContext, category_tag_scores, detect_category, has_breaking_change
from changesage.types.categories import Category


def test_build():
    context = SentenceContext.build("Fixed a null-pointer BUG.")
    assert context.raw == "Fixed a null-pointer BUG."
    assert context.text == "fixed a null-pointer bug"
    assert context.tokens == ("fixed", "a", "null-pointer", "bug")
    assert context.has_tag("Fix")


def test_build_handles_none():
    context = SentenceContext.build(None)
    assert context.text == ""
    assert context.tags == frozenset()


def test_category_tag_scores():
    context = SentenceContext.build("Fixed a null pointer bug")
    assert category_tag_scores(context) == {Category.FIX: 23}
    assert detect_category(context) == Category.FIX


def test_no_category_tag():
    assert detect_category(SentenceContext.build("Thanks to all contributors")) is None
    assert detect_category(SentenceContext.build("")) is None


def test_verb_tags_alone_do_not_qualify():
    assert detect_category(SentenceContext.build("Removes the old option")) is None


def test_ties_go_to_the_earlier_category():
    assert detect_category(SentenceContext.build("security docs")) == Category.SECURITY


def test_has_breaking_change():
    assert has_breaking_change(SentenceContext.build("This no longer supports Node 12"))
    assert has_breaking_change(SentenceContext.build("Option was renamed to `mode`"))
    assert not has_breaking_change(SentenceContext.build("Fixed a typo"))


def test_breaking_tags_trigger_detector():
    assert has_breaking_change(SentenceContext.build("Removes the old option"))
    assert has_breaking_change(SentenceContext.build("Node 12 support is discontinued"))


def test_removal_phrases_trigger_detector():
    assert has_breaking_change(SentenceContext.build("Deleting a key now throws"))
    assert not has_breaking_change(SentenceContext.build("Fixed dropdown alignment"))
