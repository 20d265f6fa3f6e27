"""
Tests for marker keyword matching.
"""

import pytest

from markerscan.core.scanner import MarkerMatcher


@pytest.fixture
def matcher():
    return MarkerMatcher()


@pytest.mark.parametrize(
    "text, marker_type, tag, content",
    [
        ("TODO: fix this bug", "TODO", None, "fix this bug"),
        ("TODO(username): implement feature", "TODO", "username", "implement feature"),
        ("FIXME: this is broken", "FIXME", None, "this is broken"),
        ("HACK: workaround here", "HACK", None, "workaround here"),
        ("BUG(description): critical issue", "BUG", "description", "critical issue"),
        ("NOTE: remember this", "NOTE", None, "remember this"),
        ("XXX: remove later", "XXX", None, "remove later"),
        ("// TODO: lowercase should match", "TODO", None, "lowercase should match"),
        ("todo - lower case keyword", "TODO", None, "lower case keyword"),
        ("Fixme no separator at all", "FIXME", None, "no separator at all"),
        ("TODO (bob) - spaced out", "TODO", "bob", "spaced out"),
        ("FIXME-now", "FIXME", None, "now"),
        ("TODO:: only one separator is eaten", "TODO", None, ": only one separator is eaten"),
        ("TODO(JIRA-123)", "TODO", "JIRA-123", ""),
        ("  TODO:   padded content   ", "TODO", None, "padded content"),
        ("see below. NOTE: mid-sentence", "NOTE", None, "mid-sentence"),
    ],
)
def test_match(matcher, text, marker_type, tag, content):
    result = matcher.match(text)

    assert result is not None
    assert result.marker_type == marker_type
    assert result.tag == tag
    assert result.content == content


@pytest.mark.parametrize(
    "text",
    [
        "",
        "no markers here",
        "TODOS are plural and not a marker",
        "MYTODO is an identifier",
        "todo_list = []",
        "NOTED with thanks",
        "XXXL shirt",
    ],
)
def test_no_match(matcher, text):
    assert matcher.match(text) is None


def test_start_is_offset_of_keyword(matcher):
    result = matcher.match(" FIXME(alice): handle nil")
    assert result.start == 1

    result = matcher.match("prefix text TODO: x")
    assert result.start == len("prefix text ")


def test_first_keyword_wins(matcher):
    result = matcher.match("TODO: first FIXME: second")
    assert result.marker_type == "TODO"
    assert result.content == "first FIXME: second"


def test_unclosed_tag_is_content(matcher):
    result = matcher.match("TODO(alice handle it")
    assert result.tag is None
    assert result.content == "(alice handle it"


def test_custom_marker_types():
    matcher = MarkerMatcher(["review", "OPTIMIZE"])

    assert matcher.marker_types == frozenset({"REVIEW", "OPTIMIZE"})
    assert matcher.match("Review: check the locking").marker_type == "REVIEW"
    assert matcher.match("OPTIMIZE - cache this").content == "cache this"
    assert matcher.match("TODO: not configured") is None


def test_overlapping_keywords_prefer_longest():
    matcher = MarkerMatcher(["FIX", "FIXME"])
    result = matcher.match("FIXME: longer keyword")
    assert result.marker_type == "FIXME"
    assert result.content == "longer keyword"


def test_empty_marker_types_rejected():
    with pytest.raises(ValueError):
        MarkerMatcher([])
    with pytest.raises(ValueError):
        MarkerMatcher(["  "])
