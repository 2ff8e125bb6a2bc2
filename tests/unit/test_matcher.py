"""Unit tests for literal matching."""

import pytest

from patchrunner.engine.matcher import (
    MatchOutcome,
    count_occurrences,
    find_occurrences,
    locate_unique,
    replace_every,
    replace_span,
)


def test_count_occurrences():
    assert count_occurrences("foo bar foo", "foo") == 2
    assert count_occurrences("foo bar foo", "baz") == 0


def test_count_is_non_overlapping():
    assert count_occurrences("aaaa", "aa") == 2
    assert count_occurrences("aaaaa", "aa") == 2


def test_find_occurrences_spans():
    assert find_occurrences("foo bar foo", "foo") == [(0, 3), (8, 11)]


def test_find_occurrences_consumes_span():
    assert find_occurrences("aaaaa", "aa") == [(0, 2), (2, 4)]


def test_find_agrees_with_count():
    content = "abcabcab abc"
    assert len(find_occurrences(content, "abc")) == count_occurrences(content, "abc")


@pytest.mark.parametrize(
    "needle",
    ["a.b", "a*", "(x)", "[0-9]+", "^start", "end$", "a|b", "\\d", "{1,2}", "?"],
)
def test_regex_metacharacters_are_literal(needle):
    content = f"prefix {needle} suffix"
    assert count_occurrences(content, needle) == 1
    # A regex engine would match these against other text; a literal match must not.
    assert count_occurrences("axb aab 123 start end", needle) == 0


def test_locate_unique_found():
    outcome = locate_unique("hello world", "world")
    assert outcome == MatchOutcome(count=1, span=(6, 11))
    assert outcome.is_unique


def test_locate_unique_missing():
    outcome = locate_unique("hello world", "nope")
    assert outcome.count == 0
    assert outcome.span is None
    assert not outcome.is_unique


def test_locate_unique_ambiguous():
    outcome = locate_unique("foo bar foo", "foo")
    assert outcome.count == 2
    assert outcome.span is None


def test_replace_span():
    assert replace_span("hello world", (6, 11), "there") == "hello there"


def test_replace_span_deletion():
    assert replace_span("hello world", (5, 11), "") == "hello"


def test_replace_every():
    assert replace_every("foo bar foo", "foo", "baz") == ("baz bar baz", 2)


def test_replace_every_no_match():
    assert replace_every("foo", "bar", "baz") == ("foo", 0)


def test_replace_every_non_overlapping():
    assert replace_every("aaaaa", "aa", "b") == ("bba", 2)


def test_replace_every_at_both_ends():
    assert replace_every("foo mid foo", "foo", "") == (" mid ", 2)
    assert replace_every("foo", "foo", "bar") == ("bar", 1)


def test_replace_every_matches_spans():
    content = "a-b-c-d"
    new_content, count = replace_every(content, "-", "+-")
    assert count == len(find_occurrences(content, "-"))
    assert new_content == "a+-b+-c+-d"


@pytest.mark.parametrize("replacement", ["$&", "\\1", "\\g<0>", "$1$2"])
def test_replacement_is_literal(replacement):
    new_content, count = replace_every("x=1", "1", replacement)
    assert new_content == f"x={replacement}"
    assert count == 1
    assert replace_span("x=1", (2, 3), replacement) == f"x={replacement}"


def test_empty_needle_rejected():
    with pytest.raises(ValueError):
        count_occurrences("abc", "")
    with pytest.raises(ValueError):
        find_occurrences("abc", "")
