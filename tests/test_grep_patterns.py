import pytest

from rapidtools.grep_errors import PatternCompilationError
from rapidtools.grep_patterns import Match, PatternMatcher


def test_single_literal():
    matcher = PatternMatcher("hello", False, False)
    matches = matcher.find_matches(b"hello world hello rust")
    assert len(matches) == 2
    assert matches[0].start == 0
    assert matches[1].start == 12


def test_case_insensitive():
    matcher = PatternMatcher("HELLO", False, True)
    matches = matcher.find_matches(b"hello world Hello RUST")
    assert len(matches) == 2


def test_regex():
    matcher = PatternMatcher(r"\d+", True, False)
    matches = matcher.find_matches(b"file123.txt and file456.txt")
    assert len(matches) == 2
    assert [(m.start, m.end) for m in matches] == [(4, 7), (20, 23)]


def test_literal_reports_overlapping_matches():
    matcher = PatternMatcher("aa")
    assert [m.start for m in matcher.find_matches(b"aaaa")] == [0, 1, 2]


def test_empty_literal_finds_nothing():
    assert PatternMatcher("").find_matches(b"anything") == []


def test_multi_literal_ids_and_positions():
    matcher = PatternMatcher("cat|dog")
    matches = matcher.find_matches(b"a dog and a cat")
    assert matches == [Match(2, 5, 1), Match(12, 15, 0)]


def test_multi_literal_ignore_case():
    matcher = PatternMatcher("cat|dog", ignore_case=True)
    matches = matcher.find_matches(b"CAT Dog")
    assert [(m.start, m.end, m.pattern_id) for m in matches] == [(0, 3, 0), (4, 7, 1)]


def test_multi_literal_non_overlapping():
    matcher = PatternMatcher("ab|b")
    matches = matcher.find_matches(b"abab")
    assert [(m.start, m.end) for m in matches] == [(0, 2), (2, 4)]


def test_regex_multiline_anchor():
    matcher = PatternMatcher("^x", use_regex=True)
    assert [m.start for m in matcher.find_matches(b"x1\nx2\ny")] == [0, 3]


def test_regex_ignore_case():
    matcher = PatternMatcher("abc", use_regex=True, ignore_case=True)
    assert len(matcher.find_matches(b"ABC abc AbC")) == 3


def test_invalid_regex_raises():
    with pytest.raises(PatternCompilationError) as info:
        PatternMatcher("a(", use_regex=True)
    assert info.value.pattern == "a("