import pytest

from rapidtools.tail_errors import TailPatternCompilationError
from rapidtools.tail_patterns import PatternMatcher


def test_literal_match():
    matcher = PatternMatcher("hello", False, False, False)
    assert matcher.matches("hello world")
    assert not matcher.matches("goodbye world")


def test_case_insensitive():
    matcher = PatternMatcher("HELLO", False, True, False)
    assert matcher.matches("hello world")
    assert matcher.matches("Hello World")
    assert matcher.matches("HELLO WORLD")


def test_regex_match():
    matcher = PatternMatcher(r"\d+", True, False, False)
    assert matcher.matches("error 404")
    assert not matcher.matches("no numbers here")


def test_invert_match():
    matcher = PatternMatcher("hello", False, False, True)
    assert not matcher.matches("hello world")
    assert matcher.matches("goodbye world")


def test_regex_ignore_case():
    matcher = PatternMatcher("error", True, True, False)
    assert matcher.matches("ERROR: disk full")


def test_literal_is_not_regex():
    matcher = PatternMatcher("a.c", False, False, False)
    assert matcher.matches("xa.cx")
    assert not matcher.matches("abc")


def test_empty_literal_depends_on_case_mode():
    assert not PatternMatcher("", False, False, False).matches("anything")
    assert PatternMatcher("", False, True, False).matches("anything")


def test_accessors():
    literal = PatternMatcher("ERROR", False, True, True)
    assert literal.pattern() == "error"
    assert literal.is_regex() is False
    assert literal.is_inverted() is True
    regex = PatternMatcher("ERROR", True, True, False)
    assert regex.pattern() == "ERROR"
    assert regex.is_regex() is True
    assert regex.is_inverted() is False


def test_invalid_regex_raises():
    with pytest.raises(TailPatternCompilationError) as info:
        PatternMatcher("(", True, False, False)
    assert info.value.pattern == "("