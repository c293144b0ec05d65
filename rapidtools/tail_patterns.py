"""Line filtering for the tail tool."""

from __future__ import annotations

import re

from .tail_errors import TailPatternCompilationError


class PatternMatcher:
    """Decides whether a line passes a literal or regular-expression filter."""

    def __init__(
        self,
        pattern: str,
        use_regex: bool = False,
        ignore_case: bool = False,
        invert_match: bool = False,
    ) -> None:
        self._regex: re.Pattern[str] | None = None
        if use_regex:
            try:
                self._regex = re.compile(pattern, re.IGNORECASE if ignore_case else 0)
            except re.error as exc:
                raise TailPatternCompilationError(pattern, exc) from exc
        self._pattern = pattern.lower() if ignore_case and not use_regex else pattern
        self._use_regex = use_regex
        self._ignore_case = ignore_case
        self._invert_match = invert_match

    def matches(self, line: str) -> bool:
        """Return whether the line passes the filter, inversion included."""
        if self._regex is not None:
            found = self._regex.search(line) is not None
        else:
            found = self._literal_match(line)
        return found != self._invert_match

    def _literal_match(self, line: str) -> bool:
        if self._ignore_case:
            return self._pattern in line.lower()
        return bool(self._pattern) and self._pattern in line

    def pattern(self) -> str:
        return self._pattern

    def is_regex(self) -> bool:
        return self._use_regex

    def is_inverted(self) -> bool:
        return self._invert_match

    def __repr__(self) -> str:
        return (
            f"PatternMatcher(pattern={self._pattern!r}, use_regex={self._use_regex}, "
            f"ignore_case={self._ignore_case}, invert_match={self._invert_match})"
        )