"""Pattern matching over raw bytes for the search tool."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

from .grep_errors import PatternCompilationError

Buffer = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class Match:
    """A byte range in the searched data that matched."""

    start: int
    end: int
    pattern_id: int = 0


@dataclass
class PatternMatcher:
    """Finds a pattern in bytes: a regular expression, a literal, or several
    literals separated by ``|``."""

    pattern: str
    use_regex: bool = False
    ignore_case: bool = False
    _regex: re.Pattern[bytes] | None = field(init=False, default=None, repr=False)
    _literals: list[bytes] | None = field(init=False, default=None, repr=False)
    _literal: bytes = field(init=False, default=b"", repr=False)

    def __post_init__(self) -> None:
        if self.use_regex:
            flags = re.MULTILINE | (re.IGNORECASE if self.ignore_case else 0)
            try:
                self._regex = re.compile(self.pattern.encode("utf-8"), flags)
            except re.error as exc:
                raise PatternCompilationError(self.pattern, exc) from exc
        elif "|" in self.pattern:
            literals = [part.encode("utf-8") for part in self.pattern.split("|")]
            if self.ignore_case:
                literals = [lit.lower() for lit in literals]
            self._literals = literals
        else:
            text = self.pattern.lower() if self.ignore_case else self.pattern
            self._literal = text.encode("utf-8")

    def find_matches(self, data: Buffer) -> list[Match]:
        """Return every match in ``data`` in order of position."""
        if self._regex is not None:
            return [Match(m.start(), m.end()) for m in self._regex.finditer(data)]
        if self._literals is not None:
            return self._find_multi(data)
        return self._find_single(data)

    def _find_single(self, data: Buffer) -> list[Match]:
        literal = self._literal
        if not literal:
            return []
        if self.ignore_case:
            haystack = bytes(data).decode("utf-8", "replace").lower().encode("utf-8")
        else:
            haystack = data
        matches = []
        pos = haystack.find(literal)
        while pos != -1:
            matches.append(Match(pos, pos + len(literal)))
            pos = haystack.find(literal, pos + 1)
        return matches

    def _find_multi(self, data: Buffer) -> list[Match]:
        assert self._literals is not None
        haystack = bytes(data).lower() if self.ignore_case else data
        matches = []
        start = 0
        while start <= len(haystack):
            best: tuple[tuple[int, int], int, int, int] | None = None
            for pattern_id, literal in enumerate(self._literals):
                idx = haystack.find(literal, start)
                if idx == -1:
                    continue
                end = idx + len(literal)
                key = (end, -len(literal))
                if best is None or key < best[0]:
                    best = (key, idx, end, pattern_id)
            if best is None:
                break
            _, match_start, match_end, pattern_id = best
            matches.append(Match(match_start, match_end, pattern_id))
            start = match_end + 1 if match_end == match_start else match_end
        return matches