"""Formatting of search results as plain text, coloured text or JSON lines."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path

_BOLD = "1"
_DIM = "2"
_RED = "31"
_GREEN = "32"
_YELLOW = "33"
_MAGENTA = "35"
_CYAN = "36"


def _paint(text: str, *codes: str) -> str:
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _byte_slice(text: str, start: int, end: int | None = None) -> str:
    """Slice ``text`` by UTF-8 byte offsets."""
    return text.encode("utf-8")[start:end].decode("utf-8", "replace")


def _json_line(payload: dict[str, object]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


@dataclass
class MatchResult:
    """One matching line, with match offsets in bytes and optional context."""

    file_path: Path
    line_number: int
    line_content: str
    match_start: int
    match_end: int
    context_before: list[tuple[int, str]] = field(default_factory=list)
    context_after: list[tuple[int, str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.file_path = Path(self.file_path)


@dataclass(frozen=True)
class OutputFormatter:
    """Turns matches, counts and file names into output lines."""

    show_line_numbers: bool = False
    show_filenames: bool = False
    use_colors: bool = False
    json_output: bool = False
    before_context: int = 0
    after_context: int = 0
    only_matching: bool = False
    invert_match: bool = False
    count_only: bool = False
    files_only: bool = False
    files_without_matches: bool = False

    def _file_prefix(self, file_path: str | os.PathLike[str], separator: str) -> str:
        if not self.show_filenames:
            return ""
        name = str(file_path)
        return (_paint(name, _BOLD, _MAGENTA) if self.use_colors else name) + separator

    def _number_prefix(self, line_number: int, separator: str, *codes: str) -> str:
        if not self.show_line_numbers:
            return ""
        number = str(line_number)
        return (_paint(number, *codes) if self.use_colors else number) + separator

    def format_match(
        self,
        file_path: str | os.PathLike[str],
        line_number: int,
        line_content: str,
        match_start: int,
        match_end: int,
    ) -> str:
        """Format one matching line; offsets are byte positions within the line."""
        if self.json_output:
            return _json_line(
                {
                    "file": str(file_path),
                    "line": line_number,
                    "content": line_content,
                    "match_start": match_start,
                    "match_end": match_end,
                }
            )
        output = self._file_prefix(file_path, ":")
        output += self._number_prefix(line_number, ":", _GREEN)
        if self.only_matching:
            length = len(line_content.encode("utf-8"))
            if match_start < match_end <= length:
                text = _byte_slice(line_content, match_start, match_end)
                output += _paint(text, _BOLD, _RED) if self.use_colors else text
        elif self.use_colors:
            output += self._highlight(line_content, match_start, match_end)
        else:
            output += line_content
        return output

    @staticmethod
    def _highlight(line: str, start: int, end: int) -> str:
        length = len(line.encode("utf-8"))
        result = ""
        if start > 0:
            result += _byte_slice(line, 0, start)
        if end <= length:
            result += _paint(_byte_slice(line, start, end), _BOLD, _RED)
        if end < length:
            result += _byte_slice(line, end)
        return result

    def format_file_header(self, file_path: str | os.PathLike[str]) -> str:
        name = str(file_path)
        return (_paint(name, _BOLD, _CYAN) if self.use_colors else name) + ":"

    def format_context_line(
        self,
        file_path: str | os.PathLike[str],
        line_number: int,
        line_content: str,
        is_before: bool,
    ) -> str:
        """Format a context line: ``-`` separates before-context, ``+`` after-context."""
        mark = "-" if is_before else "+"
        output = ""
        if self.show_filenames:
            name = str(file_path)
            output += (_paint(name, _DIM) if self.use_colors else name) + mark
        output += self._number_prefix(line_number, mark, _DIM)
        output += _paint(line_content, _DIM) if self.use_colors else line_content
        return output

    def format_separator(self) -> str:
        return _paint("--", _DIM) if self.use_colors else "--"

    def format_count(self, file_path: str | os.PathLike[str], count: int) -> str:
        if self.json_output:
            return _json_line({"file": str(file_path), "count": count})
        text = str(count)
        return self._file_prefix(file_path, ":") + (
            _paint(text, _BOLD, _YELLOW) if self.use_colors else text
        )

    def format_filename_only(self, file_path: str | os.PathLike[str]) -> str:
        name = str(file_path)
        if self.json_output:
            return _json_line({"file": name})
        return _paint(name, _BOLD, _MAGENTA) if self.use_colors else name