"""Command-line options of the search tool."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Sequence

_REGEX_METACHARACTERS = frozenset(".*+?^$|[](){}")


class ColorOption(str, Enum):
    """When to colour the output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    def __str__(self) -> str:
        return self.value


@dataclass
class GrepArgs:
    """Parsed options of one search run."""

    pattern: str
    paths: list[Path] = field(default_factory=lambda: [Path(".")])
    use_regex: bool = False
    fixed_strings: bool = False
    ignore_case: bool = False
    line_numbers: bool = False
    files_only: bool = False
    count_only: bool = False
    invert_match: bool = False
    only_matching: bool = False
    files_without_matches: bool = False
    no_filename: bool = False
    recursive: bool = True
    before_context: int | None = None
    after_context: int | None = None
    context: int | None = None
    threads: int | None = None
    file_types: str | None = None
    exclude_types: str | None = None
    respect_ignore: bool = True
    search_hidden: bool = False
    color: ColorOption = ColorOption.AUTO
    no_color: bool = False
    json_output: bool = False
    max_filesize_mb: int = 100
    use_mmap: bool = True

    def __post_init__(self) -> None:
        self.paths = [Path(p) for p in self.paths]
        self.color = ColorOption(self.color)

    def before_lines(self) -> int:
        """Lines of context before a match; ``context`` takes precedence."""
        if self.context is not None:
            return self.context
        return self.before_context or 0

    def after_lines(self) -> int:
        """Lines of context after a match; ``context`` takes precedence."""
        if self.context is not None:
            return self.context
        return self.after_context or 0

    def thread_count(self) -> int:
        if self.threads is not None:
            return self.threads
        return os.cpu_count() or 1

    def max_filesize_bytes(self) -> int:
        return self.max_filesize_mb * 1024 * 1024

    def should_use_colors(self) -> bool:
        if self.no_color:
            return False
        if self.color is ColorOption.ALWAYS:
            return True
        if self.color is ColorOption.NEVER:
            return False
        return sys.stdout.isatty()

    def is_literal_search(self) -> bool:
        return self.fixed_strings or (
            not self.use_regex and not self._pattern_looks_like_regex()
        )

    def _pattern_looks_like_regex(self) -> bool:
        return any(ch in _REGEX_METACHARACTERS for ch in self.pattern)


def _count(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"count must not be negative: {text!r}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rapidgrep",
        description="Ultra-fast parallel text search tool",
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="Show this help and exit")
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument("pattern", metavar="PATTERN", help="Pattern to search for")
    parser.add_argument(
        "paths", metavar="PATH", nargs="*", type=Path, help="Files or directories to search"
    )
    parser.add_argument("-E", "--regex", dest="use_regex", action="store_true",
                        help="Use regular expressions")
    parser.add_argument("-F", "--fixed-strings", dest="fixed_strings", action="store_true",
                        help="Literal matching, no regex")
    parser.add_argument("-i", "--ignore-case", dest="ignore_case", action="store_true",
                        help="Case insensitive search")
    parser.add_argument("-n", "--line-number", dest="line_numbers", action="store_true",
                        help="Show line numbers")
    parser.add_argument("-l", "--files-with-matches", dest="files_only", action="store_true",
                        help="Show only file names with matches")
    parser.add_argument("-c", "--count", dest="count_only", action="store_true",
                        help="Show count of matching lines per file")
    parser.add_argument("-v", "--invert-match", dest="invert_match", action="store_true",
                        help="Show non-matching lines")
    parser.add_argument("-o", "--only-matching", dest="only_matching", action="store_true",
                        help="Show only the matching part of lines")
    parser.add_argument("-L", "--files-without-match", dest="files_without_matches",
                        action="store_true", help="Show only names of files without matches")
    parser.add_argument("-h", "--no-filename", dest="no_filename", action="store_true",
                        help="Suppress filename prefix in output")
    parser.add_argument("-r", "--recursive", dest="recursive", action="store_true",
                        default=True, help="Recursively search directories")
    parser.add_argument("-B", "--before-context", dest="before_context", type=_count,
                        metavar="N", help="Context lines before a match")
    parser.add_argument("-A", "--after-context", dest="after_context", type=_count,
                        metavar="N", help="Context lines after a match")
    parser.add_argument("-C", "--context", dest="context", type=_count, metavar="N",
                        help="Context lines before and after a match")
    parser.add_argument("-j", "--threads", dest="threads", type=_count,
                        help="Number of worker threads")
    parser.add_argument("--type", dest="file_types", help="File types to include, e.g. py,js")
    parser.add_argument("--type-not", dest="exclude_types", help="File types to exclude")
    parser.add_argument("--no-ignore", dest="respect_ignore", action="store_false",
                        help="Do not respect ignore files")
    parser.add_argument("--hidden", dest="search_hidden", action="store_true",
                        help="Search hidden files")
    parser.add_argument("--color", dest="color", type=ColorOption, choices=list(ColorOption),
                        default=ColorOption.AUTO, help="Control coloured output")
    parser.add_argument("--no-color", dest="no_color", action="store_true",
                        help="Disable coloured output")
    parser.add_argument("--json", dest="json_output", action="store_true",
                        help="Output in JSON format")
    parser.add_argument("--max-filesize", dest="max_filesize_mb", type=_count, default=100,
                        help="Maximum file size to search, in MB")
    parser.add_argument("--mmap", dest="use_mmap", action="store_true", default=True,
                        help="Use memory mapping for large files")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> GrepArgs:
    """Parse command-line arguments; exits with a usage message on error."""
    namespace = _build_parser().parse_args(argv)
    values = vars(namespace)
    if not values["paths"]:
        values["paths"] = [Path(".")]
    return GrepArgs(**values)