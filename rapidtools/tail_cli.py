"""Command-line options of the tail tool."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Sequence


class ColorOption(str, Enum):
    """When to colour the output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"

    def __str__(self) -> str:
        return self.value


class OutputFormat(str, Enum):
    """How entries are written."""

    TEXT = "text"
    JSON = "json"

    def __str__(self) -> str:
        return self.value


@dataclass
class TailArgs:
    """Parsed options of one tail run."""

    files: list[Path]
    initial_lines: int = 10
    follow: bool = False
    follow_name: bool = False
    pattern: str | None = None
    use_regex: bool = False
    ignore_case: bool = False
    invert_match: bool = False
    line_numbers: bool = False
    quiet: bool = False
    color: ColorOption = ColorOption.AUTO
    format: OutputFormat = OutputFormat.TEXT
    timestamp: bool = False
    buffer_size_kb: int = 64
    poll_interval_ms: int = 100
    max_buffer_lines: int = 10000
    verbose: bool = False

    def __post_init__(self) -> None:
        self.files = [Path(f) for f in self.files]
        self.color = ColorOption(self.color)
        self.format = OutputFormat(self.format)

    def should_use_colors(self) -> bool:
        if self.color is ColorOption.ALWAYS:
            return True
        if self.color is ColorOption.NEVER:
            return False
        return sys.stdout.isatty()

    def buffer_size_bytes(self) -> int:
        return self.buffer_size_kb * 1024

    def is_json_output(self) -> bool:
        return self.format is OutputFormat.JSON

    def should_show_filenames(self) -> bool:
        return not self.quiet and len(self.files) > 1


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
        prog="rapidtail",
        description="Ultra-fast real-time file monitoring and log tailing tool",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument("files", metavar="FILE", nargs="+", type=Path,
                        help="Files to monitor")
    parser.add_argument("-n", "--lines", dest="initial_lines", type=_count, default=10,
                        help="Number of lines to show initially from the end of each file")
    parser.add_argument("-f", "--follow", dest="follow", action="store_true",
                        help="Follow file changes in real time")
    parser.add_argument("-F", "--follow-name", dest="follow_name", action="store_true",
                        help="Follow file by name (handles log rotation)")
    parser.add_argument("-g", "--grep", dest="pattern", help="Pattern to filter lines")
    parser.add_argument("-E", "--regex", dest="use_regex", action="store_true",
                        help="Use regular expressions for pattern matching")
    parser.add_argument("-i", "--ignore-case", dest="ignore_case", action="store_true",
                        help="Case insensitive pattern matching")
    parser.add_argument("-v", "--invert-match", dest="invert_match", action="store_true",
                        help="Show non-matching lines")
    parser.add_argument("-N", "--line-number", dest="line_numbers", action="store_true",
                        help="Show line numbers")
    parser.add_argument("-q", "--quiet", dest="quiet", action="store_true",
                        help="Suppress filename headers")
    parser.add_argument("--color", dest="color", type=ColorOption, choices=list(ColorOption),
                        default=ColorOption.AUTO, help="Control coloured output")
    parser.add_argument("--format", dest="format", type=OutputFormat,
                        choices=list(OutputFormat), default=OutputFormat.TEXT,
                        help="Output format")
    parser.add_argument("-t", "--timestamp", dest="timestamp", action="store_true",
                        help="Add timestamps to output lines")
    parser.add_argument("--buffer-size", dest="buffer_size_kb", type=_count, default=64,
                        help="Buffer size for reading files, in KB")
    parser.add_argument("--poll-interval", dest="poll_interval_ms", type=_count, default=100,
                        help="Polling interval in milliseconds")
    parser.add_argument("--max-buffer-lines", dest="max_buffer_lines", type=_count,
                        default=10000, help="Maximum number of new lines read at once")
    parser.add_argument("-V", "--verbose", dest="verbose", action="store_true",
                        help="Print verbose debugging information")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> TailArgs:
    """Parse command-line arguments; exits with a usage message on error."""
    return TailArgs(**vars(_build_parser().parse_args(argv)))