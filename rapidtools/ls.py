"""A directory lister with sizes, sorting and coloured names."""

from __future__ import annotations

import argparse
import functools
import os
import stat
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

_UNITS = ("B", "K", "M", "G", "T")
_BOLD = "1"
_DIM = "2"
_BLUE = "34"
_CYAN = "36"


@dataclass(frozen=True)
class Entry:
    """One directory entry with the metadata the listing shows."""

    name: str
    is_dir: bool
    size: int
    modified_ns: int


def format_size(size: int) -> str:
    """Render a byte count with binary units: ``512B``, ``1.5K`` and so on."""
    value = float(size)
    unit = 0
    while value >= 1024.0 and unit < len(_UNITS) - 1:
        value /= 1024.0
        unit += 1
    if unit == 0:
        return f"{int(value)}B"
    return f"{value:.1f}{_UNITS[unit]}"


def collect_entries(
    path: str | os.PathLike[str],
    show_hidden: bool = False,
    sort_by_time: bool = False,
    reverse: bool = False,
) -> list[Entry]:
    """Read a directory; by name ascending, or newest first when sorting by time."""
    entries = []
    with os.scandir(path) as scan:
        for item in scan:
            if not show_hidden and item.name.startswith("."):
                continue
            info = item.stat(follow_symlinks=False)
            entries.append(
                Entry(item.name, stat.S_ISDIR(info.st_mode), info.st_size, info.st_mtime_ns)
            )
    if sort_by_time:
        entries.sort(key=lambda entry: entry.modified_ns, reverse=not reverse)
    else:
        entries.sort(key=lambda entry: entry.name, reverse=reverse)
    return entries


def _style(text: str, *codes: str, enabled: bool) -> str:
    """Wrap text in ANSI codes when colouring is enabled."""
    if not enabled or not codes:
        return text
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _render(
    entries: list[Entry], long_format: bool, paint: Callable[..., str]
) -> str:
    if long_format:
        lines = []
        for entry in entries:
            kind = "d" if entry.is_dir else "-"
            size = f"{format_size(entry.size):>10}"
            name = paint(entry.name, _BOLD, _BLUE) if entry.is_dir else entry.name
            lines.append(f"{paint(kind, _DIM)} {paint(size, _CYAN)} {name}\n")
        return "".join(lines)
    parts = [
        paint(f"{entry.name}/", _BOLD, _BLUE) if entry.is_dir else entry.name
        for entry in entries
    ]
    return "".join(f"{part} " for part in parts) + "\n"


def render_entries(entries: list[Entry], long_format: bool) -> str:
    """Render entries as plain text: one per line in long format, else on one line."""
    return _render(entries, long_format, functools.partial(_style, enabled=False))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rapidls", description="Enhanced directory listing"
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument("paths", nargs="*", type=Path, help="Directories to list")
    parser.add_argument("-l", "--long", dest="long_format", action="store_true",
                        help="Show detailed information")
    parser.add_argument("-a", "--all", dest="show_hidden", action="store_true",
                        help="Show hidden files")
    parser.add_argument("-t", "--time", dest="sort_by_time", action="store_true",
                        help="Sort by modification time")
    parser.add_argument("-r", "--reverse", dest="reverse", action="store_true",
                        help="Reverse sort order")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """List each given directory; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    paths = args.paths or [Path(".")]
    paint = functools.partial(_style, enabled=sys.stdout.isatty())

    print(paint("rapidls - Enhanced Directory Listing", _BOLD, _CYAN))
    print(paint("━" * 47, _DIM))
    for path in paths:
        print(f"\n📁 {paint(str(path), _BOLD, _BLUE)}")
        try:
            entries = collect_entries(path, args.show_hidden, args.sort_by_time, args.reverse)
        except OSError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        sys.stdout.write(_render(entries, args.long_format, paint))
    return 0