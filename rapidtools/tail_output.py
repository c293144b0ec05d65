"""Log entries of the tail tool and their text or JSON rendering."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

_BOLD = "1"
_RED = "31"
_GREEN = "32"
_YELLOW = "33"
_BLUE = "34"
_MAGENTA = "35"
_CYAN = "36"
_BRIGHT_BLUE = "94"


def _paint(text: str, *codes: str) -> str:
    return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def _json_line(payload: dict[str, object]) -> str:
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)


@dataclass(frozen=True)
class LogEntry:
    """One line read from a watched file."""

    timestamp: datetime | None
    file: str
    line_number: int | None
    content: str
    matched: bool

    @classmethod
    def create(
        cls,
        file: str | os.PathLike[str],
        content: str,
        line_number: int | None = None,
        matched: bool = False,
        add_timestamp: bool = False,
    ) -> LogEntry:
        """Build an entry, stamped with the local time when ``add_timestamp`` is set."""
        timestamp = datetime.now().astimezone() if add_timestamp else None
        return cls(timestamp, str(file), line_number, content, matched)

    def to_dict(self) -> dict[str, object]:
        return {
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "file": self.file,
            "line_number": self.line_number,
            "content": self.content,
            "matched": self.matched,
        }


def _display_name(file: str) -> str:
    name = Path(file).name
    if not name or name == "..":
        return file
    return name


@dataclass(frozen=True)
class OutputFormatter:
    """Renders entries, file headers, errors and notices."""

    use_colors: bool = False
    show_line_numbers: bool = False
    show_filenames: bool = False
    show_timestamps: bool = False
    json_output: bool = False

    def format_entry(self, entry: LogEntry) -> str:
        if self.json_output:
            return _json_line(entry.to_dict())
        return self._format_text(entry)

    def _format_text(self, entry: LogEntry) -> str:
        output = ""
        if self.show_timestamps and entry.timestamp is not None:
            stamp = entry.timestamp
            text = stamp.strftime("%Y-%m-%d %H:%M:%S") + f".{stamp.microsecond // 1000:03d}"
            output += (_paint(text, _BLUE) if self.use_colors else text) + " "

        if self.show_filenames:
            name = _display_name(entry.file)
            output += (_paint(name, _BOLD, _MAGENTA) if self.use_colors else name) + ":"

        if self.show_line_numbers and entry.line_number is not None:
            number = str(entry.line_number)
            output += (_paint(number, _GREEN) if self.use_colors else number) + ":"

        if (self.show_filenames or self.show_line_numbers or self.show_timestamps) and output:
            output += " "

        if entry.matched and self.use_colors:
            output += _paint(entry.content, _YELLOW)
        else:
            output += entry.content
        return output

    def format_file_header(self, file_path: str | os.PathLike[str]) -> str:
        if self.json_output:
            return _json_line({"event": "file_header", "file": str(file_path)})
        header = f"==> {file_path} <=="
        return _paint(header, _BOLD, _CYAN) if self.use_colors else header

    def format_error(
        self, error: str, file_path: str | os.PathLike[str] | None = None
    ) -> str:
        if self.json_output:
            return _json_line(
                {
                    "event": "error",
                    "message": error,
                    "file": str(file_path) if file_path is not None else "unknown",
                }
            )
        if file_path is not None:
            message = f"Error in {file_path}: {error}"
        else:
            message = f"Error: {error}"
        return _paint(message, _BOLD, _RED) if self.use_colors else message

    def format_info(self, message: str) -> str:
        if self.json_output:
            return _json_line({"event": "info", "message": message})
        return _paint(message, _BRIGHT_BLUE) if self.use_colors else message