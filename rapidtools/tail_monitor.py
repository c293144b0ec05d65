"""Watching files for appended lines, truncation and rotation."""

from __future__ import annotations

import asyncio
import os
import sys
from collections import deque
from dataclasses import dataclass
from pathlib import Path

from .tail_errors import (
    BufferOverflowError,
    FastTailError,
    FileRotationDetectedError,
    TailFileNotFoundError,
)
from .tail_output import LogEntry
from .tail_patterns import PatternMatcher

_HAS_INODES = os.name == "posix"


def _strip_newline(raw: bytes) -> str:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw.decode("utf-8")


@dataclass
class FileState:
    """Where reading of one watched file has got to."""

    path: Path
    position: int
    size: int
    line_count: int = 0
    inode: int | None = None

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> FileState:
        """Start at the current end of the file."""
        path = Path(path)
        try:
            info = path.stat()
        except OSError:
            raise TailFileNotFoundError(path) from None
        inode = info.st_ino if _HAS_INODES else None
        return cls(path, info.st_size, info.st_size, 0, inode)

    def update_from_stat(self, stat_result: os.stat_result) -> None:
        self.size = stat_result.st_size
        if _HAS_INODES:
            self.inode = stat_result.st_ino


class FileMonitor:
    """Keeps the state of watched files and reads the lines added to them."""

    def __init__(
        self,
        pattern_matcher: PatternMatcher | None = None,
        follow_name: bool = False,
        buffer_size: int = 8192,
        max_buffer_lines: int = 10000,
        verbose: bool = False,
    ) -> None:
        self.files: dict[Path, FileState] = {}
        self.pattern_matcher = pattern_matcher
        self.follow_name = follow_name
        self.buffer_size = buffer_size
        self.max_buffer_lines = max_buffer_lines
        self.verbose = verbose

    def _passes(self, line: str) -> bool:
        return self.pattern_matcher is None or self.pattern_matcher.matches(line)

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message, file=sys.stderr)

    def add_file(self, path: str | os.PathLike[str]) -> None:
        state = FileState.from_path(path)
        self.files[state.path] = state

    def read_initial_lines(
        self, path: str | os.PathLike[str], num_lines: int
    ) -> list[LogEntry]:
        """Return the last ``num_lines`` lines that pass the filter, numbered from 1."""
        path = Path(path)
        try:
            handle = path.open("rb", buffering=self.buffer_size)
        except OSError:
            raise TailFileNotFoundError(path) from None
        with handle:
            tail: deque[tuple[int, str]] = deque(maxlen=num_lines)
            total = 0
            for total, raw in enumerate(handle, start=1):
                tail.append((total, _strip_newline(raw)))
            position = handle.tell()

        filtered = self.pattern_matcher is not None
        entries = [
            LogEntry.create(str(path), content, number, filtered, False)
            for number, content in tail
            if self._passes(content)
        ]

        state = self.files.get(path)
        if state is not None:
            state.position = position
            state.line_count = total
        return entries

    async def start_monitoring(
        self, queue: asyncio.Queue[LogEntry], poll_interval: float
    ) -> None:
        """Poll the watched files every ``poll_interval`` seconds until cancelled."""
        while True:
            await self.poll_files(queue)
            await asyncio.sleep(poll_interval)

    async def poll_files(self, queue: asyncio.Queue[LogEntry]) -> None:
        """Check every watched file once; errors are reported only when verbose."""
        for path in list(self.files):
            try:
                await self.check_file_changes(path, queue)
            except (FastTailError, OSError, UnicodeDecodeError) as exc:
                self._log(f"Error checking file {path}: {exc}")

    async def check_file_changes(
        self, path: str | os.PathLike[str], queue: asyncio.Queue[LogEntry]
    ) -> None:
        """Detect rotation or truncation of one file and queue any new lines."""
        path = Path(path)
        try:
            info = path.stat()
        except OSError:
            if self.follow_name:
                return
            raise TailFileNotFoundError(path) from None

        state = self.files[path]
        if _HAS_INODES and state.inode is not None and info.st_ino != state.inode:
            if not self.follow_name:
                raise FileRotationDetectedError(path)
            self._log(f"File rotation detected for {path}, resetting position")
            state.position = 0
            state.line_count = 0

        if info.st_size < state.size:
            self._log(f"File {path} was truncated, resetting position")
            state.position = 0
            state.line_count = 0

        state.update_from_stat(info)
        if info.st_size > state.position:
            self._read_new_lines(state, queue)

    def _read_new_lines(self, state: FileState, queue: asyncio.Queue[LogEntry]) -> None:
        try:
            handle = state.path.open("rb", buffering=self.buffer_size)
        except OSError:
            raise TailFileNotFoundError(state.path) from None
        filtered = self.pattern_matcher is not None
        with handle:
            handle.seek(state.position)
            count = 0
            for raw in handle:
                line = _strip_newline(raw)
                state.line_count += 1
                count += 1
                if self._passes(line):
                    queue.put_nowait(
                        LogEntry.create(str(state.path), line, state.line_count, filtered, True)
                    )
                if count > self.max_buffer_lines:
                    raise BufferOverflowError(count)
            state.position = handle.tell()