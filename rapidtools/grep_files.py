"""Reading files for search: binary detection, memory mapping and line splitting."""

from __future__ import annotations

import mmap
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from .grep_errors import (
    BinaryFileError,
    ContentInspectionError,
    FileProcessingError,
    MemoryMappingError,
)

_SNIFF_SIZE = 8192
_SCAN_SIZE = 1024
_BYTE_ORDER_MARKS = (
    b"\xef\xbb\xbf",
    b"\xff\xfe\x00\x00",
    b"\x00\x00\xfe\xff",
    b"\xff\xfe",
    b"\xfe\xff",
)
_BINARY_MAGIC = (b"%PDF", b"\x89PNG")

Data = Union[bytes, mmap.mmap]


def is_likely_binary(data: bytes) -> bool:
    """Guess from the start of a file whether it holds binary data."""
    if not data:
        return False
    if any(data.startswith(bom) for bom in _BYTE_ORDER_MARKS):
        return False
    if b"\x00" in data[:_SCAN_SIZE]:
        return True
    return any(data.startswith(magic) for magic in _BINARY_MAGIC)


@dataclass(frozen=True)
class Line:
    """One line of a file: its number from 1 and its byte range without the newline."""

    number: int
    start: int
    end: int
    content: bytes

    def decode(self) -> str:
        """Return the line as text; raises UnicodeDecodeError if it is not UTF-8."""
        return self.content.decode("utf-8")

    def contains_position(self, pos: int) -> bool:
        return self.start <= pos <= self.end


class FileContent:
    """The bytes of a file, read into memory or memory-mapped."""

    def __init__(self, data: Data) -> None:
        self.data = data

    @property
    def mapped(self) -> bool:
        return isinstance(self.data, mmap.mmap)

    def __bytes__(self) -> bytes:
        return bytes(self.data)

    def __len__(self) -> int:
        return len(self.data)

    def lines(self) -> list[Line]:
        """Split the content on newlines; a final line without one is kept."""
        data = self.data
        lines = []
        start = 0
        number = 1
        while (pos := data.find(b"\n", start)) != -1:
            lines.append(Line(number, start, pos, bytes(data[start:pos])))
            start = pos + 1
            number += 1
        if start < len(data):
            lines.append(Line(number, start, len(data), bytes(data[start:])))
        return lines

    def close(self) -> None:
        if isinstance(self.data, mmap.mmap):
            self.data.close()

    def __enter__(self) -> FileContent:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@dataclass(frozen=True)
class FileProcessor:
    """Loads text files, mapping those larger than ``max_size_for_mmap``."""

    max_size_for_mmap: int
    use_mmap: bool = True

    def process_file(self, path: str | os.PathLike[str]) -> FileContent:
        path = Path(path)
        try:
            size = path.stat().st_size
        except OSError as exc:
            raise FileProcessingError(path, exc) from exc

        try:
            with path.open("rb") as handle:
                head = handle.read(_SNIFF_SIZE)
        except OSError as exc:
            raise ContentInspectionError(path, exc) from exc
        if is_likely_binary(head):
            raise BinaryFileError(path)

        if self.use_mmap and size > self.max_size_for_mmap:
            return self._map(path)
        return self._read(path)

    @staticmethod
    def _map(path: Path) -> FileContent:
        try:
            handle = path.open("rb")
        except OSError as exc:
            raise FileProcessingError(path, exc) from exc
        with handle:
            try:
                mapped = mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ)
            except (OSError, ValueError) as exc:
                raise MemoryMappingError(path, exc) from exc
        return FileContent(mapped)

    @staticmethod
    def _read(path: Path) -> FileContent:
        try:
            return FileContent(path.read_bytes())
        except OSError as exc:
            raise FileProcessingError(path, exc) from exc


def iter_lines(reader: BinaryIO) -> Iterator[tuple[int, bytes]]:
    """Yield ``(line_number, content)`` pairs from a binary stream, newline removed."""
    for number, raw in enumerate(reader, start=1):
        yield number, raw[:-1] if raw.endswith(b"\n") else raw