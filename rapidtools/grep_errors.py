"""Errors raised by the search tool."""

from __future__ import annotations

import os
from pathlib import Path


class FastGrepError(Exception):
    """Base class for every error the search tool raises."""


class PatternCompilationError(FastGrepError):
    """A search pattern could not be compiled."""

    def __init__(self, pattern: str, source: BaseException | None = None) -> None:
        super().__init__(f"Pattern compilation failed: {pattern}")
        self.pattern = pattern
        self.source = source
        self.__cause__ = source


class InvalidArgumentError(FastGrepError):
    """A command-line argument has an unusable value."""

    def __init__(self, arg: str, reason: str) -> None:
        super().__init__(f"Invalid argument: {arg} - {reason}")
        self.arg = arg
        self.reason = reason


class _PathError(FastGrepError):
    _template = "{path}"

    def __init__(self, path: str | os.PathLike[str], source: BaseException | None = None) -> None:
        self.path = Path(path)
        self.source = source
        super().__init__(self._template.format(path=self.path))
        self.__cause__ = source


class FileProcessingError(_PathError):
    """A file could not be examined or read."""

    _template = "File processing error: {path}"


class BinaryFileError(_PathError):
    """A file looked binary and was skipped."""

    _template = "Binary file skipped: {path}"


class PermissionDeniedError(_PathError):
    """A file could not be accessed for lack of permission."""

    _template = "Permission denied: cannot access {path}"


class MemoryMappingError(_PathError):
    """A file could not be memory-mapped."""

    _template = "Memory mapping failed for file: {path}"


class ContentInspectionError(_PathError):
    """The start of a file could not be read to detect binary content."""

    _template = "Content inspection failed for file: {path}"


class SearchInterruptedError(FastGrepError):
    """The search was interrupted."""

    def __init__(self) -> None:
        super().__init__("Search interrupted")