"""Errors raised by the tail tool."""

from __future__ import annotations

import os
from pathlib import Path


class FastTailError(Exception):
    """Base class for every error the tail tool raises."""


class _PathError(FastTailError):
    _template = "{path}"

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        super().__init__(self._template.format(path=self.path))


class TailFileNotFoundError(_PathError):
    """A watched file does not exist."""

    _template = "File not found: {path}"


class TailPermissionDeniedError(_PathError):
    """A watched file cannot be read."""

    _template = "Permission denied accessing file: {path}"


class FileRotationDetectedError(_PathError):
    """A file was replaced while following by descriptor."""

    _template = "File rotation detected but follow-name not enabled: {path}"


class WatchError(FastTailError):
    """File watching failed."""

    def __init__(self, reason: object) -> None:
        super().__init__(f"File watching error: {reason}")
        self.reason = reason
        if isinstance(reason, BaseException):
            self.__cause__ = reason


class TailPatternCompilationError(FastTailError):
    """A filter pattern could not be compiled."""

    def __init__(self, pattern: str, source: BaseException) -> None:
        super().__init__(f"Pattern compilation error: {pattern} - {source}")
        self.pattern = pattern
        self.source = source
        self.__cause__ = source


class BufferOverflowError(FastTailError):
    """Too many new lines arrived in one read."""

    def __init__(self, current: int) -> None:
        super().__init__(f"Maximum buffer size exceeded: {current} lines")
        self.current = current


class InvalidConfigError(FastTailError):
    """The configuration cannot be used."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Invalid configuration: {message}")
        self.message = message


class OperationCancelledError(FastTailError):
    """The operation was cancelled."""

    def __init__(self) -> None:
        super().__init__("Operation cancelled")