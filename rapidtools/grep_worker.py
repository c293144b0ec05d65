"""Parallel searching of files and collection of search statistics."""

from __future__ import annotations

import os
from bisect import bisect_left
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from .grep_files import FileContent, FileProcessor, Line
from .grep_output import MatchResult
from .grep_patterns import Match, PatternMatcher


@dataclass
class SearchStats:
    """Counters gathered over one search."""

    files_processed: int = 0
    files_with_matches: int = 0
    total_matches: int = 0
    bytes_processed: int = 0
    processing_time_ms: int = 0

    def add_file(self, had_matches: bool, file_size: int, match_count: int) -> None:
        self.files_processed += 1
        if had_matches:
            self.files_with_matches += 1
        self.total_matches += match_count
        self.bytes_processed += file_size

    def throughput_mb_per_second(self) -> float:
        if self.processing_time_ms == 0:
            return 0.0
        seconds = self.processing_time_ms / 1000.0
        return self.bytes_processed / (1024.0 * 1024.0) / seconds


@dataclass
class WorkerPool:
    """Searches files on a pool of threads and turns byte matches into line results."""

    file_processor: FileProcessor
    pattern_matcher: PatternMatcher
    num_threads: int
    invert_match: bool = False
    before_context: int = 0
    after_context: int = 0

    def search_files(self, file_paths: Iterable[str | os.PathLike[str]]) -> list[MatchResult]:
        """Search every file and return all results, file by file in input order."""
        return list(self.iter_results(file_paths))

    def iter_results(
        self, file_paths: Iterable[str | os.PathLike[str]]
    ) -> Iterator[MatchResult]:
        """Yield results as each file's search completes, in input order."""
        with ThreadPoolExecutor(max_workers=self.num_threads) as executor:
            for results in executor.map(self.search_single_file, list(file_paths)):
                yield from results

    def search_single_file(self, file_path: str | os.PathLike[str]) -> list[MatchResult]:
        """Search one file; errors from reading or decoding it propagate."""
        path = Path(file_path)
        with self.file_processor.process_file(path) as content:
            if self.invert_match:
                return self._non_matching_lines(path, content)
            matches = self.pattern_matcher.find_matches(content.data)
            if not matches:
                return []
            return self._line_matches(path, content, matches)

    def _line_matches(
        self, path: Path, content: FileContent, matches: list[Match]
    ) -> list[MatchResult]:
        lines = content.lines()
        ends = [line.end for line in lines]
        results = []
        for found in matches:
            idx = bisect_left(ends, found.start)
            if idx == len(lines) or not lines[idx].contains_position(found.start):
                continue
            line = lines[idx]
            result = MatchResult(
                path,
                line.number,
                line.decode(),
                max(0, found.start - line.start),
                max(0, found.end - line.start),
            )
            if self.before_context > 0 or self.after_context > 0:
                first = max(0, line.number - self.before_context)
                result.context_before = list(
                    self._context(lines, range(first, line.number))
                )
                result.context_after = list(
                    self._context(
                        lines, range(line.number + 1, line.number + self.after_context + 1)
                    )
                )
            results.append(result)
        return results

    @staticmethod
    def _context(lines: list[Line], numbers: range) -> Iterator[tuple[int, str]]:
        for number in numbers:
            if 1 <= number <= len(lines):
                try:
                    yield number, lines[number - 1].decode()
                except UnicodeDecodeError:
                    continue

    def _non_matching_lines(self, path: Path, content: FileContent) -> list[MatchResult]:
        return [
            MatchResult(path, line.number, line.decode(), 0, 0)
            for line in content.lines()
            if not self.pattern_matcher.find_matches(line.content)
        ]