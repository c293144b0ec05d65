"""The search engine: file discovery, the output modes, and the command entry point."""

from __future__ import annotations

import os
import sys
import time
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterator, Sequence, TextIO

from .grep_cli import GrepArgs, parse_args
from .grep_errors import FastGrepError, FileProcessingError, InvalidArgumentError
from .grep_files import FileProcessor
from .grep_output import OutputFormatter
from .grep_patterns import PatternMatcher
from .grep_worker import SearchStats, WorkerPool

_FILE_TYPES: dict[str, tuple[str, ...]] = {
    "c": ("*.c", "*.h", "*.H"),
    "cpp": ("*.C", "*.cc", "*.cpp", "*.cxx", "*.h", "*.hh", "*.hpp", "*.hxx", "*.inl"),
    "csharp": ("*.cs",),
    "css": ("*.css", "*.scss"),
    "go": ("*.go",),
    "html": ("*.htm", "*.html", "*.ejs"),
    "java": ("*.java", "*.jsp"),
    "js": ("*.js", "*.jsx", "*.mjs", "*.cjs", "*.vue"),
    "json": ("*.json", "composer.lock"),
    "lua": ("*.lua",),
    "make": ("*.mak", "*.mk", "GNUmakefile", "Makefile", "makefile"),
    "markdown": ("*.markdown", "*.md", "*.mdown", "*.mkdn"),
    "md": ("*.markdown", "*.md", "*.mdown", "*.mkdn"),
    "php": ("*.php", "*.php3", "*.php4", "*.php5", "*.phtml"),
    "py": ("*.py", "*.pyi"),
    "rb": ("*.rb", "Gemfile", "Rakefile"),
    "rust": ("*.rs",),
    "sh": ("*.bash", "*.sh", "*.zsh", ".bashrc", ".zshrc"),
    "sql": ("*.sql",),
    "toml": ("*.toml", "Cargo.lock"),
    "ts": ("*.ts", "*.tsx", "*.cts", "*.mts"),
    "txt": ("*.txt",),
    "xml": ("*.xml", "*.xsd", "*.xsl", "*.svg"),
    "yaml": ("*.yaml", "*.yml"),
}


@dataclass(frozen=True)
class _TypeFilter:
    globs: tuple[str, ...]
    negate: bool

    def allows(self, name: str) -> bool:
        hit = any(fnmatchcase(name, glob) for glob in self.globs)
        return not hit if self.negate else hit


def _build_type_filter(types: str, negate: bool) -> _TypeFilter:
    globs: list[str] = []
    for name in types.split(","):
        try:
            globs.extend(_FILE_TYPES[name])
        except KeyError:
            flag = "--type-not" if negate else "--type"
            raise InvalidArgumentError(flag, f"unrecognized file type: {name!r}") from None
    return _TypeFilter(tuple(globs), negate)


@dataclass(frozen=True)
class _IgnoreRule:
    base: Path
    pattern: str
    negated: bool
    dir_only: bool
    anchored: bool

    def matches(self, path: Path, is_dir: bool) -> bool:
        if self.dir_only and not is_dir:
            return False
        if self.anchored:
            try:
                relative = path.relative_to(self.base).as_posix()
            except ValueError:
                return False
            return fnmatchcase(relative, self.pattern)
        return fnmatchcase(path.name, self.pattern)


def _parse_ignore_file(directory: Path, text: str) -> Iterator[_IgnoreRule]:
    for raw in text.splitlines():
        line = raw.rstrip()
        if not line or line.startswith("#"):
            continue
        negated = line.startswith("!")
        if negated:
            line = line[1:]
        dir_only = line.endswith("/")
        line = line.rstrip("/")
        if line.startswith("**/"):
            line = line[3:]
        anchored = "/" in line
        line = line.lstrip("/")
        if line:
            yield _IgnoreRule(directory, line, negated, dir_only, anchored)


def _load_ignore_rules(directory: Path, use_gitignore: bool) -> list[_IgnoreRule]:
    names = (".gitignore", ".ignore") if use_gitignore else (".ignore",)
    rules: list[_IgnoreRule] = []
    for name in names:
        try:
            text = (directory / name).read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
        rules.extend(_parse_ignore_file(directory, text))
    return rules


def _is_ignored(rules: list[_IgnoreRule], path: Path, is_dir: bool) -> bool:
    ignored = False
    for rule in rules:
        if rule.matches(path, is_dir):
            ignored = not rule.negated
    return ignored


def _inside_git_repo(path: Path) -> bool:
    resolved = path.resolve()
    return any((parent / ".git").exists() for parent in (resolved, *resolved.parents))


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        return 0


class SearchEngine:
    """Finds the files to search, runs the workers and prints the chosen output."""

    def __init__(self, args: GrepArgs) -> None:
        self.args = args
        use_regex = args.use_regex and not args.fixed_strings
        self.pattern_matcher = PatternMatcher(args.pattern, use_regex, args.ignore_case)
        self.file_processor = FileProcessor(args.max_filesize_bytes(), args.use_mmap)
        self.output_formatter = OutputFormatter(
            show_line_numbers=args.line_numbers,
            show_filenames=not args.no_filename and len(args.paths) > 1,
            use_colors=args.should_use_colors(),
            json_output=args.json_output,
            before_context=args.before_lines(),
            after_context=args.after_lines(),
            only_matching=args.only_matching,
            invert_match=args.invert_match,
            count_only=args.count_only,
            files_only=args.files_only,
            files_without_matches=args.files_without_matches,
        )
        self.worker_pool = WorkerPool(
            self.file_processor,
            self.pattern_matcher,
            args.thread_count(),
            args.invert_match,
            args.before_lines(),
            args.after_lines(),
        )

    def run(self, out: TextIO | None = None) -> SearchStats:
        """Search, write results to ``out`` (stdout by default) and return the statistics."""
        out = sys.stdout if out is None else out
        started = time.perf_counter()
        files = self.discover_files()
        stats = SearchStats()
        if not files:
            print("No files to search", file=sys.stderr)
            return stats

        if self.args.files_without_matches:
            self._run_files_without_matches(files, stats, out)
        elif self.args.files_only:
            self._run_files_only(files, stats, out)
        elif self.args.count_only:
            self._run_count(files, stats, out)
        else:
            self._run_normal(files, stats, out)

        stats.processing_time_ms = int((time.perf_counter() - started) * 1000)
        if "FGREP_VERBOSE" in os.environ:
            self._print_stats(stats)
        return stats

    def discover_files(self) -> list[Path]:
        """List the files to search: given files as they are, directories walked."""
        type_filter = None
        if self.args.file_types is not None:
            type_filter = _build_type_filter(self.args.file_types, negate=False)
        if self.args.exclude_types is not None:
            type_filter = _build_type_filter(self.args.exclude_types, negate=True)

        files: list[Path] = []
        for path in self.args.paths:
            if path.is_file():
                files.append(path)
            elif path.is_dir():
                use_gitignore = self.args.respect_ignore and _inside_git_repo(path)
                files.extend(self._walk(path, [], use_gitignore, type_filter))
        return files

    def _walk(
        self,
        directory: Path,
        inherited: list[_IgnoreRule],
        use_gitignore: bool,
        type_filter: _TypeFilter | None,
    ) -> Iterator[Path]:
        rules = inherited
        if self.args.respect_ignore:
            rules = inherited + _load_ignore_rules(directory, use_gitignore)
        try:
            with os.scandir(directory) as scan:
                entries = sorted(scan, key=lambda entry: entry.name)
        except OSError as exc:
            raise FileProcessingError(directory, exc) from exc

        limit = self.args.max_filesize_bytes()
        for entry in entries:
            if not self.args.search_hidden and entry.name.startswith("."):
                continue
            path = directory / entry.name
            is_dir = entry.is_dir(follow_symlinks=False)
            if rules and _is_ignored(rules, path, is_dir):
                continue
            if is_dir:
                yield from self._walk(path, rules, use_gitignore, type_filter)
                continue
            if not entry.is_file(follow_symlinks=False):
                continue
            if type_filter is not None and not type_filter.allows(entry.name):
                continue
            try:
                if entry.stat(follow_symlinks=False).st_size > limit:
                    continue
            except OSError as exc:
                raise FileProcessingError(path, exc) from exc
            yield path

    def _run_files_only(self, files: list[Path], stats: SearchStats, out: TextIO) -> None:
        with_matches: set[Path] = set()
        for result in self.worker_pool.search_files(files):
            if result.file_path not in with_matches:
                print(self.output_formatter.format_filename_only(result.file_path), file=out)
                with_matches.add(result.file_path)
        for path in files:
            had = path in with_matches
            stats.add_file(had, _file_size(path), 1 if had else 0)

    def _run_files_without_matches(
        self, files: list[Path], stats: SearchStats, out: TextIO
    ) -> None:
        with_matches = {result.file_path for result in self.worker_pool.search_files(files)}
        for path in files:
            had = path in with_matches
            if not had:
                print(self.output_formatter.format_filename_only(path), file=out)
            stats.add_file(had, _file_size(path), 1 if had else 0)

    def _run_count(self, files: list[Path], stats: SearchStats, out: TextIO) -> None:
        counts: dict[Path, int] = {}
        for result in self.worker_pool.search_files(files):
            counts[result.file_path] = counts.get(result.file_path, 0) + 1
        for path in files:
            count = counts.get(path, 0)
            if count > 0:
                print(self.output_formatter.format_count(path, count), file=out)
            stats.add_file(count > 0, _file_size(path), count)

    def _run_normal(self, files: list[Path], stats: SearchStats, out: TextIO) -> None:
        formatter = self.output_formatter
        current: Path | None = None
        file_has_matches = False
        for result in self.worker_pool.search_files(files):
            if current != result.file_path:
                if len(files) > 1 and file_has_matches:
                    print(file=out)
                current = result.file_path
                file_has_matches = True

            for number, content in result.context_before:
                print(formatter.format_context_line(result.file_path, number, content, True),
                      file=out)
            print(
                formatter.format_match(
                    result.file_path,
                    result.line_number,
                    result.line_content,
                    result.match_start,
                    result.match_end,
                ),
                file=out,
            )
            for number, content in result.context_after:
                print(formatter.format_context_line(result.file_path, number, content, False),
                      file=out)
            if result.context_before or result.context_after:
                print(formatter.format_separator(), file=out)
        stats.files_processed = len(files)

    @staticmethod
    def _print_stats(stats: SearchStats) -> None:
        err = sys.stderr
        print("Search Statistics:", file=err)
        print(f"  Files processed: {stats.files_processed}", file=err)
        print(f"  Files with matches: {stats.files_with_matches}", file=err)
        print(f"  Total matches: {stats.total_matches}", file=err)
        print(f"  Bytes processed: {stats.bytes_processed // (1024 * 1024)} MB", file=err)
        print(f"  Processing time: {stats.processing_time_ms} ms", file=err)
        print(f"  Throughput: {stats.throughput_mb_per_second():.2f} MB/s", file=err)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the search tool; returns the process exit status."""
    args = parse_args(argv)
    try:
        SearchEngine(args).run()
    except (FastGrepError, OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0