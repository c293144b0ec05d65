"""The tail tool: initial output, live following and the command entry point."""

from __future__ import annotations

import asyncio
import sys
from typing import Sequence, TextIO

from .tail_cli import TailArgs, parse_args
from .tail_errors import FastTailError, InvalidConfigError, TailFileNotFoundError
from .tail_monitor import FileMonitor
from .tail_output import LogEntry, OutputFormatter
from .tail_patterns import PatternMatcher


def _print_initial(
    monitor: FileMonitor,
    formatter: OutputFormatter,
    args: TailArgs,
    out: TextIO,
    err: TextIO,
) -> None:
    with_headers = args.should_show_filenames() and len(args.files) > 1
    for index, path in enumerate(args.files):
        if with_headers and index > 0:
            print(file=out)
        if not path.exists():
            continue
        if with_headers:
            print(formatter.format_file_header(path), file=out)
        try:
            entries = monitor.read_initial_lines(path, args.initial_lines)
        except (FastTailError, OSError, UnicodeDecodeError) as exc:
            print(formatter.format_error(str(exc), path), file=err)
            continue
        for entry in entries:
            print(formatter.format_entry(entry), file=out)


async def _follow(
    monitor: FileMonitor,
    formatter: OutputFormatter,
    poll_interval: float,
    out: TextIO,
    err: TextIO,
) -> None:
    queue: asyncio.Queue[LogEntry] = asyncio.Queue()
    watcher = asyncio.create_task(monitor.start_monitoring(queue, poll_interval))
    try:
        while True:
            getter = asyncio.ensure_future(queue.get())
            done, _ = await asyncio.wait(
                {getter, watcher}, return_when=asyncio.FIRST_COMPLETED
            )
            if getter in done:
                print(formatter.format_entry(getter.result()), file=out, flush=True)
                continue
            getter.cancel()
            while not queue.empty():
                print(formatter.format_entry(queue.get_nowait()), file=out, flush=True)
            if not watcher.cancelled() and watcher.exception() is not None:
                print(f"Monitoring error: {watcher.exception()}", file=err)
            return
    finally:
        watcher.cancel()


def run(args: TailArgs, out: TextIO | None = None, err: TextIO | None = None) -> None:
    """Print the last lines of each file and, when following, every new line."""
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err

    if args.verbose:
        print(f"Fast-tail starting with {len(args.files)} files", file=err)
    if not args.files:
        raise InvalidConfigError("No files specified")

    matcher = None
    if args.pattern is not None:
        matcher = PatternMatcher(
            args.pattern, args.use_regex, args.ignore_case, args.invert_match
        )
    formatter = OutputFormatter(
        use_colors=args.should_use_colors(),
        show_line_numbers=args.line_numbers,
        show_filenames=args.should_show_filenames(),
        show_timestamps=args.timestamp,
        json_output=args.is_json_output(),
    )
    monitor = FileMonitor(
        matcher,
        args.follow_name,
        args.buffer_size_bytes(),
        args.max_buffer_lines,
        args.verbose,
    )

    for path in args.files:
        if not path.exists():
            if not args.follow_name:
                raise TailFileNotFoundError(path)
            if args.verbose:
                print(f"File {path} doesn't exist yet, will wait for it", file=err)
        monitor.add_file(path)

    if args.initial_lines > 0:
        _print_initial(monitor, formatter, args, out, err)

    if args.follow:
        if args.verbose:
            print("Starting real-time monitoring...", file=err)
        out.flush()
        asyncio.run(_follow(monitor, formatter, args.poll_interval_ms / 1000.0, out, err))


def main(argv: Sequence[str] | None = None) -> int:
    """Run the tail tool; returns the process exit status."""
    args = parse_args(argv)
    try:
        run(args)
    except FastTailError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        if args.verbose:
            print("\nShutting down...", file=sys.stderr)
    return 0