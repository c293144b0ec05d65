# rapidtools

Three small command-line tools for everyday work with text files and
directories, plus the library modules they are built from:

- `rapid-grep` searches files and directory trees for a literal string or a
  regular expression.
- `rapid-ls` lists directory contents, optionally with sizes and sorted by time.
- `rapid-tail` prints the last lines of files and can follow them as they grow,
  with optional filtering.

The package has no runtime dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## rapid-grep

```
rapid-grep [OPTIONS] PATTERN [PATH ...]
```

`PATH` defaults to the current directory. Files named on the command line are
searched as they are; directories are walked recursively in name order.
While walking, hidden entries are skipped unless `--hidden` is given, files
larger than `--max-filesize` are skipped, and rules from `.ignore` files (and,
inside a Git work tree, `.gitignore` files) are honoured unless `--no-ignore`
is given.

A pattern is searched as a literal string by default. A literal pattern that
contains `|` matches any of its alternatives. Use `-E` for a regular
expression; `-F` forces a literal search even with `-E`.

File names are put in front of result lines only when more than one `PATH`
is given.

| Option | Meaning |
| --- | --- |
| `-E`, `--regex` | treat the pattern as a regular expression |
| `-F`, `--fixed-strings` | always treat the pattern literally |
| `-i`, `--ignore-case` | case-insensitive search |
| `-n`, `--line-number` | show line numbers |
| `-l`, `--files-with-matches` | print only names of files with matches |
| `-L`, `--files-without-match` | print only names of files without matches |
| `-c`, `--count` | print the number of result lines per file that has any |
| `-v`, `--invert-match` | print lines that do not match |
| `-o`, `--only-matching` | print only the matched part of each line |
| `-h`, `--no-filename` | never prefix lines with the file name |
| `-B N`, `-A N`, `-C N` | lines of context before, after, or around a match (`-C` wins) |
| `-j N`, `--threads N` | number of worker threads (default: number of CPUs) |
| `--type LIST`, `--type-not LIST` | include or exclude file types, comma separated, e.g. `py,rust,md` |
| `--hidden` | search hidden files too |
| `--no-ignore` | do not honour ignore files |
| `--color auto\|always\|never` | control coloured output |
| `--no-color` | same as `--color never` |
| `--json` | one JSON object per result |
| `--max-filesize MB` | size limit for files found while walking (default 100) |
| `--help`, `--version` | show help or version |

Context lines are marked with `-` (before) and `+` (after) instead of `:`, and
each match that has context is followed by a `--` line. With `--json`, a match
is written as `{"file":…,"line":…,"content":…,"match_start":…,"match_end":…}`
with byte offsets, a count as `{"file":…,"count":…}`, and a file name as
`{"file":…}`.

If the environment variable `FGREP_VERBOSE` is set, search statistics are
written to standard error when the search ends.

Examples:

```
rapid-grep -n TODO src
rapid-grep -E -i 'error \d+' logs
rapid-grep -c --json needle notes.txt other.txt
```

## rapid-ls

```
rapid-ls [-l] [-a] [-t] [-r] [PATH ...]
```

`PATH` defaults to the current directory. Each directory is listed under a
heading; names are coloured when standard output is a terminal.

| Option | Meaning |
| --- | --- |
| `-l`, `--long` | one entry per line with a type marker (`d` or `-`) and a human-readable size |
| `-a`, `--all` | include entries whose names start with `.` |
| `-t`, `--time` | sort newest first by modification time |
| `-r`, `--reverse` | reverse the sort order |

Sizes are shown as `512B`, `1.5K`, `3.2M` and so on.

## rapid-tail

```
rapid-tail [OPTIONS] FILE [FILE ...]
```

Prints the last lines of each file (10 by default). With several files and
without `-q`, a `==> name <==` header precedes each one and followed lines are
prefixed with the file's base name.

| Option | Meaning |
| --- | --- |
| `-n N`, `--lines N` | number of lines to show initially (`0` shows none) |
| `-f`, `--follow` | keep printing lines as they are appended |
| `-F`, `--follow-name` | while following, survive rotation and removal instead of stopping with an error |
| `-g PAT`, `--grep PAT` | show only lines containing `PAT` |
| `-E`, `--regex` | treat the filter as a regular expression |
| `-i`, `--ignore-case` | case-insensitive filtering |
| `-v`, `--invert-match` | show lines that do not match the filter |
| `-N`, `--line-number` | show line numbers |
| `-q`, `--quiet` | no file headers or name prefixes |
| `-t`, `--timestamp` | prefix followed lines with the time they were read |
| `--format text\|json` | output format |
| `--color auto\|always\|never` | control coloured output |
| `--buffer-size KB` | read buffer size (default 64) |
| `--poll-interval MS` | polling interval while following (default 100) |
| `--max-buffer-lines N` | limit on new lines read from a file in one pass (default 10000) |
| `-V`, `--verbose` | diagnostic messages on standard error |

With `--format json` each line is written as an object with the fields
`timestamp`, `file`, `line_number`, `content` and `matched`.

Examples:

```
rapid-tail -n 50 app.log
rapid-tail -f -F -g ERROR -N /var/log/app.log
rapid-tail -f --format json access.log error.log
```

### Limits

- Following works by polling the files at `--poll-interval`; filesystem
  change notifications are not used.
- Every file must exist when `rapid-tail` starts, even with `-F`; a missing
  file ends the run with an error.
- In `rapid-grep`, a binary file, or a matching line that is not valid UTF-8,
  ends the search with an error message and exit status 1 rather than being
  skipped.

## Using the library

The modules behind the commands can be used directly:

- `rapidtools.grep_patterns.PatternMatcher` finds a pattern in bytes;
  `rapidtools.grep_files.FileProcessor` loads files; 
  `rapidtools.grep_worker.WorkerPool` searches files on threads;
  `rapidtools.grep_output.OutputFormatter` formats results;
  `rapidtools.grep_search.SearchEngine` puts them together.
- `rapidtools.tail_patterns.PatternMatcher` filters lines;
  `rapidtools.tail_monitor.FileMonitor` reads initial and new lines;
  `rapidtools.tail_output.OutputFormatter` renders `LogEntry` objects;
  `rapidtools.tail_app.run` runs the tail tool on parsed `TailArgs`.
- `rapidtools.ls` provides `collect_entries`, `render_entries` and
  `format_size`.

For example:

```python
from rapidtools.ls import format_size

format_size(1536)   # "1.5K"
```

```python
from rapidtools.grep_patterns import PatternMatcher

matcher = PatternMatcher("hello", False, False)
[m.start for m in matcher.find_matches(b"hello world hello")]   # [0, 12]
```

```python
from rapidtools.tail_patterns import PatternMatcher

matcher = PatternMatcher("HELLO", False, True, False)
matcher.matches("Hello World")   # True
```