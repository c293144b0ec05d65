import json
from pathlib import Path

from rapidtools.grep_output import MatchResult, OutputFormatter


def plain(**kwargs):
    options = {"show_line_numbers": True, "show_filenames": True}
    options.update(kwargs)
    return OutputFormatter(**options)


def test_text_formatting():
    result = plain().format_match(Path("test.txt"), 42, "hello world", 0, 5)
    assert result == "test.txt:42:hello world"


def test_json_formatting():
    result = plain(json_output=True).format_match(Path("test.txt"), 42, "hello world", 0, 5)
    assert '"file":"test.txt"' in result
    assert '"line":42' in result


def test_only_matching():
    result = plain(only_matching=True).format_match(
        Path("test.txt"), 42, "hello world rust code", 6, 11
    )
    assert result == "test.txt:42:world"


def test_json_round_trip_with_quotes():
    result = plain(json_output=True).format_match("a.txt", 3, 'say "hi"', 5, 7)
    assert json.loads(result) == {
        "file": "a.txt",
        "line": 3,
        "content": 'say "hi"',
        "match_start": 5,
        "match_end": 7,
    }


def test_without_prefixes():
    formatter = OutputFormatter()
    assert formatter.format_match("x.txt", 1, "abc", 0, 1) == "abc"


def test_only_matching_invalid_range_prints_nothing():
    formatter = OutputFormatter(only_matching=True)
    assert formatter.format_match("x", 1, "abc", 0, 10) == ""
    assert formatter.format_match("x", 1, "abc", 2, 2) == ""


def test_only_matching_uses_byte_offsets():
    formatter = OutputFormatter(only_matching=True)
    # "é" is two bytes in UTF-8.
    assert formatter.format_match("x", 1, "é world", 3, 8) == "world"


def test_coloured_match_highlights_range():
    formatter = OutputFormatter(use_colors=True)
    result = formatter.format_match("x", 1, "hello world", 6, 11)
    assert result == "hello \x1b[1;31mworld\x1b[0m"


def test_coloured_prefixes():
    formatter = OutputFormatter(show_filenames=True, show_line_numbers=True, use_colors=True)
    result = formatter.format_match("f", 7, "abc", 0, 1)
    assert result == "\x1b[1;35mf\x1b[0m:\x1b[32m7\x1b[0m:\x1b[1;31ma\x1b[0mbc"


def test_context_lines():
    formatter = plain()
    assert formatter.format_context_line("f.txt", 2, "before", True) == "f.txt-2-before"
    assert formatter.format_context_line("f.txt", 4, "after", False) == "f.txt+4+after"


def test_separator_and_header():
    assert OutputFormatter().format_separator() == "--"
    assert OutputFormatter(use_colors=True).format_separator() == "\x1b[2m--\x1b[0m"
    assert OutputFormatter().format_file_header("dir/f.txt") == "dir/f.txt:"


def test_count():
    assert plain().format_count("f.txt", 5) == "f.txt:5"
    assert OutputFormatter().format_count("f.txt", 5) == "5"
    assert json.loads(plain(json_output=True).format_count("f.txt", 5)) == {
        "file": "f.txt",
        "count": 5,
    }


def test_filename_only():
    assert OutputFormatter().format_filename_only(Path("a/b.txt")) == "a/b.txt"
    assert json.loads(OutputFormatter(json_output=True).format_filename_only("b.txt")) == {
        "file": "b.txt"
    }


def test_match_result_defaults():
    result = MatchResult("f.txt", 1, "line", 0, 4)
    result.context_before.append((0, "x"))
    assert result.file_path == Path("f.txt")
    assert result.context_before == [(0, "x")]
    assert MatchResult("g", 1, "l", 0, 1).context_before == []