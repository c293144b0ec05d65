from pathlib import Path

import pytest

from rapidtools.tail_cli import ColorOption, OutputFormat, TailArgs, parse_args


def test_defaults():
    args = parse_args(["app.log"])
    assert args.files == [Path("app.log")]
    assert args.initial_lines == 10
    assert args.buffer_size_kb == 64
    assert args.poll_interval_ms == 100
    assert args.max_buffer_lines == 10000
    assert args.follow is False
    assert args.pattern is None
    assert args.color is ColorOption.AUTO
    assert args.format is OutputFormat.TEXT


def test_flags_parsed():
    args = parse_args(
        ["-n", "5", "-f", "-F", "-g", "err", "-E", "-i", "-v", "-N", "-q", "-t", "-V",
         "--color", "never", "--format", "json", "a.log", "b.log"]
    )
    assert args.initial_lines == 5
    assert args.follow and args.follow_name
    assert args.pattern == "err"
    assert args.use_regex and args.ignore_case and args.invert_match
    assert args.line_numbers and args.quiet and args.timestamp and args.verbose
    assert args.color is ColorOption.NEVER
    assert args.is_json_output() is True
    assert args.files == [Path("a.log"), Path("b.log")]


def test_buffer_size_bytes():
    assert TailArgs(files=["x"], buffer_size_kb=2).buffer_size_bytes() == 2048


def test_text_format_is_not_json():
    assert TailArgs(files=["x"]).is_json_output() is False


@pytest.mark.parametrize(
    "files, quiet, expected",
    [(["a"], False, False), (["a", "b"], False, True), (["a", "b"], True, False)],
)
def test_should_show_filenames(files, quiet, expected):
    assert TailArgs(files=files, quiet=quiet).should_show_filenames() is expected


def test_colors_always_and_never():
    assert TailArgs(files=["a"], color="always").should_use_colors() is True
    assert TailArgs(files=["a"], color="never").should_use_colors() is False


def test_colors_auto_follows_terminal(monkeypatch):
    class _Tty:
        def isatty(self):
            return True

    monkeypatch.setattr("sys.stdout", _Tty())
    assert TailArgs(files=["a"]).should_use_colors() is True


def test_files_required():
    with pytest.raises(SystemExit):
        parse_args([])


def test_bad_format_rejected():
    with pytest.raises(SystemExit):
        parse_args(["--format", "xml", "a.log"])


def test_negative_lines_rejected():
    with pytest.raises(SystemExit):
        parse_args(["-n", "-3", "a.log"])


def test_bad_enum_in_dataclass():
    with pytest.raises(ValueError):
        TailArgs(files=["a"], color="sometimes")