import asyncio

import pytest

from rapidtools.tail_errors import BufferOverflowError, TailFileNotFoundError
from rapidtools.tail_monitor import FileMonitor, FileState
from rapidtools.tail_patterns import PatternMatcher


def _drain(queue):
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items


def test_file_state_creation(tmp_path):
    path = tmp_path / "empty.log"
    path.write_bytes(b"")
    state = FileState.from_path(path)
    assert state.path == path
    assert state.position == 0


def test_file_state_starts_at_end(tmp_path):
    path = tmp_path / "a.log"
    path.write_bytes(b"abc\n")
    state = FileState.from_path(path)
    assert (state.position, state.size, state.line_count) == (4, 4, 0)


def test_file_state_missing_file(tmp_path):
    with pytest.raises(TailFileNotFoundError):
        FileState.from_path(tmp_path / "missing.log")


def test_update_from_stat_sets_size(tmp_path):
    path = tmp_path / "a.log"
    path.write_bytes(b"abc\n")
    state = FileState.from_path(path)
    path.write_bytes(b"abcdefgh\n")
    state.update_from_stat(path.stat())
    assert state.size == 9


def test_read_initial_lines(tmp_path):
    path = tmp_path / "a.log"
    path.write_text("line 1\nline 2\nline 3\n")
    monitor = FileMonitor(None, False, 8192, 10000, False)
    monitor.add_file(path)
    lines = monitor.read_initial_lines(path, 2)
    assert len(lines) == 2
    assert "line 2" in lines[0].content
    assert "line 3" in lines[1].content
    assert [entry.line_number for entry in lines] == [2, 3]


def test_read_initial_zero_lines(tmp_path):
    path = tmp_path / "a.log"
    path.write_text("x\ny\n")
    monitor = FileMonitor()
    assert monitor.read_initial_lines(path, 0) == []


def test_read_initial_missing(tmp_path):
    with pytest.raises(TailFileNotFoundError):
        FileMonitor().read_initial_lines(tmp_path / "nope.log", 5)


@pytest.mark.asyncio
async def test_check_file_changes_reads_appended(tmp_path):
    path = tmp_path / "a.log"
    path.write_text("line 1\nline 2\nline 3\n")
    monitor = FileMonitor()
    monitor.add_file(path)
    monitor.read_initial_lines(path, 10)
    with path.open("a") as handle:
        handle.write("line 4\n")
    queue = asyncio.Queue()
    await monitor.check_file_changes(path, queue)
    entries = _drain(queue)
    assert [(e.line_number, e.content) for e in entries] == [(4, "line 4")]
    assert entries[0].timestamp is not None
    assert monitor.files[path].position == path.stat().st_size


@pytest.mark.asyncio
async def test_check_file_changes_truncation_resets(tmp_path):
    path = tmp_path / "a.log"
    path.write_text("aaa\nbbb\nccc\n")
    monitor = FileMonitor()
    monitor.add_file(path)
    monitor.read_initial_lines(path, 10)
    with path.open("r+") as handle:
        handle.truncate(0)
        handle.write("x\n")
    queue = asyncio.Queue()
    await monitor.check_file_changes(path, queue)
    entries = _drain(queue)
    assert [(e.line_number, e.content) for e in entries] == [(1, "x")]


@pytest.mark.asyncio
async def test_check_file_changes_missing_file(tmp_path):
    path = tmp_path / "a.log"
    path.write_text("x\n")
    monitor = FileMonitor()
    monitor.add_file(path)
    path.unlink()
    with pytest.raises(TailFileNotFoundError):
        await monitor.check_file_changes(path, asyncio.Queue())


@pytest.mark.asyncio
async def test_check_file_changes_missing_follow_name(tmp_path):
    path = tmp_path / "a.log"
    path.write_text("x\n")
    monitor = FileMonitor(follow_name=True)
    monitor.add_file(path)
    path.unlink()
    queue = asyncio.Queue()
    await monitor.check_file_changes(path, queue)
    assert queue.empty()


@pytest.mark.asyncio
async def test_buffer_overflow(tmp_path):
    path = tmp_path / "a.log"
    path.write_text("")
    monitor = FileMonitor(max_buffer_lines=2)
    monitor.add_file(path)
    path.write_text("1\n2\n3\n4\n")
    with pytest.raises(BufferOverflowError) as info:
        await monitor.check_file_changes(path, asyncio.Queue())
    assert info.value.current == 3


@pytest.mark.asyncio
async def test_poll_files_swallows_errors(tmp_path):
    good = tmp_path / "good.log"
    bad = tmp_path / "bad.log"
    good.write_text("")
    bad.write_text("")
    monitor = FileMonitor()
    monitor.add_file(good)
    monitor.add_file(bad)
    bad.unlink()
    good.write_text("fresh\n")
    queue = asyncio.Queue()
    await monitor.poll_files(queue)
    assert [e.content for e in _drain(queue)] == ["fresh"]


@pytest.mark.asyncio
async def test_start_monitoring_delivers_new_lines(tmp_path):
    path = tmp_path / "a.log"
    path.write_text("old\n")
    monitor = FileMonitor(PatternMatcher("keep"))
    monitor.add_file(path)
    queue = asyncio.Queue()
    task = asyncio.create_task(monitor.start_monitoring(queue, 0.01))
    try:
        with path.open("a") as handle:
            handle.write("drop me\nkeep me\n")
        entry = await asyncio.wait_for(queue.get(), timeout=5)
    finally:
        task.cancel()
    assert (entry.content, entry.line_number, entry.matched) == ("keep me", 2, True)