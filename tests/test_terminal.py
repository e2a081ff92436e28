"""Tests for pi.readline.terminal."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from pi.readline.terminal import FdSink, FdSource, RawMode, TermiosControl

from .virtual_terminal import FakeControl


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


class TestRawMode:
    """Scoped, re-entrant raw mode."""

    def test_enter_and_restore(self) -> None:
        control = FakeControl()
        scope = RawMode(control)
        with scope:
            assert scope.active
            assert control.raw
        assert not scope.active
        assert control.restored == [{"mode": "cooked", "n": 1}]

    def test_nested_scopes_acquire_once(self) -> None:
        control = FakeControl()
        scope = RawMode(control)
        with scope:
            with scope:
                assert control.entered == 1
            assert control.restored == []
            assert scope.active
        assert control.restored == [{"mode": "cooked", "n": 1}]

    def test_restores_on_error(self) -> None:
        control = FakeControl()
        scope = RawMode(control)
        with pytest.raises(ValueError):
            with scope:
                raise ValueError("boom")
        assert control.raw is False
        assert len(control.restored) == 1

    def test_unsupported_terminal_is_not_active(self) -> None:
        control = FakeControl(supported=False)
        scope = RawMode(control)
        with scope:
            assert not scope.active
        assert control.restored == []

    def test_reacquires_after_release(self) -> None:
        control = FakeControl()
        scope = RawMode(control)
        with scope:
            pass
        with scope:
            pass
        assert control.entered == 2
        assert [t["n"] for t in control.restored] == [1, 2]  # type: ignore[index]


class TestTermiosControl:
    """Raw mode on a real file descriptor."""

    def test_non_tty_has_no_raw_mode(self, pipe) -> None:
        read_fd, _ = pipe
        assert TermiosControl(read_fd).enter_raw_mode() is None


class TestFdSource:
    """Polling and reading a file descriptor."""

    def test_poll_and_read(self, pipe) -> None:
        read_fd, write_fd = pipe
        source = FdSource(read_fd)
        assert source.poll(0) is False
        os.write(write_fd, b"abc")
        assert source.poll(0.1) is True
        assert source.read_chunk(2) == b"ab"
        assert source.read_chunk(512) == b"c"

    def test_closed_writer_is_end_of_input(self, pipe) -> None:
        read_fd, write_fd = pipe
        os.close(write_fd)
        source = FdSource(read_fd)
        assert source.poll(0.1) is True
        assert source.read_chunk(512) == b""


class TestFdSink:
    """Writing to a file descriptor and the write log."""

    def test_writes_utf8(self, pipe) -> None:
        read_fd, write_fd = pipe
        FdSink(write_fd).write("héllo")
        assert os.read(read_fd, 64) == "héllo".encode("utf-8")

    def test_empty_write_is_skipped(self, pipe) -> None:
        read_fd, write_fd = pipe
        FdSink(write_fd).write("")
        assert FdSource(read_fd).poll(0) is False

    def test_write_log(self, pipe, tmp_path: Path) -> None:
        read_fd, write_fd = pipe
        log = tmp_path / "writes.log"
        sink = FdSink(write_fd, write_log=str(log))
        sink.write("a")
        sink.write("\x1b[1D")
        assert log.read_text(encoding="utf-8") == "a\x1b[1D"
        assert os.read(read_fd, 64) == b"a\x1b[1D"
