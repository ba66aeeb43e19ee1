import os

import pytest

from eplayout.writer import flush_pipe, write_ext


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    os.set_blocking(read_fd, False)
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


def test_write_ext_passes_single_buffer():
    calls = []

    def recorder(fd, buffers):
        calls.append((fd, list(buffers)))
        return 42

    assert write_ext(recorder, 7, b"payload") == 42
    assert calls == [(7, [b"payload"])]


def test_write_ext_with_writev(pipe):
    read_fd, write_fd = pipe
    assert write_ext(os.writev, write_fd, b"hello") == 5
    assert os.read(read_fd, 16) == b"hello"


def test_flush_pipe_drains(pipe):
    read_fd, write_fd = pipe
    os.write(write_fd, b"abc")
    assert flush_pipe(read_fd) == 3
    with pytest.raises(BlockingIOError):
        os.read(read_fd, 1)


def test_flush_empty_pipe(pipe):
    read_fd, _ = pipe
    assert flush_pipe(read_fd) == 0


def test_flush_pipe_closed_writer(pipe):
    read_fd, write_fd = pipe
    os.write(write_fd, b"xy")
    os.close(write_fd)
    assert flush_pipe(read_fd) == 2
    assert os.read(read_fd, 1) == b""