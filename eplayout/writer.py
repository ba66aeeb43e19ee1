"""Low-level helpers shared by stream writers."""

from __future__ import annotations

import os
from typing import Callable, Sequence

WriteV = Callable[[int, Sequence[bytes]], int]


def write_ext(call: WriteV, fd: int, data: bytes) -> int:
    """Write ``data`` to ``fd`` through a writev-style callable."""
    return call(fd, [data])


def flush_pipe(fd: int) -> int:
    """Drain a non-blocking pipe one byte at a time; return bytes discarded."""
    drained = 0
    while True:
        try:
            chunk = os.read(fd, 1)
        except OSError:
            break
        if len(chunk) != 1:
            break
        drained += 1
    return drained