"""Big-endian bit packing and small byte-reading helpers."""

from __future__ import annotations

INVALID_PTS_VALUE = 0x200000000

_WORD_MASK = 0xFFFFFFFF


class BitPacker:
    """Packs bit fields MSB-first into 32-bit big-endian words."""

    def __init__(self) -> None:
        self._out = bytearray()
        self._buffer = 0
        self._remaining = 32

    def put_bits(self, code: int, length: int) -> None:
        """Append the low ``length`` bits of ``code``."""
        bit_buf = self._buffer
        bit_left = self._remaining

        if length < bit_left:
            bit_buf = ((bit_buf << length) | code) & _WORD_MASK
            bit_left -= length
        else:
            bit_buf = (bit_buf << bit_left) & _WORD_MASK
            bit_buf |= (code >> (length - bit_left)) & _WORD_MASK
            self._out += bit_buf.to_bytes(4, "big")
            length -= bit_left
            bit_left = 32 - length
            # Bits already emitted are shifted out of the 32-bit word later.
            bit_buf = code & _WORD_MASK

        self._buffer = bit_buf
        self._remaining = bit_left

    def flush(self) -> None:
        """Emit any pending bits, zero-padded to a whole byte."""
        buf = (self._buffer << self._remaining) & _WORD_MASK
        remaining = self._remaining
        while remaining < 32:
            self._out.append(buf >> 24)
            buf = (buf << 8) & _WORD_MASK
            remaining += 8
        self._remaining = 32
        self._buffer = 0

    def getvalue(self) -> bytes:
        """Return the bytes emitted so far."""
        return bytes(self._out)


def read_uint32(buffer: bytes) -> int:
    """Read a big-endian unsigned 32-bit integer from the start of ``buffer``."""
    if len(buffer) < 4:
        raise ValueError("need at least 4 bytes")
    return int.from_bytes(buffer[:4], "big")


def read_uint16(buffer: bytes) -> int:
    """Read a big-endian unsigned 16-bit integer from the start of ``buffer``."""
    if len(buffer) < 2:
        raise ValueError("need at least 2 bytes")
    return int.from_bytes(buffer[:2], "big")


def get_extension(name: str | None) -> str | None:
    """Return the text after the last dot in ``name``, or None."""
    if name is None:
        return None
    _, dot, ext = name.rpartition(".")
    return ext if dot else None