import pytest

from eplayout.bits import BitPacker, get_extension, read_uint16, read_uint32


def _pack(fields):
    packer = BitPacker()
    for code, width in fields:
        packer.put_bits(code, width)
    packer.flush()
    return packer.getvalue()


def test_single_byte():
    assert _pack([(0xAB, 8)]) == b"\xab"


def test_full_word_is_emitted_before_flush():
    packer = BitPacker()
    for code in (0x12, 0x34, 0x56, 0x78):
        packer.put_bits(code, 8)
    assert packer.getvalue() == b"\x12\x34\x56\x78"


def test_partial_byte_is_zero_padded():
    out = _pack([(0b101, 3)])
    assert len(out) == 1
    assert out[0] >> 5 == 0b101
    assert out[0] & 0x1F == 0


def test_flush_twice_adds_nothing():
    packer = BitPacker()
    packer.put_bits(0x7, 3)
    packer.flush()
    first = packer.getvalue()
    packer.flush()
    assert packer.getvalue() == first


def test_empty_packer_flush():
    packer = BitPacker()
    packer.flush()
    assert packer.getvalue() == b""


@pytest.mark.parametrize(
    "fields",
    [
        [(0x3, 2), (0xFFFFFFFF, 32)],
        [(1, 1), (0x1234, 16), (0x5, 3), (0xABCDE, 20), (0, 7)],
        [(0x2, 4), (0x7, 3), (1, 1), (0x7FFF, 15), (1, 1), (0x1234, 15), (1, 1)],
        [(0xDEADBEEF, 32), (0xCAFE, 16)],
    ],
)
def test_round_trip(fields):
    out = _pack(fields)
    total = sum(width for _, width in fields)
    assert len(out) == (total + 7) // 8
    value = int.from_bytes(out, "big")
    value >>= len(out) * 8 - total
    for code, width in reversed(fields):
        assert value & ((1 << width) - 1) == code
        value >>= width


def test_read_uint32():
    assert read_uint32(b"\x12\x34\x56\x78\x9a") == 0x12345678


def test_read_uint16():
    assert read_uint16(b"\xbe\xef") == 0xBEEF


def test_read_short_buffers():
    with pytest.raises(ValueError):
        read_uint32(b"\x00\x01\x02")
    with pytest.raises(ValueError):
        read_uint16(b"\x00")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("movie.mkv", "mkv"),
        ("archive.tar.gz", "gz"),
        ("noext", None),
        ("trailing.", ""),
        (None, None),
    ],
)
def test_get_extension(name, expected):
    assert get_extension(name) == expected