"""Construction of MPEG PES packet headers."""

from __future__ import annotations

from .bits import INVALID_PTS_VALUE, BitPacker

PES_MAX_HEADER_SIZE = 64
PES_PRIVATE_DATA_FLAG = 0x80
PES_PRIVATE_DATA_LENGTH = 8
PES_LENGTH_BYTE_0 = 5
PES_LENGTH_BYTE_1 = 4
PES_FLAGS_BYTE = 7
PES_EXTENSION_DATA_PRESENT = 0x01
PES_HEADER_DATA_LENGTH_BYTE = 8
PES_START_CODE_RESERVED_4 = 0xFD
PES_VERSION_FAKE_START_CODE = 0x31

MAX_PES_PACKET_SIZE = 65535

PCM_PES_START_CODE = 0xBD
PRIVATE_STREAM_1_PES_START_CODE = 0xBD
H263_VIDEO_PES_START_CODE = 0xFE
H264_VIDEO_PES_START_CODE = 0xE2
MPEG_VIDEO_PES_START_CODE = 0xE0
MPEG_AUDIO_PES_START_CODE = 0xC0
VC1_VIDEO_PES_START_CODE = 0xFD
AAC_AUDIO_PES_START_CODE = 0xCF


def insert_pes_header(
    size: int,
    stream_id: int,
    pts: int = INVALID_PTS_VALUE,
    pic_start_code: int = 0,
) -> bytes:
    """Build a PES header for a payload of ``size`` bytes.

    A size that does not fit the 16-bit length field is written as 0
    (unbounded).
    """
    has_pts = pts != INVALID_PTS_VALUE
    packer = BitPacker()

    packer.put_bits(0x0, 8)
    packer.put_bits(0x0, 8)
    packer.put_bits(0x1, 8)
    packer.put_bits(stream_id & 0xFF, 8)

    if size > 0:
        size += 3 + (5 if has_pts else 0) + (5 if pic_start_code else 0)
    if size > MAX_PES_PACKET_SIZE or size < 0:
        size = 0

    packer.put_bits(size, 16)

    packer.put_bits(0x2, 2)
    packer.put_bits(0x0, 2)  # scrambling control
    packer.put_bits(0x0, 1)  # priority
    packer.put_bits(0x0, 1)  # data alignment
    packer.put_bits(0x0, 1)  # copyright
    packer.put_bits(0x0, 1)  # original or copy

    packer.put_bits(0x2 if has_pts else 0x0, 2)  # PTS_DTS flags
    for _ in range(6):  # ESCR, ES rate, trick mode, copy info, CRC, extension
        packer.put_bits(0x0, 1)

    packer.put_bits(0x5 if has_pts else 0x0, 8)  # header data length

    if has_pts:
        packer.put_bits(0x2, 4)
        packer.put_bits((pts >> 30) & 0x7, 3)
        packer.put_bits(0x1, 1)
        packer.put_bits((pts >> 15) & 0x7FFF, 15)
        packer.put_bits(0x1, 1)
        packer.put_bits(pts & 0x7FFF, 15)
        packer.put_bits(0x1, 1)

    if pic_start_code:
        packer.put_bits(0x0, 8)
        packer.put_bits(0x0, 8)
        packer.put_bits(0x1, 8)
        packer.put_bits(pic_start_code & 0xFF, 8)
        packer.put_bits((pic_start_code >> 8) & 0xFF, 8)

    packer.flush()
    return packer.getvalue()


def insert_video_private_data_header(payload_size: int) -> bytes:
    """Build the private data header that carries a payload size."""
    packer = BitPacker()
    packer.put_bits(PES_PRIVATE_DATA_FLAG, 8)
    packer.put_bits(payload_size & 0xFF, 8)
    packer.put_bits((payload_size >> 8) & 0xFF, 8)
    packer.put_bits((payload_size >> 16) & 0xFF, 8)
    for _ in range(4, PES_PRIVATE_DATA_LENGTH + 1):
        packer.put_bits(0, 8)
    packer.flush()
    return packer.getvalue()


def update_pes_header_payload_size(data: bytearray, size: int) -> None:
    """Rewrite the PES packet length field of ``data`` in place."""
    if size > MAX_PES_PACKET_SIZE or size < 0:
        size = 0
    data[PES_LENGTH_BYTE_1] = size >> 8
    data[PES_LENGTH_BYTE_0] = size & 0xFF