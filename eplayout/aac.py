"""AAC ADTS helpers."""

from __future__ import annotations

AAC_HEADER_LENGTH = 7

_SAMPLE_RATES = (
    96000, 88200, 64000, 48000, 44100, 32000, 24000,
    22050, 16000, 12000, 11025, 8000, 7350,
)


def has_adts_header(data: bytes) -> bool:
    """Tell whether ``data`` is one ADTS frame whose length field matches its size.

    The first byte must be 0xFF and the protection-absent bit of the second
    byte must be set.
    """
    size = len(data)
    if size < AAC_HEADER_LENGTH or data[0] != 0xFF or not data[1] & 0x01:
        return False
    frame_length = (data[3] & 0x3) << 11 | data[4] << 3 | data[5] >> 5
    return frame_length == size


def aac_sample_rate_index(sample_rate: int) -> int:
    """Return the AAC sampling frequency index for ``sample_rate``."""
    for index, rate in enumerate(_SAMPLE_RATES):
        if sample_rate >= rate:
            return index
    return len(_SAMPLE_RATES)