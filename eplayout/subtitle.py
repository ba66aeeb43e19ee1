"""Subtitle output that forwards subtitle events as JSON messages to one client."""

from __future__ import annotations

import dataclasses
import sys
import threading
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Protocol

from .output import Context, Output, OutputCommand, OutputError

_JSON_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}

_JSON_BYTE_ESCAPES = {ord(k): v.encode("ascii") for k, v in _JSON_ESCAPES.items()}

FLUSH_MESSAGE = '{"s_f":{"r":0}}\n'


class SubtitleCodecId(IntEnum):
    """Subtitle codecs the output distinguishes."""

    UNKNOWN = 0
    SUBRIP = 1
    ASS = 2
    WEBVTT = 3
    PGS = 4
    DVB = 5
    XSUB = 6
    MOV_TEXT = 7


_GRAPHIC_CODECS = frozenset({SubtitleCodecId.PGS, SubtitleCodecId.DVB, SubtitleCodecId.XSUB})


@dataclass
class SubtitlePacket:
    """One subtitle event as delivered by the container."""

    track_id: int
    data: bytes
    pts: int = 0
    dts: int = 0
    duration_ms: int = 0
    private_data: bytes = b""
    width: int = 0
    height: int = 0
    codec_id: SubtitleCodecId = SubtitleCodecId.UNKNOWN


class GraphicSubtitleWriter(Protocol):
    """Renders graphic (bitmap) subtitles."""

    def write(self, packet: SubtitlePacket) -> Any: ...

    def reset(self) -> Any: ...

    def close(self) -> Any: ...


class SubtitleTrackSource(Protocol):
    """The subtitle track manager as seen by the output."""

    def current_track_id(self) -> int: ...

    def current_encoding(self) -> str | None: ...


def json_string_escape(text: str) -> str:
    """Escape ``text`` for use inside a JSON string literal."""
    return "".join(_JSON_ESCAPES.get(ch, ch) for ch in text)


def ass_get_text(text: str) -> str:
    """Return the Text field of an ASS event line, with hard breaks as ``\\n``.

    The event fields are ReadOrder, Layer, Style, Name, MarginL, MarginR,
    MarginV, Effect and Text; everything after the eighth comma is the text.
    """
    parts = text.split(",", 8)
    if len(parts) < 9:
        return ""
    return parts[8].replace("\\N", "\\n")


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


def mov_get_text(data: bytes | None) -> str:
    """Extract the text of a MOV text sample, JSON-escaped.

    Leading ASCII bytes up to the first space or non-ASCII byte are skipped.
    ``\\N`` becomes a newline, malformed UTF-8 is dropped and a truncated
    multi-byte sequence ends the text.
    """
    if not data:
        return ""

    start = 0
    while start < len(data) and data[start] < 0x80 and data[start] != 0x20:
        start += 1
    if start >= len(data):
        return ""

    body = data[start:]
    end = body.find(b"\x00")
    if end != -1:
        body = body[:end]

    out = bytearray()
    i = 0
    size = len(body)
    while i < size:
        byte = body[i]
        if byte == 0x5C and i + 1 < size and body[i + 1] == 0x4E:
            out += b"\n"
            i += 2
            continue
        if byte < 0x80:
            out += _JSON_BYTE_ESCAPES.get(byte, bytes((byte,)))
            i += 1
            continue
        if byte < 0xC2:
            i += 1
            continue
        if byte & 0xF0 == 0xF0:
            width = 4
        elif byte & 0xE0 == 0xE0:
            width = 3
        else:
            width = 2
        if i + width > size:
            break
        if all(_is_continuation(b) for b in body[i + 1 : i + width]):
            out += body[i : i + width]
            i += width
        else:
            i += 1
    return out.decode("utf-8", errors="replace")


def subtitle_codec_id(encoding: str | None) -> SubtitleCodecId:
    """Map a track encoding name to a subtitle codec."""
    if encoding is None:
        return SubtitleCodecId.UNKNOWN
    if encoding.startswith("S_TEXT/SUBRIP"):
        return SubtitleCodecId.SUBRIP
    if encoding.startswith("S_TEXT/ASS"):
        return SubtitleCodecId.ASS
    if encoding == "S_TEXT/WEBVTT":
        return SubtitleCodecId.WEBVTT
    if encoding.startswith("S_GRAPHIC/PGS"):
        return SubtitleCodecId.PGS
    if encoding.startswith("S_GRAPHIC/DVB"):
        return SubtitleCodecId.DVB
    if encoding.startswith("S_GRAPHIC/XSUB"):
        return SubtitleCodecId.XSUB
    if encoding.startswith("S_TEXT/MOV"):
        return SubtitleCodecId.MOV_TEXT
    return SubtitleCodecId.UNKNOWN


def _pts_to_ms(pts: int) -> int:
    """Convert a 90 kHz timestamp to milliseconds, truncating toward zero."""
    ms = abs(pts) // 90
    return ms if pts >= 0 else -ms


def _decode_text(data: bytes) -> str:
    end = data.find(b"\x00")
    if end != -1:
        data = data[:end]
    return data.decode("utf-8", errors="replace")


def _stdout_send(message: str) -> None:
    sys.stdout.write(message)
    sys.stdout.flush()


class SubtitleOutput(Output):
    """Sends text subtitles to a client and hands graphic ones to a writer."""

    def __init__(
        self,
        send: Callable[[str], Any] = _stdout_send,
        graphic_writer: GraphicSubtitleWriter | None = None,
    ) -> None:
        super().__init__("Subtitle", ("subtitle",))
        self._send = send
        self._graphic_writer = graphic_writer
        self._active_writer: GraphicSubtitleWriter | None = None
        self._lock = threading.Lock()
        self.is_open = False

    def open(self) -> None:
        """Open the output; raise OutputError if it is already open."""
        with self._lock:
            if self.is_open:
                raise OutputError("subtitle output already opened")
            self.is_open = True

    def close(self) -> None:
        """Close the output and any graphic writer in use."""
        with self._lock:
            if self._active_writer is not None:
                self._active_writer.close()
                self._active_writer = None
            self.is_open = False

    def flush(self) -> None:
        """Reset the graphic writer and tell the client to clear subtitles."""
        if self._active_writer is not None:
            self._active_writer.reset()
        self._send(FLUSH_MESSAGE)

    def _send_text(self, packet: SubtitlePacket, text: str) -> None:
        start = _pts_to_ms(packet.pts)
        end = start + packet.duration_ms
        self._send(
            f'{{"s_a":{{"id":{packet.track_id},"s":{start},"e":{end},"t":"{text}"}}}}\n'
        )

    def write(self, context: Context, packet: SubtitlePacket) -> None:
        """Deliver one subtitle packet of the current track."""
        if packet is None:
            raise OutputError("no subtitle packet given")

        tracks: SubtitleTrackSource = context.manager.subtitle
        if tracks.current_track_id() != packet.track_id:
            if self._active_writer is not None:
                self._active_writer.close()
                self._active_writer = None
            self.flush()

        encoding = tracks.current_encoding()
        if encoding is None:
            raise OutputError("subtitle encoding unknown")

        codec = subtitle_codec_id(encoding)
        if codec in (SubtitleCodecId.SUBRIP, SubtitleCodecId.WEBVTT):
            self._send_text(packet, json_string_escape(_decode_text(packet.data)))
        elif codec is SubtitleCodecId.ASS:
            self._send_text(packet, ass_get_text(_decode_text(packet.data)))
        elif codec is SubtitleCodecId.MOV_TEXT:
            self._send_text(packet, mov_get_text(packet.data))
        elif codec in _GRAPHIC_CODECS:
            if self._active_writer is None:
                if self._graphic_writer is None:
                    raise OutputError(f"no graphic subtitle writer for {encoding}")
                self._active_writer = self._graphic_writer
            self._active_writer.write(dataclasses.replace(packet, codec_id=codec))
        else:
            raise OutputError(f"unknown subtitle encoding {encoding}")

    def command(self, context: Context, command: OutputCommand, argument: Any = None) -> Any:
        """Carry out an output command."""
        command = OutputCommand(command)
        if command is OutputCommand.OPEN:
            self.open()
        elif command is OutputCommand.CLOSE:
            self.close()
        elif command in (OutputCommand.PLAY, OutputCommand.STOP):
            pass
        elif command in (OutputCommand.SWITCH, OutputCommand.FLUSH, OutputCommand.CLEAR):
            self.flush()
        elif command in (OutputCommand.PAUSE, OutputCommand.CONTINUE):
            raise OutputError(f"subtitle {command.name.lower()} not implemented")
        else:
            raise OutputError(f"command {command.name} not supported")
        return None