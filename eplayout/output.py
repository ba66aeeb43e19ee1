"""Routing of player output commands to the audio, video and subtitle outputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Iterable, Sequence

_PORTS = ("video", "audio", "subtitle")


class OutputError(Exception):
    """Raised when an output command fails or cannot be carried out."""


class OutputCommand(IntEnum):
    """Commands understood by outputs and the output handler."""

    INIT = 0
    ADD = 1
    DEL = 2
    CAPABILITIES = 3
    PLAY = 4
    STOP = 5
    PAUSE = 6
    OPEN = 7
    CLOSE = 8
    FLUSH = 9
    CONTINUE = 10
    FASTFORWARD = 11
    AVSYNC = 12
    CLEAR = 13
    PTS = 14
    SWITCH = 15
    SLOWMOTION = 16
    AUDIOMUTE = 17
    REVERSE = 18
    DISCONTINUITY_REVERSE = 19
    GET_FRAME_COUNT = 20
    GET_PROGRESSIVE = 21
    SET_BUFFER_SIZE = 22
    GET_BUFFER_SIZE = 23


@dataclass
class PlaybackState:
    """State of the current playback as seen by the outputs."""

    uri: str | None = None
    size: int = 0
    is_file: bool = False
    is_http: bool = False
    is_playing: bool = False
    is_paused: bool = False
    is_forwarding: bool = False
    is_seeking: bool = False
    is_creation_phase: bool = False
    backward: int = 0
    slow_motion: int = 0
    speed: int = 0
    av_sync: int = 0
    is_video: bool = False
    is_audio: bool = False
    is_subtitle: bool = False
    abort_requested: bool = False
    noprobe: bool = False
    is_loop_mode: bool = False
    is_ts_live_mode: bool = False


class Output:
    """A sink for one or more kinds of stream, named by its capabilities.

    The base implementation supports no commands and accepts no data;
    concrete outputs override :meth:`command` and :meth:`write`.
    """

    def __init__(self, name: str, capabilities: Iterable[str]) -> None:
        self.name = name
        self.capabilities = tuple(capabilities)

    def command(self, context: "Context", command: OutputCommand, argument: Any = None) -> Any:
        """Carry out ``command``; raise OutputError if it is not supported."""
        raise OutputError(f"{self.name}: command {OutputCommand(command).name} not supported")

    def write(self, context: "Context", packet: Any) -> None:
        """Deliver one packet of stream data."""
        raise OutputError(f"{self.name}: output does not accept data")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, capabilities={self.capabilities!r})"


class OutputHandler:
    """Selects an output for each port and forwards commands to them."""

    name = "Output"

    def __init__(self, available: Sequence[Output] = ()) -> None:
        self.available: list[Output] = list(available)
        self.audio: Output | None = None
        self.video: Output | None = None
        self.subtitle: Output | None = None

    def add(self, port: str) -> Output | None:
        """Select the first available output able to serve ``port``."""
        if port not in _PORTS:
            return None
        for output in self.available:
            if port in output.capabilities:
                setattr(self, port, output)
                return output
        return None

    def delete(self, port: str) -> None:
        """Deselect the output of ``port``."""
        if port in _PORTS:
            setattr(self, port, None)

    def capabilities(self) -> list[tuple[str, tuple[str, ...]]]:
        """Return the name and capabilities of every available output."""
        return [(output.name, output.capabilities) for output in self.available]

    def _target(self, port: str) -> Output:
        output = getattr(self, port)
        if output is None:
            raise OutputError(f"no {port} output selected")
        return output

    def _call(self, context: "Context", command: OutputCommand, port: str, argument: Any) -> Any:
        return self._target(port).command(context, command, argument)

    def _broadcast(self, context: "Context", command: OutputCommand, ports: Iterable[str]) -> None:
        failures = []
        for port in ports:
            try:
                self._call(context, command, port, port)
            except OutputError as exc:
                failures.append(f"{port}: {exc}")
        if failures:
            raise OutputError("; ".join(failures))

    @staticmethod
    def _active(playback: PlaybackState, ports: Iterable[str]) -> list[str]:
        return [port for port in ports if getattr(playback, f"is_{port}")]

    def command(self, context: "Context", command: OutputCommand, argument: Any = None) -> Any:
        """Forward ``command`` to the outputs the playback uses.

        Queries return the answering output's result, or None when no
        output was asked.
        """
        command = OutputCommand(command)

        if command is OutputCommand.ADD:
            self.add(argument)
            return None
        if command is OutputCommand.DEL:
            self.delete(argument)
            return None
        if command is OutputCommand.CAPABILITIES:
            return self.capabilities()

        if command is OutputCommand.INIT:
            raise OutputError(f"command {command.name} not supported")
        if context is None or context.playback is None:
            raise OutputError("no playback context")
        playback = context.playback

        if command in (
            OutputCommand.OPEN,
            OutputCommand.CLOSE,
            OutputCommand.STOP,
            OutputCommand.FLUSH,
            OutputCommand.PAUSE,
            OutputCommand.CONTINUE,
        ):
            self._broadcast(context, command, self._active(playback, _PORTS))
            return None

        if command in (
            OutputCommand.FASTFORWARD,
            OutputCommand.REVERSE,
            OutputCommand.SLOWMOTION,
        ):
            self._broadcast(context, command, self._active(playback, ("video", "audio")))
            return None

        if command is OutputCommand.PLAY:
            for port in self._active(playback, _PORTS):
                self._call(context, command, port, port)
            return None

        if command is OutputCommand.AVSYNC:
            if playback.is_video and playback.is_audio:
                self._broadcast(context, command, ("audio",))
            return None

        if command is OutputCommand.CLEAR:
            ports = [
                port
                for port in self._active(playback, _PORTS)
                if argument is None or argument[:1] == port[0]
            ]
            self._broadcast(context, command, ports)
            return None

        if command in (OutputCommand.PTS, OutputCommand.GET_FRAME_COUNT):
            for port in self._active(playback, ("video", "audio")):
                return self._call(context, command, port, argument)
            return None

        if command is OutputCommand.SWITCH:
            for port in self._active(playback, ("audio", "video", "subtitle")):
                return self._call(context, command, port, port)
            return None

        if command is OutputCommand.AUDIOMUTE:
            if playback.is_audio:
                self._call(context, command, "audio", argument)
            return None

        if command is OutputCommand.DISCONTINUITY_REVERSE:
            if playback.is_video:
                self._call(context, command, "video", argument)
            return None

        if command is OutputCommand.GET_PROGRESSIVE:
            if playback.is_video:
                return self._call(context, command, "video", argument)
            return None

        if command in (OutputCommand.SET_BUFFER_SIZE, OutputCommand.GET_BUFFER_SIZE):
            if self.video is not None:
                return self.video.command(context, command, argument)
            if self.audio is not None:
                return self.audio.command(context, command, argument)
            return None

        raise OutputError(f"command {command.name} not supported")


@dataclass
class Context:
    """What the outputs need to know about the running player."""

    playback: PlaybackState | None = None
    output: OutputHandler = field(default_factory=OutputHandler)
    manager: Any = None