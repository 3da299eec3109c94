"""Capability interfaces the console core consumes.

The core never talks to a serial port or a sound card directly. It only
needs these operations, so any backend that implements them can be used
(hardware, a no-op, or a test double).
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Transport(Protocol):
    """Byte sink for lighting frames."""

    def write(self, data: bytes) -> None:
        """
        Write one complete frame.

        Raises:
            TransportError: If the write fails or times out
        """
        ...

    def close(self) -> None:
        """Release the underlying device."""
        ...


@runtime_checkable
class Sink(Protocol):
    """Audio output for a single cue."""

    def append(self, decoder: Any) -> None:
        """Queue decoded audio for playback and start output."""
        ...

    def set_volume(self, volume: float) -> None:
        """Set the linear gain applied to this sink's output."""
        ...

    def stop(self) -> None:
        """Stop output and release the audio stream."""
        ...

    @property
    def empty(self) -> bool:
        """True once everything appended has been played."""
        ...


@runtime_checkable
class AudioBackend(Protocol):
    """Opens cue sources and creates output sinks."""

    def open(self, source: str) -> Any:
        """
        Open and decode an audio source.

        Raises:
            DecodeError: If the source cannot be opened or decoded
        """
        ...

    def create_sink(self) -> Sink:
        """Create a new, idle output sink."""
        ...
