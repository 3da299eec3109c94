"""Per-cue audio output sink backed by a sounddevice stream."""

import logging
from collections import deque
from threading import Lock
from typing import Optional

import numpy as np
import sounddevice as sd

from cuedeck.exceptions import AudioDeviceError

from .data import AudioData

logger = logging.getLogger(__name__)


class SoundDeviceSink:
    """
    Plays queued AudioData through its own output stream.

    Each cue owns one sink, so cues never share a stream and one cue's
    failure cannot silence another. The stream format is taken from the
    first appended source; later sources must match it.

    The gain set by `set_volume` is applied in the audio callback, so a new
    volume is audible from the next block.
    """

    def __init__(self, device: Optional[int] = None, buffer_size: int = 512):
        """
        Initialize sink.

        Args:
            device: Output device ID (None for default)
            buffer_size: Audio buffer size in frames
        """
        self.device = device
        self.buffer_size = buffer_size

        self._queue: deque[AudioData] = deque()
        self._position = 0  # Frame offset into the head of the queue
        self._volume = 1.0
        self._lock = Lock()
        self._stream: Optional[sd.OutputStream] = None
        self._num_channels = 0
        self._sample_rate = 0
        self._stopped = False

    def append(self, decoder: AudioData) -> None:
        """
        Queue audio for playback, opening the output stream on first use.

        Raises:
            ValueError: If the audio format differs from the stream format
            RuntimeError: If the sink has been stopped
            AudioDeviceError: If the output stream cannot be opened
        """
        with self._lock:
            if self._stopped:
                raise RuntimeError("Cannot append to a stopped sink")

            if self._stream is not None and (
                decoder.sample_rate != self._sample_rate
                or decoder.num_channels != self._num_channels
            ):
                raise ValueError(
                    f"Sink is {self._num_channels} ch @ {self._sample_rate} Hz, "
                    f"got {decoder.num_channels} ch @ {decoder.sample_rate} Hz"
                )
            self._queue.append(decoder)

            if self._stream is None:
                self._open_stream(decoder.sample_rate, decoder.num_channels)

    def _open_stream(self, sample_rate: int, num_channels: int) -> None:
        """Create and start the output stream. Call with _lock held."""
        try:
            stream = sd.OutputStream(
                samplerate=sample_rate,
                blocksize=self.buffer_size,
                channels=num_channels,
                device=self.device,
                dtype=np.float32,
                callback=self._audio_callback,
            )
            stream.start()
        except sd.PortAudioError as e:
            raise AudioDeviceError(
                "Could not open audio output",
                device_id=self.device,
                technical_message=f"PortAudio error opening output stream: {e}",
                recoverable=True,
            ) from e

        self._stream = stream
        self._sample_rate = sample_rate
        self._num_channels = num_channels
        logger.debug(
            f"Output stream started: {num_channels} ch @ {sample_rate} Hz, "
            f"latency {stream.latency * 1000:.1f}ms"
        )

    def set_volume(self, volume: float) -> None:
        """Set the linear output gain."""
        self._volume = volume

    @property
    def volume(self) -> float:
        """Current linear output gain."""
        return self._volume

    @property
    def empty(self) -> bool:
        """True once every appended source has been played to the end."""
        with self._lock:
            return not self._queue

    def stop(self) -> None:
        """Stop output, drop anything still queued and close the stream."""
        with self._lock:
            self._stopped = True
            self._queue.clear()
            self._position = 0
            stream, self._stream = self._stream, None

        # Outside the lock: stopping waits for the callback, which takes the lock
        if stream is not None:
            try:
                stream.stop()
                stream.close()
            except sd.PortAudioError as e:
                logger.warning(f"Error closing output stream: {e}")

    def _audio_callback(self, outdata: np.ndarray, frames: int, time_info, status) -> None:
        """
        Fill one output block from the queue.

        Called by sounddevice on the audio thread.
        """
        if status:
            logger.warning(f"Audio callback status: {status}")

        outdata.fill(0)
        written = 0
        with self._lock:
            while written < frames and self._queue:
                current = self._queue[0]
                take = min(frames - written, current.num_frames - self._position)
                outdata[written:written + take] = current.data[self._position:self._position + take]
                written += take
                self._position += take
                if self._position >= current.num_frames:
                    self._queue.popleft()
                    self._position = 0

        if self._volume != 1.0:
            outdata *= self._volume
