"""Default audio backend: soundfile decoding, sounddevice output."""

import logging
from typing import Optional

from .data import AudioData
from .device import AudioDevice
from .loader import SampleLoader
from .sink import SoundDeviceSink

logger = logging.getLogger(__name__)


class SoundDeviceBackend:
    """
    Opens cue sources from disk and plays them on a local sound card.

    Composes the generic audio primitives (loader, device, sink); the
    playback controller only sees the open/create_sink interface.
    """

    def __init__(self, device: Optional[int] = None, buffer_size: int = 512):
        """
        Initialize backend.

        Args:
            device: Output device ID (None for system default)
            buffer_size: Audio buffer size in frames

        Raises:
            AudioDeviceError: If the device does not exist
        """
        self.device = AudioDevice.resolve(device)
        self.buffer_size = buffer_size
        self._loader = SampleLoader()

    def open(self, source: str) -> AudioData:
        """
        Decode an audio file.

        Raises:
            DecodeError: If the file cannot be opened or decoded
        """
        return self._loader.load(source)

    def create_sink(self) -> SoundDeviceSink:
        """Create an idle sink on the configured device."""
        return SoundDeviceSink(device=self.device, buffer_size=self.buffer_size)
