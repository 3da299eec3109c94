"""Audio decoding and output for cue playback."""

from .backend import SoundDeviceBackend
from .data import AudioData
from .device import AudioDevice
from .loader import SampleLoader
from .sink import SoundDeviceSink

__all__ = [
    "AudioData",
    "AudioDevice",
    "SampleLoader",
    "SoundDeviceBackend",
    "SoundDeviceSink",
]
