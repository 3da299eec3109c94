"""Cuedeck: live-event console for audio cues and DMX lighting."""

__version__ = "0.1.0"

# Controllers
from .core import PlaybackController
from .dmx import DeviceController

# Application
from .console import ConsoleApplication

__all__ = [
    "ConsoleApplication",
    "DeviceController",
    "PlaybackController",
]
