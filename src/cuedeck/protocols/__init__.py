"""Protocols and events shared across the console."""

from .backends import AudioBackend, Sink, Transport
from .events import CueEvent
from .observers import CueObserver

__all__ = [
    "AudioBackend",
    "CueEvent",
    "CueObserver",
    "Sink",
    "Transport",
]
