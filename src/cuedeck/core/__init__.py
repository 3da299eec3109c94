"""Cue playback core."""

from .handle import PlaybackHandle
from .playback_controller import PlaybackController
from .volume import MasterVolume

__all__ = ["MasterVolume", "PlaybackController", "PlaybackHandle"]
