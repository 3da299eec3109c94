"""CLI commands for cuedeck."""

from .audio import audio_group
from .config import config
from .send import send
from .serial import serial_group

__all__ = ["audio_group", "config", "send", "serial_group"]
