"""Data models for the cue console."""

from .config import DEFAULT_CONFIG_PATH, AppConfig
from .enums import CueState, RestartPolicy

__all__ = [
    "AppConfig",
    "CueState",
    "DEFAULT_CONFIG_PATH",
    "RestartPolicy",
]
