"""Cue playback exceptions.

- PlaybackError: Base class for cue playback errors
- DecodeError: Audio source could not be opened or decoded
- PlaybackStartError: A cue failed before it started producing output
- CueLimitError: Admission policy refused a new cue
- CueAlreadyActiveError: Restart policy refused a duplicate cue
"""

from typing import Optional

from .base import CueDeckError


class PlaybackError(CueDeckError):
    """Cue playback failed."""
    pass


class DecodeError(PlaybackError):
    """Audio source could not be opened or decoded."""

    def __init__(self, source: str, reason: str):
        """
        Initialize decode error.

        Args:
            source: The source identifier (usually a file path)
            reason: Why decoding failed
        """
        super().__init__(
            user_message=f"Cannot open audio source '{source}'",
            technical_message=f"Failed to decode {source}: {reason}",
            recoverable=True,
            recovery_hint="Check the file path and that the format is supported (WAV, FLAC, OGG).",
        )
        self.source = source
        self.reason = reason


class PlaybackStartError(PlaybackError):
    """A cue failed before reaching the running state."""

    def __init__(self, identifier: str, cause: Optional[Exception] = None):
        """
        Initialize playback start error.

        Args:
            identifier: Cue identifier that failed
            cause: Underlying exception
        """
        detail = cause.technical_message if isinstance(cause, CueDeckError) else str(cause)
        super().__init__(
            user_message=f"Cue '{identifier}' failed to start",
            technical_message=f"Cue '{identifier}' failed to start: {detail}",
            recoverable=True,
        )
        self.identifier = identifier
        self.cause = cause


class CueLimitError(PlaybackError):
    """Too many cues are already running."""

    def __init__(self, identifier: str, limit: int):
        super().__init__(
            user_message=f"Cannot start '{identifier}': {limit} cues already running",
            recoverable=True,
            recovery_hint="Stop a running cue or raise max_concurrent_cues in the configuration.",
        )
        self.identifier = identifier
        self.limit = limit


class CueAlreadyActiveError(PlaybackError):
    """A live cue with the same identifier already exists."""

    def __init__(self, identifier: str):
        super().__init__(
            user_message=f"Cue '{identifier}' is already playing",
            recoverable=True,
            recovery_hint=f"Run 'stop_sound {identifier}' first, or set restart_policy to 'replace'.",
        )
        self.identifier = identifier
