"""Enumerations for the cue console."""

from enum import Enum


class CueState(str, Enum):
    """Lifecycle state of a single cue."""

    STARTING = "starting"  # Thread launched, source not yet opened
    RUNNING = "running"  # Producing output, polling for volume/stop
    STOPPING = "stopping"  # Stop requested, thread still draining
    TERMINATED = "terminated"  # Thread exited, sink released
    FAILED = "failed"  # Source could not be opened; never ran

    @property
    def is_live(self) -> bool:
        """True while the cue thread may still produce output."""
        return self in (CueState.STARTING, CueState.RUNNING)


class RestartPolicy(str, Enum):
    """What to do when a cue is started while one with the same identifier is live."""

    REPLACE = "replace"  # Cancel the old instance and wait for it to exit
    REJECT = "reject"  # Refuse the new start
    ALLOW = "allow"  # Run both side by side
