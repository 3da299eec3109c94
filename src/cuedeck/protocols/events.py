"""Domain events for the observer pattern."""

from enum import Enum


class CueEvent(Enum):
    """Events from the cue playback controller."""

    CUE_STARTED = "cue_started"  # Cue registered and its thread launched
    CUE_RUNNING = "cue_running"  # Source opened, output started
    CUE_STOPPING = "cue_stopping"  # Cancellation requested
    CUE_FINISHED = "cue_finished"  # Source played to its end
    CUE_TERMINATED = "cue_terminated"  # Cue thread exited and released its sink
    CUE_FAILED = "cue_failed"  # Source could not be opened
