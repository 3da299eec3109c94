"""Per-cue playback handle."""

import itertools
import threading
from typing import Optional

from cuedeck.models import CueState

_cue_ids = itertools.count(1)


class PlaybackHandle:
    """
    State shared between the playback controller and one cue thread.

    The controller only ever requests a stop (STOPPING plus the cancellation
    flag); the cue thread drives every other state change. The cue-local
    volume is fixed at creation.
    """

    def __init__(self, identifier: str, volume: float = 1.0):
        """
        Create a handle in the STARTING state.

        Args:
            identifier: Cue source (usually a file path); not unique
            volume: Cue-local volume, multiplied by the master volume
        """
        self.identifier = identifier
        self.cue_id = next(_cue_ids)
        self._volume = volume
        self._state = CueState.STARTING
        self._state_lock = threading.Lock()
        self._cancelled = threading.Event()
        self._exited = threading.Event()
        self.applied_volume: Optional[float] = None
        self.thread: Optional[threading.Thread] = None

    @property
    def volume(self) -> float:
        """Cue-local volume."""
        return self._volume

    @property
    def state(self) -> CueState:
        """Current lifecycle state."""
        with self._state_lock:
            return self._state

    @property
    def cancelled(self) -> bool:
        """True once stop has been requested."""
        return self._cancelled.is_set()

    @property
    def is_live(self) -> bool:
        """True while the cue is playing or about to, and no stop has been requested."""
        return not self._cancelled.is_set() and self.state.is_live

    def mark_stopping(self) -> bool:
        """
        Move a live cue to STOPPING without waking its thread.

        Lets the controller announce the stop before the cue thread can
        react to it. The cue is no longer live once this returns True.

        Returns:
            True if this call moved the cue into STOPPING
        """
        return self._advance(CueState.STOPPING, (CueState.STARTING, CueState.RUNNING))

    def cancel(self) -> bool:
        """
        Request the cue to stop. Safe to call any number of times from any thread.

        Returns:
            True if this call moved the cue into STOPPING
        """
        moved = self.mark_stopping()
        self._cancelled.set()
        return moved

    def wait_cancelled(self, timeout: float) -> bool:
        """Sleep up to `timeout` seconds, waking early if the cue is cancelled."""
        return self._cancelled.wait(timeout)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the cue thread has exited.

        Returns:
            True if the thread exited within the timeout
        """
        return self._exited.wait(timeout)

    def _advance(self, new_state: CueState, allowed_from: tuple[CueState, ...]) -> bool:
        """Move to new_state if currently in one of allowed_from."""
        with self._state_lock:
            if self._state not in allowed_from:
                return False
            self._state = new_state
            return True

    def _mark_running(self) -> bool:
        """Called by the cue thread once output has started."""
        if self._cancelled.is_set():
            return False
        return self._advance(CueState.RUNNING, (CueState.STARTING,))

    def _finish(self, state: CueState) -> None:
        """Called by the cue thread as its last action."""
        with self._state_lock:
            self._state = state
        self._exited.set()

    def __repr__(self) -> str:
        return (
            f"PlaybackHandle(#{self.cue_id} {self.identifier!r}, "
            f"volume={self._volume}, state={self.state.value})"
        )
