"""Concurrent multi-cue playback with per-cue cancellation and shared volume."""

import logging
import threading
import time
from typing import Optional

from cuedeck.exceptions import CueAlreadyActiveError, CueLimitError, PlaybackStartError
from cuedeck.models import AppConfig, CueState, RestartPolicy
from cuedeck.protocols import AudioBackend, CueEvent, CueObserver, Sink
from cuedeck.utils import ObserverManager

from .handle import PlaybackHandle
from .volume import MasterVolume, validate_level

logger = logging.getLogger(__name__)


class PlaybackController:
    """
    Runs audio cues as independent threads.

    Each cue thread opens its source, starts a sink and then polls: it
    checks its cancellation flag, applies master volume x cue volume to the
    sink and waits `poll_interval` before checking again. Stop and volume
    changes therefore take effect within one poll interval, without any
    channel from the controller into the thread.

    The controller never blocks on a cue: `start` returns once the thread is
    launched and `stop`/`stop_all` only set flags. Anything that goes wrong
    inside a cue thread is logged and ends that cue alone.
    """

    def __init__(
        self,
        backend: AudioBackend,
        poll_interval: float = 0.1,
        initial_volume: float = 1.0,
        max_concurrent_cues: Optional[int] = None,
        restart_policy: RestartPolicy = RestartPolicy.REPLACE,
        restart_timeout: float = 1.0,
        volume_retry_attempts: int = 3,
        volume_lock_timeout: float = 0.05,
    ):
        """
        Initialize playback controller.

        Args:
            backend: Opens sources and creates sinks
            poll_interval: Seconds between a cue's stop/volume checks
            initial_volume: Starting master volume
            max_concurrent_cues: Cap on live cues (None = unlimited)
            restart_policy: What to do when starting an already-live identifier
            restart_timeout: Seconds to wait for a replaced cue to exit
            volume_retry_attempts: Lock attempts per master volume write
            volume_lock_timeout: Seconds per lock attempt
        """
        self._backend = backend
        self._poll_interval = poll_interval
        self._max_concurrent_cues = max_concurrent_cues
        self._restart_policy = restart_policy
        self._restart_timeout = restart_timeout
        self._volume = MasterVolume(initial_volume, volume_retry_attempts, volume_lock_timeout)

        self._registry: list[PlaybackHandle] = []
        self._registry_lock = threading.Lock()
        self._observers = ObserverManager[CueObserver](observer_type_name="cue")

        logger.info(
            f"PlaybackController initialized (poll={poll_interval}s, "
            f"max_cues={max_concurrent_cues or 'unlimited'}, restart={restart_policy.value})"
        )

    @classmethod
    def from_config(cls, backend: AudioBackend, config: AppConfig) -> "PlaybackController":
        """Build a controller from application configuration."""
        return cls(
            backend,
            poll_interval=config.poll_interval,
            initial_volume=config.initial_volume,
            max_concurrent_cues=config.max_concurrent_cues,
            restart_policy=config.restart_policy,
            restart_timeout=config.restart_timeout,
            volume_retry_attempts=config.volume_retry_attempts,
            volume_lock_timeout=config.volume_lock_timeout,
        )

    # =================================================================
    # Commands
    # =================================================================

    def start(self, identifier: str, cue_volume: float = 1.0) -> PlaybackHandle:
        """
        Launch a cue and return its handle without waiting for playback.

        Source errors surface later, in the cue thread's log, never here.

        Args:
            identifier: Cue source (file path for the default backend)
            cue_volume: Cue-local volume

        Returns:
            Handle for the new cue

        Raises:
            ValueError: If cue_volume is negative or not finite
            CueAlreadyActiveError: If the identifier is live and the policy is REJECT
            CueLimitError: If max_concurrent_cues live cues already exist
        """
        cue_volume = validate_level(cue_volume, "cue volume")

        with self._registry_lock:
            duplicates = [h for h in self._registry if h.identifier == identifier and h.is_live]
            if duplicates and self._restart_policy is RestartPolicy.REJECT:
                raise CueAlreadyActiveError(identifier)
            replaced = duplicates if self._restart_policy is RestartPolicy.REPLACE else []

            if self._max_concurrent_cues is not None:
                live = sum(1 for h in self._registry if h.is_live) - len(replaced)
                if live >= self._max_concurrent_cues:
                    raise CueLimitError(identifier, self._max_concurrent_cues)

            stopping = [h for h in replaced if h.mark_stopping()]
            handle = PlaybackHandle(identifier, cue_volume)
            self._registry.append(handle)

        for old in stopping:
            self._observers.notify("on_cue_event", CueEvent.CUE_STOPPING, old)
        for old in replaced:
            old.cancel()
        for old in replaced:
            if not old.wait(self._restart_timeout):
                logger.warning(f"Replaced cue #{old.cue_id} '{identifier}' still draining")

        thread = threading.Thread(
            target=self._run_cue,
            args=(handle,),
            name=f"cue-{handle.cue_id}",
            daemon=True,
        )
        handle.thread = thread

        logger.info(f"Starting cue #{handle.cue_id}: {identifier} (volume {cue_volume})")
        self._observers.notify("on_cue_event", CueEvent.CUE_STARTED, handle)
        try:
            thread.start()
        except RuntimeError:
            logger.error(f"Could not launch thread for cue #{handle.cue_id}: {identifier}")
            self._deregister(handle)
            handle._finish(CueState.FAILED)
            self._observers.notify("on_cue_event", CueEvent.CUE_FAILED, handle)
            raise
        return handle

    def stop(self, identifier: str) -> int:
        """
        Request every cue with this identifier to stop. Does not wait.

        Returns:
            Number of cues newly asked to stop (0 if none matched)
        """
        with self._registry_lock:
            targets = [h for h in self._registry if h.identifier == identifier]

        if not targets:
            logger.debug(f"stop: no cue playing for '{identifier}'")
        return self._cancel(targets)

    def stop_all(self) -> int:
        """
        Request every registered cue to stop. Does not wait.

        Returns:
            Number of cues newly asked to stop
        """
        with self._registry_lock:
            targets = list(self._registry)

        logger.info(f"Stopping all cues ({len(targets)} registered)")
        return self._cancel(targets)

    def set_volume(self, level: float) -> bool:
        """
        Set the master volume. Running cues pick it up on their next poll.

        Returns:
            True if applied, False if the lock stayed busy (logged)

        Raises:
            ValueError: If level is negative or not finite
        """
        applied = self._volume.set(level)
        if applied:
            logger.info(f"Master volume set to {level}")
        return applied

    def _cancel(self, handles: list[PlaybackHandle]) -> int:
        count = 0
        for handle in handles:
            if handle.mark_stopping():
                count += 1
                logger.info(f"Stopping cue #{handle.cue_id}: {handle.identifier}")
                self._observers.notify("on_cue_event", CueEvent.CUE_STOPPING, handle)
            handle.cancel()
        return count

    # =================================================================
    # Cue thread
    # =================================================================

    def _run_cue(self, handle: PlaybackHandle) -> None:
        """Body of a cue thread. Never raises."""
        sink: Optional[Sink] = None
        final_state = CueState.TERMINATED
        try:
            try:
                decoder = self._backend.open(handle.identifier)
                # A stop may have arrived while the source was opening
                if handle.cancelled:
                    logger.debug(f"Cue #{handle.cue_id} stopped while opening")
                    return
                sink = self._backend.create_sink()
                if handle.cancelled:
                    logger.debug(f"Cue #{handle.cue_id} stopped before output started")
                    return
                self._apply_volume(handle, sink)
                sink.append(decoder)
            except Exception as e:
                error = PlaybackStartError(handle.identifier, e)
                logger.error(f"Cue #{handle.cue_id}: {error.technical_message}")
                final_state = CueState.FAILED
                return

            if handle._mark_running():
                logger.debug(f"Cue #{handle.cue_id} running")
                self._observers.notify("on_cue_event", CueEvent.CUE_RUNNING, handle)

            if self._poll(handle, sink):
                logger.info(f"Cue #{handle.cue_id} finished: {handle.identifier}")
                self._observers.notify("on_cue_event", CueEvent.CUE_FINISHED, handle)

        except Exception:
            logger.exception(f"Cue #{handle.cue_id} ({handle.identifier}) crashed")

        finally:
            if sink is not None:
                try:
                    sink.stop()
                except Exception:
                    logger.exception(f"Cue #{handle.cue_id}: error stopping sink")
            self._deregister(handle)
            handle._finish(final_state)
            event = CueEvent.CUE_FAILED if final_state is CueState.FAILED else CueEvent.CUE_TERMINATED
            self._observers.notify("on_cue_event", event, handle)
            logger.debug(f"Cue #{handle.cue_id} exited ({final_state.value})")

    def _poll(self, handle: PlaybackHandle, sink: Sink) -> bool:
        """
        Apply volume until cancelled or the sink drains.

        Returns:
            True if the cue played to its end, False if it was stopped
        """
        while not handle.cancelled:
            if sink.empty:
                return True
            self._apply_volume(handle, sink)
            handle.wait_cancelled(self._poll_interval)
        return False

    def _apply_volume(self, handle: PlaybackHandle, sink: Sink) -> None:
        effective = self._volume.get() * handle.volume
        sink.set_volume(effective)
        handle.applied_volume = effective

    def _deregister(self, handle: PlaybackHandle) -> None:
        with self._registry_lock:
            try:
                self._registry.remove(handle)
            except ValueError:
                pass

    # =================================================================
    # Queries and lifecycle
    # =================================================================

    @property
    def volume(self) -> float:
        """Current master volume."""
        return self._volume.get()

    @property
    def poll_interval(self) -> float:
        """Seconds between a cue's stop/volume checks."""
        return self._poll_interval

    def active_cues(self) -> list[PlaybackHandle]:
        """Snapshot of registered cues, including ones still draining after a stop."""
        with self._registry_lock:
            return list(self._registry)

    def is_playing(self, identifier: str) -> bool:
        """Check whether a live (not stopped) cue has this identifier."""
        with self._registry_lock:
            return any(h.identifier == identifier and h.is_live for h in self._registry)

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Block until every currently registered cue thread has exited.

        Returns:
            True if all exited within the timeout
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        for handle in self.active_cues():
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            if not handle.wait(remaining):
                return False
        return True

    def shutdown(self, timeout: float = 2.0) -> bool:
        """
        Stop every cue and wait for the threads to exit.

        Returns:
            True if all cues exited within the timeout
        """
        self.stop_all()
        idle = self.wait_idle(timeout)
        if not idle:
            logger.warning(f"{len(self.active_cues())} cue(s) still running after shutdown")
        logger.info("PlaybackController shut down")
        return idle

    def register_observer(self, observer: CueObserver) -> None:
        """Register an observer for cue lifecycle events."""
        self._observers.register(observer)

    def unregister_observer(self, observer: CueObserver) -> None:
        """Unregister a cue observer."""
        self._observers.unregister(observer)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.shutdown()
