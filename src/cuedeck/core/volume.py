"""Shared master volume."""

import logging
import math
from threading import Lock

logger = logging.getLogger(__name__)


def validate_level(level: float, name: str = "volume") -> float:
    """
    Check a volume level is a finite, non-negative number.

    Raises:
        ValueError: If level is negative, NaN or infinite
    """
    level = float(level)
    if math.isnan(level) or math.isinf(level) or level < 0.0:
        raise ValueError(f"{name} must be a finite number >= 0, got {level}")
    return level


class MasterVolume:
    """
    Volume scalar read by every running cue and written by the console.

    Every access holds the lock only for the read or write itself. Writes
    that cannot get the lock retry a bounded number of times and then give
    up with an error log instead of raising; a momentary conflict on a
    scalar is not worth failing the command for.
    """

    def __init__(self, initial: float = 1.0, retry_attempts: int = 3, lock_timeout: float = 0.05):
        """
        Initialize master volume.

        Args:
            initial: Starting level
            retry_attempts: How many times a write tries to take the lock
            lock_timeout: Seconds to wait for the lock on each attempt
        """
        self._value = validate_level(initial, "master volume")
        self._lock = Lock()
        self._retry_attempts = retry_attempts
        self._lock_timeout = lock_timeout

    def get(self) -> float:
        """Read the current level."""
        with self._lock:
            return self._value

    def set(self, level: float) -> bool:
        """
        Overwrite the level.

        Returns:
            True if written, False if the lock could not be acquired

        Raises:
            ValueError: If level is negative, NaN or infinite
        """
        level = validate_level(level, "master volume")

        for attempt in range(1, self._retry_attempts + 1):
            if self._lock.acquire(timeout=self._lock_timeout):
                try:
                    self._value = level
                finally:
                    self._lock.release()
                return True
            logger.warning(
                f"Master volume lock busy, retrying ({attempt}/{self._retry_attempts})"
            )

        logger.error(f"Failed to set master volume to {level}: lock unavailable")
        return False
