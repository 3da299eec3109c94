"""DMX device controller: universe buffers plus an exclusively owned transport."""

import logging
from threading import RLock
from typing import Optional

from cuedeck.exceptions import OutOfRangeError, TransportError
from cuedeck.protocols import Transport

from .buffer import DMX_CHANNEL_COUNT, ChannelBuffer

logger = logging.getLogger(__name__)


class DeviceController:
    """
    Holds the lighting state for one or more universes and sends it on demand.

    Composing a frame (`set`) is separate from sending it (`flush`): values
    are written into memory and nothing goes out until `flush` is called.
    This matches the DMX pattern of building a full universe before a
    single transmission.

    Only this controller writes to its transport. A single lock serializes
    flushes so two callers can never interleave bytes of different frames,
    and `set`/`get` share it so a flush always sends a consistent frame.
    """

    def __init__(
        self,
        transport: Transport,
        universe_count: int = 1,
        channels_per_universe: int = DMX_CHANNEL_COUNT,
    ):
        """
        Initialize device controller.

        Args:
            transport: Output transport (owned by this controller from now on)
            universe_count: Number of universes to allocate up front
            channels_per_universe: Channels in each universe
        """
        self._transport = transport
        self._channels_per_universe = channels_per_universe
        self._buffers: list[ChannelBuffer] = []
        self._lock = RLock()

        for _ in range(universe_count):
            self.add_universe()

        logger.info(
            f"DeviceController initialized: {universe_count} universe(s) x "
            f"{channels_per_universe} channels via {transport!r}"
        )

    def add_universe(self) -> int:
        """
        Register a new all-zero universe.

        Returns:
            Index of the new universe
        """
        with self._lock:
            self._buffers.append(ChannelBuffer(self._channels_per_universe))
            return len(self._buffers) - 1

    def _buffer(self, universe: int) -> ChannelBuffer:
        """Return the buffer for a universe. Call with _lock held."""
        if not 0 <= universe < len(self._buffers):
            raise OutOfRangeError("universe", universe, len(self._buffers))
        return self._buffers[universe]

    def set(self, universe: int, channel: int, value: int) -> None:
        """
        Write a channel value into memory. Does not transmit.

        Raises:
            OutOfRangeError: If universe, channel or value is invalid
        """
        with self._lock:
            self._buffer(universe).set(channel, value)
        logger.debug(f"DMX value set: universe {universe} channel {channel} -> {value}")

    def get(self, universe: int, channel: int) -> int:
        """
        Read a channel value from memory.

        Raises:
            OutOfRangeError: If universe or channel is invalid
        """
        with self._lock:
            return self._buffer(universe).get(channel)

    def snapshot(self, universe: int) -> bytes:
        """Return a copy of the current contents of a universe."""
        with self._lock:
            return self._buffer(universe).to_bytes()

    def clear(self, universe: Optional[int] = None) -> None:
        """
        Zero one universe, or every universe if none is given. Does not transmit.

        Raises:
            OutOfRangeError: If universe is invalid
        """
        with self._lock:
            targets = self._buffers if universe is None else [self._buffer(universe)]
            for buffer in targets:
                buffer.clear()
        logger.debug(f"DMX cleared: {'all universes' if universe is None else f'universe {universe}'}")

    def flush(self, universe: int) -> None:
        """
        Send the full channel sequence of a universe in one transport write.

        The in-memory state is unchanged whether or not the write succeeds.

        Raises:
            OutOfRangeError: If universe is invalid
            TransportError: If the transport write fails
        """
        with self._lock:
            frame = self._buffer(universe).to_bytes()
            try:
                self._transport.write(frame)
            except TransportError as e:
                logger.error(f"Flush of universe {universe} failed: {e.technical_message}")
                raise
            except OSError as e:
                logger.error(f"Flush of universe {universe} failed: {e}")
                raise TransportError("DMX interface write failed", original_error=str(e)) from e
        logger.debug(f"Flushed universe {universe} ({len(frame)} bytes)")

    def flush_all(self) -> None:
        """
        Flush every universe in index order, stopping at the first failure.

        Raises:
            TransportError: If any transport write fails
        """
        with self._lock:
            for universe in range(len(self._buffers)):
                self.flush(universe)

    def close(self) -> None:
        """Close the transport."""
        with self._lock:
            self._transport.close()
        logger.info("DeviceController closed")

    @property
    def universe_count(self) -> int:
        """Number of registered universes."""
        with self._lock:
            return len(self._buffers)

    @property
    def channels_per_universe(self) -> int:
        """Channels in each universe."""
        return self._channels_per_universe

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
