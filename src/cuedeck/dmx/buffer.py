"""In-memory channel buffer for one DMX universe.

Like the audio data structures, this is a plain class rather than a
Pydantic model: it is mutated constantly and serialized straight to bytes.
"""

from cuedeck.exceptions import OutOfRangeError

DMX_CHANNEL_COUNT = 512
DMX_MAX_VALUE = 255


class ChannelBuffer:
    """
    Fixed-length array of 8-bit channel intensities.

    Channels are 0-based. The length is fixed at creation and the buffer is
    never resized. Out-of-range access raises OutOfRangeError rather than
    clamping.
    """

    __slots__ = ("_data",)

    def __init__(self, size: int = DMX_CHANNEL_COUNT):
        """
        Create an all-zero buffer.

        Args:
            size: Number of channels (1-512)
        """
        if not 1 <= size <= DMX_CHANNEL_COUNT:
            raise ValueError(f"Universe size must be 1-{DMX_CHANNEL_COUNT}, got {size}")
        self._data = bytearray(size)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def _check_channel(self, channel: int) -> None:
        if not 0 <= channel < len(self._data):
            raise OutOfRangeError("channel", channel, len(self._data))

    def set(self, channel: int, value: int) -> None:
        """
        Write a channel value.

        Raises:
            OutOfRangeError: If channel or value is invalid
        """
        self._check_channel(channel)
        if not 0 <= value <= DMX_MAX_VALUE:
            raise OutOfRangeError("value", value, DMX_MAX_VALUE + 1)
        self._data[channel] = value

    def get(self, channel: int) -> int:
        """
        Read a channel value.

        Raises:
            OutOfRangeError: If channel is invalid
        """
        self._check_channel(channel)
        return self._data[channel]

    def clear(self) -> None:
        """Set every channel to zero."""
        self._data[:] = bytes(len(self._data))

    def to_bytes(self) -> bytes:
        """Copy of the full channel sequence, one byte per channel."""
        return bytes(self._data)
