"""Lighting (DMX) exceptions.

- DmxError: Base class for channel buffer and transport errors
- OutOfRangeError: Universe, channel or value outside its valid range
- TransportError: Writing a frame to the output transport failed
"""

from typing import Optional

from .base import CueDeckError


class DmxError(CueDeckError):
    """Channel buffer or DMX output failed."""
    pass


class OutOfRangeError(DmxError):
    """A universe, channel or value index is outside its valid range."""

    def __init__(self, field: str, value: int, limit: int):
        """
        Initialize out-of-range error.

        Args:
            field: Which index was invalid ("universe", "channel" or "value")
            value: The rejected value
            limit: Exclusive upper bound of the valid range
        """
        user_msg = f"{field.capitalize()} {value} is out of range (valid: 0-{limit - 1})"
        super().__init__(
            user_message=user_msg,
            technical_message=f"OutOfRange: {field}={value} not in [0, {limit})",
            recoverable=False,
        )
        self.field = field
        self.value = value
        self.limit = limit


class TransportError(DmxError):
    """Writing a frame to the lighting transport failed."""

    def __init__(
        self,
        user_message: str,
        port: Optional[str] = None,
        original_error: Optional[str] = None,
        **kwargs
    ):
        """
        Initialize transport error.

        Args:
            user_message: User-friendly error message
            port: Serial port path (if applicable)
            original_error: Error message from the serial library
        """
        tech_msg = user_message
        if port:
            tech_msg += f" (port: {port})"
        if original_error:
            tech_msg += f"\nOriginal error: {original_error}"

        kwargs.setdefault("recoverable", True)
        kwargs.setdefault(
            "recovery_hint",
            "Check that the DMX interface is plugged in. "
            "Run 'cuedeck serial list' to see available ports.",
        )
        super().__init__(user_message, technical_message=tech_msg, **kwargs)
        self.port = port
        self.original_error = original_error
