"""Audio device exceptions."""

from .base import CueDeckError


class AudioDeviceError(CueDeckError):
    """Audio device initialization or operation failed."""

    def __init__(self, user_message: str, device_id: int | None = None, **kwargs):
        """
        Initialize audio device error.

        Args:
            user_message: User-friendly error message
            device_id: The device ID that failed (if applicable)
        """
        kwargs.setdefault("recovery_hint", "Run 'cuedeck audio list' to see available devices.")
        super().__init__(user_message, **kwargs)
        self.device_id = device_id
