"""Decoded audio data.

A dataclass rather than a Pydantic model: it holds a NumPy buffer, is
internal to the audio backend, and is read from the real-time callback.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
import numpy.typing as npt


@dataclass(slots=True)
class AudioData:
    """Fully decoded audio for one cue source."""

    data: npt.NDArray[np.float32]  # Shape (num_frames, num_channels)
    sample_rate: int
    num_channels: int
    num_frames: int
    source: Optional[str] = None  # Where the audio was loaded from

    @classmethod
    def from_array(
        cls,
        data: npt.NDArray[np.float32],
        sample_rate: int,
        source: Optional[str] = None,
    ) -> "AudioData":
        """
        Create AudioData from a NumPy array.

        Mono input of shape (num_frames,) is stored as (num_frames, 1) so the
        output callback can always index two dimensions.

        Args:
            data: Audio samples, 1D (mono) or 2D (frames x channels)
            sample_rate: Sample rate in Hz
            source: Optional source identifier

        Raises:
            ValueError: If data is not 1D or 2D
        """
        if data.ndim == 1:
            data = data.reshape(-1, 1)
        elif data.ndim != 2:
            raise ValueError(f"Audio data must be 1D or 2D, got {data.ndim}D")

        if data.dtype != np.float32:
            data = data.astype(np.float32)

        num_frames, num_channels = data.shape
        return cls(
            data=data,
            sample_rate=sample_rate,
            num_channels=num_channels,
            num_frames=num_frames,
            source=source,
        )
