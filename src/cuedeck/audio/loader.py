"""Load audio files into AudioData."""

import logging
from pathlib import Path

import soundfile as sf

from cuedeck.exceptions import DecodeError

from .data import AudioData

logger = logging.getLogger(__name__)


class SampleLoader:
    """
    Decode audio files with soundfile.

    Handles WAV, FLAC, OGG, and the other formats libsndfile supports.
    """

    def load(self, source: str | Path) -> AudioData:
        """
        Load and fully decode an audio file.

        Args:
            source: Path to the audio file

        Returns:
            AudioData containing the decoded audio

        Raises:
            DecodeError: If the file is missing, empty, or cannot be decoded
        """
        path = Path(source)
        if not path.exists():
            raise DecodeError(str(source), "file not found")

        try:
            data, sample_rate = sf.read(str(path), dtype="float32", always_2d=True)
        except (sf.LibsndfileError, RuntimeError, OSError) as e:
            raise DecodeError(str(source), str(e)) from e

        if len(data) == 0:
            raise DecodeError(str(source), "file contains no audio")

        audio = AudioData.from_array(data, sample_rate, source=str(source))
        logger.debug(
            f"Decoded {path.name}: {audio.num_frames} frames, "
            f"{audio.num_channels} ch @ {audio.sample_rate} Hz"
        )
        return audio
