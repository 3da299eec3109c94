"""Application configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field

from cuedeck.utils.persistence import PydanticPersistence

from .enums import RestartPolicy

DEFAULT_CONFIG_DIR = Path.home() / ".cuedeck"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.json"


class AppConfig(BaseModel):
    """Console configuration and settings."""

    # DMX output
    serial_port: str | None = Field(
        default=None,
        description="Serial port of the DMX interface (None = no output, frames are discarded)",
    )
    baud_rate: int = Field(default=250_000, gt=0, description="Serial baud rate (DMX512 uses 250000)")
    serial_timeout: float = Field(
        default=0.1, gt=0, description="Serial read/write timeout in seconds"
    )
    universe_count: int = Field(default=2, ge=1, description="Number of DMX universes to allocate")
    channels_per_universe: int = Field(
        default=512, ge=1, le=512, description="Channels per universe"
    )
    flush_on_set: bool = Field(
        default=True, description="Transmit the universe after every set_dmx_value command"
    )

    # Audio output
    audio_device: int | None = Field(
        default=None, description="Audio output device ID (None = system default)"
    )
    audio_buffer_size: int = Field(default=512, gt=0, description="Audio buffer size in frames")

    # Cue playback
    poll_interval: float = Field(
        default=0.1,
        gt=0,
        description="Seconds between a cue's checks for stop and volume changes",
    )
    max_concurrent_cues: int | None = Field(
        default=None, ge=1, description="Maximum simultaneously running cues (None = unlimited)"
    )
    restart_policy: RestartPolicy = Field(
        default=RestartPolicy.REPLACE,
        description="Behaviour when starting a cue that is already playing",
    )
    restart_timeout: float = Field(
        default=1.0, ge=0, description="Seconds to wait for a replaced cue to exit"
    )
    initial_volume: float = Field(default=1.0, ge=0, description="Master volume at startup")
    volume_retry_attempts: int = Field(
        default=3, ge=1, description="Attempts to acquire the master volume lock"
    )
    volume_lock_timeout: float = Field(
        default=0.05, gt=0, description="Seconds to wait for the volume lock per attempt"
    )

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "AppConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.cuedeck/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_json_or_default(path or DEFAULT_CONFIG_PATH, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
