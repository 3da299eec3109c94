"""Console application: builds the controllers once and wires them to the facade."""

import logging
from typing import Optional

from cuedeck.core import PlaybackController
from cuedeck.dmx import DeviceController, NullTransport, SerialTransport
from cuedeck.exceptions import ErrorContext
from cuedeck.models import AppConfig
from cuedeck.protocols import AudioBackend, CueObserver, Transport

from .commands import CommandFacade

logger = logging.getLogger(__name__)


class ConsoleApplication:
    """
    Owns one DeviceController and one PlaybackController for the process.

    Controllers are plain instances handed to the command facade, never
    module-level globals. Backends can be injected for testing; otherwise
    they are built from the configuration.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        transport: Optional[Transport] = None,
        backend: Optional[AudioBackend] = None,
    ):
        """
        Initialize console application.

        Args:
            config: Console configuration (loads default if None)
            transport: DMX transport (built from config if None)
            backend: Audio backend (built from config if None)

        Raises:
            AudioDeviceError: If the configured audio device does not exist
        """
        self.config = config or AppConfig.load_or_default()

        with ErrorContext("initialize console", logger_instance=logger):
            if transport is None:
                transport = self._build_transport(self.config)
            if backend is None:
                # Imported here so injected backends never load PortAudio
                from cuedeck.audio import SoundDeviceBackend

                backend = SoundDeviceBackend(
                    device=self.config.audio_device,
                    buffer_size=self.config.audio_buffer_size,
                )

            self.dmx = DeviceController(
                transport,
                universe_count=self.config.universe_count,
                channels_per_universe=self.config.channels_per_universe,
            )
            self.playback = PlaybackController.from_config(backend, self.config)
            self.commands = CommandFacade(
                self.dmx, self.playback, flush_on_set=self.config.flush_on_set
            )

        self._closed = False
        logger.info("Console application initialized")

    @staticmethod
    def _build_transport(config: AppConfig) -> Transport:
        if config.serial_port is None:
            logger.warning("No serial port configured - DMX frames will be discarded")
            return NullTransport()
        return SerialTransport(
            config.serial_port, baudrate=config.baud_rate, timeout=config.serial_timeout
        )

    def execute(self, line: str) -> str:
        """Run one command line through the facade."""
        return self.commands.execute(line)

    def execute_verb(self, verb: str, args: list[str]) -> str:
        """Run one already-tokenized command."""
        return self.commands.dispatch(verb, args)

    def register_observer(self, observer: CueObserver) -> None:
        """Follow cue lifecycle events."""
        self.playback.register_observer(observer)

    def shutdown(self, timeout: float = 2.0) -> None:
        """Stop every cue and close the DMX transport. Safe to call twice."""
        if self._closed:
            return
        self._closed = True

        logger.info("Shutting down console")
        self.playback.shutdown(timeout)
        self.dmx.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.shutdown()
