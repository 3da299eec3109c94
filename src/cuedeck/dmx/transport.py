"""Byte transports for DMX frames."""

import logging
import threading
from typing import Optional

import serial
from serial.tools import list_ports

from cuedeck.exceptions import TransportError, wrap_serial_error

logger = logging.getLogger(__name__)

DMX_BAUD_RATE = 250_000


class SerialTransport:
    """
    Serial-port transport for USB/RS-485 DMX interfaces.

    The port is opened lazily on the first write and reopened on the next
    write after a failure, so a replugged interface recovers without a
    restart.
    """

    def __init__(
        self,
        port: str,
        baudrate: int = DMX_BAUD_RATE,
        timeout: float = 0.1,
    ):
        """
        Initialize serial transport.

        Args:
            port: Serial device path (e.g. /dev/ttyUSB0 or COM3)
            baudrate: Line speed (DMX512 uses 250000)
            timeout: Read and write timeout in seconds
        """
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self._serial: Optional[serial.Serial] = None
        self._lock = threading.Lock()

    def _get_serial(self) -> serial.Serial:
        """Return an open port, opening it if needed. Call with _lock held."""
        if self._serial is None or not self._serial.is_open:
            try:
                self._serial = serial.Serial(
                    self.port,
                    self.baudrate,
                    bytesize=serial.EIGHTBITS,
                    parity=serial.PARITY_NONE,
                    stopbits=serial.STOPBITS_TWO,
                    timeout=self.timeout,
                    write_timeout=self.timeout,
                )
                logger.info(f"Serial connected: {self.port} @ {self.baudrate}")
            except (serial.SerialException, OSError) as e:
                self._serial = None
                raise wrap_serial_error(e, port=self.port) from e
        return self._serial

    def write(self, data: bytes) -> None:
        """
        Write one frame to the port.

        Raises:
            TransportError: If the port cannot be opened or the write fails
        """
        with self._lock:
            port = self._get_serial()
            try:
                written = port.write(data)
                port.flush()
            except (serial.SerialException, OSError) as e:
                self._drop_port()
                raise wrap_serial_error(e, port=self.port) from e

            if written is not None and written != len(data):
                self._drop_port()
                raise TransportError(
                    "DMX frame was only partially written",
                    port=self.port,
                    original_error=f"wrote {written} of {len(data)} bytes",
                )

    def _drop_port(self) -> None:
        """Close a failed port so the next write reopens it. Call with _lock held."""
        if self._serial is not None:
            try:
                self._serial.close()
            except (serial.SerialException, OSError) as e:
                logger.debug(f"Error closing serial port {self.port}: {e}")
            self._serial = None

    def close(self) -> None:
        """Close the serial port."""
        with self._lock:
            self._drop_port()
        logger.debug(f"Serial transport closed: {self.port}")

    @property
    def is_open(self) -> bool:
        """Check if the port is currently open."""
        with self._lock:
            return self._serial is not None and self._serial.is_open

    @staticmethod
    def list_ports() -> list[tuple[str, str]]:
        """
        List serial ports on this machine.

        Returns:
            List of (device, description) tuples
        """
        return [(p.device, p.description) for p in list_ports.comports()]

    def __repr__(self) -> str:
        return f"SerialTransport({self.port!r}, baudrate={self.baudrate})"


class NullTransport:
    """Transport that discards frames. Used when no DMX interface is configured."""

    def __init__(self):
        self.frames_written = 0

    def write(self, data: bytes) -> None:
        self.frames_written += 1
        logger.debug(f"Discarding DMX frame ({len(data)} bytes)")

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return "NullTransport()"
