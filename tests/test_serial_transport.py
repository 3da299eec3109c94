"""Tests for the serial DMX transport (pyserial patched out)."""

from unittest.mock import Mock, patch

import pytest
import serial

from cuedeck.dmx import NullTransport, SerialTransport
from cuedeck.exceptions import TransportError


@pytest.fixture
def mock_serial():
    """Patch serial.Serial with a port that accepts every byte."""
    with patch("cuedeck.dmx.transport.serial.Serial") as serial_cls:
        port = serial_cls.return_value
        port.is_open = True
        port.write.side_effect = lambda data: len(data)
        yield serial_cls


@pytest.mark.unit
class TestSerialTransport:
    """Test SerialTransport."""

    def test_opens_lazily(self, mock_serial):
        """Test the port is not touched until the first write."""
        transport = SerialTransport("/dev/ttyUSB0")

        mock_serial.assert_not_called()
        assert not transport.is_open

        transport.write(bytes(512))

        mock_serial.assert_called_once()
        args, kwargs = mock_serial.call_args
        assert args == ("/dev/ttyUSB0", 250_000)
        assert kwargs["stopbits"] == serial.STOPBITS_TWO
        assert transport.is_open

    def test_writes_exact_frame(self, mock_serial):
        """Test the frame bytes are passed through unchanged."""
        transport = SerialTransport("COM3", baudrate=115200)
        frame = bytes(range(256)) * 2

        transport.write(frame)
        transport.write(frame)

        port = mock_serial.return_value
        assert port.write.call_count == 2
        port.write.assert_called_with(frame)
        assert mock_serial.call_count == 1  # Port reused between frames

    def test_partial_write(self, mock_serial):
        """Test a short write raises and drops the port."""
        mock_serial.return_value.write.side_effect = lambda data: len(data) - 1
        transport = SerialTransport("/dev/ttyUSB0")

        with pytest.raises(TransportError) as exc_info:
            transport.write(bytes(512))

        assert "partially" in exc_info.value.user_message
        mock_serial.return_value.close.assert_called_once()

    def test_write_failure_reopens(self, mock_serial):
        """Test the next write after a failure opens a fresh port."""
        port = mock_serial.return_value
        port.write.side_effect = [serial.SerialTimeoutException("Write timeout"), 512]
        transport = SerialTransport("/dev/ttyUSB0")

        with pytest.raises(TransportError) as exc_info:
            transport.write(bytes(512))
        assert "timed out" in exc_info.value.user_message

        transport.write(bytes(512))
        assert mock_serial.call_count == 2

    def test_open_failure(self, mock_serial):
        """Test a missing device is reported as not found."""
        mock_serial.side_effect = serial.SerialException(
            "could not open port /dev/ttyUSB9: [Errno 2] No such file or directory"
        )
        transport = SerialTransport("/dev/ttyUSB9")

        with pytest.raises(TransportError) as exc_info:
            transport.write(bytes(512))

        assert exc_info.value.user_message == "DMX interface not found"
        assert exc_info.value.port == "/dev/ttyUSB9"

    def test_permission_denied(self, mock_serial):
        """Test permission errors get a specific hint."""
        mock_serial.side_effect = serial.SerialException("[Errno 13] Permission denied: '/dev/ttyUSB0'")

        with pytest.raises(TransportError) as exc_info:
            SerialTransport("/dev/ttyUSB0").write(b"\x00")

        assert "dialout" in exc_info.value.recovery_hint

    def test_close(self, mock_serial):
        """Test close releases an open port."""
        transport = SerialTransport("/dev/ttyUSB0")
        transport.write(b"\x00")

        transport.close()

        mock_serial.return_value.close.assert_called_once()
        assert not transport.is_open

    def test_list_ports(self):
        """Test port listing returns (device, description) pairs."""
        ports = [Mock(device="/dev/ttyUSB0", description="FT232R USB UART")]

        with patch("cuedeck.dmx.transport.list_ports.comports", return_value=ports):
            assert SerialTransport.list_ports() == [("/dev/ttyUSB0", "FT232R USB UART")]


@pytest.mark.unit
class TestNullTransport:
    """Test NullTransport."""

    def test_discards_frames(self):
        """Test frames are counted and dropped."""
        transport = NullTransport()

        transport.write(bytes(512))
        transport.write(bytes(512))
        transport.close()

        assert transport.frames_written == 2
