"""Tests for the DMX DeviceController."""

import threading
from unittest.mock import Mock

import pytest

from conftest import FakeTransport
from cuedeck.dmx import DeviceController
from cuedeck.exceptions import OutOfRangeError, TransportError


@pytest.mark.unit
class TestDeviceControllerBuffers:
    """Test universe state handling."""

    def test_set_does_not_transmit(self, dmx, transport):
        """Test set only changes memory."""
        dmx.set(0, 10, 128)

        assert dmx.get(0, 10) == 128
        assert transport.frames == []

    def test_universes_are_independent(self, dmx):
        """Test writing one universe leaves the other untouched."""
        dmx.set(0, 0, 255)

        assert dmx.get(1, 0) == 0

    @pytest.mark.parametrize(
        "universe,channel,value,field",
        [
            (2, 0, 1, "universe"),
            (-1, 0, 1, "universe"),
            (0, 512, 1, "channel"),
            (0, 0, 256, "value"),
        ],
    )
    def test_out_of_range(self, dmx, universe, channel, value, field):
        """Test every invalid index raises OutOfRangeError naming the field."""
        with pytest.raises(OutOfRangeError) as exc_info:
            dmx.set(universe, channel, value)

        assert exc_info.value.field == field

    def test_add_universe(self, dmx):
        """Test new universes get the next index and start zeroed."""
        index = dmx.add_universe()

        assert index == 2
        assert dmx.universe_count == 3
        assert dmx.snapshot(2) == bytes(512)

    def test_clear_single_and_all(self, dmx):
        """Test clear zeroes one universe or all of them."""
        dmx.set(0, 1, 50)
        dmx.set(1, 1, 60)

        dmx.clear(0)
        assert dmx.get(0, 1) == 0
        assert dmx.get(1, 1) == 60

        dmx.clear()
        assert dmx.get(1, 1) == 0

    def test_custom_universe_size(self, transport):
        """Test universes can be smaller than 512 channels."""
        controller = DeviceController(transport, universe_count=1, channels_per_universe=24)

        controller.flush(0)

        assert transport.frames == [bytes(24)]
        with pytest.raises(OutOfRangeError):
            controller.set(0, 24, 1)


@pytest.mark.unit
class TestDeviceControllerFlush:
    """Test frame transmission."""

    def test_flush_sends_exact_buffer(self, dmx, transport):
        """Test flush writes the universe's full channel sequence once."""
        dmx.set(0, 0, 1)
        dmx.set(0, 511, 2)
        dmx.set(1, 5, 99)

        dmx.flush(0)

        assert len(transport.frames) == 1
        frame = transport.frames[0]
        assert len(frame) == 512
        assert frame[0] == 1
        assert frame[511] == 2
        assert frame[5] == 0  # Universe 1's value never leaks into universe 0

    def test_flush_invalid_universe(self, dmx, transport):
        """Test flushing a missing universe raises without writing."""
        with pytest.raises(OutOfRangeError):
            dmx.flush(5)

        assert transport.frames == []

    def test_flush_all_in_order(self, dmx, transport):
        """Test flush_all sends every universe in index order."""
        dmx.set(0, 0, 10)
        dmx.set(1, 0, 20)

        dmx.flush_all()

        assert [frame[0] for frame in transport.frames] == [10, 20]

    def test_transport_error_keeps_state(self):
        """Test a failed write propagates and leaves the buffer intact."""
        transport = FakeTransport(fail=True)
        controller = DeviceController(transport)
        controller.set(0, 3, 77)

        with pytest.raises(TransportError):
            controller.flush(0)

        assert controller.get(0, 3) == 77

    def test_os_error_wrapped(self):
        """Test raw OS errors from a transport become TransportError."""
        transport = Mock()
        transport.write.side_effect = OSError("device unplugged")
        controller = DeviceController(transport)

        with pytest.raises(TransportError) as exc_info:
            controller.flush(0)

        assert "device unplugged" in exc_info.value.technical_message

    def test_close_closes_transport(self, dmx, transport):
        """Test close releases the transport."""
        dmx.close()

        assert transport.closed

    def test_context_manager(self, transport):
        """Test the controller closes its transport on exit."""
        with DeviceController(transport) as controller:
            controller.flush(0)

        assert transport.closed


@pytest.mark.integration
class TestDeviceControllerConcurrency:
    """Test flushes from several threads."""

    def test_concurrent_flushes_never_interleave(self):
        """Test the transport never sees two writes at once."""
        transport = FakeTransport(write_delay=0.002)
        controller = DeviceController(transport, universe_count=2)

        def worker(universe):
            for value in range(10):
                controller.set(universe, 0, value)
                controller.flush(universe)

        threads = [threading.Thread(target=worker, args=(u % 2,)) for u in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5.0)

        assert transport.overlaps == 0
        assert len(transport.frames) == 40
        assert all(len(frame) == 512 for frame in transport.frames)
