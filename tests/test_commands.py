"""Tests for the CommandFacade verb dispatch."""

from unittest.mock import Mock

import pytest

from conftest import FakeTransport
from cuedeck.console import DONE, CommandFacade
from cuedeck.core import PlaybackController
from cuedeck.dmx import DeviceController
from cuedeck.exceptions import (
    CommandArgumentError,
    OutOfRangeError,
    TransportError,
    UnknownCommandError,
)


@pytest.fixture
def mock_playback():
    """Create a mock playback controller."""
    playback = Mock(spec=PlaybackController)
    playback.volume = 1.0
    playback.active_cues.return_value = []
    return playback


@pytest.fixture
def facade(dmx, mock_playback):
    """Create a facade over a real DMX controller and mock playback."""
    return CommandFacade(dmx, mock_playback)


@pytest.mark.unit
class TestLightingCommands:
    """Test DMX verbs."""

    def test_set_dmx_value_flushes(self, facade, dmx, transport):
        """Test set_dmx_value writes the value and transmits its universe."""
        result = facade.dispatch("set_dmx_value", ["1", "10", "200"])

        assert result == DONE
        assert dmx.get(1, 10) == 200
        assert len(transport.frames) == 1
        assert transport.frames[0][10] == 200

    def test_set_without_flush(self, dmx, transport, mock_playback):
        """Test flush_on_set=False only updates memory."""
        facade = CommandFacade(dmx, mock_playback, flush_on_set=False)

        facade.dispatch("set_dmx_value", ["0", "0", "1"])

        assert dmx.get(0, 0) == 1
        assert transport.frames == []

    def test_get_dmx_value(self, facade, dmx):
        """Test get_dmx_value returns the value as a string."""
        dmx.set(0, 5, 42)

        assert facade.dispatch("get_dmx_value", ["0", "5"]) == "42"

    def test_flush_one_and_all(self, facade, transport):
        """Test flush with and without a universe."""
        facade.dispatch("flush", ["1"])
        assert len(transport.frames) == 1

        facade.dispatch("flush", [])
        assert len(transport.frames) == 3

    def test_blackout(self, facade, dmx, transport):
        """Test blackout zeroes and transmits every universe."""
        dmx.set(0, 0, 255)
        dmx.set(1, 0, 255)

        facade.dispatch("blackout", [])

        assert transport.frames == [bytes(512), bytes(512)]

    def test_out_of_range_propagates(self, facade):
        """Test controller range errors pass through unchanged."""
        with pytest.raises(OutOfRangeError):
            facade.dispatch("set_dmx_value", ["0", "0", "300"])

    def test_transport_error_propagates(self, mock_playback):
        """Test a failed flush reaches the caller."""
        facade = CommandFacade(DeviceController(FakeTransport(fail=True)), mock_playback)

        with pytest.raises(TransportError):
            facade.dispatch("set_dmx_value", ["0", "0", "1"])


@pytest.mark.unit
class TestPlaybackCommands:
    """Test audio verbs."""

    def test_play_sound_default_volume(self, facade, mock_playback):
        """Test play_sound without a volume plays at 1.0."""
        assert facade.dispatch("play_sound", ["intro.wav"]) == DONE

        mock_playback.start.assert_called_once_with("intro.wav", 1.0)

    def test_play_sound_with_volume(self, facade, mock_playback):
        """Test play_sound parses the cue volume."""
        facade.dispatch("play_sound", ["intro.wav", "0.25"])

        mock_playback.start.assert_called_once_with("intro.wav", 0.25)

    def test_play_sound_invalid_volume(self, facade, mock_playback):
        """Test a rejected volume becomes an argument error."""
        mock_playback.start.side_effect = ValueError("cue volume must be a finite number >= 0")

        with pytest.raises(CommandArgumentError):
            facade.dispatch("play_sound", ["intro.wav", "-1"])

    def test_stop_commands(self, facade, mock_playback):
        """Test stop_sound and stop_all_sounds route to the controller."""
        facade.dispatch("stop_sound", ["intro.wav"])
        facade.dispatch("stop_all_sounds", [])

        mock_playback.stop.assert_called_once_with("intro.wav")
        mock_playback.stop_all.assert_called_once_with()

    def test_set_volume(self, facade, mock_playback):
        """Test set_volume parses the level."""
        facade.dispatch("set_volume", ["0.5"])

        mock_playback.set_volume.assert_called_once_with(0.5)

    def test_status(self, facade, mock_playback):
        """Test status reports master volume and idle state."""
        result = facade.dispatch("status", [])

        assert "master volume: 1" in result
        assert "no cues" in result


@pytest.mark.unit
class TestParsing:
    """Test verb lookup and argument parsing."""

    def test_unknown_verb(self, facade):
        """Test an unknown verb raises and lists the known ones."""
        with pytest.raises(UnknownCommandError) as exc_info:
            facade.dispatch("dance", [])

        assert "set_dmx_value" in exc_info.value.recovery_hint

    @pytest.mark.parametrize(
        "verb,args",
        [
            ("set_dmx_value", ["0", "1"]),
            ("set_dmx_value", ["0", "1", "2", "3"]),
            ("stop_sound", []),
            ("stop_all_sounds", ["extra"]),
            ("play_sound", ["a", "b", "c"]),
        ],
    )
    def test_wrong_argument_count(self, facade, verb, args):
        """Test missing or extra arguments are rejected with usage."""
        with pytest.raises(CommandArgumentError) as exc_info:
            facade.dispatch(verb, args)

        assert exc_info.value.recovery_hint.startswith("Usage: " + verb)

    @pytest.mark.parametrize(
        "verb,args",
        [
            ("set_dmx_value", ["zero", "1", "2"]),
            ("set_dmx_value", ["0", "1.5", "2"]),
            ("set_volume", ["loud"]),
            ("play_sound", ["intro.wav", "max"]),
        ],
    )
    def test_unparseable_arguments(self, facade, verb, args):
        """Test non-numeric arguments are rejected before reaching a controller."""
        with pytest.raises(CommandArgumentError):
            facade.dispatch(verb, args)

    def test_execute_splits_quoted_paths(self, facade, mock_playback):
        """Test execute honours shell-style quoting."""
        facade.execute('play_sound "my cue.wav" 0.5')

        mock_playback.start.assert_called_once_with("my cue.wav", 0.5)

    def test_execute_blank_line(self, facade):
        """Test a blank line does nothing."""
        assert facade.execute("   ") == ""

    def test_execute_unbalanced_quotes(self, facade):
        """Test a malformed line raises an argument error."""
        with pytest.raises(CommandArgumentError):
            facade.execute('play_sound "unterminated')

    def test_usage_marks_optional(self, facade):
        """Test optional parameters are bracketed in usage."""
        assert facade.commands["play_sound"].usage == "play_sound identifier [volume]"
        assert facade.commands["flush"].usage == "flush [universe]"


@pytest.mark.integration
class TestFacadeWithPlayback:
    """Test the facade against a real playback controller."""

    def test_status_lists_cues(self, dmx, playback):
        """Test status shows running cues."""
        facade = CommandFacade(dmx, playback)
        facade.execute("play_sound intro.wav 0.5")

        result = facade.execute("status")

        assert "intro.wav" in result
        assert "volume 0.5" in result
