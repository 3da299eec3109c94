"""Verb + argument command facade over the DMX and playback controllers."""

import logging
import shlex
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from cuedeck.core import PlaybackController
from cuedeck.dmx import DeviceController
from cuedeck.exceptions import CommandArgumentError, UnknownCommandError

logger = logging.getLogger(__name__)

DONE = "done"


@dataclass(frozen=True, slots=True)
class Command:
    """One console verb."""

    name: str
    handler: Callable[..., str]
    params: tuple[str, ...]
    optional: int = 0  # How many trailing params may be omitted
    help: str = ""

    @property
    def usage(self) -> str:
        required = self.params[:len(self.params) - self.optional]
        optional = self.params[len(self.params) - self.optional:]
        parts = [self.name, *required, *(f"[{p}]" for p in optional)]
        return " ".join(parts)


class CommandFacade:
    """
    Parses string commands and routes them to the controllers.

    This is the only place strings become typed values. Unknown verbs and
    malformed arguments are rejected here; range errors come from the
    controllers and propagate unchanged.
    """

    def __init__(
        self,
        dmx: DeviceController,
        playback: PlaybackController,
        flush_on_set: bool = True,
    ):
        """
        Initialize facade.

        Args:
            dmx: Lighting controller
            playback: Cue playback controller
            flush_on_set: Transmit the universe after each set_dmx_value
        """
        self._dmx = dmx
        self._playback = playback
        self._flush_on_set = flush_on_set

        self._commands: dict[str, Command] = {}
        for command in (
            Command("set_dmx_value", self._set_dmx_value, ("universe", "channel", "value"),
                    help="Set a channel value (0-255)"),
            Command("get_dmx_value", self._get_dmx_value, ("universe", "channel"),
                    help="Read a channel value"),
            Command("flush", self._flush, ("universe",), optional=1,
                    help="Transmit one universe, or all of them"),
            Command("blackout", self._blackout, (), help="Zero and transmit every universe"),
            Command("play_sound", self._play_sound, ("identifier", "volume"), optional=1,
                    help="Start a cue"),
            Command("stop_sound", self._stop_sound, ("identifier",), help="Stop a cue"),
            Command("stop_all_sounds", self._stop_all_sounds, (), help="Stop every cue"),
            Command("set_volume", self._set_volume, ("level",), help="Set the master volume"),
            Command("status", self._status, (), help="Show master volume and running cues"),
        ):
            self._commands[command.name] = command

    @property
    def commands(self) -> dict[str, Command]:
        """Registered commands by verb."""
        return dict(self._commands)

    def dispatch(self, verb: str, args: Sequence[str]) -> str:
        """
        Run one command.

        Args:
            verb: Command name
            args: Raw string arguments

        Returns:
            "done" for actions, or the requested value for queries

        Raises:
            UnknownCommandError: If the verb is not registered
            CommandArgumentError: If arguments are missing, extra or unparseable
            OutOfRangeError: If a universe/channel/value is invalid
            TransportError: If a flush fails
        """
        command = self._commands.get(verb)
        if command is None:
            raise UnknownCommandError(verb, list(self._commands))

        required = len(command.params) - command.optional
        if not required <= len(args) <= len(command.params):
            raise CommandArgumentError(
                verb,
                f"expected {self._expected(command)} argument(s), got {len(args)}",
                command.usage,
            )

        logger.info(f"Received command: {verb} with args: {list(args)}")
        return command.handler(command, *args)

    def execute(self, line: str) -> str:
        """
        Parse and run a command line such as `play_sound "intro.wav" 0.8`.

        Returns:
            Command result, or an empty string for a blank line
        """
        try:
            tokens = shlex.split(line)
        except ValueError as e:
            raise CommandArgumentError("command", str(e), "VERB [ARGS...]") from e

        if not tokens:
            return ""
        return self.dispatch(tokens[0], tokens[1:])

    @staticmethod
    def _expected(command: Command) -> str:
        total = len(command.params)
        required = total - command.optional
        return str(total) if required == total else f"{required}-{total}"

    @staticmethod
    def _int(command: Command, name: str, raw: str) -> int:
        try:
            return int(raw)
        except ValueError:
            raise CommandArgumentError(
                command.name, f"{name} must be an integer, got '{raw}'", command.usage
            ) from None

    @staticmethod
    def _float(command: Command, name: str, raw: str) -> float:
        try:
            return float(raw)
        except ValueError:
            raise CommandArgumentError(
                command.name, f"{name} must be a number, got '{raw}'", command.usage
            ) from None

    # =================================================================
    # Lighting
    # =================================================================

    def _set_dmx_value(self, command: Command, universe: str, channel: str, value: str) -> str:
        u = self._int(command, "universe", universe)
        self._dmx.set(u, self._int(command, "channel", channel), self._int(command, "value", value))
        if self._flush_on_set:
            self._dmx.flush(u)
        return DONE

    def _get_dmx_value(self, command: Command, universe: str, channel: str) -> str:
        return str(self._dmx.get(self._int(command, "universe", universe),
                                 self._int(command, "channel", channel)))

    def _flush(self, command: Command, universe: str | None = None) -> str:
        if universe is None:
            self._dmx.flush_all()
        else:
            self._dmx.flush(self._int(command, "universe", universe))
        return DONE

    def _blackout(self, command: Command) -> str:
        self._dmx.clear()
        self._dmx.flush_all()
        return DONE

    # =================================================================
    # Playback
    # =================================================================

    def _play_sound(self, command: Command, identifier: str, volume: str = "1.0") -> str:
        level = self._float(command, "volume", volume)
        try:
            self._playback.start(identifier, level)
        except ValueError as e:
            raise CommandArgumentError(command.name, str(e), command.usage) from e
        return DONE

    def _stop_sound(self, command: Command, identifier: str) -> str:
        self._playback.stop(identifier)
        return DONE

    def _stop_all_sounds(self, command: Command) -> str:
        self._playback.stop_all()
        return DONE

    def _set_volume(self, command: Command, level: str) -> str:
        value = self._float(command, "level", level)
        try:
            self._playback.set_volume(value)
        except ValueError as e:
            raise CommandArgumentError(command.name, str(e), command.usage) from e
        return DONE

    def _status(self, command: Command) -> str:
        lines = [f"master volume: {self._playback.volume:g}"]
        cues = self._playback.active_cues()
        if not cues:
            lines.append("no cues")
        for handle in cues:
            lines.append(
                f"#{handle.cue_id} {handle.identifier} [{handle.state.value}] volume {handle.volume:g}"
            )
        return "\n".join(lines)
