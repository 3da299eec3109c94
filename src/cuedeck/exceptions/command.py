"""Command facade exceptions."""

from .base import CueDeckError


class CommandError(CueDeckError):
    """A console command was rejected."""
    pass


class UnknownCommandError(CommandError):
    """The verb is not one the console understands."""

    def __init__(self, verb: str, known: list[str]):
        super().__init__(
            user_message=f"Unknown command: {verb}",
            recoverable=True,
            recovery_hint="Known commands: " + ", ".join(sorted(known)),
        )
        self.verb = verb


class CommandArgumentError(CommandError):
    """The command arguments have the wrong count or type."""

    def __init__(self, verb: str, reason: str, usage: str):
        super().__init__(
            user_message=f"Invalid arguments for {verb}: {reason}",
            recoverable=True,
            recovery_hint=f"Usage: {usage}",
        )
        self.verb = verb
        self.reason = reason
