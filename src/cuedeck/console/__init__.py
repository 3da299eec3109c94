"""Command facade and application wiring."""

from .application import ConsoleApplication
from .commands import DONE, Command, CommandFacade

__all__ = ["Command", "CommandFacade", "ConsoleApplication", "DONE"]
