"""Root of the cuedeck error hierarchy.

Console errors carry two audiences. The operator at the REPL or the
`cuedeck` CLI sees `user_message` and, when present, `recovery_hint`
(see `format_error_for_display`). Cue threads and the DMX flush path log
`technical_message`, which keeps the PortAudio/serial/decoder detail out
of the operator's way.

`recoverable` marks errors the console survives: a bad command, an
unreadable cue or a missing device leaves the session running, while an
out-of-range DMX address is a caller bug.
"""

from typing import Optional


class CueDeckError(Exception):
    """
    Base for every error cuedeck raises on purpose.

    Catch this at the console boundary; anything else escaping there is a
    defect and is shown with its type name.
    """

    def __init__(
        self,
        user_message: str,
        technical_message: Optional[str] = None,
        recoverable: bool = False,
        recovery_hint: Optional[str] = None,
        *args,
        **kwargs
    ):
        """
        Args:
            user_message: One line for the operator, e.g. "Cannot open audio source 'x.wav'"
            technical_message: Log line with the underlying cause (defaults to user_message)
            recoverable: True if the console keeps running after this error
            recovery_hint: What the operator can do next, e.g. a command to run
        """
        super().__init__(user_message, *args, **kwargs)
        self.user_message = user_message
        self.technical_message = technical_message or user_message
        self.recoverable = recoverable
        self.recovery_hint = recovery_hint

    def __str__(self) -> str:
        return self.user_message

    def get_full_message(self) -> str:
        """Operator message followed by the hint, as printed by `cuedeck config`."""
        msg = self.user_message
        if self.recovery_hint:
            msg += f"\n\nSuggestion: {self.recovery_hint}"
        return msg
