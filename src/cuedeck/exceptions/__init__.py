"""
Custom exception hierarchy for cuedeck.

```
CueDeckError (base)
├── DmxError
│   ├── OutOfRangeError
│   └── TransportError
├── PlaybackError
│   ├── DecodeError
│   ├── PlaybackStartError
│   ├── CueLimitError
│   └── CueAlreadyActiveError
├── AudioDeviceError
├── CommandError
│   ├── UnknownCommandError
│   └── CommandArgumentError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

Index and transport errors propagate to the caller of `set`/`flush`.
Playback errors raised inside a cue thread are logged there and never reach
the caller of `start`.
"""

from .audio import AudioDeviceError
from .base import CueDeckError
from .command import CommandArgumentError, CommandError, UnknownCommandError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .dmx import DmxError, OutOfRangeError, TransportError
from .handlers import (
    ErrorContext,
    format_error_for_display,
    wrap_pydantic_error,
    wrap_serial_error,
)
from .playback import (
    CueAlreadyActiveError,
    CueLimitError,
    DecodeError,
    PlaybackError,
    PlaybackStartError,
)

__all__ = [
    # Audio
    "AudioDeviceError",
    # Base
    "CueDeckError",
    # Commands
    "CommandArgumentError",
    "CommandError",
    "UnknownCommandError",
    # Config
    "ConfigFileInvalidError",
    "ConfigValidationError",
    "ConfigurationError",
    # DMX
    "DmxError",
    "OutOfRangeError",
    "TransportError",
    # Playback
    "CueAlreadyActiveError",
    "CueLimitError",
    "DecodeError",
    "PlaybackError",
    "PlaybackStartError",
    # Handlers
    "ErrorContext",
    "format_error_for_display",
    "wrap_pydantic_error",
    "wrap_serial_error",
]
