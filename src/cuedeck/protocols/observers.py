"""Observer protocol definitions."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .events import CueEvent

if TYPE_CHECKING:
    from cuedeck.core.handle import PlaybackHandle


@runtime_checkable
class CueObserver(Protocol):
    """
    Observer that receives cue lifecycle events.

    Lets a console front end follow cues without the playback controller
    knowing anything about it.
    """

    def on_cue_event(self, event: CueEvent, handle: "PlaybackHandle") -> None:
        """
        Handle a cue lifecycle change.

        Args:
            event: The type of cue event
            handle: Handle of the cue that changed state

        Note:
            Most events are delivered from the cue's own thread, so
            implementations should be thread-safe and avoid blocking.
        """
        ...
