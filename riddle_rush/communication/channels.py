"""Change notification between the engine and its renderers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:
    from ..engine.state import GameState


Subscriber = Callable[["GameState"], None]


class EventKind(Enum):
    """Kinds of engine events."""
    STAGE = "stage"        # Stage transition
    INFO = "info"          # Riddle loaded, hint revealed, etc.
    IGNORED = "ignored"    # Intent dispatched in the wrong stage
    ERROR = "error"        # Provider failure


@dataclass
class Event:
    """A single entry in the event log."""
    kind: EventKind
    content: str
    round_number: int


@dataclass
class EventChannel:
    """Fans state changes out to subscribers and keeps an event log."""

    events: list[Event] = field(default_factory=list)
    _subscribers: list[Subscriber] = field(default_factory=list, repr=False)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a callback for state changes.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, state: "GameState") -> None:
        """Send a snapshot of the state to every subscriber."""
        for callback in list(self._subscribers):
            callback(state.snapshot())

    def add_event(self, kind: EventKind, content: str, round_number: int) -> Event:
        """Append an event to the log."""
        event = Event(kind=kind, content=content, round_number=round_number)
        self.events.append(event)
        return event

    def get_events(self, kind: Optional[EventKind] = None) -> list[Event]:
        """Get events, optionally filtered by kind."""
        if kind is None:
            return self.events
        return [e for e in self.events if e.kind == kind]
