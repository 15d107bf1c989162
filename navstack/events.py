"""Transition history recorded from navigation stack notifications."""

from collections import deque

from navstack.models import Screen, StackAction, StackEvent


class EventLog:
    """Stack listener that keeps the most recent transitions.

    Attributes:
        max_events: Maximum number of events kept (oldest dropped first)
        synced_top: Screen received through ``stack_top`` on registration
    """

    def __init__(self, max_events: int = 200) -> None:
        """Initialize the event log.

        Args:
            max_events: Maximum number of events kept

        Raises:
            ValueError: If max_events is not positive
        """
        if max_events <= 0:
            raise ValueError("max_events must be positive")
        self.max_events = max_events
        self.synced_top: Screen | None = None
        self._events: deque[StackEvent] = deque(maxlen=max_events)

    def stack_pushed(self, screen: Screen) -> None:
        self._events.append(StackEvent(action=StackAction.PUSH, screen=screen, new_top=screen))

    def stack_popped(self, popped: Screen, new_top: Screen | None) -> None:
        self._events.append(StackEvent(action=StackAction.POP, screen=popped, new_top=new_top))

    def stack_top(self, screen: Screen) -> None:
        self.synced_top = screen

    @property
    def events(self) -> list[StackEvent]:
        """Recorded events, oldest first."""
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Forget all recorded events."""
        self._events.clear()


__all__ = ["EventLog"]
