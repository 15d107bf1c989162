"""Navigation stack holding the history of active screens.

Screens are pushed when the user drills into a view and popped when the user
backs out. Registered listeners are notified synchronously, in registration
order, after every structural change.
"""

import logging
import threading
from collections import deque
from collections.abc import Iterator

from navstack.models import Screen, StackAction, StackListener

logger = logging.getLogger(__name__)


class NavigationStack:
    """LIFO stack of screens with ordered listener notification.

    Screen identity is reference identity: the same name may appear several
    times, and two equal-looking screens are still distinct entries.
    """

    def __init__(self) -> None:
        self._items: list[Screen] = []
        self._listeners: list[StackListener] = []
        self._lock = threading.RLock()
        self._pending: deque = deque()
        self._dispatching = False

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __iter__(self) -> Iterator[Screen]:
        return iter(self.peek())

    def __repr__(self) -> str:
        return f"NavigationStack({self.flatten()!r})"

    # ------------------------------------------------------------ listeners

    def _is_registered(self, listener: StackListener) -> bool:
        return any(registered is listener for registered in self._listeners)

    def add_listener(self, listener: StackListener) -> None:
        """Register a listener.

        If the stack is not empty the listener immediately receives a single
        ``stack_top`` call with the current top, so it can sync to the current
        state without replaying the push history. Registering the same
        listener twice has no effect.

        Args:
            listener: Object implementing the StackListener hooks
        """
        with self._lock:
            if self._is_registered(listener):
                logger.debug("Listener %r already registered", listener)
                return
            self._listeners.append(listener)
            logger.debug("Added listener %r (%d total)", listener, len(self._listeners))

            top = self.top()
            if top is not None:
                listener.stack_top(top)

    def remove_listener(self, listener: StackListener) -> None:
        """Unregister a listener. Unknown listeners are ignored.

        Args:
            listener: Previously registered listener
        """
        with self._lock:
            for idx, registered in enumerate(self._listeners):
                if registered is listener:
                    del self._listeners[idx]
                    logger.debug("Removed listener %r", listener)
                    return

    def _notify(self, action: StackAction, screen: Screen, new_top: Screen | None) -> None:
        """Queue a transition and deliver it unless a dispatch is running.

        Transitions caused from inside a hook are delivered only after every
        listener has seen the current one, so all listeners observe the same
        sequence with the same payloads.
        """
        # Recipients are the listeners registered when the transition
        # happened; a listener removed before delivery is skipped.
        self._pending.append((action, screen, new_top, list(self._listeners)))
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._pending:
                action, screen, new_top, recipients = self._pending.popleft()
                for listener in recipients:
                    if not self._is_registered(listener):
                        continue
                    if action == StackAction.PUSH:
                        listener.stack_pushed(screen)
                    else:
                        listener.stack_popped(screen, new_top)
        finally:
            self._dispatching = False
            self._pending.clear()

    # ------------------------------------------------------------ mutation

    def push(self, screen: Screen) -> None:
        """Put a screen on top of the stack and notify listeners.

        Args:
            screen: Screen to make current
        """
        with self._lock:
            self._items.append(screen)
            logger.debug("Pushed %s (depth %d)", screen.name, len(self._items))
            self._notify(StackAction.PUSH, screen, screen)

    def pop(self) -> Screen | None:
        """Remove the top screen and notify listeners.

        Lifecycle methods of the removed screen are not called; that is left
        to whoever reacts to the notification.

        Returns:
            The popped screen, or None if the stack was empty
        """
        with self._lock:
            if not self._items:
                return None
            screen = self._items.pop()
            logger.debug("Popped %s (depth %d)", screen.name, len(self._items))
            self._notify(StackAction.POP, screen, self.top())
            return screen

    def clear(self) -> None:
        """Pop every screen, top first, firing one pop notification each."""
        with self._lock:
            logger.debug("Clearing %d screen(s)", len(self._items))
            while self._items:
                self.pop()

    # ------------------------------------------------------------ queries

    def top(self) -> Screen | None:
        """Return the current screen, or None if the stack is empty."""
        with self._lock:
            return self._items[-1] if self._items else None

    def previous(self) -> Screen | None:
        """Return the screen beneath the top, or None with fewer than two."""
        with self._lock:
            return self._items[-2] if len(self._items) >= 2 else None

    def is_last(self) -> bool:
        """Return True if exactly one screen remains."""
        with self._lock:
            return len(self._items) == 1

    def empty(self) -> bool:
        """Return True if the stack holds no screens."""
        with self._lock:
            return not self._items

    def flatten(self) -> list[str]:
        """Return the screen names from bottom to top."""
        with self._lock:
            return [screen.name or "" for screen in self._items]

    def peek(self) -> list[Screen]:
        """Return a copy of the screens from bottom to top."""
        with self._lock:
            return list(self._items)

    def dump(self) -> None:
        """Log the stack contents at debug level."""
        with self._lock:
            logger.debug("--- navigation stack (%d) ---", len(self._items))
            for idx, screen in enumerate(self._items):
                logger.debug("  %d: %s [%s]", idx, screen.name, type(screen).__name__)


__all__ = ["NavigationStack"]
