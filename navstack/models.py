"""Data structures and capability contracts for navstack."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class Screen(Protocol):
    """A unit of navigable UI state that can occupy the navigation stack.

    The stack only relies on ``name``. The lifecycle hooks are driven by the
    host application, never by the stack itself.
    """

    @property
    def name(self) -> str | None: ...

    def init(self) -> None: ...

    def start(self) -> None: ...

    def stop(self) -> None: ...


@runtime_checkable
class StackListener(Protocol):
    """Receives structural change notifications from a NavigationStack."""

    def stack_pushed(self, screen: Screen) -> None: ...

    def stack_popped(self, popped: Screen, new_top: Screen | None) -> None: ...

    def stack_top(self, screen: Screen) -> None: ...


class StackAction(str, Enum):
    """Kind of structural change on the stack."""

    PUSH = "push"
    POP = "pop"


@dataclass
class StackEvent:
    """A single stack transition.

    Attributes:
        action: Whether a screen was pushed or popped
        screen: The pushed or popped screen
        new_top: Top of the stack after the transition (None if empty)
        timestamp: When the transition was recorded
    """

    action: StackAction
    screen: Screen
    new_top: Screen | None
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class BrowserConfig:
    """Configuration for the drill-down browser.

    Attributes:
        show_hidden: Include dot-files in directory listings
        max_entries: Maximum number of entries listed per directory
        preview_bytes: Maximum bytes read for a file preview
        filter_threshold: Minimum fuzzy score (0-100) for the entry filter
        breadcrumb_width: Maximum width of the breadcrumb trail
    """

    show_hidden: bool = False
    max_entries: int = 500
    preview_bytes: int = 4096
    filter_threshold: float = 60.0
    breadcrumb_width: int = 60

    def __post_init__(self) -> None:
        if self.max_entries <= 0:
            raise ValueError("max_entries must be positive")
        if self.preview_bytes <= 0:
            raise ValueError("preview_bytes must be positive")
        if not 0.0 <= self.filter_threshold <= 100.0:
            raise ValueError("filter_threshold must be between 0 and 100")
        if self.breadcrumb_width <= 0:
            raise ValueError("breadcrumb_width must be positive")


@dataclass
class Entry:
    """A directory entry shown in a listing.

    Attributes:
        name: Base name of the entry
        path: Full path of the entry
        is_dir: True if the entry is a directory
        size: Size in bytes (0 for directories)
        modified: Last modification time
    """

    name: str
    path: Path
    is_dir: bool
    size: int = 0
    modified: datetime = field(default_factory=datetime.now)


__all__ = [
    "Screen",
    "StackListener",
    "StackAction",
    "StackEvent",
    "BrowserConfig",
    "Entry",
]
