"""TUI screens for navstack."""

import logging
from pathlib import Path
from typing import Literal

from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Input, Static

from navstack.listing import filter_entries, list_entries, read_preview
from navstack.models import BrowserConfig, Entry, StackAction, StackEvent
from navstack.tui import display_utils

logger = logging.getLogger(__name__)

Lifecycle = Literal["new", "ready", "started", "stopped"]


class NavScreen(Screen):
    """Base class for screens that live on the navigation stack.

    Implements the lifecycle contract the application drives: ``init`` once
    before the screen is pushed, ``start`` whenever it becomes the top and
    ``stop`` whenever it is covered or removed.

    Attributes:
        config: Browser configuration
        lifecycle: Current lifecycle state
    """

    BINDINGS = [
        ("escape", "go_back", "Back"),
        ("backspace", "go_back", "Back"),
    ]

    def __init__(self, name: str, config: BrowserConfig | None = None) -> None:
        """Initialize the navigation screen.

        Args:
            name: Screen name shown in the breadcrumb trail
            config: Browser configuration (defaults if None)
        """
        super().__init__(name=name)
        self.config = config or BrowserConfig()
        self.lifecycle: Lifecycle = "new"
        self.breadcrumbs = ""

    def init(self) -> None:
        """Load the screen's data. May raise OSError."""
        self.lifecycle = "ready"

    def start(self) -> None:
        """Mark the screen as the active one."""
        self.lifecycle = "started"
        logger.debug("Started %s", self.name)

    def stop(self) -> None:
        """Mark the screen as inactive."""
        self.lifecycle = "stopped"
        logger.debug("Stopped %s", self.name)

    def set_breadcrumbs(self, trail: str) -> None:
        """Update the breadcrumb trail shown above the content."""
        self.breadcrumbs = trail
        if self.is_mounted:
            self.query_one("#breadcrumbs", Static).update(trail)

    def _breadcrumbs_static(self) -> Static:
        return Static(self.breadcrumbs, id="breadcrumbs", markup=False)

    def action_go_back(self) -> None:
        """Return to the previous screen."""
        self.app.action_go_back()


class DirectoryScreen(NavScreen):
    """Screen listing the entries of a directory.

    Attributes:
        path: Directory shown by this screen
        entries: Entries loaded by ``init``
        filter_text: Current filter query
    """

    BINDINGS = [
        ("slash", "filter", "Filter"),
        ("r", "reload", "Reload"),
    ]

    def __init__(self, path: Path, config: BrowserConfig | None = None) -> None:
        """Initialize the directory screen.

        Args:
            path: Directory to list
            config: Browser configuration (defaults if None)
        """
        path = Path(path)
        super().__init__(name=path.name or str(path), config=config)
        self.path = path
        self.entries: list[Entry] = []
        self.filter_text = ""

    def init(self) -> None:
        """Load the directory listing.

        Raises:
            OSError: If the directory cannot be listed
        """
        self.entries = list_entries(self.path, self.config)
        super().init()

    def visible_entries(self) -> list[Entry]:
        """Get entries matching the current filter."""
        return filter_entries(self.entries, self.filter_text, self.config.filter_threshold)

    def compose(self):
        """Compose the directory screen."""
        yield Header()
        yield self._breadcrumbs_static()
        yield Static(
            "[dim]↑↓: Navigate | Enter: Open | /: Filter | r: Reload | Esc: Back | h: History | q: Quit[/]",
            id="help_text",
        )
        yield DataTable(id="entries_table")
        yield Input(placeholder="Filter entries…", id="filter_input")
        yield Footer()

    def on_mount(self) -> None:
        """Populate the table when mounted."""
        self.query_one("#filter_input", Input).display = False
        self._refresh_table()
        self.query_one("#entries_table", DataTable).focus()

    def _refresh_table(self) -> None:
        """Refresh the table with the visible entries."""
        table = self.query_one("#entries_table", DataTable)
        table.clear(columns=True)
        table.add_columns("", "Name", "Size", "Modified")
        table.zebra_striping = True
        table.cursor_type = "row"

        for entry in self.visible_entries():
            table.add_row(
                display_utils.entry_icon(entry),
                display_utils.truncate_string(entry.name, 50),
                "—" if entry.is_dir else display_utils.format_size(entry.size),
                display_utils.format_mtime(entry.modified),
            )

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Drill into the selected entry."""
        entries = self.visible_entries()
        if 0 <= event.cursor_row < len(entries):
            self.app.open_entry(entries[event.cursor_row])

    def on_input_changed(self, event: Input.Changed) -> None:
        """Apply the filter as the user types."""
        self.filter_text = event.value
        self._refresh_table()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Close the filter input and return focus to the table."""
        event.input.display = False
        self.query_one("#entries_table", DataTable).focus()

    def action_filter(self) -> None:
        """Show the filter input."""
        filter_input = self.query_one("#filter_input", Input)
        filter_input.display = True
        filter_input.focus()

    def action_reload(self) -> None:
        """Reload the directory listing."""
        try:
            self.entries = list_entries(self.path, self.config)
        except OSError as e:
            logger.warning("Reload of %s failed: %s", self.path, e)
            self.app.notify(f"Cannot reload {self.path}: {e}", severity="error")
            return
        self._refresh_table()

    def action_go_back(self) -> None:
        """Clear an active filter first, otherwise go back."""
        if self.filter_text:
            self.filter_text = ""
            filter_input = self.query_one("#filter_input", Input)
            filter_input.value = ""
            filter_input.display = False
            self._refresh_table()
            return
        super().action_go_back()


class FileScreen(NavScreen):
    """Screen previewing the head of a file."""

    def __init__(self, path: Path, config: BrowserConfig | None = None) -> None:
        """Initialize the file screen.

        Args:
            path: File to preview
            config: Browser configuration (defaults if None)
        """
        path = Path(path)
        super().__init__(name=path.name, config=config)
        self.path = path
        self.preview = ""

    def init(self) -> None:
        """Read the file preview.

        Raises:
            OSError: If the file cannot be read
        """
        self.preview = read_preview(self.path, self.config.preview_bytes)
        super().init()

    def compose(self):
        """Compose the file screen."""
        yield Header()
        yield self._breadcrumbs_static()
        yield Static(self.preview, id="preview", markup=False)
        yield Footer()


class HistoryScreen(NavScreen):
    """Screen listing recorded stack transitions."""

    def __init__(self, events: list[StackEvent], config: BrowserConfig | None = None) -> None:
        """Initialize the history screen.

        Args:
            events: Transitions to show, oldest first
            config: Browser configuration (defaults if None)
        """
        super().__init__(name="history", config=config)
        self.transitions = list(events)

    def compose(self):
        """Compose the history screen."""
        yield Header()
        yield self._breadcrumbs_static()
        yield Static(f"[bold]Navigation History ({len(self.transitions)})[/]", id="history_title")
        yield DataTable(id="history_table")
        yield Footer()

    def on_mount(self) -> None:
        """Populate the table when mounted."""
        table = self.query_one("#history_table", DataTable)
        table.add_columns("Time", "Action", "Screen", "Top After")
        table.zebra_striping = True

        for event in reversed(self.transitions):
            table.add_row(*self.format_event(event))

    @staticmethod
    def format_event(event: StackEvent) -> tuple[str, str, str, str]:
        """Format a transition as table cells."""
        action = (
            "[green]push[/]" if event.action == StackAction.PUSH else "[yellow]pop[/]"
        )
        new_top = event.new_top.name if event.new_top is not None else "—"
        return (
            event.timestamp.strftime("%H:%M:%S"),
            action,
            event.screen.name or "",
            new_top or "",
        )


__all__ = ["NavScreen", "DirectoryScreen", "FileScreen", "HistoryScreen"]
