"""Main Textual TUI application for navstack."""

import logging
from pathlib import Path

from textual.app import App

from navstack.events import EventLog
from navstack.listing import drill_path
from navstack.models import BrowserConfig, Entry
from navstack.stack import NavigationStack
from navstack.tui import display_utils
from navstack.tui.screens import DirectoryScreen, FileScreen, HistoryScreen, NavScreen

logger = logging.getLogger(__name__)


class NavApp(App):
    """Drill-down file browser driven by a NavigationStack.

    The app is registered as a listener on its own stack: every push or pop
    on ``nav`` is mirrored onto Textual's screen stack, and the breadcrumb
    trail is refreshed from ``nav.flatten()``.

    Attributes:
        root_path: Directory the browser starts in
        open_path: Path below root to open on startup
        browser_config: Browser configuration
        nav: Navigation stack owning the screen history
        event_log: Recorded stack transitions
    """

    TITLE = "navstack"
    SUB_TITLE = ""

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("h", "show_history", "History"),
    ]

    CSS = """
    Screen {
        background: $background;
    }

    #breadcrumbs {
        padding: 0 1;
        text-style: bold;
        background: $primary;
    }

    #help_text {
        text-align: center;
        padding: 0 0 1 0;
        background: $surface;
    }

    #history_title {
        text-align: center;
        padding: 1 0;
        background: $surface;
    }

    DataTable {
        height: 1fr;
    }

    #preview {
        margin: 1 2;
    }
    """

    def __init__(
        self,
        root_path: Path,
        config: BrowserConfig | None = None,
        open_path: Path | None = None,
    ) -> None:
        """Initialize the navstack TUI application.

        Args:
            root_path: Directory the browser starts in
            config: Browser configuration (defaults if None)
            open_path: Path below root to open on startup
        """
        super().__init__()
        self.root_path = Path(root_path)
        self.open_path = open_path
        self.browser_config = config or BrowserConfig()
        self.nav = NavigationStack()
        self.event_log = EventLog()
        self.nav.add_listener(self.event_log)

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.nav.add_listener(self)
        for level in drill_path(self.root_path, self.open_path):
            if not self.drill_into(DirectoryScreen(level, self.browser_config)):
                break

    # ------------------------------------------------------------ stack listener

    def stack_pushed(self, screen: NavScreen) -> None:
        self.push_screen(screen)
        self._refresh_breadcrumbs()

    def stack_popped(self, popped: NavScreen, new_top: NavScreen | None) -> None:
        self.pop_screen()
        popped.stop()
        if new_top is not None:
            new_top.start()
        self._refresh_breadcrumbs()

    def stack_top(self, screen: NavScreen) -> None:
        self._refresh_breadcrumbs()

    def _refresh_breadcrumbs(self) -> None:
        trail = display_utils.format_breadcrumbs(
            self.nav.flatten(), self.browser_config.breadcrumb_width
        )
        self.sub_title = trail
        top = self.nav.top()
        if top is not None:
            top.set_breadcrumbs(trail)

    # ------------------------------------------------------------ navigation

    def drill_into(self, screen: NavScreen) -> bool:
        """Initialize a screen and make it the current one.

        Args:
            screen: Screen to open

        Returns:
            True if the screen was pushed, False if it failed to initialize
        """
        try:
            screen.init()
        except OSError as e:
            logger.warning("Cannot open %s: %s", screen.name, e)
            self.notify(f"Cannot open {screen.name}: {e}", severity="error")
            return False

        current = self.nav.top()
        if current is not None:
            current.stop()
        self.nav.push(screen)
        screen.start()
        return True

    def open_entry(self, entry: Entry) -> bool:
        """Open a directory entry in a new screen."""
        if entry.is_dir:
            return self.drill_into(DirectoryScreen(entry.path, self.browser_config))
        return self.drill_into(FileScreen(entry.path, self.browser_config))

    def action_go_back(self) -> None:
        """Pop the current screen unless it is the last one."""
        if self.nav.empty() or self.nav.is_last():
            self.notify("Already at the top level", severity="warning")
            return
        self.nav.pop()

    def action_show_history(self) -> None:
        """Show the navigation history screen."""
        self.drill_into(HistoryScreen(self.event_log.events, self.browser_config))


def run_tui(
    root_path: Path,
    config: BrowserConfig | None = None,
    open_path: Path | None = None,
) -> None:
    """Run the Textual TUI application.

    Args:
        root_path: Directory the browser starts in
        config: Browser configuration
        open_path: Path below root to open on startup
    """
    app = NavApp(root_path, config, open_path)
    app.run()


__all__ = ["NavApp", "run_tui"]
