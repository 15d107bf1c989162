"""CLI entry point for navstack.

Opens a drill-down browser over a directory tree, or prints the navigation
trail in dry-run mode.
"""

import logging
from pathlib import Path

import typer
from textual.logging import TextualHandler

from navstack.listing import drill_path
from navstack.models import BrowserConfig
from navstack.stack import NavigationStack
from navstack.tui import display_utils
from navstack.tui.screens import DirectoryScreen

logger = logging.getLogger(__name__)


def configure_logging(level: str, log_file: Path | None = None, tui: bool = False) -> None:
    """Configure root logging for the CLI.

    Records go to ``log_file`` when given. Otherwise they go to stderr, or to
    Textual's devtools console when the TUI owns the terminal.

    Args:
        level: Log level name (DEBUG, INFO, ...)
        log_file: Write logs to this file
        tui: Whether the Textual UI is about to take over the terminal

    Raises:
        typer.BadParameter: If level is not a known log level
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise typer.BadParameter(f"Unknown log level: {level}", param_hint="--log-level")

    handlers: list[logging.Handler] = []
    if log_file is not None:
        handlers.append(logging.FileHandler(log_file))
    elif tui:
        handlers.append(TextualHandler())
    else:
        handlers.append(logging.StreamHandler())

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def browse(
    root: Path = typer.Argument(..., help="Directory to browse"),
    open_path: str | None = typer.Option(
        None, "--open", "-o", help="Path below ROOT to drill into on startup"
    ),
    show_hidden: bool = typer.Option(False, "--show-hidden", "-a", help="Show dot-files"),
    max_entries: int = typer.Option(
        500, "--max-entries", "-n", help="Maximum entries listed per directory"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the trail without launching TUI"),
    log_level: str = typer.Option("WARNING", "--log-level", "-l", help="Log level"),
    log_file: Path | None = typer.Option(None, "--log-file", help="Write logs to this file"),
) -> None:
    """Browse a directory tree with drill-down navigation.

    Each directory opened becomes a screen on the navigation stack; going
    back pops it and restores the previous one.
    """
    configure_logging(log_level, log_file, tui=not dry_run)

    if not root.exists():
        typer.echo(f"Error: Root not found: {root}", err=True)
        raise typer.Exit(1)

    if not root.is_dir():
        typer.echo(f"Error: Root is not a directory: {root}", err=True)
        raise typer.Exit(1)

    try:
        config = BrowserConfig(show_hidden=show_hidden, max_entries=max_entries)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    try:
        levels = drill_path(root, open_path)
    except (ValueError, OSError) as e:
        typer.echo(f"Error: Cannot open {open_path}: {e}", err=True)
        raise typer.Exit(1)

    if not dry_run:
        from navstack.tui.app import run_tui

        logger.info("Launching TUI at %s", root)
        run_tui(root, config, Path(open_path) if open_path else None)
        return

    nav = NavigationStack()
    for level in levels:
        screen = DirectoryScreen(level, config)
        try:
            screen.init()
        except OSError as e:
            typer.echo(f"Error: Cannot list {level}: {e}", err=True)
            raise typer.Exit(1)
        nav.push(screen)
    nav.dump()

    top = nav.top()
    typer.echo(f"Trail: {display_utils.format_breadcrumbs(nav.flatten(), max_len=10_000)}")
    typer.echo(f"Depth: {len(nav)}")
    typer.echo("\n" + "=" * 50)
    typer.echo(f"{top.path} ({len(top.entries)} entries)")
    typer.echo("=" * 50)
    for entry in top.entries:
        size = "<dir>" if entry.is_dir else display_utils.format_size(entry.size)
        marker = "/" if entry.is_dir else ""
        typer.echo(f"  {size:>10}  {entry.name}{marker}")

    typer.echo("\nDry run complete. Run without --dry-run to launch TUI.")


# Entry point for CLI
app = typer.Typer(add_completion=False)
app.command()(browse)


if __name__ == "__main__":
    app()
