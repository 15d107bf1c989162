"""Shared display formatting utilities for TUI screens.

This module provides common formatting functions used across multiple
TUI screen classes to eliminate code duplication.
"""

from datetime import datetime

from navstack.models import Entry

BREADCRUMB_SEPARATOR = " › "


def format_size(size: int | None) -> str:
    """Format a byte count for display.

    Args:
        size: Size in bytes

    Returns:
        Human readable size ("512 B", "1.5 KB", ...) or "N/A" if None
    """
    if size is None:
        return "N/A"
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            break
        value /= 1024
    if unit == "B":
        return f"{int(value)} B"
    return f"{value:.1f} {unit}"


def format_mtime(modified: datetime | None) -> str:
    """Format a modification time for display.

    Args:
        modified: Modification timestamp

    Returns:
        Formatted "YYYY-MM-DD HH:MM" string or "N/A" if None
    """
    if modified is None:
        return "N/A"
    return modified.strftime("%Y-%m-%d %H:%M")


def truncate_string(s: str, max_len: int) -> str:
    """Truncate string to max length with ellipsis.

    Args:
        s: String to truncate
        max_len: Maximum length before truncation

    Returns:
        Truncated string with "..." appended if truncated, otherwise original string
    """
    return s[:max_len] + "..." if len(s) > max_len else s


def format_breadcrumbs(names: list[str], max_len: int = 60) -> str:
    """Join screen names into a breadcrumb trail.

    When the trail is too long, the oldest crumbs are replaced by "…" so the
    current screen always stays visible.

    Args:
        names: Screen names from bottom to top
        max_len: Maximum length of the resulting trail

    Returns:
        Breadcrumb trail, empty string for no names
    """
    if not names:
        return ""

    trail = BREADCRUMB_SEPARATOR.join(names)
    if len(trail) <= max_len:
        return trail

    crumbs = list(names)
    while len(crumbs) > 1:
        crumbs.pop(0)
        trail = BREADCRUMB_SEPARATOR.join(["…", *crumbs])
        if len(trail) <= max_len:
            return trail
    return truncate_string(crumbs[-1], max(max_len - 3, 1))


def entry_icon(entry: Entry) -> str:
    """Get the markup icon for a directory entry."""
    if entry.is_dir:
        return "[bold blue]▸[/]"
    return "[dim]·[/]"


__all__ = [
    "BREADCRUMB_SEPARATOR",
    "format_size",
    "format_mtime",
    "truncate_string",
    "format_breadcrumbs",
    "entry_icon",
]
