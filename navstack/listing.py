"""Directory listing and entry filtering for the drill-down browser."""

import logging
from datetime import datetime
from pathlib import Path

from rapidfuzz import fuzz

from navstack.models import BrowserConfig, Entry

logger = logging.getLogger(__name__)

BINARY_MARKER = "<binary file>"


def _make_entry(path: Path) -> Entry:
    """Build an Entry from a filesystem path.

    Broken symlinks and entries that vanish while listing are reported with
    zero size instead of failing the whole listing.
    """
    try:
        stat = path.stat()
    except OSError as e:
        logger.warning("Cannot stat %s: %s", path, e)
        return Entry(name=path.name, path=path, is_dir=False)

    is_dir = path.is_dir()
    return Entry(
        name=path.name,
        path=path,
        is_dir=is_dir,
        size=0 if is_dir else stat.st_size,
        modified=datetime.fromtimestamp(stat.st_mtime),
    )


def list_entries(path: Path, config: BrowserConfig | None = None) -> list[Entry]:
    """List a directory, directories first, then alphabetically.

    Args:
        path: Directory to list
        config: Browser configuration (defaults if None)

    Returns:
        At most ``config.max_entries`` entries

    Raises:
        NotADirectoryError: If path is not a directory
        OSError: If the directory cannot be read
    """
    config = config or BrowserConfig()
    path = Path(path)

    if not path.is_dir():
        raise NotADirectoryError(f"Not a directory: {path}")

    entries = [
        _make_entry(child)
        for child in path.iterdir()
        if config.show_hidden or not child.name.startswith(".")
    ]
    entries.sort(key=lambda e: (not e.is_dir, e.name.lower()))

    if len(entries) > config.max_entries:
        logger.info(
            "Truncating listing of %s from %d to %d entries",
            path,
            len(entries),
            config.max_entries,
        )
        entries = entries[: config.max_entries]

    return entries


def drill_path(root: Path, relative: Path | str | None = None) -> list[Path]:
    """Expand a path below root into the directories visited to reach it.

    Args:
        root: Directory the browser starts in
        relative: Path below root to open (None opens root only)

    Returns:
        Directories from root down to the target, root first

    Raises:
        ValueError: If relative escapes root
        NotADirectoryError: If root or any visited level is not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    levels = [root]
    if relative is None or str(relative) in ("", "."):
        return levels

    target = (root / relative).resolve()
    resolved_root = root.resolve()
    if target != resolved_root and resolved_root not in target.parents:
        raise ValueError(f"{relative} is outside {root}")

    current = root
    for part in target.relative_to(resolved_root).parts:
        current = current / part
        if not current.is_dir():
            raise NotADirectoryError(f"Not a directory: {current}")
        levels.append(current)
    return levels


def filter_entries(entries: list[Entry], query: str, threshold: float = 60.0) -> list[Entry]:
    """Fuzzy filter entries by name.

    Substring matches always pass; other names are scored with
    ``fuzz.partial_ratio`` and kept when the score reaches the threshold.

    Args:
        entries: Entries to filter
        query: Filter text (empty keeps everything)
        threshold: Minimum similarity score from 0 to 100

    Returns:
        Matching entries, best score first (stable for equal scores)
    """
    query = query.strip().lower()
    if not query:
        return list(entries)

    scored = []
    for entry in entries:
        name = entry.name.lower()
        score = 100.0 if query in name else fuzz.partial_ratio(query, name)
        if score >= threshold:
            scored.append((score, entry))

    scored.sort(key=lambda x: x[0], reverse=True)
    return [entry for _, entry in scored]


def read_preview(path: Path, max_bytes: int = 4096) -> str:
    """Read the head of a file for preview.

    Args:
        path: File to read
        max_bytes: Maximum number of bytes read

    Returns:
        Decoded text, or BINARY_MARKER for non-text content

    Raises:
        OSError: If the file cannot be read
    """
    with open(path, "rb") as f:
        data = f.read(max_bytes)

    if b"\x00" in data:
        return BINARY_MARKER
    # A truncated read may end inside a multi-byte character
    trims = range(4) if len(data) == max_bytes else range(1)
    for trim in trims:
        try:
            return data[: len(data) - trim].decode("utf-8")
        except UnicodeDecodeError:
            continue
    return BINARY_MARKER


__all__ = ["BINARY_MARKER", "list_entries", "drill_path", "filter_entries", "read_preview"]
