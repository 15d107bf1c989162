"""Tests for CLI entry point.

Tests the browse() command in navstack/main.py.
"""

import logging
from pathlib import Path

import pytest
from textual.logging import TextualHandler
from typer.testing import CliRunner

from navstack.main import app


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo the root handlers installed by configure_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


class TestCLIBrowseCommand:
    """Test the CLI browse command."""

    def test_missing_root(self, tmp_path: Path) -> None:
        """Test that a missing root produces a helpful error."""
        runner = CliRunner()

        result = runner.invoke(app, [str(tmp_path / "nonexistent"), "--dry-run"])

        assert result.exit_code == 1
        assert "Error: Root not found" in result.stderr

    def test_root_is_file(self, tree: Path) -> None:
        runner = CliRunner()

        result = runner.invoke(app, [str(tree / "readme.md"), "--dry-run"])

        assert result.exit_code == 1
        assert "Error: Root is not a directory" in result.stderr

    def test_dry_run_lists_root(self, tree: Path) -> None:
        """Test dry-run prints trail, depth and listing."""
        runner = CliRunner()

        result = runner.invoke(app, [str(tree), "--dry-run"])

        assert result.exit_code == 0
        assert f"Trail: {tree.name}" in result.stdout
        assert "Depth: 1" in result.stdout
        assert "alpha/" in result.stdout
        assert "readme.md" in result.stdout
        assert ".hidden" not in result.stdout
        assert "Dry run complete" in result.stdout

    def test_dry_run_open_nested(self, tree: Path) -> None:
        """Test that --open pushes one screen per level."""
        runner = CliRunner()

        result = runner.invoke(app, [str(tree), "--open", "alpha/beta", "--dry-run"])

        assert result.exit_code == 0
        assert f"Trail: {tree.name} › alpha › beta" in result.stdout
        assert "Depth: 3" in result.stdout
        assert "notes.txt" in result.stdout

    def test_open_outside_root(self, tree: Path) -> None:
        runner = CliRunner()

        result = runner.invoke(app, [str(tree / "alpha"), "--open", "..", "--dry-run"])

        assert result.exit_code == 1
        assert "Error: Cannot open .." in result.stderr

    def test_open_file_rejected(self, tree: Path) -> None:
        runner = CliRunner()

        result = runner.invoke(app, [str(tree), "--open", "readme.md", "--dry-run"])

        assert result.exit_code == 1
        assert "Error: Cannot open readme.md" in result.stderr

    def test_show_hidden_option(self, tree: Path) -> None:
        runner = CliRunner()

        result = runner.invoke(app, [str(tree), "--show-hidden", "--dry-run"])

        assert result.exit_code == 0
        assert ".hidden" in result.stdout

    def test_max_entries_option(self, tree: Path) -> None:
        runner = CliRunner()

        result = runner.invoke(app, [str(tree), "--max-entries", "1", "--dry-run"])

        assert result.exit_code == 0
        assert "(1 entries)" in result.stdout
        assert "readme.md" not in result.stdout

    def test_invalid_max_entries(self, tree: Path) -> None:
        runner = CliRunner()

        result = runner.invoke(app, [str(tree), "--max-entries", "0", "--dry-run"])

        assert result.exit_code == 1
        assert "max_entries must be positive" in result.stderr

    def test_unknown_log_level(self, tree: Path) -> None:
        runner = CliRunner()

        result = runner.invoke(app, [str(tree), "--log-level", "chatty", "--dry-run"])

        assert result.exit_code != 0

    def test_log_file_receives_stack_dump(self, tree: Path, tmp_path: Path) -> None:
        """Test that debug logging writes the stack dump to the log file."""
        runner = CliRunner()
        log_file = tmp_path / "navstack.log"

        result = runner.invoke(
            app,
            [str(tree), "--dry-run", "--log-level", "debug", "--log-file", str(log_file)],
        )

        assert result.exit_code == 0
        assert "navigation stack (1)" in log_file.read_text()

    def test_launches_tui_without_dry_run(self, tree: Path, monkeypatch) -> None:
        """Test that the TUI is launched with the parsed options."""
        calls = []

        def mock_run_tui(root, config, open_path):
            calls.append((root, config, open_path))

        monkeypatch.setattr("navstack.tui.app.run_tui", mock_run_tui)
        runner = CliRunner()

        result = runner.invoke(app, [str(tree), "--open", "alpha", "--show-hidden"])

        assert result.exit_code == 0
        assert len(calls) == 1
        root, config, open_path = calls[0]
        assert root == tree
        assert config.show_hidden is True
        assert open_path == Path("alpha")

    def test_tui_logs_to_textual_console(self, tree: Path, monkeypatch) -> None:
        """Test that log records stay off the terminal the TUI draws on."""
        handlers = []
        monkeypatch.setattr(
            "navstack.tui.app.run_tui",
            lambda root, config, open_path: handlers.extend(logging.getLogger().handlers),
        )
        runner = CliRunner()

        result = runner.invoke(app, [str(tree)])

        assert result.exit_code == 0
        assert len(handlers) == 1
        assert isinstance(handlers[0], TextualHandler)

    def test_tui_with_log_file_uses_file_handler(self, tree: Path, tmp_path: Path, monkeypatch) -> None:
        handlers = []
        monkeypatch.setattr(
            "navstack.tui.app.run_tui",
            lambda root, config, open_path: handlers.extend(logging.getLogger().handlers),
        )
        runner = CliRunner()

        result = runner.invoke(app, [str(tree), "--log-file", str(tmp_path / "tui.log")])

        assert result.exit_code == 0
        assert [type(h) for h in handlers] == [logging.FileHandler]

    def test_dry_run_logs_to_stderr(self, tree: Path) -> None:
        runner = CliRunner()

        result = runner.invoke(app, [str(tree), "--dry-run"])

        assert result.exit_code == 0
        root_handlers = logging.getLogger().handlers
        assert [type(h) for h in root_handlers] == [logging.StreamHandler]
