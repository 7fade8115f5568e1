"""Shared Rich Console for diagnostics.

The console writes to stderr only: stdout carries clipboard payloads and
target lists, which callers pipe into other programs.
"""

from __future__ import annotations

from rich.console import Console

from wsl_clip_bridge.core.text_safety import sanitize_for_display

_console: Console | None = None


def get_console() -> Console:
    """Get the shared stderr Console, creating it on first access."""
    global _console
    if _console is None:
        _console = Console(
            stderr=True,
            highlight=False,
            markup=True,
            soft_wrap=True,
        )
    return _console


def set_console(console: Console) -> None:
    """Set a custom Console instance.

    Useful for testing or custom configurations.
    """
    global _console
    _console = console


def print_error(message: str) -> None:
    """Print ``Error: <message>`` with untrusted text sanitized."""
    get_console().print(f"[red]Error:[/red] {sanitize_for_display(message)}")
