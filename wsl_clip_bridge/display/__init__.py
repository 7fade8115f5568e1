"""Terminal output for diagnostics."""

from wsl_clip_bridge.display.console import get_console, print_error, set_console

__all__ = ["get_console", "print_error", "set_console"]
