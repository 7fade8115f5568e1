"""Command-line interface."""

from wsl_clip_bridge.cli.main import main, run

__all__ = ["main", "run"]
