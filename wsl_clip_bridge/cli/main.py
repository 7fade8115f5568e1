"""Process entry point: parse flags, run one bridge transaction, exit 0 or 1."""

import logging
import os
import sys
from collections.abc import Sequence
from typing import BinaryIO

from wsl_clip_bridge.cli.arg_parser import ArgumentParseError, parse_args
from wsl_clip_bridge.clipboard.manager import ClipboardBridge
from wsl_clip_bridge.core.constants import ENV_LOG_LEVEL
from wsl_clip_bridge.core.errors import BridgeError
from wsl_clip_bridge.display.console import print_error

logger = logging.getLogger(__name__)

LOGGER_NAMESPACE = "wsl_clip_bridge"


def configure_logging(level: str | None = None) -> None:
    """Send wsl_clip_bridge.* logs to stderr.

    Args:
        level: Logging level name. Defaults to $WSL_CLIP_BRIDGE_LOG_LEVEL,
            then WARNING. Unknown names fall back to WARNING.
    """
    name = (level or os.environ.get(ENV_LOG_LEVEL) or "WARNING").strip().upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        numeric = logging.WARNING

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    ))

    bridge_logger = logging.getLogger(LOGGER_NAMESPACE)
    bridge_logger.setLevel(numeric)

    # Remove any existing handlers to avoid duplicates on reconfigure
    bridge_logger.handlers.clear()
    bridge_logger.addHandler(handler)

    # Don't propagate to root logger
    bridge_logger.propagate = False


def run(
    argv: Sequence[str],
    stdin: BinaryIO | None = None,
    stdout: BinaryIO | None = None,
    bridge: ClipboardBridge | None = None,
) -> int:
    """Run one invocation and return its exit code (0 or 1).

    Args:
        argv: Arguments without the program name.
        stdin: Binary input stream (default: sys.stdin.buffer).
        stdout: Binary output stream (default: sys.stdout.buffer).
        bridge: Preconfigured bridge (default: built from the environment).
    """
    try:
        args = parse_args(argv)
    except ArgumentParseError as e:
        print_error(str(e))
        return 1

    if args.ignored:
        logger.debug("Ignoring unsupported arguments: %s", list(args.ignored))

    try:
        if bridge is None:
            bridge = ClipboardBridge.from_environment()
        return bridge.run(
            output_mode=args.output_mode,
            mime=args.mime_type,
            input_file=args.input_file,
            stdin=stdin if stdin is not None else sys.stdin.buffer,
            stdout=stdout if stdout is not None else sys.stdout.buffer,
        )
    except BridgeError as e:
        print_error(e.message)
        return 1
    except OSError as e:
        logger.debug("I/O failure", exc_info=True)
        print_error(e.strerror or str(e))
        return 1


def main() -> None:
    """Console-script entry point."""
    configure_logging()
    sys.exit(run(sys.argv[1:]))
