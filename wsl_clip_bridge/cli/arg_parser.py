"""Argument parsing for the xclip-compatible command line.

Accepts the subset of xclip flags that clipboard consumers actually send.
Flags may appear in any order and anything unrecognized is ignored, so
callers written for the real xclip keep working.
"""

import argparse
from collections.abc import Sequence
from dataclasses import dataclass

_VALUE_FLAGS = frozenset({"-selection", "-sel", "-t", "-target"})
_INPUT_FLAGS = frozenset({"-i", "-in"})
_SWITCH_FLAGS = frozenset({"-o", "-out"})


class ArgumentParseError(Exception):
    """Raised instead of argparse's exit(2), e.g. when -t is missing its value."""


class _XclipArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise ArgumentParseError(message)


@dataclass(frozen=True)
class XclipArgs:
    """Parsed invocation."""

    selection: str
    mime_type: str | None
    output_mode: bool
    input_file: str | None
    ignored: tuple[str, ...] = ()


def build_parser() -> argparse.ArgumentParser:
    """Build the xclip-style parser (single-dash long options, no help flag)."""
    parser = _XclipArgumentParser(
        prog="xclip",
        description="File-backed xclip replacement for WSL clipboard bridging",
        add_help=False,
        allow_abbrev=False,
    )
    # Kept for xclip compatibility; there is only one clipboard
    parser.add_argument(
        "-selection", "-sel",
        dest="selection",
        default="clipboard",
    )
    parser.add_argument(
        "-t", "-target",
        dest="mime_type",
        help="MIME type to read or write; TARGETS lists what is available",
    )
    parser.add_argument(
        "-o", "-out",
        dest="output_mode",
        action="store_true",
        help="Print the clipboard instead of storing to it",
    )
    parser.add_argument(
        "-i", "-in",
        dest="input_file",
        nargs="?",
        default=None,
        help="Store to the clipboard from FILE, or from stdin when omitted",
    )
    return parser


def split_known_args(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Separate exact xclip flags from everything else.

    Only tokens that equal a known flag reach argparse, so an unknown token
    like ``-otherflag`` is never split into ``-o -t herflag`` and ``-ifile``
    is never read as ``-i file``. A flag's value is attached with ``=`` so a
    value starting with ``-`` stays a value. The token after ``-i`` is its
    path only when it does not start with ``-``.

    Returns:
        (tokens for argparse, ignored tokens)
    """
    known: list[str] = []
    ignored: list[str] = []
    tokens = list(argv)
    i = 0
    while i < len(tokens):
        token = tokens[i]
        following = tokens[i + 1] if i + 1 < len(tokens) else None

        if token in _VALUE_FLAGS and following is not None:
            known.append(f"{token}={following}")
            i += 1
        elif token in _INPUT_FLAGS and following is not None and not following.startswith("-"):
            known.append(f"{token}={following}")
            i += 1
        elif token in _VALUE_FLAGS or token in _INPUT_FLAGS or token in _SWITCH_FLAGS:
            # A trailing value flag is left for argparse to reject
            known.append(token)
        else:
            ignored.append(token)
        i += 1

    return known, ignored


def parse_args(argv: Sequence[str]) -> XclipArgs:
    """Parse command line arguments.

    Raises:
        ArgumentParseError: If a known flag is malformed.
    """
    known, ignored = split_known_args(argv)
    ns = build_parser().parse_args(known)

    return XclipArgs(
        selection=ns.selection,
        mime_type=ns.mime_type,
        output_mode=ns.output_mode,
        input_file=ns.input_file,
        ignored=tuple(ignored),
    )
