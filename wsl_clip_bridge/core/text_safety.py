"""Text sanitization for diagnostics printed to the terminal.

MIME strings and paths in error messages come straight from the command
line, so they are stripped of terminal escapes and Rich markup before they
reach the console.
"""

import re

from rich.markup import escape as rich_escape

# ANSI escape sequence pattern - comprehensive terminal escape stripping
# Covers CSI (colors, cursor), mode changes, OSC (title, clipboard), and others
ANSI_ESCAPE_PATTERN = re.compile(
    r'\x1b\[[0-9;]*[ABCDEFGHJKSTfmnsu]|'  # CSI sequences (colors, cursor movement, clear)
    r'\x1b\[\?[0-9;]*[hl]|'               # CSI ? sequences (modes like cursor visibility)
    r'\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)|'  # OSC sequences (title, clipboard, etc.)
    r'\x1b[PX^_][^\x1b]*\x1b\\'            # DCS, SOS, PM, APC sequences
)

# C0 control characters except \n, \t, \r, plus DEL
CONTROL_CHAR_PATTERN = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')


def strip_terminal_escapes(text: str) -> str:
    """Remove ANSI escape sequences and dangerous control characters.

    Examples:
        >>> strip_terminal_escapes("\\x1b[31mRed\\x1b[0m")
        'Red'
        >>> strip_terminal_escapes("Hello\\x00World")
        'HelloWorld'
    """
    text = ANSI_ESCAPE_PATTERN.sub('', text)
    return CONTROL_CHAR_PATTERN.sub('', text)


def sanitize_for_display(text: str) -> str:
    """Strip terminal escapes, then escape Rich markup."""
    return rich_escape(strip_terminal_escapes(text))
