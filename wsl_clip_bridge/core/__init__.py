"""Core primitives: paths, errors, secure file I/O and access validation."""

from wsl_clip_bridge.core.errors import (
    AccessDeniedError,
    BridgeError,
    ConfigError,
    FileTooLargeError,
    InputTooLargeError,
    NotInAllowedDirectoryError,
    OutsideHomeError,
    UnsupportedFormatError,
)
from wsl_clip_bridge.core.paths import ensure_storage_dir, resolve_storage_dir

__all__ = [
    "AccessDeniedError",
    "BridgeError",
    "ConfigError",
    "FileTooLargeError",
    "InputTooLargeError",
    "NotInAllowedDirectoryError",
    "OutsideHomeError",
    "UnsupportedFormatError",
    "ensure_storage_dir",
    "resolve_storage_dir",
]
