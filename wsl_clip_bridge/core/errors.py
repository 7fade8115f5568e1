"""Typed exception hierarchy for the clipboard bridge."""

from __future__ import annotations


class BridgeError(Exception):
    """Base class for all clipboard bridge errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(BridgeError):
    """Raised for configuration issues (unreadable file, invalid TOML, validation failure)."""


class UnsupportedFormatError(BridgeError):
    """Raised when a MIME type is neither a text nor a supported image kind."""

    def __init__(self, mime: str) -> None:
        self.mime = mime
        super().__init__(
            f"Unsupported format '{mime}'. Only PNG, JPEG, GIF, and WebP are supported."
        )


class AccessDeniedError(BridgeError):
    """Raised when an input file violates the configured access policy."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(reason)


class FileTooLargeError(AccessDeniedError):
    """Input file is larger than max_file_size_mb."""

    def __init__(self, path: str, max_mb: int) -> None:
        self.max_mb = max_mb
        super().__init__(path, f"File exceeds maximum size of {max_mb}MB")


class OutsideHomeError(AccessDeniedError):
    """Input file resolves outside the home directory while restrict_to_home is on."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "Access denied - file is outside home directory")


class NotInAllowedDirectoryError(AccessDeniedError):
    """Input file resolves outside every entry of allowed_directories."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "File is not in an allowed directory")


class InputTooLargeError(BridgeError):
    """Raised when a standard-input image payload exceeds the byte limit."""

    def __init__(self, limit_bytes: int) -> None:
        self.limit_bytes = limit_bytes
        super().__init__("Input exceeds maximum size")
