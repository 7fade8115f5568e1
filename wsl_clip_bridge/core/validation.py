"""Access policy for input files named on the command line.

Only explicit ``-i <path>`` inputs are checked; standard input never is.
Checks run in a fixed order (size, home restriction, allow-list) and each
applies only when its config option is set.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from wsl_clip_bridge.core.errors import (
    FileTooLargeError,
    NotInAllowedDirectoryError,
    OutsideHomeError,
)
from wsl_clip_bridge.core.paths import canonicalize, get_home, is_within

if TYPE_CHECKING:
    from wsl_clip_bridge.config.schema import BridgeConfig

logger = logging.getLogger(__name__)


def _check_size(path: Path, config: BridgeConfig) -> None:
    limit = config.max_file_size_bytes
    if limit is None:
        return
    try:
        size = path.stat().st_size
    except OSError:
        # Unreadable files fail later, when they are actually read
        return
    if size > limit:
        assert config.max_file_size_mb is not None
        raise FileTooLargeError(str(path), config.max_file_size_mb)


def _check_home(path: Path, config: BridgeConfig, home: Path | None) -> None:
    if not config.restrict_to_home or home is None:
        return
    if not is_within(canonicalize(path), canonicalize(home)):
        raise OutsideHomeError(str(path))


def _check_allowed(path: Path, config: BridgeConfig) -> None:
    allowed = config.allowed_directories
    if not allowed:
        return
    resolved = canonicalize(path)
    for entry in allowed:
        if is_within(resolved, canonicalize(entry)):
            logger.debug("%s allowed by %s", resolved, entry)
            return
    raise NotInAllowedDirectoryError(str(path))


def validate_file_access(
    path: str | Path,
    config: BridgeConfig | None,
    home: Path | None = None,
) -> None:
    """Apply the access policy to an input file.

    Args:
        path: The file about to be read into the cache.
        config: Loaded config; None means no restrictions.
        home: Home directory for restrict_to_home. Defaults to $HOME.

    Raises:
        FileTooLargeError: File is larger than max_file_size_mb.
        OutsideHomeError: restrict_to_home is on and the file is outside home.
        NotInAllowedDirectoryError: File is outside every allowed directory.
    """
    if config is None:
        return

    p = Path(path)
    _check_size(p, config)
    _check_home(p, config, home if home is not None else get_home())
    _check_allowed(p, config)
