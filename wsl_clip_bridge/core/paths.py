"""Storage and config location resolution plus path canonicalization.

Locations are derived from environment variables on every call rather than
cached, so tests (and callers that tweak the environment) always see the
current value.
"""

import logging
import os
import tempfile
from pathlib import Path

from wsl_clip_bridge.core.constants import (
    APP_DIR_NAME,
    CONFIG_FILE_NAME,
    ENV_CACHE_HOME,
    ENV_CONFIG_HOME,
    ENV_CONFIG_PATH,
    ENV_HOME,
    ENV_UID,
)
from wsl_clip_bridge.core.secure_io import secure_mkdir

logger = logging.getLogger(__name__)


def _env_non_blank(name: str) -> str | None:
    """Return the variable's value, or None if unset or whitespace only."""
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return value


def get_home() -> Path | None:
    """Home directory from $HOME, or None if unset.

    Path.home() is deliberately not used: it falls back to the password
    database, which would let restrict_to_home apply when HOME is unset.
    """
    home = os.environ.get(ENV_HOME)
    return Path(home) if home else None


def resolve_storage_dir() -> Path:
    """Resolve the cache directory holding the clipboard slots.

    Precedence:
    1. ``$XDG_CACHE_HOME/wsl-clip-bridge`` when set and non-blank
    2. ``$HOME/.cache/wsl-clip-bridge``
    3. ``<tmp>/wsl-clip-bridge-<UID>`` (``unknown`` when UID is unavailable)

    ``~/.cache`` is preferred over ``/run/user`` because under WSL the
    latter is not reliably a tmpfs and may not exist at all.
    """
    cache_home = _env_non_blank(ENV_CACHE_HOME)
    if cache_home is not None:
        return Path(cache_home) / APP_DIR_NAME

    home = get_home()
    if home is not None:
        return home / ".cache" / APP_DIR_NAME

    uid = os.environ.get(ENV_UID, "unknown")
    return Path(tempfile.gettempdir()) / f"{APP_DIR_NAME}-{uid}"


def ensure_storage_dir() -> Path:
    """Create the storage directory (owner-only) if needed and return it.

    Raises:
        OSError: If the directory cannot be created.
    """
    directory = resolve_storage_dir()
    secure_mkdir(directory)
    return directory


def resolve_config_dir() -> Path:
    """Directory holding config.toml (XDG config home, ~/.config, or tmp)."""
    config_home = _env_non_blank(ENV_CONFIG_HOME)
    if config_home is not None:
        return Path(config_home) / APP_DIR_NAME

    home = get_home()
    if home is not None:
        return home / ".config" / APP_DIR_NAME

    return Path(tempfile.gettempdir()) / APP_DIR_NAME


def resolve_config_path() -> Path:
    """Config file path: explicit ``$WSL_CLIP_BRIDGE_CONFIG`` or the config dir default."""
    explicit = _env_non_blank(ENV_CONFIG_PATH)
    if explicit is not None:
        return Path(explicit)
    return resolve_config_dir() / CONFIG_FILE_NAME


def canonicalize(path: str | Path) -> Path:
    """Resolve ``path`` to an absolute path with symlinks followed.

    Falls back to the absolute, unresolved path when resolution fails
    (symlink loops, unreadable components).
    """
    p = Path(path)
    try:
        return p.expanduser().resolve(strict=False)
    except (OSError, RuntimeError, ValueError) as e:
        logger.debug("Cannot resolve %s, using literal path: %s", p, e)
        return Path(os.path.abspath(p))


def is_within(path: Path, parent: Path) -> bool:
    """True if ``path`` equals ``parent`` or lies beneath it (component-wise)."""
    return path.is_relative_to(parent)
