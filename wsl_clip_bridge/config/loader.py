"""Configuration loading that never blocks a clipboard operation.

The config file is re-read on every invocation; nothing is cached across
calls. A missing file is replaced by a commented default template, but the
invocation that wrote it still runs without config. A broken file disables
its options instead of failing the command.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from wsl_clip_bridge.config.schema import BridgeConfig
from wsl_clip_bridge.core.constants import (
    DEFAULT_MAX_IMAGE_DIMENSION,
    DEFAULT_STDIN_LIMIT_MB,
    DEFAULT_TTL_SECS,
    ENV_TTL_SECS,
    MAX_TTL_SECS,
)
from wsl_clip_bridge.core.errors import ConfigError
from wsl_clip_bridge.core.paths import resolve_config_path
from wsl_clip_bridge.core.secure_io import (
    SECURE_DIR_MODE,
    SECURE_FILE_MODE,
    harden,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_TEMPLATE = f"""\
# wsl-clip-bridge config

# TTL for primed data in seconds (default {DEFAULT_TTL_SECS})
ttl_secs = {DEFAULT_TTL_SECS}

# Maximum image dimension in pixels (images larger will be downscaled)
# Set to 0 to disable downscaling
max_image_dimension = {DEFAULT_MAX_IMAGE_DIMENSION}

# Security Settings

# Maximum file size in MB (default {DEFAULT_STDIN_LIMIT_MB}MB)
max_file_size_mb = {DEFAULT_STDIN_LIMIT_MB}

# Restrict file access to home directory only (recommended)
restrict_to_home = true

# Optional: Only allow files from specific directories
# Uncomment and customize for ShareX-only mode:
# allowed_directories = [
#   "/mnt/c/Users/YOUR_USERNAME/Pictures/ShareX",
#   "/mnt/c/Users/YOUR_USERNAME/Documents/ShareX",
#   "/tmp"
# ]
"""


def write_default_config(path: Path) -> None:
    """Write the commented default template to ``path`` (owner-only).

    Best-effort: failures are logged, not raised.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        harden(path.parent, SECURE_DIR_MODE)
        path.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
        harden(path, SECURE_FILE_MODE)
    except OSError as e:
        logger.debug("Could not write default config to %s: %s", path, e)
        return
    logger.info("Wrote default config: %s", path)


def parse_config(path: Path) -> BridgeConfig:
    """Read and validate a config file.

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML, or fails
            validation.
    """
    try:
        content = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e

    try:
        data: dict[str, Any] = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    try:
        return BridgeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Config validation failed for {path}: {e}") from e


def load_config(path: Path | None = None) -> BridgeConfig | None:
    """Load the bridge config, or None when there is none to apply.

    Args:
        path: Explicit config path. Defaults to resolve_config_path().

    Returns:
        The validated config, or None if the file was missing (a default is
        written for next time) or could not be parsed.
    """
    config_path = path if path is not None else resolve_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, writing default", config_path)
        write_default_config(config_path)
        return None

    try:
        config = parse_config(config_path)
    except ConfigError as e:
        logger.warning("Ignoring config: %s", e.message)
        return None

    logger.debug("Config loaded from: %s", config_path)
    return config


def resolve_ttl(config: BridgeConfig | None) -> float:
    """TTL in seconds: env override, then config ttl_secs, then the default.

    Both sources are clamped to 24 hours. The env value must be plain ASCII
    digits (surrounding whitespace allowed); signs, underscores and decimals
    make it ignored.
    """
    raw = os.environ.get(ENV_TTL_SECS)
    if raw is not None:
        value = raw.strip()
        if value.isascii() and value.isdigit():
            return float(min(int(value), MAX_TTL_SECS))
        logger.debug("Ignoring non-integer %s=%r", ENV_TTL_SECS, raw)

    if config is not None and config.ttl_secs is not None:
        return float(min(config.ttl_secs, MAX_TTL_SECS))

    return float(DEFAULT_TTL_SECS)


def load_ttl() -> float:
    """Resolve the TTL against a freshly loaded config."""
    return resolve_ttl(load_config())
