"""Configuration loading and validation."""

from wsl_clip_bridge.config.loader import (
    DEFAULT_CONFIG_TEMPLATE,
    load_config,
    load_ttl,
    resolve_ttl,
)
from wsl_clip_bridge.config.schema import BridgeConfig

__all__ = [
    "BridgeConfig",
    "DEFAULT_CONFIG_TEMPLATE",
    "load_config",
    "load_ttl",
    "resolve_ttl",
]
