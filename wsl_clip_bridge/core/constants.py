"""Core constants for the clipboard bridge.

Single source of truth for directory names, file names, environment
variables and limits. Modules import from here instead of hardcoding them.
"""

APP_DIR_NAME = "wsl-clip-bridge"
CONFIG_FILE_NAME = "config.toml"

# Slot files inside the storage directory
IMAGE_FILE_NAME = "image.bin"
IMAGE_FORMAT_FILE_NAME = "image.format"
TEXT_FILE_NAME = "text.txt"

# Environment variables
ENV_CACHE_HOME = "XDG_CACHE_HOME"
ENV_CONFIG_HOME = "XDG_CONFIG_HOME"
ENV_CONFIG_PATH = "WSL_CLIP_BRIDGE_CONFIG"
ENV_TTL_SECS = "WSL_CLIP_BRIDGE_TTL_SECS"
ENV_LOG_LEVEL = "WSL_CLIP_BRIDGE_LOG_LEVEL"
ENV_HOME = "HOME"
ENV_UID = "UID"

# Freshness
DEFAULT_TTL_SECS = 300
MAX_TTL_SECS = 24 * 60 * 60

# Size limits
BYTES_PER_MB = 1024 * 1024
DEFAULT_STDIN_LIMIT_MB = 100

# Default written into a fresh config file
DEFAULT_MAX_IMAGE_DIMENSION = 1568
