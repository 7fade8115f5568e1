"""WSL clipboard bridge: an xclip-compatible, file-backed clipboard cache."""

__version__ = "0.3.0"
