"""Shared pytest fixtures and configuration for pytest."""

import io
import os
import sys
import time
from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from wsl_clip_bridge.clipboard.storage import ClipboardStorage

_BRIDGE_ENV = (
    "XDG_CACHE_HOME",
    "XDG_CONFIG_HOME",
    "WSL_CLIP_BRIDGE_CONFIG",
    "WSL_CLIP_BRIDGE_TTL_SECS",
    "WSL_CLIP_BRIDGE_LOG_LEVEL",
    "UID",
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for platform-specific tests."""
    config.addinivalue_line("markers", "windows: mark test to run only on Windows")
    config.addinivalue_line("markers", "unix_only: mark test to run only on Unix")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Auto-skip tests based on platform markers."""
    skip_windows = pytest.mark.skip(reason="Windows-only test")
    skip_unix = pytest.mark.skip(reason="Unix-only test")

    for item in items:
        if "windows" in item.keywords and sys.platform != "win32":
            item.add_marker(skip_windows)
        if "unix_only" in item.keywords and sys.platform == "win32":
            item.add_marker(skip_unix)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME at a fresh directory and clear every bridge variable."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    for name in _BRIDGE_ENV:
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def home(isolated_env: Path) -> Path:
    """The isolated home directory."""
    return isolated_env


@pytest.fixture
def storage(tmp_path: Path) -> ClipboardStorage:
    """Storage in a private directory under tmp_path."""
    store = ClipboardStorage(tmp_path / "cache" / "wsl-clip-bridge")
    store.ensure()
    return store


def _encode_image(width: int, height: int, fmt: str = "PNG", mode: str = "RGB") -> bytes:
    color: tuple[int, ...] | int = (200, 30, 30, 255)[: len(mode)] if mode in ("RGB", "RGBA") else 128
    img = Image.new(mode, (width, height), color)
    out = io.BytesIO()
    img.save(out, format=fmt)
    return out.getvalue()


def _age_file(path: Path, seconds: float) -> None:
    mtime = time.time() - seconds
    os.utime(path, (mtime, mtime))


@pytest.fixture
def make_image() -> Callable[..., bytes]:
    """Factory: make_image(width, height, fmt="PNG", mode="RGB") -> encoded bytes."""
    return _encode_image


@pytest.fixture
def age_file() -> Callable[[Path, float], None]:
    """Factory: age_file(path, seconds) sets the mtime to ``seconds`` ago."""
    return _age_file
