"""Tests for wsl_clip_bridge.config.loader."""

import stat
import tomllib
from pathlib import Path

import pytest

from wsl_clip_bridge.config.loader import (
    DEFAULT_CONFIG_TEMPLATE,
    load_config,
    load_ttl,
    parse_config,
    resolve_ttl,
)
from wsl_clip_bridge.config.schema import BridgeConfig
from wsl_clip_bridge.core.errors import ConfigError


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


class TestDefaultTemplate:
    """Tests for the config written on first use."""

    def test_template_is_valid_toml_with_documented_defaults(self) -> None:
        data = tomllib.loads(DEFAULT_CONFIG_TEMPLATE)
        assert data == {
            "ttl_secs": 300,
            "max_image_dimension": 1568,
            "max_file_size_mb": 100,
            "restrict_to_home": True,
        }

    def test_template_mentions_allowed_directories(self) -> None:
        assert "# allowed_directories = [" in DEFAULT_CONFIG_TEMPLATE


class TestLoadConfig:
    """Tests for load_config()."""

    def test_missing_file_writes_default_and_returns_none(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg" / "config.toml"
        assert load_config(path) is None
        assert path.read_text(encoding="utf-8") == DEFAULT_CONFIG_TEMPLATE

    @pytest.mark.unix_only
    def test_default_file_is_owner_only(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg" / "config.toml"
        load_config(path)
        assert stat.S_IMODE(path.stat().st_mode) == 0o600
        assert stat.S_IMODE(path.parent.stat().st_mode) == 0o700

    def test_existing_file_is_parsed(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "config.toml", (
            "ttl_secs = 10\n"
            "max_image_dimension = 800\n"
            "max_file_size_mb = 5\n"
            "restrict_to_home = false\n"
            'allowed_directories = ["/a", "/b"]\n'
        ))
        assert load_config(path) == BridgeConfig(
            ttl_secs=10,
            max_image_dimension=800,
            max_file_size_mb=5,
            restrict_to_home=False,
            allowed_directories=["/a", "/b"],
        )

    def test_partial_file_leaves_other_fields_unset(self, tmp_path: Path) -> None:
        config = load_config(_write(tmp_path / "config.toml", "ttl_secs = 7\n"))
        assert config is not None
        assert config.ttl_secs == 7
        assert config.max_image_dimension is None
        assert config.allowed_directories is None

    def test_empty_file_is_empty_config(self, tmp_path: Path) -> None:
        assert load_config(_write(tmp_path / "config.toml", "")) == BridgeConfig()

    def test_unknown_keys_are_ignored(self, tmp_path: Path) -> None:
        config = load_config(_write(tmp_path / "config.toml", "ttl_secs = 1\nfuture = 'x'\n"))
        assert config is not None
        assert config.ttl_secs == 1

    @pytest.mark.parametrize("content", [
        "ttl_secs = = 3",
        "ttl_secs = 'soon'",
        "ttl_secs = -5",
        "restrict_to_home = 'maybe'",
        "allowed_directories = 3",
        "ttl_secs = '300'",
        "restrict_to_home = 'false'",
        "max_image_dimension = 1568.0",
    ])
    def test_broken_file_returns_none(self, tmp_path: Path, content: str) -> None:
        path = _write(tmp_path / "config.toml", content)
        assert load_config(path) is None
        # The broken file is left for the user to fix
        assert path.read_text(encoding="utf-8") == content

    def test_default_path_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        explicit = _write(tmp_path / "elsewhere.toml", "max_file_size_mb = 3\n")
        monkeypatch.setenv("WSL_CLIP_BRIDGE_CONFIG", str(explicit))
        config = load_config()
        assert config is not None
        assert config.max_file_size_mb == 3

    def test_reloaded_every_call(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "config.toml", "ttl_secs = 1\n")
        assert load_config(path) == BridgeConfig(ttl_secs=1)
        path.write_text("ttl_secs = 2\n", encoding="utf-8")
        assert load_config(path) == BridgeConfig(ttl_secs=2)


class TestParseConfig:
    """Tests for parse_config() error reporting."""

    def test_invalid_toml_raises_config_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "config.toml", "[[[")
        with pytest.raises(ConfigError) as exc_info:
            parse_config(path)
        assert "Invalid TOML" in exc_info.value.message

    def test_validation_failure_raises_config_error(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "config.toml", "max_image_dimension = -1")
        with pytest.raises(ConfigError) as exc_info:
            parse_config(path)
        assert "validation failed" in exc_info.value.message

    def test_utf8_bom_accepted(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_bytes(b"\xef\xbb\xbfttl_secs = 9\n")
        assert parse_config(path).ttl_secs == 9


class TestResolveTtl:
    """Tests for TTL precedence and clamping."""

    def test_default(self) -> None:
        assert resolve_ttl(None) == 300

    def test_config_value(self) -> None:
        assert resolve_ttl(BridgeConfig(ttl_secs=12)) == 12

    def test_config_without_ttl_uses_default(self) -> None:
        assert resolve_ttl(BridgeConfig(max_image_dimension=5)) == 300

    def test_config_clamped(self) -> None:
        assert resolve_ttl(BridgeConfig(ttl_secs=10**9)) == 86_400

    def test_env_overrides_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WSL_CLIP_BRIDGE_TTL_SECS", " 45 ")
        assert resolve_ttl(BridgeConfig(ttl_secs=12)) == 45

    def test_env_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WSL_CLIP_BRIDGE_TTL_SECS", "999999")
        assert resolve_ttl(None) == 86_400

    def test_env_zero_is_honoured(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("WSL_CLIP_BRIDGE_TTL_SECS", "0")
        assert resolve_ttl(BridgeConfig(ttl_secs=12)) == 0

    @pytest.mark.parametrize("raw", ["abc", "", "-3", "1.5", "1_000", "+5", "\u0663"])
    def test_bad_env_falls_through(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv("WSL_CLIP_BRIDGE_TTL_SECS", raw)
        assert resolve_ttl(BridgeConfig(ttl_secs=12)) == 12

    def test_load_ttl_reads_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = _write(tmp_path / "config.toml", "ttl_secs = 77\n")
        monkeypatch.setenv("WSL_CLIP_BRIDGE_CONFIG", str(path))
        assert load_ttl() == 77

    def test_load_ttl_first_run_uses_default(self, home: Path) -> None:
        assert load_ttl() == 300
        assert (home / ".config" / "wsl-clip-bridge" / "config.toml").exists()


class TestBridgeConfig:
    """Tests for the schema helpers."""

    def test_max_file_size_bytes(self) -> None:
        assert BridgeConfig(max_file_size_mb=2).max_file_size_bytes == 2 * 1024 * 1024

    @pytest.mark.parametrize("mb", [None, 0])
    def test_max_file_size_bytes_disabled(self, mb: int | None) -> None:
        assert BridgeConfig(max_file_size_mb=mb).max_file_size_bytes is None
