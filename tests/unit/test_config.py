"""Unit tests for config loading, env interpolation, and validation."""
from __future__ import annotations

from pathlib import Path

import pytest

from statfarm.config import (
    DEFAULT_SOURCES,
    ApiConfig,
    AppConfig,
    SourceConfig,
    _interpolate_env,
    load_config,
)


class TestInterpolateEnv:
    def test_simple_substitution(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MY_VAR", "hello")
        assert _interpolate_env("${MY_VAR}") == "hello"

    def test_missing_var_becomes_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NONEXISTENT_VAR_XYZ", raising=False)
        assert _interpolate_env("${NONEXISTENT_VAR_XYZ}") == ""

    def test_nested_dict(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOST", "api.test")
        result = _interpolate_env({"url": "https://${HOST}", "plain": "text"})
        assert result == {"url": "https://api.test", "plain": "text"}

    def test_nested_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("A", "x")
        assert _interpolate_env(["${A}", "y"]) == ["x", "y"]

    def test_non_string_passthrough(self) -> None:
        assert _interpolate_env(42) == 42
        assert _interpolate_env(None) is None


class TestSourceConfig:
    def test_interval_in_seconds(self) -> None:
        assert SourceConfig(path="/x", refresh_interval_ms=2000).refresh_interval == 2.0

    def test_one_shot(self) -> None:
        assert SourceConfig(path="/x").refresh_interval is None

    def test_default_cadence(self) -> None:
        assert DEFAULT_SOURCES["info"].refresh_interval_ms == 2000
        assert DEFAULT_SOURCES["markets"].refresh_interval_ms == 5000
        assert DEFAULT_SOURCES["governance"].refresh_interval_ms == 20000
        assert DEFAULT_SOURCES["chart"].refresh_interval_ms is None


class TestLoadConfig:
    def test_loads_valid_yaml(self, sample_yaml_path: Path) -> None:
        cfg = load_config(sample_yaml_path)
        assert isinstance(cfg, AppConfig)
        assert cfg.api.base_url == "https://api.example.com"
        assert cfg.api.timeout_seconds == 7.0
        assert cfg.sources["governance"].refresh_interval == 20.0
        assert cfg.sources["chart"].refresh_interval is None
        assert cfg.polling.discard_stale is True
        assert cfg.display.width == 120
        assert cfg.display.clear_screen is False

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nonexistent.yaml")

    def test_sources_default_when_omitted(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text('api:\n  base_url: "https://api.test.com"\n')
        cfg = load_config(cfg_file)
        assert cfg.sources == DEFAULT_SOURCES

    def test_partial_source_override(self, tmp_path: Path) -> None:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(
            'api:\n  base_url: "https://api.test.com"\n'
            "sources:\n  info:\n    refresh_interval_ms: 1000\n"
        )
        cfg = load_config(cfg_file)
        assert cfg.sources["info"] == SourceConfig("/api/compound/info", 1000)

    def test_env_interpolation_in_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("STATFARM_API_URL", "https://statfarm.test")
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text('api:\n  base_url: "${STATFARM_API_URL}"\n')
        cfg = load_config(cfg_file)
        assert cfg.api.base_url == "https://statfarm.test"


class TestValidation:
    def _write(self, tmp_path: Path, content: str) -> Path:
        cfg_file = tmp_path / "config.yaml"
        cfg_file.write_text(content)
        return cfg_file

    def test_missing_base_url_raises(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("UNSET_URL_XYZ", raising=False)
        path = self._write(tmp_path, 'api:\n  base_url: "${UNSET_URL_XYZ}"\n')
        with pytest.raises(ValueError, match="base_url must be configured"):
            load_config(path)

    def test_non_http_base_url_raises(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, "api:\n  base_url: ftp://x\n")
        with pytest.raises(ValueError, match="not an http"):
            load_config(path)

    def test_empty_path_raises(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path,
            "api:\n  base_url: https://x\nsources:\n  markets:\n    path: ''\n",
        )
        with pytest.raises(ValueError, match="'markets' has no path"):
            load_config(path)

    def test_non_positive_interval_raises(self, tmp_path: Path) -> None:
        path = self._write(
            tmp_path,
            "api:\n  base_url: https://x\nsources:\n  info:\n    refresh_interval_ms: 0\n",
        )
        with pytest.raises(ValueError, match="non-positive refresh interval"):
            load_config(path)

    def test_narrow_display_raises(self, tmp_path: Path) -> None:
        path = self._write(tmp_path, "api:\n  base_url: https://x\ndisplay:\n  width: 20\n")
        with pytest.raises(ValueError, match="at least 40"):
            load_config(path)


class TestFrozenConfigs:
    def test_api_config_immutable(self) -> None:
        a = ApiConfig(base_url="https://x")
        with pytest.raises(AttributeError):
            a.base_url = "https://y"  # type: ignore[misc]

    def test_source_config_immutable(self) -> None:
        s = SourceConfig(path="/x")
        with pytest.raises(AttributeError):
            s.refresh_interval_ms = 1  # type: ignore[misc]
