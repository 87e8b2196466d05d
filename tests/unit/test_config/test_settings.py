"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from hangle.config.settings import (
    BridgeConfig,
    ConsoleConfig,
    Settings,
    load_settings,
)


class TestSettings:
    def test_default_settings(self) -> None:
        """Default Settings should be valid."""
        settings = Settings()
        assert settings.bridge.endpoint_url == "http://localhost:8080/"
        assert settings.console.port == 8080
        assert settings.logging.level == "INFO"

    def test_bridge_config_defaults(self) -> None:
        config = BridgeConfig()
        assert config.request_timeout is None
        assert config.preload_modules == ["json", "math"]

    def test_console_config_defaults(self) -> None:
        config = ConsoleConfig()
        assert config.input_timeout == 45.0
        assert config.session_limit == 1800
        assert config.history_file is not None
        assert config.history_file.name == ".hangle_history"

    def test_invalid_port_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ConsoleConfig(port=0)

    def test_load_settings_missing_file(self, tmp_path: Path) -> None:
        """load_settings with missing file should return defaults."""
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.console.input_timeout == 45.0

    def test_load_settings_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "hangle.yaml"
        path.write_text(
            "bridge:\n"
            "  endpoint_url: http://operator.example:9000/\n"
            "  preload_modules: [os]\n"
            "console:\n"
            "  input_timeout: 10\n"
            "  history_file: null\n"
        )
        settings = load_settings(path)
        assert settings.bridge.endpoint_url == "http://operator.example:9000/"
        assert settings.bridge.preload_modules == ["os"]
        assert settings.console.input_timeout == 10.0
        assert settings.console.history_file is None

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HANGLE_BRIDGE__ENDPOINT_URL", "http://from-env/")
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.bridge.endpoint_url == "http://from-env/"

    def test_yaml_wins_and_env_fills_gaps(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "hangle.yaml"
        path.write_text(
            "bridge:\n"
            "  endpoint_url: http://from-yaml/\n"
            "console:\n"
            "  input_timeout: 10\n"
        )
        monkeypatch.setenv("HANGLE_BRIDGE__ENDPOINT_URL", "http://from-env/")
        monkeypatch.setenv("HANGLE_CONSOLE__PORT", "9090")
        settings = load_settings(path)
        assert settings.bridge.endpoint_url == "http://from-yaml/"
        assert settings.console.input_timeout == 10.0
        assert settings.console.port == 9090
