"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from pointerbridge.config.settings import (
    CaptureConfig,
    ServerConfig,
    Settings,
    load_settings,
)


class TestSettings:
    def test_default_settings(self) -> None:
        settings = Settings()
        assert settings.server.host == "0.0.0.0"
        assert settings.server.port == 5005
        assert settings.xdotool.binary == "xdotool"
        assert settings.xdotool.type_delay_ms == 10
        assert settings.drag.default_steps == 30
        assert settings.macro.action_delay_ms == 1500

    def test_capture_config_defaults(self) -> None:
        config = CaptureConfig()
        assert config.default_delay == 3
        assert config.max_delay == 30

    def test_invalid_port_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ServerConfig(port=70000)

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POINTERBRIDGE_SERVER__PORT", "6123")
        assert Settings().server.port == 6123


class TestLoadSettings:
    def test_missing_file_uses_defaults(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("DISPLAY", raising=False)
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.server.port == 5005
        assert settings.xdotool.display is None

    def test_yaml_values(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DISPLAY", raising=False)
        path = tmp_path / "pb.yaml"
        path.write_text("server:\n  port: 7000\nxdotool:\n  type_delay_ms: 0\n")
        settings = load_settings(path)
        assert settings.server.port == 7000
        assert settings.xdotool.type_delay_ms == 0

    def test_display_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DISPLAY", ":2")
        settings = load_settings(tmp_path / "nonexistent.yaml")
        assert settings.xdotool.display == ":2"

    def test_configured_display_wins(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("DISPLAY", ":2")
        path = tmp_path / "pb.yaml"
        path.write_text("xdotool:\n  display: ':0'\n")
        assert load_settings(path).xdotool.display == ":0"

    def test_env_beats_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("POINTERBRIDGE_SERVER__PORT", "6500")
        path = tmp_path / "pb.yaml"
        path.write_text("server:\n  host: 127.0.0.1\n  port: 7000\n")
        settings = load_settings(path)
        assert settings.server.port == 6500
        assert settings.server.host == "127.0.0.1"
