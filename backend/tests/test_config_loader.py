"""Tests for the TOML configuration loader."""

import pytest

from modeled.utils import config_loader
from modeled.utils.config_loader import ConfigLoader, reload_config


def test_dot_notation_and_typed_sections(config_file, tmp_path):
    config = ConfigLoader(str(config_file))

    assert config.get("app.port") == 7000
    assert config.get("app.missing", "fallback") == "fallback"
    assert config.get_section("editor")["backend_url"] == "http://backend.test"

    assert config.app.port == 7000
    assert config.app.host == "0.0.0.0"
    assert config.storage.models_file == (tmp_path / "models.json").as_posix()
    assert config.storage.indent == 2
    assert config.editor.notification_seconds == 3
    assert config.editor.load_path == "/api/models"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError) as exc_info:
        ConfigLoader(str(tmp_path / "absent.toml"))

    assert "config.example.toml" in str(exc_info.value)


def test_missing_section(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[app]\nport = 1\n\n[storage]\n", encoding="utf-8")

    with pytest.raises(ValueError) as exc_info:
        ConfigLoader(str(path))

    assert "editor" in str(exc_info.value)


def test_reload_config_switches_file(config_file, monkeypatch):
    monkeypatch.setattr(config_loader, "_config", None)
    monkeypatch.setattr(config_loader, "_config_path", config_loader.DEFAULT_CONFIG_PATH)

    config = reload_config(str(config_file))

    assert config_loader.get_config() is config
    assert config.app.log_level == "DEBUG"
