"""
Tests for settings loading.
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from recordstore.core.config import (
    LogSettings,
    Settings,
    StorageSettings,
    get_settings,
)
from recordstore.models import Entity
from recordstore.repositories import RecordStore


class Item(Entity):
    store_name = "items"

    id: str


class TestSettings:
    """Tests for Settings and its sections."""

    def test_defaults(self, monkeypatch, tmp_path):
        """Test default base directory lives under the home directory."""
        monkeypatch.setenv("HOME", str(tmp_path))

        settings = Settings()

        assert settings.storage.base_dir == tmp_path / "file-database"
        assert settings.storage.json_indent is None
        assert settings.log.level == "WARNING"
        assert settings.log.format == "console"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test RECORDSTORE_* variables are read."""
        monkeypatch.setenv("RECORDSTORE_STORAGE_BASE_DIR", str(tmp_path / "env"))
        monkeypatch.setenv("RECORDSTORE_STORAGE_JSON_INDENT", "2")
        monkeypatch.setenv("RECORDSTORE_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.storage.base_dir == tmp_path / "env"
        assert settings.storage.json_indent == 2
        assert settings.log.level == "DEBUG"

    def test_base_dir_expands_user(self, monkeypatch, tmp_path):
        """Test ~ in base_dir is expanded."""
        monkeypatch.setenv("HOME", str(tmp_path))

        assert StorageSettings(base_dir="~/data").base_dir == tmp_path / "data"

    def test_invalid_log_settings(self):
        """Test log level and format validation."""
        with pytest.raises(ValidationError):
            LogSettings(level="LOUD")
        with pytest.raises(ValidationError):
            LogSettings(format="xml")
        with pytest.raises(ValidationError):
            StorageSettings(json_indent=-1)

    def test_load_from_yaml(self, tmp_path):
        """Test YAML sections are applied."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({
            "storage": {"base_dir": str(tmp_path / "yaml"), "json_indent": 4},
            "log": {"level": "info", "format": "json"},
        }))

        settings = Settings.load_from_yaml(config_file)

        assert settings.storage.base_dir == tmp_path / "yaml"
        assert settings.storage.json_indent == 4
        assert settings.log.level == "INFO"
        assert settings.log.format == "json"

    def test_environment_beats_yaml(self, monkeypatch, tmp_path):
        """Test environment variables take precedence over the YAML file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text(yaml.safe_dump({"storage": {"base_dir": str(tmp_path / "yaml")}}))
        monkeypatch.setenv("RECORDSTORE_STORAGE_BASE_DIR", str(tmp_path / "env"))

        settings = Settings.load_from_yaml(config_file)

        assert settings.storage.base_dir == tmp_path / "env"

    def test_missing_yaml_uses_defaults(self, monkeypatch, tmp_path):
        """Test a missing file behaves like no file."""
        monkeypatch.setenv("HOME", str(tmp_path))

        settings = Settings.load_from_yaml(tmp_path / "absent.yaml")

        assert settings.storage.base_dir == tmp_path / "file-database"

    def test_get_settings_is_cached(self, tmp_path):
        """Test get_settings returns one instance per config file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("log:\n  level: ERROR\n")

        first = get_settings(config_file)

        assert get_settings(config_file) is first
        assert first.log.level == "ERROR"

    def test_open_store(self, tmp_path):
        """Test open_store binds a store under the configured directory."""
        settings = Settings(storage=StorageSettings(base_dir=tmp_path, json_indent=2))

        store = settings.open_store(Item)
        store.save(Item(id="a"))

        assert isinstance(store, RecordStore)
        assert store.path == Path(tmp_path) / "items.json"
        assert store.path.read_text(encoding="utf-8").startswith("[\n  {")
