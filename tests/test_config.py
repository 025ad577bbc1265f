"""
Tests for configuration loading.
"""

import json

import pytest

from xlf_translator import config as config_module
from xlf_translator.config import (
    DEFAULT_CONFIG,
    create_default_config,
    language_columns,
    load_config,
    required_columns,
    save_config,
)


def write_config(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadConfig:

    def test_defaults_without_file(self, tmp_path):
        config = load_config(tmp_path / "missing.json")

        assert config["source_language"] == "en_US"
        assert config["sync_strategy"] == "rewrite"
        assert config["store"]["backend"] == "sqlite"
        assert list(config["languages"])[0] == "Spanish"
        assert len(config["languages"]) == 28

    def test_file_sections_are_merged(self, tmp_path):
        path = write_config(tmp_path / "config.json", {"store": {"table": "strings"}, "log_mode": "info"})
        config = load_config(path)

        assert config["store"]["table"] == "strings"
        assert config["store"]["backend"] == "sqlite"
        assert config["log_mode"] == "info"

    def test_languages_replace_defaults(self, tmp_path):
        path = write_config(tmp_path / "config.json", {"languages": {"German": "de", "French": "fr"}})

        assert list(load_config(path)["languages"].items()) == [("German", "de"), ("French", "fr")]

    def test_defaults_are_not_mutated(self, tmp_path):
        path = write_config(tmp_path / "config.json", {"store": {"table": "strings"}})
        load_config(path)

        assert DEFAULT_CONFIG["store"]["table"] == "records"

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "config.json", {"google_sheets": {"sheet_id": "from-file"}})
        monkeypatch.setenv("GOOGLE_SHEET_ID", "from-env")
        monkeypatch.setenv("XLF_SYNC_STRATEGY", "targeted")

        config = load_config(path)

        assert config["google_sheets"]["sheet_id"] == "from-env"
        assert config["sync_strategy"] == "targeted"

    def test_config_file_from_env(self, tmp_path, monkeypatch):
        path = write_config(tmp_path / "other.json", {"source_column": "Source"})
        monkeypatch.setenv("XLF_CONFIG_FILE", str(path))

        assert load_config()["source_column"] == "Source"

    def test_invalid_json_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        assert load_config(path)["store"]["table"] == "records"

    def test_unknown_sync_strategy(self, tmp_path):
        path = write_config(tmp_path / "config.json", {"sync_strategy": "merge"})

        with pytest.raises(ValueError):
            load_config(path)


class TestSaveConfig:

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = load_config(path)
        config["languages"] = {"Japanese": "ja"}
        save_config(config, path)

        assert load_config(path)["languages"] == {"Japanese": "ja"}

    def test_create_default_config(self, tmp_path):
        path = tmp_path / "config.json"
        create_default_config(path)

        assert json.loads(path.read_text(encoding="utf-8"))["sync_strategy"] == "rewrite"

    def test_default_location(self):
        assert config_module.get_config_file().name == "config.json"


class TestColumns:

    def test_required_columns(self):
        assert required_columns(DEFAULT_CONFIG) == ["id", "category", "maxwidth", "size-unit", "English", "active"]

    def test_language_columns(self):
        columns = ["id", "category", "English", "French", "active", "Reviewer"]

        assert language_columns(columns, DEFAULT_CONFIG) == ["French", "Reviewer"]
