"""Tests for configuration loading."""

from pathlib import Path

import tomli_w

from config import DEFAULT_STORAGE_KEY, Config, load_config


class TestLoadConfig:
    def test_creates_default_config(self, tmp_path, monkeypatch):
        """Test that a missing config file is created with defaults."""
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        config_path = tmp_path / ".config" / "tripbudget.toml"

        config = load_config(config_path)

        assert config_path.exists()
        assert config == Config.default()
        assert config.db_path == tmp_path / "data" / "tripbudget" / "db" / "tripbudget.db"
        assert config.storage_key == DEFAULT_STORAGE_KEY

    def test_reads_existing_config(self, tmp_path):
        config_path = tmp_path / "tripbudget.toml"
        with open(config_path, "wb") as f:
            tomli_w.dump(
                {
                    "base_dir": str(tmp_path / "base"),
                    "storage_key": "my-trip",
                    "database": {"filename": "trips.db"},
                    "logging": {"level": "DEBUG"},
                },
                f,
            )

        config = load_config(config_path)

        assert config.storage_key == "my-trip"
        assert config.db_path == tmp_path / "base" / "db" / "trips.db"
        assert config.log_level == "DEBUG"
        assert config.log_dir == tmp_path / "base" / "logs"

    def test_written_defaults_round_trip(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        config_path = tmp_path / "tripbudget.toml"

        first = load_config(config_path)
        second = load_config(config_path)

        assert first == second
