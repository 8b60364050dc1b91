"""Tests for environment-driven configuration."""
import logging
import os
from unittest.mock import patch

from civic_triage import config as config_module
from civic_triage.config import EngineConfig


class TestEngineConfigFromEnv:
    """Tests for EngineConfig.from_env."""

    def test_defaults_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            config = EngineConfig.from_env(load_env_file=False)

        assert config.duplicate_snapshot_limit == 50
        assert config.hotspot_limit == 5
        assert config.log_level == "INFO"
        assert config.log_file is None

    def test_reads_civic_variables(self):
        env = {
            "CIVIC_DUPLICATE_SNAPSHOT_LIMIT": "200",
            "CIVIC_HOTSPOT_LIMIT": "8",
            "CIVIC_LOG_LEVEL": "debug",
            "CIVIC_LOG_FILE": "/tmp/civic.log",
        }
        with patch.dict(os.environ, env, clear=True):
            config = EngineConfig.from_env(load_env_file=False)

        assert config.duplicate_snapshot_limit == 200
        assert config.hotspot_limit == 8
        assert config.log_level == "DEBUG"
        assert config.log_file == "/tmp/civic.log"

    def test_invalid_integer_falls_back(self, caplog):
        with patch.dict(os.environ, {"CIVIC_HOTSPOT_LIMIT": "many"}, clear=True):
            with caplog.at_level(logging.WARNING):
                config = EngineConfig.from_env(load_env_file=False)

        assert config.hotspot_limit == 5
        assert "CIVIC_HOTSPOT_LIMIT invalid" in caplog.text

    def test_out_of_bounds_falls_back(self, caplog):
        with patch.dict(os.environ, {"CIVIC_DUPLICATE_SNAPSHOT_LIMIT": "0"}, clear=True):
            with caplog.at_level(logging.WARNING):
                config = EngineConfig.from_env(load_env_file=False)

        assert config.duplicate_snapshot_limit == 50
        assert "out of bounds" in caplog.text

    def test_loads_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("CIVIC_HOTSPOT_LIMIT=9\n")
        monkeypatch.setattr(config_module, "ENV_FILE", env_file)

        with patch.dict(os.environ, {}, clear=True):
            config = EngineConfig.from_env()

        assert config.hotspot_limit == 9

    def test_process_env_beats_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("CIVIC_HOTSPOT_LIMIT=9\n")
        monkeypatch.setattr(config_module, "ENV_FILE", env_file)

        with patch.dict(os.environ, {"CIVIC_HOTSPOT_LIMIT": "3"}, clear=True):
            config = EngineConfig.from_env()

        assert config.hotspot_limit == 3


class TestLogLevelValue:
    """Tests for mapping level names to logging constants."""

    def test_known_level(self):
        assert EngineConfig(log_level="WARNING").log_level_value == logging.WARNING

    def test_unknown_level_is_info(self):
        assert EngineConfig(log_level="VERBOSE").log_level_value == logging.INFO
