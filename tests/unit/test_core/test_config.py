#!/usr/bin/env python3
"""Unit tests for configuration loading and validation."""

from pathlib import Path

import pytest

from smsledger.core.config import (
    DEFAULT_CARD_SENDER_KEYWORDS,
    Config,
    Environment,
    get_config,
    reload_config,
)


class TestConfigFromEnvironment:
    """Test environment-driven configuration."""

    def test_test_environment_defaults(self, tmp_path):
        """The autouse fixture selects the test environment."""
        config = Config.from_environment()

        assert config.environment == Environment.TEST
        assert config.data_dir == tmp_path / "smsledger_data"
        assert config.data_dir.exists()
        assert config.storage.store_file == config.data_dir / "ledger.json"
        assert config.ingestion.max_messages == 1000
        assert config.ingestion.card_sender_keywords == DEFAULT_CARD_SENDER_KEYWORDS

    def test_overrides(self, monkeypatch, tmp_path):
        """Store file, message limit and card senders are configurable."""
        monkeypatch.setenv("SMSLEDGER_STORE_FILE", str(tmp_path / "custom.json"))
        monkeypatch.setenv("SMSLEDGER_MAX_MESSAGES", "50")
        monkeypatch.setenv("SMSLEDGER_CARD_SENDERS", "HDFC, YESBNK ,")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = Config.from_environment()

        assert config.storage.store_file == tmp_path / "custom.json"
        assert config.ingestion.max_messages == 50
        assert config.ingestion.card_sender_keywords == ["HDFC", "YESBNK"]
        assert config.log_level == "DEBUG"

    def test_validate_reports_every_error(self, monkeypatch):
        """All problems are listed together."""
        monkeypatch.setenv("SMSLEDGER_MAX_MESSAGES", "0")
        monkeypatch.setenv("SMSLEDGER_CARD_SENDERS", "")
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        errors = Config.from_environment().validate()

        assert len(errors) == 3
        assert any("SMSLEDGER_MAX_MESSAGES" in error for error in errors)
        assert any("SMSLEDGER_CARD_SENDERS" in error for error in errors)
        assert any("LOG_LEVEL" in error for error in errors)

    def test_get_config_raises_on_invalid(self, monkeypatch):
        """get_config refuses an invalid configuration."""
        monkeypatch.setenv("SMSLEDGER_MAX_MESSAGES", "-1")
        with pytest.raises(ValueError, match="Configuration validation failed"):
            get_config()

    def test_get_config_is_cached_until_reload(self, monkeypatch):
        """The global config is created once and rebuilt by reload_config."""
        first = get_config()
        assert get_config() is first

        monkeypatch.setenv("SMSLEDGER_MAX_MESSAGES", "10")
        reloaded = reload_config()
        assert reloaded is not first
        assert reloaded.ingestion.max_messages == 10

    def test_to_dict_is_json_friendly(self):
        """Paths and enums are rendered as strings."""
        data = Config.from_environment().to_dict()

        assert data["environment"] == "test"
        assert isinstance(data["data_dir"], str)
        assert isinstance(data["storage"]["store_file"], str)
        assert Path(data["storage"]["store_file"]).name == "ledger.json"
        assert data["ingestion"]["max_messages"] == 1000
