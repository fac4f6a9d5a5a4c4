"""
Unit tests for showsheet/config_manager.py

Tests configuration loading, validation, and environment variable handling.
"""

from types import SimpleNamespace

import pytest

from showsheet.config_manager import Config
from showsheet.exceptions import ConfigurationError
from showsheet.media_client import DEFAULT_USER_AGENT


def _config_from(**settings) -> Config:
    config = Config()
    config._load_from_module(SimpleNamespace(**settings))
    return config


class TestConfigLoadFromModule:

    @pytest.mark.unit
    def test_defaults(self):
        config = _config_from(SHEET_ID="abc", VENUES_GID="1", SHOWS_GID="2")
        assert config.output_path == "shows.json"
        assert config.cache_path == "media-cache.json"
        assert config.user_agent == DEFAULT_USER_AGENT
        assert config.request_timeout == 30
        assert config.fetch_media is True
        assert config.log_level == "INFO"

    @pytest.mark.unit
    def test_all_settings(self):
        config = _config_from(
            SHEET_ID="abc", VENUES_GID="1", SHOWS_GID="2",
            OUTPUT_PATH="site/shows.json", CACHE_PATH=".cache/media.json",
            USER_AGENT="custom/2.0", REQUEST_TIMEOUT=None, FETCH_MEDIA=False, LOG_LEVEL="DEBUG",
        )
        assert config.output_path == "site/shows.json"
        assert config.cache_path == ".cache/media.json"
        assert config.user_agent == "custom/2.0"
        assert config.request_timeout is None
        assert config.fetch_media is False
        assert config.log_level == "DEBUG"


class TestConfigLoadFromEnv:

    @pytest.mark.unit
    def test_env_values(self, monkeypatch):
        monkeypatch.setenv("SHEET_ID", "env-sheet")
        monkeypatch.setenv("VENUES_GID", "10")
        monkeypatch.setenv("SHOWS_GID", "20")
        monkeypatch.setenv("REQUEST_TIMEOUT", "12.5")
        monkeypatch.setenv("FETCH_MEDIA", "no")
        config = Config()
        config._load_from_env()
        assert config.sheet_id == "env-sheet"
        assert config.venues_gid == "10"
        assert config.shows_gid == "20"
        assert config.request_timeout == 12.5
        assert config.fetch_media is False

    @pytest.mark.unit
    def test_blank_timeout_means_none(self, monkeypatch):
        monkeypatch.setenv("REQUEST_TIMEOUT", "")
        config = Config()
        config._load_from_env()
        assert config.request_timeout is None


class TestConfigValidation:

    @pytest.mark.unit
    def test_valid(self):
        _config_from(SHEET_ID="abc", VENUES_GID=0, SHOWS_GID="2")._validate()

    @pytest.mark.unit
    def test_missing_sheet_id(self):
        with pytest.raises(ConfigurationError, match="SHEET_ID"):
            _config_from(VENUES_GID="1", SHOWS_GID="2")._validate()

    @pytest.mark.unit
    def test_placeholder_sheet_id(self):
        with pytest.raises(ConfigurationError, match="update SHEET_ID"):
            _config_from(SHEET_ID="YOUR_SHEET_ID_HERE", VENUES_GID="1", SHOWS_GID="2")._validate()

    @pytest.mark.unit
    def test_missing_gid(self):
        with pytest.raises(ConfigurationError, match="GID"):
            _config_from(SHEET_ID="abc", VENUES_GID="1")._validate()

    @pytest.mark.unit
    def test_bad_timeout(self):
        with pytest.raises(ConfigurationError, match="REQUEST_TIMEOUT"):
            _config_from(SHEET_ID="abc", VENUES_GID="1", SHOWS_GID="2", REQUEST_TIMEOUT=0)._validate()


class TestConfigExport:

    @pytest.mark.unit
    def test_to_dict_and_repr(self):
        config = _config_from(SHEET_ID="abc", VENUES_GID="1", SHOWS_GID="2")
        data = config.to_dict()
        assert data["sheet_id"] == "abc"
        assert data["fetch_media"] is True
        assert "abc" in repr(config)
        assert "shows.json" in repr(config)
