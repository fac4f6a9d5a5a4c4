"""Configuration management for the show listings builder."""

import os
from typing import Dict, Any

from showsheet.exceptions import ConfigurationError
from showsheet.media_client import DEFAULT_USER_AGENT

PLACEHOLDER_SHEET_ID = "YOUR_SHEET_ID_HERE"


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Configuration container with validation."""

    def __init__(self):
        """Initialize configuration from environment or config.py file."""
        try:
            import sys
            from pathlib import Path

            # config.py lives at the repository root, next to the package
            config_dir = Path(__file__).parent.parent
            if str(config_dir) not in sys.path:
                sys.path.insert(0, str(config_dir))

            try:
                import config as config_module
                self._load_from_module(config_module)
            except ImportError:
                self._load_from_env()
        except Exception as e:
            raise ConfigurationError(f"Failed to load configuration: {e}")

        # Validation is explicit: scripts call _validate() once CLI overrides
        # have been applied.

    def _load_from_module(self, config_module) -> None:
        """Load configuration from config.py module."""
        # Spreadsheet source
        self.sheet_id = getattr(config_module, 'SHEET_ID', None)
        self.venues_gid = getattr(config_module, 'VENUES_GID', None)
        self.shows_gid = getattr(config_module, 'SHOWS_GID', None)

        # Output files
        self.output_path = getattr(config_module, 'OUTPUT_PATH', 'shows.json')
        self.cache_path = getattr(config_module, 'CACHE_PATH', 'media-cache.json')

        # Media fetching
        self.user_agent = getattr(config_module, 'USER_AGENT', DEFAULT_USER_AGENT)
        self.request_timeout = getattr(config_module, 'REQUEST_TIMEOUT', 30)
        self.fetch_media = _as_bool(getattr(config_module, 'FETCH_MEDIA', True))

        self.log_level = getattr(config_module, 'LOG_LEVEL', 'INFO')

    def _load_from_env(self) -> None:
        """Load configuration from environment variables (fallback)."""
        # Spreadsheet source
        self.sheet_id = os.getenv('SHEET_ID')
        self.venues_gid = os.getenv('VENUES_GID')
        self.shows_gid = os.getenv('SHOWS_GID')

        # Output files
        self.output_path = os.getenv('OUTPUT_PATH', 'shows.json')
        self.cache_path = os.getenv('CACHE_PATH', 'media-cache.json')

        # Media fetching
        self.user_agent = os.getenv('USER_AGENT', DEFAULT_USER_AGENT)
        timeout = os.getenv('REQUEST_TIMEOUT', '30')
        self.request_timeout = float(timeout) if timeout.strip() else None
        self.fetch_media = _as_bool(os.getenv('FETCH_MEDIA', 'true'))

        self.log_level = os.getenv('LOG_LEVEL', 'INFO')

    def _validate(self) -> None:
        """Validate required configuration values."""
        if not self.sheet_id:
            raise ConfigurationError(
                "SHEET_ID is required. Set it in config.py or SHEET_ID environment variable."
            )

        if self.sheet_id == PLACEHOLDER_SHEET_ID:
            raise ConfigurationError(
                "Please update SHEET_ID in config.py with your actual spreadsheet ID."
            )

        if self.venues_gid in (None, '') or self.shows_gid in (None, ''):
            raise ConfigurationError(
                "VENUES_GID and SHOWS_GID are required (the gid=... value of each tab's URL)."
            )

        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ConfigurationError("REQUEST_TIMEOUT must be a positive number of seconds.")

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            'sheet_id': self.sheet_id,
            'venues_gid': self.venues_gid,
            'shows_gid': self.shows_gid,
            'output_path': self.output_path,
            'cache_path': self.cache_path,
            'user_agent': self.user_agent,
            'request_timeout': self.request_timeout,
            'fetch_media': self.fetch_media,
            'log_level': self.log_level,
        }

    def __repr__(self) -> str:
        return (
            f"Config(sheet_id={self.sheet_id}, "
            f"output={self.output_path}, "
            f"cache={self.cache_path})"
        )
