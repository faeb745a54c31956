"""Configuration management for tager."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import Optional
from pathlib import Path
import os
import json
import logging

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TagerConfig(BaseSettings):
    """
    tager configuration with environment variable support.

    Every field can be overridden with a ``TAGER_``-prefixed environment
    variable, e.g. ``TAGER_STORE_PATH=/tmp/tags.json``.
    """

    # Persisted tag graph snapshot
    store_path: str = "~/.tager/config.json"

    # Logging
    log_level: str = "WARNING"
    json_logging: bool = False
    log_file: Optional[str] = None

    # Mount layout
    mount_prefix: str = "tager-"  # Mount directory is <prefix><tag>
    mount_separator: str = "-"  # Replaces "/" in symlink names

    model_config = SettingsConfigDict(
        env_prefix="TAGER_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        v = v.strip().upper()
        if v not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return v

    @field_validator("mount_separator")
    @classmethod
    def validate_mount_separator(cls, v: str) -> str:
        """Symlink names are built by substituting this for the path separator."""
        if len(v) != 1 or v in ("/", os.sep):
            raise ValueError("mount_separator must be a single character other than the path separator")
        return v

    @field_validator("mount_prefix")
    @classmethod
    def validate_mount_prefix(cls, v: str) -> str:
        if "/" in v:
            raise ValueError("mount_prefix cannot contain '/'")
        return v

    def get_expanded_path(self, path: str) -> Path:
        """Expand ~ and environment variables in path."""
        return Path(os.path.expanduser(os.path.expandvars(path)))

    @property
    def store_path_expanded(self) -> Path:
        """Get expanded snapshot path."""
        return self.get_expanded_path(self.store_path)

    @property
    def log_file_expanded(self) -> Optional[Path]:
        if not self.log_file:
            return None
        path = self.get_expanded_path(self.log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path


# Global config instance
_config: Optional[TagerConfig] = None

# User settings file location (kept apart from the tag store itself)
_USER_CONFIG_PATH = Path.home() / ".tager" / "settings.json"


def _load_user_config_overrides() -> dict:
    """
    Load user configuration overrides from ~/.tager/settings.json.

    Returns:
        Dict of config overrides, or empty dict if no settings file exists
    """
    if not _USER_CONFIG_PATH.exists():
        return {}

    try:
        with open(_USER_CONFIG_PATH, "r") as f:
            overrides = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load user config from {_USER_CONFIG_PATH}: {e}")
        return {}

    if not isinstance(overrides, dict):
        logger.warning(f"Ignoring {_USER_CONFIG_PATH}: expected a JSON object")
        return {}
    return overrides


def get_config() -> TagerConfig:
    """
    Get or create global configuration instance.

    Configuration priority (highest to lowest):
    1. Environment variables (TAGER_*)
    2. User settings file (~/.tager/settings.json)
    3. Built-in defaults
    """
    global _config
    if _config is None:
        user_overrides = _load_user_config_overrides()
        # Init kwargs beat env vars in pydantic-settings; drop keys the env sets
        env_keys = {k[len("TAGER_"):].lower() for k in os.environ if k.upper().startswith("TAGER_")}
        user_overrides = {k: v for k, v in user_overrides.items() if k.lower() not in env_keys}
        _config = TagerConfig(**user_overrides)
    return _config


def set_config(config: Optional[TagerConfig]) -> None:
    """Set global configuration instance (mainly for testing)."""
    global _config
    _config = config
