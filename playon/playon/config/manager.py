"""
Centralized configuration management for PlayOn.

This module provides type-safe, validated configuration using Pydantic.
Every section reads its own environment prefix and the project's .env file.
"""

import json
from pathlib import Path
from typing import Optional, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..constants import (
    ANILIST_API_URL,
    ANILIST_DEFAULT_PER_PAGE,
    ANILIST_TIMEOUT_SECONDS,
    ANILIST_RETRY_COUNT,
    DEFAULT_CACHE_TTL_SECONDS,
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_LOG_FILE,
)
from ..logging import ConfigError


class AniListConfig(BaseSettings):
    """Configuration for the AniList GraphQL API"""

    model_config = SettingsConfigDict(
        env_prefix="ANILIST_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    api_url: str = Field(default=ANILIST_API_URL, description="AniList GraphQL endpoint")
    timeout: int = Field(default=ANILIST_TIMEOUT_SECONDS, description="Per-request timeout in seconds")
    per_page: int = Field(default=ANILIST_DEFAULT_PER_PAGE, description="Results requested per search")
    max_retries: int = Field(default=ANILIST_RETRY_COUNT, description="Transport retries on 5xx responses")

    @field_validator('per_page')
    @classmethod
    def validate_per_page(cls, v: int) -> int:
        # AniList caps Page.perPage at 50
        if not 1 <= v <= 50:
            raise ValueError("per_page must be between 1 and 50")
        return v


class CacheConfig(BaseSettings):
    """Configuration for the lookup cache"""

    model_config = SettingsConfigDict(
        env_prefix="CACHE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    enabled: bool = Field(default=True, description="Whether title lookups are cached")
    ttl_seconds: int = Field(default=DEFAULT_CACHE_TTL_SECONDS, description="Cache entry lifetime in seconds")


class LoggingConfig(BaseSettings):
    """Configuration for logging behavior"""

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    file_level: str = Field(default="INFO", description="File logging level")
    console_level: str = Field(default="WARNING", description="Console logging level")
    log_file: str = Field(default=DEFAULT_LOG_FILE, description="Log file path")

    @field_validator('file_level', 'console_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log level is one of the allowed values"""
        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class DetectionConfig(BaseSettings):
    """Configuration for window detection"""

    model_config = SettingsConfigDict(
        env_prefix="DETECT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    poll_interval: float = Field(default=DEFAULT_POLL_INTERVAL_SECONDS, description="Seconds between polls in watch mode")
    scan_all_windows: bool = Field(default=False, description="Fall back to all visible windows when the active one is not a player")


class PlayOnConfig(BaseSettings):
    """
    Main configuration class for PlayOn.

    This class serves as the single source of truth for all configuration.
    It automatically loads from environment variables and .env files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore"
    )

    anilist: AniListConfig = Field(default_factory=AniListConfig, description="AniList API configuration")
    cache: CacheConfig = Field(default_factory=CacheConfig, description="Cache configuration")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")
    detection: DetectionConfig = Field(default_factory=DetectionConfig, description="Detection configuration")

    verbose: bool = Field(default=False, description="Show INFO logs on the console without -v")

    def save_to_file(self, path: Union[str, Path]) -> None:
        """
        Save configuration to a JSON file.

        Args:
            path: Path to save the configuration file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode='json'), f, indent=2, ensure_ascii=False)

    @classmethod
    def load_from_file(cls, path: Union[str, Path], **overrides) -> "PlayOnConfig":
        """
        Load configuration from a JSON file. Sections missing from the file
        fall back to environment variables and defaults.

        Raises:
            FileNotFoundError: If the file does not exist
            ConfigError: If the file is not a JSON object
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid configuration file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid configuration file {path}: expected a JSON object")

        data.update(overrides)
        return cls(**data)


# Global configuration instance
_config_instance: Optional[PlayOnConfig] = None


def setup_config(
    env_file: Optional[Union[str, Path]] = None,
    config_file: Optional[Union[str, Path]] = None,
    **kwargs
) -> PlayOnConfig:
    """
    Set up the global configuration.

    Args:
        env_file: Path to .env file
        config_file: JSON file written by save_to_file
        **kwargs: Additional configuration overrides

    Returns:
        PlayOnConfig instance
    """
    global _config_instance

    config_kwargs = {}
    if env_file:
        config_kwargs["_env_file"] = str(env_file)
    config_kwargs.update(kwargs)

    if config_file:
        _config_instance = PlayOnConfig.load_from_file(config_file, **config_kwargs)
    else:
        _config_instance = PlayOnConfig(**config_kwargs)
    return _config_instance


def get_config() -> PlayOnConfig:
    """Get the global configuration instance, loading it on first use."""
    global _config_instance
    if _config_instance is None:
        _config_instance = PlayOnConfig()
    return _config_instance


def reload_config() -> PlayOnConfig:
    """Reload configuration from environment and .env files."""
    global _config_instance
    _config_instance = PlayOnConfig()
    return _config_instance


def get_anilist_config() -> AniListConfig:
    return get_config().anilist


def get_cache_config() -> CacheConfig:
    return get_config().cache


def get_logging_config() -> LoggingConfig:
    return get_config().logging


def get_detection_config() -> DetectionConfig:
    return get_config().detection


__all__ = [
    "AniListConfig",
    "CacheConfig",
    "LoggingConfig",
    "DetectionConfig",
    "PlayOnConfig",
    "setup_config",
    "get_config",
    "reload_config",
    "get_anilist_config",
    "get_cache_config",
    "get_logging_config",
    "get_detection_config",
]
