"""
Configuration package for PlayOn.

This package provides centralized, type-safe configuration management.
"""

from .manager import (
    AniListConfig,
    CacheConfig,
    LoggingConfig,
    DetectionConfig,
    PlayOnConfig,
    setup_config,
    get_config,
    reload_config,
    get_anilist_config,
    get_cache_config,
    get_logging_config,
    get_detection_config,
)

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
