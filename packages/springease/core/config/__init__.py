"""Configuration management for springease."""

from springease.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
    load_spring_options,
)
from springease.core.config.models import AppConfig, ConfigBase, EasingConfig, LoggingConfig

__all__ = [
    # Loaders
    "configure_logging",
    "detect_format",
    "load_app_config",
    "load_config",
    "load_spring_options",
    # Models
    "AppConfig",
    "ConfigBase",
    "EasingConfig",
    "LoggingConfig",
]
