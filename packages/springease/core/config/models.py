"""Configuration models for springease."""

from __future__ import annotations

from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from springease.core.spring.defaults import (
    DEFAULT_RESOLUTION,
    DEFAULT_SPRING,
    DURATION_STEP_MS,
    FRAME_STEP_MS,
    MAX_DURATION_MS,
    SpringDefaults,
)


class ConfigBase(BaseModel):
    """Base class for springease configurations.

    Provides common functionality for loading from files with defaults.
    Subclasses must implement default_path() to specify their default location.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type.

        Subclasses must override this to provide their default location.

        Returns:
            Path to the default config file
        """
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path or use default path.

        Args:
            path: Path to config file, or None to use default

        Returns:
            Loaded config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValidationError: If config is invalid
        """
        # AppConfig applies environment overrides and caching
        if cls.__name__ == "AppConfig":
            from springease.core.config.loader import load_app_config

            return load_app_config(path)  # type: ignore[return-value]

        from springease.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
        raw = load_config(path)
        return cls.model_validate(raw)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON log lines")
    filename: str | None = Field(default=None, description="Log file; stderr when unset")


class EasingConfig(BaseModel):
    """Sampling and settling-search settings for generated easings."""

    model_config = ConfigDict(extra="forbid")

    resolution: int = Field(default=DEFAULT_RESOLUTION, ge=2, description="Samples per curve")
    precision: int | None = Field(
        default=None, ge=0, description="Fractional digits in rendered values (None = exact)"
    )
    duration_step_ms: float = Field(default=DURATION_STEP_MS, gt=0.0)
    max_duration_ms: float = Field(default=MAX_DURATION_MS, gt=0.0)
    frame_step_ms: float = Field(default=FRAME_STEP_MS, gt=0.0)


class AppConfig(ConfigBase):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    spring: SpringDefaults = Field(default_factory=lambda: DEFAULT_SPRING)
    easing: EasingConfig = Field(default_factory=EasingConfig)

    @classmethod
    def default_path(cls) -> Path:
        return Path("springease.yaml")
