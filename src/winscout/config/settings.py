"""Configuration management for winscout using pydantic-settings.

Supports environment variables (``WINSCOUT_`` prefix), ``.env`` files and
type validation. Defaults are the empirically tuned detection constants.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EDGE_THRESHOLD = 175
LARGE_REGION_THRESHOLD = 0.15
MEDIUM_REGION_THRESHOLD = 0.05
MAX_CYCLING_ATTEMPTS = 15
CYCLING_TIMEOUT_SECONDS = 180
SETTLE_DELAY_MS = 2500


class WinscoutSettings(BaseSettings):
    """Main configuration settings for winscout."""

    model_config = SettingsConfigDict(
        env_prefix="WINSCOUT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Edge detection
    edge_threshold: int = Field(
        EDGE_THRESHOLD,
        ge=150,
        le=200,
        description="Sobel magnitude above which a pixel is foreground",
    )
    seed_stride: int = Field(5, ge=1, description="Grid stride for seed points in pixels")
    trace_window: int = Field(200, ge=1, description="Side of the square traced from each seed")
    min_region_size: int = Field(
        50, ge=0, description="Width and height a region must exceed to be kept"
    )
    max_screen_fraction: float = Field(
        0.9, gt=0.0, le=1.0, description="Regions must be narrower and shorter than this"
    )

    # Classification
    large_region_threshold: float = Field(
        LARGE_REGION_THRESHOLD, gt=0.0, le=1.0, description="Screen share of a large region"
    )
    medium_region_threshold: float = Field(
        MEDIUM_REGION_THRESHOLD, gt=0.0, le=1.0, description="Screen share of a medium region"
    )

    # Cycling
    max_cycling_attempts: int = Field(
        MAX_CYCLING_ATTEMPTS, ge=1, description="Capture rounds per detection run"
    )
    cycling_timeout_seconds: float = Field(
        CYCLING_TIMEOUT_SECONDS, gt=0.0, description="Budget for a whole detection run"
    )
    settle_delay_ms: int = Field(
        SETTLE_DELAY_MS, ge=0, description="Wait after each cycle before the next capture"
    )

    # Thumbnails
    thumbnail_width: int = Field(200, ge=1, description="Thumbnail width in pixels")
    thumbnail_height: int = Field(150, ge=1, description="Thumbnail height in pixels")

    # Logging
    debug_mode: bool = Field(False, description="Enable debug logging and readable output")
    log_level: str = Field("INFO", description="Log level when not in debug mode")
    log_file: Path | None = Field(None, description="Optional log file path")

    def validate_thresholds(self) -> None:
        """Validate that the medium threshold sits below the large one."""
        if self.medium_region_threshold >= self.large_region_threshold:
            raise ValueError(
                "medium_region_threshold must be lower than large_region_threshold, got "
                f"{self.medium_region_threshold} >= {self.large_region_threshold}"
            )

    def model_post_init(self, __context) -> None:
        """Post-initialization validation."""
        self.validate_thresholds()

    @property
    def settle_delay_seconds(self) -> float:
        """Settle delay converted to seconds."""
        return self.settle_delay_ms / 1000.0


# Singleton instance
_settings: WinscoutSettings | None = None


def get_settings() -> WinscoutSettings:
    """Get the singleton settings instance.

    Returns:
        WinscoutSettings instance
    """
    global _settings

    if _settings is None:
        _settings = WinscoutSettings()

    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
