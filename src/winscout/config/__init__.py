"""Configuration package.

Usage:
    from winscout.config import get_settings

    settings = get_settings()
    settings.settle_delay_ms
"""

from .settings import (
    CYCLING_TIMEOUT_SECONDS,
    EDGE_THRESHOLD,
    LARGE_REGION_THRESHOLD,
    MAX_CYCLING_ATTEMPTS,
    MEDIUM_REGION_THRESHOLD,
    SETTLE_DELAY_MS,
    WinscoutSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "WinscoutSettings",
    "get_settings",
    "reset_settings",
    "EDGE_THRESHOLD",
    "LARGE_REGION_THRESHOLD",
    "MEDIUM_REGION_THRESHOLD",
    "MAX_CYCLING_ATTEMPTS",
    "CYCLING_TIMEOUT_SECONDS",
    "SETTLE_DELAY_MS",
]
