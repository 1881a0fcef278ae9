"""Logging module for winscout."""

from .logger import PerformanceLogger, StateLogger, get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "StateLogger",
    "PerformanceLogger",
]
