"""Structured logging configuration for winscout using structlog.

Log records are rendered as JSON by default and as colored console lines
in debug mode. All output goes to stderr so stdout stays free for CLI
results.
"""

import logging
import os
import sys
from collections import deque
from collections.abc import Sequence
from pathlib import Path
from typing import Any, cast

import structlog

from ..config import get_settings

DEFAULT_MAX_SAMPLES = 1000


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    structured: bool = True,
    console: bool = True,
    add_timestamp: bool = True,
    colorize: bool = True,
) -> None:
    """Configure structured logging for winscout.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file
        structured: Use JSON structured output
        console: Enable console output (overridden by WINSCOUT_DISABLE_CONSOLE_LOGGING)
        add_timestamp: Add timestamps to logs
        colorize: Colorize console output (only for non-structured)
    """
    if os.getenv("WINSCOUT_DISABLE_CONSOLE_LOGGING") == "1":
        console = False
        log_file = None

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]

    if add_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    processors.extend(
        [
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ]
    )

    if structured:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=colorize and console))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handlers: list[logging.Handler] = []

    if console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        handlers.append(file_handler)

    if not handlers:
        handlers.append(logging.NullHandler())
        level = "CRITICAL"

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        handlers=handlers,
        force=True,
    )


# Global state for lazy initialization
_logging_initialized = False


def _ensure_logging_initialized() -> None:
    """Ensure logging is initialized (called lazily, not at import time)."""
    global _logging_initialized

    if _logging_initialized:
        return

    if os.getenv("WINSCOUT_DISABLE_CONSOLE_LOGGING") == "1":
        logging.disable(logging.CRITICAL)
        _logging_initialized = True
        return

    try:
        settings = get_settings()
        setup_logging(
            level="DEBUG" if settings.debug_mode else settings.log_level,
            log_file=settings.log_file,
            structured=not settings.debug_mode,
            colorize=settings.debug_mode,
        )
    except (AttributeError, OSError, ValueError):
        # Invalid settings or unwritable log path
        setup_logging(level="INFO", structured=False)

    _logging_initialized = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    _ensure_logging_initialized()
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))


class StateLogger:
    """Specialized logger for phase transitions."""

    def __init__(self, base_logger: structlog.stdlib.BoundLogger | None = None) -> None:
        """Initialize state logger.

        Args:
            base_logger: Base logger to use
        """
        self.logger = base_logger or get_logger(__name__)

    def log_transition(
        self,
        from_state: str,
        to_state: str,
        trigger: str | None = None,
        success: bool = True,
        **kwargs,
    ) -> None:
        """Log a phase transition.

        Args:
            from_state: Source phase
            to_state: Target phase
            trigger: Operation that caused the transition
            success: Whether the transition reached its intended phase
            **kwargs: Additional context
        """
        log_data = {
            "from_state": from_state,
            "to_state": to_state,
            "success": success,
            **kwargs,
        }

        if trigger:
            log_data["trigger"] = trigger

        if success:
            self.logger.info("state_transition", **log_data)
        else:
            self.logger.warning("state_transition_failed", **log_data)


class PerformanceLogger:
    """Logger for timing of detection work.

    Keeps the most recent ``max_samples`` durations per operation, so a
    long-lived process holds bounded history.
    """

    def __init__(
        self,
        base_logger: structlog.stdlib.BoundLogger | None = None,
        max_samples: int = DEFAULT_MAX_SAMPLES,
    ) -> None:
        """Initialize performance logger.

        Args:
            base_logger: Base logger to use
            max_samples: Durations kept per operation; older ones are dropped
        """
        if max_samples < 1:
            raise ValueError(f"max_samples must be positive, got {max_samples}")
        self.logger = base_logger or get_logger(__name__)
        self.max_samples = max_samples
        self.metrics: dict[str, deque[float]] = {}

    def log_timing(self, operation: str, duration: float, **kwargs) -> None:
        """Log operation timing.

        Args:
            operation: Operation name
            duration: Duration in seconds
            **kwargs: Additional context
        """
        samples = self.metrics.get(operation)
        if samples is None:
            samples = self.metrics[operation] = deque(maxlen=self.max_samples)
        samples.append(duration)
        self.logger.debug("performance_timing", operation=operation, duration=duration, **kwargs)

    def get_stats(self, operation: str | None = None) -> dict[str, Any]:
        """Get timing statistics.

        Args:
            operation: Optional specific operation

        Returns:
            Statistics dict, keyed by operation when no operation is given
        """
        if operation:
            values = self.metrics.get(operation)
            return self._summarize(values) if values else {}

        return {op: self._summarize(values) for op, values in self.metrics.items() if values}

    @staticmethod
    def _summarize(values: Sequence[float]) -> dict[str, float]:
        return {
            "count": len(values),
            "mean": sum(values) / len(values),
            "min": min(values),
            "max": max(values),
            "total": sum(values),
        }
