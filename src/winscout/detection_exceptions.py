"""Region detection exceptions.

Raised by the detection session when a cycling run cannot produce a
result. The phase controller converts every one of these into a
user-facing error message.
"""

from .base_exceptions import WinscoutException


class DetectionException(WinscoutException):
    """Base exception for region detection errors."""

    pass


class DetectionTimeout(DetectionException):
    """Raised when a whole cycling run exceeds its time budget."""

    def __init__(self, timeout_seconds: float, **kwargs) -> None:
        """Initialize with the exceeded budget."""
        super().__init__(
            f"Detection timed out after {timeout_seconds:g} seconds",
            error_code="DETECTION_TIMEOUT",
            context={"timeout_seconds": timeout_seconds, **kwargs},
        )
        self.timeout_seconds = timeout_seconds


class DetectionError(DetectionException):
    """Raised when capture, decode or tracing fails unexpectedly.

    The original fault is kept as ``cause`` and its text is part of the
    message, so callers can show it without unwrapping.
    """

    def __init__(self, reason: str, cause: BaseException | None = None, **kwargs) -> None:
        """Initialize with failure details."""
        super().__init__(
            f"Detection failed: {reason}",
            error_code="DETECTION_FAILED",
            context={"reason": reason, **kwargs},
        )
        self.cause = cause


class EmptyDetectionResult(DetectionException):
    """Raised when a run completes but nothing survives filtering."""

    def __init__(self, **kwargs) -> None:
        """Initialize with the fixed user message."""
        super().__init__(
            "No windows detected. Try restarting detection.",
            error_code="NO_REGIONS_DETECTED",
            context=kwargs,
        )
