"""Phase controller exceptions.

These describe failures of user-driven transitions: confirming an empty
selection and cycling back to a selected region.
"""

from .base_exceptions import WinscoutException


class PhaseException(WinscoutException):
    """Base exception for phase state machine errors."""

    pass


class EmptySelection(PhaseException):
    """Raised when the user confirms a selection of zero regions."""

    def __init__(self, **kwargs) -> None:
        """Initialize with the fixed user message."""
        super().__init__(
            "No windows selected. Please select at least one window.",
            error_code="EMPTY_SELECTION",
            context=kwargs,
        )


class NavigationError(PhaseException):
    """Raised when cycling to a selected region fails."""

    def __init__(self, index: int, reason: str, **kwargs) -> None:
        """Initialize with navigation details."""
        super().__init__(
            f"Navigation failed: {reason}",
            error_code="NAVIGATION_FAILED",
            context={"index": index, "reason": reason, **kwargs},
        )
        self.index = index
