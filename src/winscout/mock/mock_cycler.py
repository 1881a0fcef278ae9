"""MockCycler - counts surface switches without sending keystrokes.

Tracks every advance so tests can verify how many cycles a detection
run or a navigation performed.
"""

import logging

from ..hal.interfaces.cycler import ICycler

logger = logging.getLogger(__name__)


class MockCycler(ICycler):
    """Cycler that records advances.

    Example:
        cycler = MockCycler()
        await cycler.advance()
        cycler.advance_count  # 1
    """

    def __init__(self, fail_after: int | None = None, error: Exception | None = None) -> None:
        """Initialize MockCycler.

        Args:
            fail_after: Raise on the advance following this many successful ones
            error: Exception to raise when failing (RuntimeError by default)
        """
        self.advance_count = 0
        self.fail_after = fail_after
        self.error = error

    async def advance(self) -> None:
        """Record an advance (mock)."""
        if self.fail_after is not None and self.advance_count >= self.fail_after:
            raise self.error or RuntimeError("Mock cycler failure")

        self.advance_count += 1
        logger.debug(f"MockCycler.advance #{self.advance_count}")

    def reset(self) -> None:
        """Reset the advance counter."""
        self.advance_count = 0
