"""MockFrameSource - replays prepared frames instead of capturing.

Enables fast, headless and deterministic detection runs: the same
frames come back every time, and gaps (``None``) simulate a remote
session that has not delivered an image yet.
"""

import asyncio
import logging
from collections.abc import Iterable

from ..hal.interfaces.frame_source import IFrameSource
from ..model import Frame

logger = logging.getLogger(__name__)


class MockFrameSource(IFrameSource):
    """Frame source backed by a fixed sequence of frames.

    Example:
        source = MockFrameSource([frame_a, None, frame_b])
        await source.capture()  # frame_a
        await source.capture()  # None
        await source.capture()  # frame_b
        await source.capture()  # frame_b again when repeat_last=True
    """

    def __init__(
        self,
        frames: Iterable[Frame | None] = (),
        repeat_last: bool = True,
        delay_seconds: float = 0.0,
    ) -> None:
        """Initialize MockFrameSource.

        Args:
            frames: Frames returned by successive captures
            repeat_last: Keep returning the last frame once the sequence is exhausted
            delay_seconds: Simulated capture latency
        """
        self.frames = list(frames)
        self.repeat_last = repeat_last
        self.delay_seconds = delay_seconds
        self.capture_count = 0

        logger.debug(f"MockFrameSource initialized with {len(self.frames)} frames")

    async def capture(self) -> Frame | None:
        """Return the next prepared frame (mock)."""
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

        index = self.capture_count
        self.capture_count += 1

        if index < len(self.frames):
            return self.frames[index]
        if self.repeat_last and self.frames:
            return self.frames[-1]
        return None

    def reset(self) -> None:
        """Reset the capture counter."""
        self.capture_count = 0
