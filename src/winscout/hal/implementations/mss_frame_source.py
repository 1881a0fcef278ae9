"""MSS-based frame source implementation."""

import asyncio
import threading

import mss
import numpy as np
from mss.base import MSSBase
from mss.exception import ScreenShotError
from PIL import Image

from ...logging import get_logger
from ...model import Frame
from ..interfaces.frame_source import IFrameSource

logger = get_logger(__name__)


class MSSFrameSource(IFrameSource):
    """Frame source that grabs a local monitor using MSS.

    Captures run on a worker thread so the event loop keeps running while
    the grab is in progress. Each thread gets its own mss instance to
    avoid thread-local storage issues with Windows GDI. Every instance is
    tracked so :meth:`close` can release those created on worker threads.
    """

    def __init__(self, monitor: int = 0):
        """Initialize MSS frame source.

        Args:
            monitor: Monitor index (0-based, excluding the virtual all-screens monitor)
        """
        self.monitor = monitor
        self._thread_local = threading.local()
        self._instances: list[MSSBase] = []
        self._lock = threading.Lock()

    @property
    def sct(self) -> MSSBase:
        """Get or create the thread-local mss instance."""
        if not hasattr(self._thread_local, "sct"):
            sct = mss.mss()
            with self._lock:
                self._instances.append(sct)
            self._thread_local.sct = sct
            logger.debug("mss_instance_created", thread_id=threading.current_thread().ident)
        return self._thread_local.sct

    async def capture(self) -> Frame | None:
        """Capture the configured monitor as an RGB frame.

        Returns:
            The captured frame, or None if the grab failed
        """
        try:
            return await asyncio.to_thread(self._grab)
        except (ScreenShotError, IndexError, OSError) as e:
            logger.warning("frame_capture_failed", monitor=self.monitor, error=str(e))
            return None

    def _grab(self) -> Frame:
        # Index 0 is the combined virtual monitor
        mon = self.sct.monitors[self.monitor + 1]
        shot = self.sct.grab(mon)
        image = Image.frombytes("RGB", shot.size, shot.bgra, "raw", "BGRX")
        frame = Frame.from_array(np.asarray(image))
        logger.debug("frame_captured", monitor=self.monitor, width=frame.width, height=frame.height)
        return frame

    def close(self) -> None:
        """Release every mss instance created by this source."""
        with self._lock:
            instances, self._instances = self._instances, []
        for sct in instances:
            try:
                sct.close()
            except Exception as e:
                logger.debug("mss_close_failed", error=str(e))
        # Stale per-thread handles must not be reused after close
        self._thread_local = threading.local()
        logger.debug("mss_frame_source_closed", instances=len(instances))

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
