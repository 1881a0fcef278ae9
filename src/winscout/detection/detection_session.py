"""Cycling detection runs across the surfaces of a remote session.

A run repeats capture, detect and cycle rounds, keeps the first
observation of every region, and hands back a filtered, ordered list.

Architecture:
    - DetectionSession: orchestrates the rounds under a global timeout
    - merge_unique: session-scoped deduplication by truncated bounds
    - filter_and_sort: drops small regions, orders by category then area

Example:
    >>> session = DetectionSession(frame_source, cycler)
    >>> regions = await session.run()
"""

import asyncio
import time
from collections.abc import Iterable

from ..config import WinscoutSettings, get_settings
from ..detection_exceptions import DetectionError, DetectionException, DetectionTimeout
from ..hal.interfaces import ICycler, IFrameSource
from ..logging import PerformanceLogger, get_logger
from ..model import DetectedRegion, RegionCategory, region_key
from .region_detector import RegionDetector

logger = get_logger(__name__)


def merge_unique(
    accumulated: list[DetectedRegion],
    seen_keys: set[str],
    regions: Iterable[DetectedRegion],
) -> int:
    """Append regions whose dedup key has not been seen yet.

    Args:
        accumulated: Result list, extended in place
        seen_keys: Keys observed so far in this session, updated in place
        regions: Candidates from one round

    Returns:
        Number of regions appended
    """
    added = 0
    for region in regions:
        key = region_key(region.bounds)
        if key in seen_keys:
            continue
        seen_keys.add(key)
        accumulated.append(region)
        added += 1
    return added


def filter_and_sort(
    regions: Iterable[DetectedRegion], include_small: bool = False
) -> list[DetectedRegion]:
    """Drop small regions and order large before medium, then by area descending.

    The sort is stable, so equal regions keep their discovery order.
    """
    kept = [r for r in regions if include_small or r.category is not RegionCategory.SMALL]
    return sorted(kept, key=lambda r: (-r.category.priority, -r.area))


class DetectionSession:
    """Runs one complete cycling detection pass.

    Rounds are strictly sequential: a frame is captured and analysed
    before the next cycle is issued, since each capture must show the
    settled surface. Detection itself runs on a worker thread so the
    event loop stays responsive.
    """

    def __init__(
        self,
        frame_source: IFrameSource,
        cycler: ICycler,
        detector: RegionDetector | None = None,
        settings: WinscoutSettings | None = None,
    ) -> None:
        """Initialize DetectionSession.

        Args:
            frame_source: Supplies one frame per round
            cycler: Switches to the next surface between rounds
            detector: Frame-level detector (built from settings by default)
            settings: Detection settings. Uses the global settings if not provided.
        """
        self.frame_source = frame_source
        self.cycler = cycler
        self.settings = settings or get_settings()
        self.detector = detector or RegionDetector(self.settings)
        self.performance_logger = PerformanceLogger(logger)

    async def run(self) -> list[DetectedRegion]:
        """Run all cycling rounds under the overall timeout.

        Returns:
            Deduplicated medium and large regions, largest first

        Raises:
            DetectionTimeout: If the run exceeds the configured budget
            DetectionError: If a round fails unexpectedly
        """
        timeout = self.settings.cycling_timeout_seconds
        start = time.perf_counter()
        logger.info(
            "detection_started",
            max_attempts=self.settings.max_cycling_attempts,
            timeout_seconds=timeout,
        )

        try:
            regions = await asyncio.wait_for(self._perform_detection_cycles(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("detection_timed_out", timeout_seconds=timeout)
            raise DetectionTimeout(timeout) from None
        except DetectionException:
            raise
        except Exception as e:
            logger.error("detection_failed", error=str(e), error_type=type(e).__name__)
            raise DetectionError(str(e), cause=e) from e

        duration = time.perf_counter() - start
        self.performance_logger.log_timing("detection_run", duration, region_count=len(regions))
        logger.info("detection_completed", region_count=len(regions), duration=duration)
        return regions

    async def _perform_detection_cycles(self) -> list[DetectedRegion]:
        attempts = self.settings.max_cycling_attempts
        settle = self.settings.settle_delay_seconds

        all_regions: list[DetectedRegion] = []
        seen_keys: set[str] = set()

        for cycle in range(attempts):
            frame = await self.frame_source.capture()
            if frame is None:
                # No settled surface to observe, so this round is skipped entirely
                logger.debug("frame_unavailable", cycle=cycle)
                continue

            regions = await asyncio.to_thread(
                self.detector.detect, frame.pixels, frame.width, frame.height, cycle
            )
            added = merge_unique(all_regions, seen_keys, regions)
            logger.debug("cycle_processed", cycle=cycle, found=len(regions), added=added)

            if cycle < attempts - 1:
                await self.cycler.advance()
                await asyncio.sleep(settle)

        return filter_and_sort(all_regions)
