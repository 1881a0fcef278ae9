"""
Region detection for window-like rectangles in a captured frame.

Uses a Sobel gradient pass over luminance, a fixed binarization threshold
and coarse-grid rectangle tracing. The detector favours speed and
determinism over precision: false positives are resolved by the user's
selection, false negatives by repeated cycling rounds.
"""

import time

import cv2
import numpy as np

from ..config import WinscoutSettings, get_settings
from ..logging import PerformanceLogger, get_logger
from ..model import DetectedRegion, PixelBuffer, Rect, RegionCategory, classify
from .frame_decoder import decode_frame
from .thumbnail import render_thumbnail

logger = get_logger(__name__)

# Seeds closer than this to the right or bottom edge are not traced
SEED_MARGIN = 10


class RegionDetector:
    """
    Frame-level detector producing categorized candidate regions.

    ``detect`` never raises: decode failures, degenerate frames and any
    internal fault yield an empty list.
    """

    def __init__(
        self,
        settings: WinscoutSettings | None = None,
        performance_logger: PerformanceLogger | None = None,
    ) -> None:
        """
        Initialize the region detector.

        Args:
            settings: Detection settings. Uses the global settings if not provided.
            performance_logger: Receives per-frame timings.
        """
        self.settings = settings or get_settings()
        self.performance_logger = performance_logger or PerformanceLogger(logger)

    def detect(
        self,
        pixels: PixelBuffer,
        width: int,
        height: int,
        cycle_position: int,
    ) -> list[DetectedRegion]:
        """
        Detect window-like regions in one frame.

        Args:
            pixels: Frame buffer (array, raw RGBA bytes or encoded image).
            width: Frame width in pixels.
            height: Frame height in pixels.
            cycle_position: Cycling round that produced the frame.

        Returns:
            Detected regions in scan order, possibly empty.
        """
        start = time.perf_counter()
        try:
            image = decode_frame(pixels, width, height)
            binary = self.binarize(self.edge_magnitude(image))
            boxes = self.find_rectangular_regions(binary)

            thumbnail_size = (self.settings.thumbnail_width, self.settings.thumbnail_height)
            regions = [
                DetectedRegion(
                    bounds=box,
                    cycle_position=cycle_position,
                    thumbnail=render_thumbnail(image, box, thumbnail_size),
                    category=self.categorize(box, width, height),
                )
                for box in boxes
            ]
        except Exception as e:
            logger.warning(
                "region_detection_failed",
                cycle_position=cycle_position,
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

        self.performance_logger.log_timing(
            "detect_frame",
            time.perf_counter() - start,
            cycle_position=cycle_position,
            region_count=len(regions),
        )
        return regions

    def edge_magnitude(self, image: np.ndarray) -> np.ndarray:
        """
        Compute the Sobel gradient magnitude of the image luminance.

        Returns:
            Float32 magnitude image clipped to ``0..255``.
        """
        gray = cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
        gx = cv2.Sobel(gray, cv2.CV_32F, 1, 0, ksize=3)
        gy = cv2.Sobel(gray, cv2.CV_32F, 0, 1, ksize=3)
        return np.clip(cv2.magnitude(gx, gy), 0, 255)

    def binarize(self, magnitude: np.ndarray) -> np.ndarray:
        """Map magnitudes above the edge threshold to 255 and the rest to 0."""
        return np.where(magnitude > self.settings.edge_threshold, 255, 0).astype(np.uint8)

    def find_rectangular_regions(self, binary: np.ndarray) -> list[Rect]:
        """
        Trace candidate boxes from a coarse grid of seed points.

        Seeds already covered by a traced foreground pixel are skipped.

        Args:
            binary: Binarized edge image (0 or 255).

        Returns:
            Boxes passing the size filter, in scan order.
        """
        height, width = binary.shape[:2]
        foreground = binary > 128
        visited = np.zeros_like(foreground)
        stride = self.settings.seed_stride
        span = self.settings.trace_window

        # Summed-area table: windows without foreground cannot yield a box
        integral = cv2.integral(foreground.astype(np.uint8))

        regions: list[Rect] = []
        for y in range(0, height - SEED_MARGIN, stride):
            y2 = min(y + span, height)
            for x in range(0, width - SEED_MARGIN, stride):
                if visited[y, x]:
                    continue

                x2 = min(x + span, width)
                count = integral[y2, x2] - integral[y, x2] - integral[y2, x] + integral[y, x]
                if count == 0:
                    continue

                region = self._trace_rectangle(foreground, visited, x, y, x2, y2)
                if region is not None and self.is_valid_region(region, width, height):
                    regions.append(region)

        return regions

    def _trace_rectangle(
        self,
        foreground: np.ndarray,
        visited: np.ndarray,
        x: int,
        y: int,
        x2: int,
        y2: int,
    ) -> Rect | None:
        """Expand a box anchored at the seed over every foreground pixel in its window."""
        window = foreground[y:y2, x:x2]
        rows = np.flatnonzero(window.any(axis=1))
        if rows.size == 0:
            return None
        cols = np.flatnonzero(window.any(axis=0))

        visited[y:y2, x:x2] |= window

        box_width = int(cols[-1])
        box_height = int(rows[-1])
        min_size = self.settings.min_region_size
        if box_width > min_size and box_height > min_size:
            return Rect(float(x), float(y), float(box_width), float(box_height))
        return None

    def is_valid_region(self, region: Rect, screen_width: int, screen_height: int) -> bool:
        """Reject noise-sized boxes and the trivial whole-screen box."""
        min_size = self.settings.min_region_size
        fraction = self.settings.max_screen_fraction
        return (
            region.width > min_size
            and region.height > min_size
            and region.width < screen_width * fraction
            and region.height < screen_height * fraction
        )

    def categorize(self, region: Rect, screen_width: int, screen_height: int) -> RegionCategory:
        """Classify a region by its share of the screen area."""
        return classify(
            region.area / (screen_width * screen_height),
            self.settings.large_region_threshold,
            self.settings.medium_region_threshold,
        )
