"""Domain model: rectangles, categories, detected regions and frames."""

from .detected_region import DetectedRegion
from .frame import Frame, PixelBuffer
from .rect import Rect, region_key
from .region_category import RegionCategory, classify

__all__ = [
    "Rect",
    "region_key",
    "RegionCategory",
    "classify",
    "DetectedRegion",
    "Frame",
    "PixelBuffer",
]
