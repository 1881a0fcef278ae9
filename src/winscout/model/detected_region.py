"""DetectedRegion - a window-like rectangle found in one cycling round."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .rect import Rect
from .region_category import RegionCategory


@dataclass(frozen=True)
class DetectedRegion:
    """Immutable detection result.

    ``cycle_position`` is the cycling round in which the region was first
    seen; navigation replays that many cycles to return to it. Equality and
    hashing ignore ``thumbnail`` so two detections of the same bounds and
    category in the same round compare equal despite pixel noise.
    """

    bounds: Rect
    cycle_position: int
    thumbnail: bytes = field(compare=False, repr=False)
    category: RegionCategory

    def __post_init__(self) -> None:
        if self.cycle_position < 0:
            raise ValueError(f"cycle_position must be non-negative, got {self.cycle_position}")
        if not self.thumbnail:
            raise ValueError("thumbnail data cannot be empty")
        # Callers may hand in bytearray/memoryview; keep an immutable copy.
        if not isinstance(self.thumbnail, bytes):
            object.__setattr__(self, "thumbnail", bytes(self.thumbnail))

    @property
    def area(self) -> float:
        return self.bounds.area

    @property
    def aspect_ratio(self) -> float:
        return self.bounds.aspect_ratio

    def screen_percentage(self, screen_width: int, screen_height: int) -> float:
        """Share of the screen area covered by this region.

        Raises:
            ValueError: If a screen dimension is not positive
        """
        if screen_width <= 0 or screen_height <= 0:
            raise ValueError("Screen dimensions must be positive")
        return self.area / (screen_width * screen_height)

    def is_within_screen(self, screen_width: int, screen_height: int) -> bool:
        b = self.bounds
        return b.left >= 0 and b.top >= 0 and b.right <= screen_width and b.bottom <= screen_height

    def copy_with(self, **changes: Any) -> DetectedRegion:
        """Return a new region with the given fields replaced."""
        return replace(self, **changes)

    def __repr__(self) -> str:
        return (
            f"DetectedRegion(bounds={self.bounds}, cycle={self.cycle_position}, "
            f"category={self.category.value}, area={int(self.area)})"
        )
