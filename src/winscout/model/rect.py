"""Rect - an axis-aligned rectangle on a captured frame."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle with a top-left origin.

    Width and height must be strictly positive; a degenerate rectangle
    never describes a region.
    """

    left: float
    top: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if not (self.width > 0 and self.height > 0):
            raise ValueError(
                f"Rect width and height must be positive, got {self.width}x{self.height}"
            )

    @classmethod
    def from_ltrb(cls, left: float, top: float, right: float, bottom: float) -> Rect:
        """Create a rectangle from its edge coordinates."""
        return cls(left, top, right - left, bottom - top)

    @property
    def right(self) -> float:
        """X coordinate of the right edge."""
        return self.left + self.width

    @property
    def bottom(self) -> float:
        """Y coordinate of the bottom edge."""
        return self.top + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def truncated(self) -> tuple[int, int, int, int]:
        """Return ``(left, top, width, height)`` truncated toward zero."""
        return (int(self.left), int(self.top), int(self.width), int(self.height))

    def __str__(self) -> str:
        return f"Rect({self.left:g}, {self.top:g}, {self.width:g}x{self.height:g})"


def region_key(rect: Rect) -> str:
    """Build the deduplication key of a rectangle.

    Bounds are truncated to integers, so rectangles that differ only by a
    sub-pixel amount share a key.
    """
    return "_".join(str(value) for value in rect.truncated())
