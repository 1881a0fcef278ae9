"""Size-based category of a detected region."""

from enum import Enum

from ..config import LARGE_REGION_THRESHOLD, MEDIUM_REGION_THRESHOLD


class RegionCategory(Enum):
    """Relative size class of a region, from its share of the screen area.

    Large regions are likely windows, medium ones possible windows. Small
    regions are never shown to the user.
    """

    LARGE = "large"
    MEDIUM = "medium"
    SMALL = "small"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def priority(self) -> int:
        """Sort priority, higher is more important."""
        return _PRIORITIES[self]

    @classmethod
    def from_screen_percentage(
        cls,
        percentage: float,
        large_threshold: float = LARGE_REGION_THRESHOLD,
        medium_threshold: float = MEDIUM_REGION_THRESHOLD,
    ) -> "RegionCategory":
        """Classify a screen share; values on a boundary belong to the higher class."""
        if percentage >= large_threshold:
            return cls.LARGE
        if percentage >= medium_threshold:
            return cls.MEDIUM
        return cls.SMALL


_DISPLAY_NAMES = {
    RegionCategory.LARGE: "Likely Window",
    RegionCategory.MEDIUM: "Possible Window",
    RegionCategory.SMALL: "Small Region",
}

_PRIORITIES = {
    RegionCategory.LARGE: 3,
    RegionCategory.MEDIUM: 2,
    RegionCategory.SMALL: 1,
}


def classify(
    percentage: float,
    large_threshold: float = LARGE_REGION_THRESHOLD,
    medium_threshold: float = MEDIUM_REGION_THRESHOLD,
) -> RegionCategory:
    """Map ``area / screen_area`` to a :class:`RegionCategory`."""
    return RegionCategory.from_screen_percentage(percentage, large_threshold, medium_threshold)
