"""Frame - one raw raster capture of the remote screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import numpy as np

PixelBuffer = Union[np.ndarray, bytes, bytearray, memoryview]


@dataclass(frozen=True)
class Frame:
    """A captured frame as delivered by a frame source.

    ``pixels`` is either an ``H x W x C`` array, raw RGBA bytes of length
    ``width * height * 4``, or an encoded image such as PNG.
    """

    pixels: PixelBuffer
    width: int
    height: int

    @property
    def screen_area(self) -> int:
        return self.width * self.height

    @classmethod
    def from_array(cls, array: np.ndarray) -> Frame:
        """Wrap an image array, taking dimensions from its shape."""
        height, width = array.shape[:2]
        return cls(pixels=array, width=width, height=height)
