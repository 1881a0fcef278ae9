"""Thumbnail rendering for detected regions."""

from io import BytesIO

import numpy as np
from PIL import Image

from ..model import Rect


def render_thumbnail(image: np.ndarray, bounds: Rect, size: tuple[int, int]) -> bytes:
    """Crop ``image`` to ``bounds`` and encode a resized PNG thumbnail.

    Args:
        image: RGB image array
        bounds: Region to crop, in image coordinates
        size: Thumbnail ``(width, height)``

    Returns:
        PNG-encoded thumbnail bytes
    """
    left, top, width, height = bounds.truncated()
    crop = image[top : top + height, left : left + width]

    pil_image = Image.fromarray(np.ascontiguousarray(crop))
    pil_image = pil_image.resize(size, Image.Resampling.BILINEAR)

    buffer = BytesIO()
    pil_image.save(buffer, format="PNG")
    return buffer.getvalue()
