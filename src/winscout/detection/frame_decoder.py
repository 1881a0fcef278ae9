"""Conversion of raw frame buffers into RGB image arrays."""

import cv2
import numpy as np

from ..model import PixelBuffer


def decode_frame(pixels: PixelBuffer, width: int, height: int) -> np.ndarray:
    """Decode a frame buffer into an ``height x width x 3`` RGB array.

    Accepts image arrays (grayscale, RGB or RGBA), raw RGBA bytes of
    exactly ``width * height * 4`` bytes, or an encoded image (PNG, JPEG).

    Args:
        pixels: Frame buffer
        width: Expected frame width
        height: Expected frame height

    Returns:
        RGB image array of dtype uint8

    Raises:
        ValueError: If the buffer cannot be decoded or its size disagrees
            with ``width`` and ``height``
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Degenerate frame size {width}x{height}")

    if isinstance(pixels, np.ndarray):
        image = _normalize_array(pixels)
    elif isinstance(pixels, (bytes, bytearray, memoryview)):
        buffer = np.frombuffer(pixels, dtype=np.uint8)
        if buffer.size == width * height * 4:
            image = cv2.cvtColor(buffer.reshape(height, width, 4), cv2.COLOR_RGBA2RGB)
        else:
            decoded = cv2.imdecode(buffer, cv2.IMREAD_COLOR) if buffer.size else None
            if decoded is None:
                raise ValueError("Frame bytes are neither raw RGBA nor a decodable image")
            image = cv2.cvtColor(decoded, cv2.COLOR_BGR2RGB)
    else:
        raise ValueError(f"Unsupported frame buffer type: {type(pixels).__name__}")

    if image.shape[:2] != (height, width):
        raise ValueError(
            f"Frame is {image.shape[1]}x{image.shape[0]}, expected {width}x{height}"
        )
    return image


def _normalize_array(array: np.ndarray) -> np.ndarray:
    if array.dtype != np.uint8:
        array = np.clip(array, 0, 255).astype(np.uint8)

    if array.ndim == 3 and array.shape[2] == 1:
        array = array[:, :, 0]

    if array.ndim == 2:
        return cv2.cvtColor(array, cv2.COLOR_GRAY2RGB)
    if array.ndim == 3 and array.shape[2] == 4:
        return cv2.cvtColor(array, cv2.COLOR_RGBA2RGB)
    if array.ndim == 3 and array.shape[2] == 3:
        return array
    raise ValueError(f"Unsupported frame array shape: {array.shape}")
