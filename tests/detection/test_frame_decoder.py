"""Tests for frame buffer decoding."""

import cv2
import numpy as np
import pytest

from winscout.detection import decode_frame


@pytest.fixture
def rgb_image():
    image = np.zeros((20, 30, 3), dtype=np.uint8)
    image[:, :, 0] = 200
    image[5:15, 10:20, 1] = 120
    image[:, :, 2] = 40
    return image


def test_rgb_array_passes_through(rgb_image):
    decoded = decode_frame(rgb_image, 30, 20)
    assert np.array_equal(decoded, rgb_image)


def test_grayscale_array_expanded_to_rgb():
    gray = np.full((20, 30), 77, dtype=np.uint8)
    decoded = decode_frame(gray, 30, 20)

    assert decoded.shape == (20, 30, 3)
    assert (decoded == 77).all()


def test_rgba_array_drops_alpha(rgb_image):
    rgba = np.dstack([rgb_image, np.full((20, 30), 255, dtype=np.uint8)])
    assert np.array_equal(decode_frame(rgba, 30, 20), rgb_image)


def test_float_array_clipped_to_uint8():
    decoded = decode_frame(np.full((20, 30, 3), 300.0), 30, 20)

    assert decoded.dtype == np.uint8
    assert (decoded == 255).all()


def test_raw_rgba_bytes(rgb_image):
    rgba = np.dstack([rgb_image, np.zeros((20, 30), dtype=np.uint8)])
    decoded = decode_frame(rgba.tobytes(), 30, 20)

    assert np.array_equal(decoded, rgb_image)


def test_png_bytes(rgb_image):
    ok, encoded = cv2.imencode(".png", cv2.cvtColor(rgb_image, cv2.COLOR_RGB2BGR))
    assert ok

    decoded = decode_frame(encoded.tobytes(), 30, 20)
    assert np.array_equal(decoded, rgb_image)


def test_undecodable_bytes_rejected():
    with pytest.raises(ValueError, match="neither raw RGBA"):
        decode_frame(b"not an image at all", 30, 20)


def test_empty_bytes_rejected():
    with pytest.raises(ValueError):
        decode_frame(b"", 30, 20)


def test_dimension_mismatch_rejected(rgb_image):
    with pytest.raises(ValueError, match="expected 40x20"):
        decode_frame(rgb_image, 40, 20)


@pytest.mark.parametrize("width,height", [(0, 20), (30, 0), (-5, 20)])
def test_degenerate_size_rejected(rgb_image, width, height):
    with pytest.raises(ValueError, match="Degenerate"):
        decode_frame(rgb_image, width, height)


def test_unsupported_buffer_type_rejected():
    with pytest.raises(ValueError, match="Unsupported"):
        decode_frame([[0, 0, 0]], 1, 1)


def test_unsupported_channel_count_rejected():
    with pytest.raises(ValueError, match="shape"):
        decode_frame(np.zeros((20, 30, 2), dtype=np.uint8), 30, 20)
