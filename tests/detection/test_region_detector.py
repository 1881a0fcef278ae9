"""Tests for RegionDetector."""

from io import BytesIO
from unittest.mock import patch

import numpy as np
import pytest
from PIL import Image

from winscout.config import EDGE_THRESHOLD, WinscoutSettings
from winscout.detection import RegionDetector, merge_unique
from winscout.model import Rect, RegionCategory, classify

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def detector():
    return RegionDetector(WinscoutSettings())


def _detect(detector, frame, cycle=0):
    return detector.detect(frame.pixels, frame.width, frame.height, cycle)


class TestDetect:
    def test_blank_frame_has_no_regions(self, detector, blank_frame):
        assert _detect(detector, blank_frame) == []

    def test_frame_smaller_than_seed_margin(self, detector):
        tiny = np.full((8, 8, 3), 255, dtype=np.uint8)
        assert detector.detect(tiny, 8, 8, 0) == []

    def test_degenerate_size_returns_empty(self, detector, blob_frame):
        assert detector.detect(blob_frame.pixels, 0, 300, 0) == []

    def test_undecodable_bytes_return_empty(self, detector):
        assert detector.detect(b"\x00\x01garbage", 400, 300, 0) == []

    def test_dimension_mismatch_returns_empty(self, detector, blob_frame):
        assert detector.detect(blob_frame.pixels, 640, 480, 0) == []

    def test_internal_failure_returns_empty(self, detector, blob_frame):
        with patch.object(detector, "find_rectangular_regions", side_effect=RuntimeError("boom")):
            assert _detect(detector, blob_frame) == []

    def test_regions_found_around_edges(self, detector, blob_frame):
        regions = _detect(detector, blob_frame, cycle=3)

        assert regions
        for region in regions:
            assert region.cycle_position == 3
            assert region.bounds.width > 50
            assert region.bounds.height > 50
            assert region.bounds.width < 400 * 0.9
            assert region.bounds.height < 300 * 0.9
            assert region.is_within_screen(400, 300)

    def test_boxes_end_at_the_only_foreground(self, detector, blob_frame):
        regions = _detect(detector, blob_frame)

        assert len({r.bounds.right for r in regions}) == 1
        assert len({r.bounds.bottom for r in regions}) == 1
        assert regions[0].bounds.left == 0
        assert regions[0].bounds.top == 0

    def test_categories_follow_screen_share(self, detector, blob_frame):
        for region in _detect(detector, blob_frame):
            assert region.category is classify(region.area / (400 * 300))

    def test_thumbnails_are_png_of_configured_size(self, detector, blob_frame):
        region = _detect(detector, blob_frame)[0]

        assert region.thumbnail.startswith(PNG_SIGNATURE)
        with Image.open(BytesIO(region.thumbnail)) as thumb:
            assert thumb.size == (200, 150)

    def test_raw_rgba_bytes_match_array_input(self, detector, blob_frame):
        rgba = np.dstack([blob_frame.pixels, np.full((300, 400), 255, dtype=np.uint8)])

        from_bytes = detector.detect(rgba.tobytes(), 400, 300, 0)
        from_array = _detect(detector, blob_frame)

        assert [r.bounds for r in from_bytes] == [r.bounds for r in from_array]

    def test_detection_is_deterministic(self, detector, blob_frame):
        first = _detect(detector, blob_frame)
        second = _detect(detector, blob_frame)
        assert first == second

    def test_repeated_frame_adds_nothing_new(self, detector, blob_frame):
        """Merging the same frame's regions twice keeps the count of one pass."""
        regions = _detect(detector, blob_frame)
        accumulated, seen = [], set()

        assert merge_unique(accumulated, seen, regions) == len(regions)
        assert merge_unique(accumulated, seen, _detect(detector, blob_frame)) == 0
        assert len(accumulated) == len(regions)

    def test_timing_logged(self, blob_frame):
        detector = RegionDetector(WinscoutSettings())
        _detect(detector, blob_frame)
        assert detector.performance_logger.get_stats("detect_frame")["count"] == 1


class TestEdgeMagnitude:
    def test_vertical_step_is_foreground(self, detector):
        image = np.zeros((100, 100, 3), dtype=np.uint8)
        image[:, 50:] = 255

        binary = detector.binarize(detector.edge_magnitude(image))

        assert binary[20:80, 49:51].min() == 255
        assert binary[:, 10].max() == 0
        assert binary[:, 90].max() == 0

    def test_magnitude_clipped(self, detector):
        image = np.zeros((40, 40, 3), dtype=np.uint8)
        image[:, 20:] = 255

        magnitude = detector.edge_magnitude(image)
        assert magnitude.max() == 255
        assert magnitude.min() == 0

    def test_threshold_is_strict(self, detector):
        magnitude = np.array([[EDGE_THRESHOLD, EDGE_THRESHOLD + 1, 0, 255]], dtype=np.float32)
        assert detector.binarize(magnitude).tolist() == [[0, 255, 0, 255]]

    def test_default_threshold_in_tuned_range(self):
        assert 150 <= EDGE_THRESHOLD <= 200


class TestFindRectangularRegions:
    def test_single_foreground_pixel(self, detector):
        """Every seed up-left of the pixel traces a box ending at it."""
        binary = np.zeros((300, 400), dtype=np.uint8)
        binary[120, 130] = 255

        regions = detector.find_rectangular_regions(binary)

        # Seeds with 130 - x > 50 and 120 - y > 50 on the stride-5 grid
        assert len(regions) == 16 * 14
        assert regions[0] == Rect(0, 0, 130, 120)
        assert all(r.right == 130 and r.bottom == 120 for r in regions)

    def test_seeds_near_edge_not_traced(self, detector):
        binary = np.zeros((300, 400), dtype=np.uint8)
        binary[295, 395] = 255

        regions = detector.find_rectangular_regions(binary)
        assert regions
        assert all(r.left < 390 and r.top < 290 for r in regions)

    def test_empty_binary(self, detector):
        assert detector.find_rectangular_regions(np.zeros((300, 400), dtype=np.uint8)) == []

    def test_min_region_size_setting(self):
        detector = RegionDetector(WinscoutSettings(min_region_size=100))
        binary = np.zeros((300, 400), dtype=np.uint8)
        binary[120, 130] = 255

        regions = detector.find_rectangular_regions(binary)
        expected = [
            Rect(x, y, 130 - x, 120 - y) for y in range(0, 20, 5) for x in range(0, 30, 5)
        ]
        assert regions == expected


class TestIsValidRegion:
    @pytest.mark.parametrize(
        "rect,expected",
        [
            (Rect(0, 0, 51, 51), True),
            (Rect(0, 0, 50, 100), False),
            (Rect(0, 0, 100, 50), False),
            (Rect(0, 0, 575, 100), True),
            (Rect(0, 0, 576, 100), False),
            (Rect(0, 0, 100, 432), False),
            (Rect(0, 0, 620, 460), False),
        ],
    )
    def test_size_filter(self, detector, rect, expected):
        assert detector.is_valid_region(rect, 640, 480) is expected


def test_categorize(detector):
    assert detector.categorize(Rect(0, 0, 400, 300), 640, 480) is RegionCategory.LARGE
    assert detector.categorize(Rect(0, 0, 200, 100), 640, 480) is RegionCategory.MEDIUM
    assert detector.categorize(Rect(0, 0, 100, 100), 640, 480) is RegionCategory.SMALL
