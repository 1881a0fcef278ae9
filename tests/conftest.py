"""Pytest configuration and fixtures."""

import numpy as np
import pytest

from winscout.config import WinscoutSettings, reset_settings
from winscout.model import DetectedRegion, Frame, Rect, RegionCategory

# PNG signature plus filler; regions built by hand never decode it
FAKE_THUMBNAIL = b"\x89PNG\r\n\x1a\nfake"


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep the settings singleton and WINSCOUT_* variables out of tests."""
    monkeypatch.delenv("WINSCOUT_SETTLE_DELAY_MS", raising=False)
    monkeypatch.delenv("WINSCOUT_MAX_CYCLING_ATTEMPTS", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def fast_settings():
    """Default thresholds with no settle delay."""
    return WinscoutSettings(settle_delay_ms=0, cycling_timeout_seconds=30)


@pytest.fixture
def blank_frame():
    """A featureless 400x300 frame."""
    return Frame.from_array(np.zeros((300, 400, 3), dtype=np.uint8))


@pytest.fixture
def blob_frame():
    """A 400x300 frame with one small bright square at (130, 120).

    Its edges are the only foreground, so every traced box ends at the
    same right and bottom coordinates.
    """
    image = np.zeros((300, 400, 3), dtype=np.uint8)
    image[120:124, 130:134] = 255
    return Frame.from_array(image)


@pytest.fixture
def make_region():
    """Factory for hand-built regions."""

    def _make(
        left=0.0,
        top=0.0,
        width=100.0,
        height=100.0,
        cycle_position=0,
        category=RegionCategory.MEDIUM,
    ):
        return DetectedRegion(
            bounds=Rect(left, top, width, height),
            cycle_position=cycle_position,
            thumbnail=FAKE_THUMBNAIL,
            category=category,
        )

    return _make


@pytest.fixture
def sample_regions(make_region):
    """Two large and one medium region, as a finished detection returns them."""
    return [
        make_region(100, 100, 900, 600, cycle_position=2, category=RegionCategory.LARGE),
        make_region(50, 40, 800, 500, cycle_position=0, category=RegionCategory.LARGE),
        make_region(300, 200, 400, 300, cycle_position=4, category=RegionCategory.MEDIUM),
    ]
