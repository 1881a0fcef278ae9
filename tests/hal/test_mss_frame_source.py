"""Tests for MSSFrameSource with mss patched out."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from mss.exception import ScreenShotError

from winscout.hal.implementations import mss_frame_source
from winscout.hal.implementations.mss_frame_source import MSSFrameSource


@pytest.fixture
def fake_sct(monkeypatch):
    sct = MagicMock()
    sct.monitors = [
        {"left": 0, "top": 0, "width": 8, "height": 3},
        {"left": 0, "top": 0, "width": 4, "height": 3},
        {"left": 4, "top": 0, "width": 4, "height": 3},
    ]
    # BGRA pixels: blue=10, green=20, red=30
    sct.grab.return_value = SimpleNamespace(size=(4, 3), bgra=bytes([10, 20, 30, 0] * 12))

    fake_mss = MagicMock()
    fake_mss.mss.return_value = sct
    monkeypatch.setattr(mss_frame_source, "mss", fake_mss)
    return sct


@pytest.mark.asyncio
async def test_capture_returns_rgb_frame(fake_sct):
    source = MSSFrameSource()

    frame = await source.capture()

    assert (frame.width, frame.height) == (4, 3)
    assert frame.pixels.shape == (3, 4, 3)
    assert frame.pixels[0, 0].tolist() == [30, 20, 10]
    fake_sct.grab.assert_called_once_with(fake_sct.monitors[1])


@pytest.mark.asyncio
async def test_monitor_index_skips_virtual_monitor(fake_sct):
    await MSSFrameSource(monitor=1).capture()
    fake_sct.grab.assert_called_once_with(fake_sct.monitors[2])


@pytest.mark.asyncio
async def test_grab_failure_returns_none(fake_sct):
    fake_sct.grab.side_effect = ScreenShotError("no display")
    assert await MSSFrameSource().capture() is None


@pytest.mark.asyncio
async def test_missing_monitor_returns_none(fake_sct):
    assert await MSSFrameSource(monitor=5).capture() is None


def test_close_releases_instance(fake_sct):
    source = MSSFrameSource()
    assert source.sct is fake_sct

    source.close()
    source.close()

    fake_sct.close.assert_called_once()


@pytest.mark.asyncio
async def test_close_releases_worker_thread_instance(fake_sct):
    source = MSSFrameSource()

    await source.capture()
    source.close()

    fake_sct.close.assert_called_once()


@pytest.mark.asyncio
async def test_capture_after_close_creates_new_instance(fake_sct):
    source = MSSFrameSource()
    await source.capture()
    source.close()

    await source.capture()
    source.close()

    assert mss_frame_source.mss.mss.call_count == 2
    assert fake_sct.close.call_count == 2


def test_close_tolerates_close_error(fake_sct):
    fake_sct.close.side_effect = RuntimeError("already gone")
    source = MSSFrameSource()
    assert source.sct is fake_sct

    source.close()

    fake_sct.close.assert_called_once()


@pytest.mark.asyncio
async def test_context_manager_closes_on_exit(fake_sct):
    with MSSFrameSource() as source:
        frame = await source.capture()

    assert frame is not None
    fake_sct.close.assert_called_once()
