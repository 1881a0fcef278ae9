"""Tests for MockFrameSource and MockCycler."""

import pytest

from winscout.hal import ICycler, IFrameSource
from winscout.mock import MockCycler, MockFrameSource


def test_mocks_implement_interfaces():
    assert isinstance(MockFrameSource(), IFrameSource)
    assert isinstance(MockCycler(), ICycler)


@pytest.mark.asyncio
async def test_frames_replayed_in_order(blank_frame, blob_frame):
    source = MockFrameSource([blank_frame, None, blob_frame])

    assert await source.capture() is blank_frame
    assert await source.capture() is None
    assert await source.capture() is blob_frame
    assert await source.capture() is blob_frame
    assert source.capture_count == 4


@pytest.mark.asyncio
async def test_exhausted_without_repeat(blank_frame):
    source = MockFrameSource([blank_frame], repeat_last=False)

    await source.capture()
    assert await source.capture() is None


@pytest.mark.asyncio
async def test_empty_source_returns_none():
    assert await MockFrameSource().capture() is None


@pytest.mark.asyncio
async def test_frame_source_reset(blank_frame, blob_frame):
    source = MockFrameSource([blank_frame, blob_frame])
    await source.capture()
    source.reset()
    assert await source.capture() is blank_frame


@pytest.mark.asyncio
async def test_cycler_counts_advances():
    cycler = MockCycler()
    await cycler.advance()
    await cycler.advance()
    assert cycler.advance_count == 2

    cycler.reset()
    assert cycler.advance_count == 0


@pytest.mark.asyncio
async def test_cycler_fails_after_limit():
    cycler = MockCycler(fail_after=1, error=ConnectionError("session lost"))
    await cycler.advance()

    with pytest.raises(ConnectionError, match="session lost"):
        await cycler.advance()
    assert cycler.advance_count == 1
