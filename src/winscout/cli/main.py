"""winscout CLI - Main entry point.

Provides commands for detecting window regions in saved screenshots and
for running a full cycling detection against the local screen.

Exit codes:
    0: Success
    1: No regions detected
    2: Input error
    3: Runtime error
"""

import asyncio
import sys
from pathlib import Path

import click
import numpy as np
from PIL import Image, UnidentifiedImageError

from .. import __version__
from ..config import WinscoutSettings, get_settings
from ..detection import DetectionSession, RegionDetector, filter_and_sort, merge_unique
from ..detection_exceptions import DetectionException
from ..logging import setup_logging
from ..model import DetectedRegion, Frame
from .formatters import format_regions

# Exit codes
EXIT_SUCCESS = 0
EXIT_NO_REGIONS = 1
EXIT_INPUT_ERROR = 2
EXIT_RUNTIME_ERROR = 3


def load_frame(image_path: str) -> Frame | None:
    """Load an image file as an RGB frame.

    Args:
        image_path: Path to the image

    Returns:
        The frame, or None if the file is not a readable image
    """
    try:
        with Image.open(image_path) as image:
            return Frame.from_array(np.asarray(image.convert("RGB")))
    except (UnidentifiedImageError, OSError) as e:
        click.echo(f"Error: Cannot read image {image_path}: {e}", err=True)
        return None


def write_thumbnails(regions: list[DetectedRegion], directory: str) -> None:
    """Write each region's thumbnail as ``region_NNN.png``."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    for i, region in enumerate(regions):
        (out_dir / f"region_{i:03d}.png").write_bytes(region.thumbnail)


def _emit(regions: list[DetectedRegion], output_format: str, thumbnails: str | None) -> None:
    click.echo(format_regions(regions, output_format))
    if thumbnails:
        write_thumbnails(regions, thumbnails)
    sys.exit(EXIT_SUCCESS if regions else EXIT_NO_REGIONS)


@click.group()
@click.version_option(version=__version__, prog_name="winscout")
@click.pass_context
def main(ctx: click.Context) -> None:
    """winscout CLI - Window region detection for remote sessions.

    Detect window-like regions in screenshots or on the live screen.
    """
    ctx.ensure_object(dict)


@main.command()
@click.argument("images", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option("--thumbnails", type=click.Path(file_okay=False), help="Directory for thumbnails")
@click.option("--include-small", is_flag=True, help="Keep regions classified as small")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def detect(
    images: tuple[str, ...],
    output_format: str,
    thumbnails: str | None,
    include_small: bool,
    verbose: bool,
) -> None:
    """Detect regions in saved screenshots.

    Each IMAGE is treated as one cycling round, in the order given, and
    regions are deduplicated across images.
    """
    setup_logging(level="DEBUG" if verbose else "WARNING", structured=False)

    detector = RegionDetector(get_settings())
    all_regions: list[DetectedRegion] = []
    seen_keys: set[str] = set()

    for cycle, image_path in enumerate(images):
        frame = load_frame(image_path)
        if frame is None:
            sys.exit(EXIT_INPUT_ERROR)
        regions = detector.detect(frame.pixels, frame.width, frame.height, cycle)
        merge_unique(all_regions, seen_keys, regions)

    _emit(filter_and_sort(all_regions, include_small=include_small), output_format, thumbnails)


@main.command()
@click.option("--monitor", default=0, show_default=True, help="Monitor index to capture")
@click.option("--attempts", type=int, help="Number of cycling rounds")
@click.option("--settle-ms", type=int, help="Settle delay after each cycle in milliseconds")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option("--thumbnails", type=click.Path(file_okay=False), help="Directory for thumbnails")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def scan(
    monitor: int,
    attempts: int | None,
    settle_ms: int | None,
    output_format: str,
    thumbnails: str | None,
    verbose: bool,
) -> None:
    """Cycle through the local screen's surfaces and detect regions.

    Sends the surface-switch hotkey between captures, so the focused
    window changes while this runs.
    """
    setup_logging(level="DEBUG" if verbose else "WARNING", structured=False)

    overrides: dict[str, int] = {}
    if attempts is not None:
        overrides["max_cycling_attempts"] = attempts
    if settle_ms is not None:
        overrides["settle_delay_ms"] = settle_ms

    try:
        settings = WinscoutSettings(**overrides) if overrides else get_settings()
    except ValueError as e:
        click.echo(f"Error: Invalid settings: {e}", err=True)
        sys.exit(EXIT_INPUT_ERROR)

    # Platform backends need a display; import them only when scanning
    from ..hal.implementations.keyboard_cycler import KeyComboCycler
    from ..hal.implementations.mss_frame_source import MSSFrameSource

    with MSSFrameSource(monitor=monitor) as frame_source:
        session = DetectionSession(frame_source, KeyComboCycler(), settings=settings)
        try:
            regions = asyncio.run(session.run())
        except DetectionException as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(EXIT_RUNTIME_ERROR)

    _emit(regions, output_format, thumbnails)
