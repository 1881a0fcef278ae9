"""Hardware abstraction layer for frame capture and surface cycling."""

from .interfaces import ICycler, IFrameSource

__all__ = ["IFrameSource", "ICycler"]
