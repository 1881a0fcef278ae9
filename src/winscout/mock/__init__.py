"""Mock collaborators for headless runs and testing."""

from .mock_cycler import MockCycler
from .mock_frame_source import MockFrameSource

__all__ = ["MockFrameSource", "MockCycler"]
