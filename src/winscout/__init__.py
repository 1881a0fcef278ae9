"""winscout - window-region detection and phase control for remote sessions.

Detects window-like rectangles in full-screen frames, deduplicates them
across surface-cycling rounds, and drives the detect, select and navigate
state machine consumed by a client UI.

Example:
    >>> from winscout import PhaseController
    >>> controller = PhaseController(frame_source, cycler)
    >>> await controller.start_window_detection()
"""

__version__ = "0.1.0"

from .base_exceptions import WinscoutException
from .config import WinscoutSettings, get_settings
from .detection import DetectionSession, RegionDetector
from .detection_exceptions import (
    DetectionError,
    DetectionException,
    DetectionTimeout,
    EmptyDetectionResult,
)
from .hal import ICycler, IFrameSource
from .model import DetectedRegion, Frame, Rect, RegionCategory, classify, region_key
from .state_exceptions import EmptySelection, NavigationError, PhaseException
from .state_management import Phase, PhaseController, PhaseState, PhaseStateValidator

__all__ = [
    "__version__",
    "WinscoutException",
    "WinscoutSettings",
    "get_settings",
    "Rect",
    "region_key",
    "RegionCategory",
    "classify",
    "DetectedRegion",
    "Frame",
    "IFrameSource",
    "ICycler",
    "RegionDetector",
    "DetectionSession",
    "DetectionException",
    "DetectionTimeout",
    "DetectionError",
    "EmptyDetectionResult",
    "PhaseException",
    "EmptySelection",
    "NavigationError",
    "Phase",
    "PhaseState",
    "PhaseController",
    "PhaseStateValidator",
]
