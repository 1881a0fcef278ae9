"""HAL Interface definitions.

These interfaces define the contracts that collaborators injected into
the detection session and phase controller must follow.
"""

from .cycler import ICycler
from .frame_source import IFrameSource

__all__ = [
    "IFrameSource",
    "ICycler",
]
