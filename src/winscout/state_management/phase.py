"""Phases of the window-mode state machine and its state snapshot."""

from dataclasses import dataclass
from enum import Enum

from ..model import DetectedRegion


class Phase(Enum):
    """Coarse operating mode of the phase controller."""

    NORMAL = "normal"
    DETECTING = "detecting"
    SELECTING = "selecting"
    NAVIGATING = "navigating"


@dataclass(frozen=True)
class PhaseState:
    """Complete observable state of a phase controller.

    Replaced wholesale on every transition, so a snapshot handed to an
    observer never changes underneath it.
    """

    phase: Phase = Phase.NORMAL
    detected: tuple[DetectedRegion, ...] = ()
    selected: tuple[DetectedRegion, ...] = ()
    current_index: int = 0
    processing: bool = False
    error_message: str = ""
