"""Phase state machine for window detection, selection and navigation."""

from .change_notifier import ChangeNotifier
from .phase import Phase, PhaseState
from .phase_controller import PhaseController
from .state_validator import PhaseStateValidator

__all__ = [
    "Phase",
    "PhaseState",
    "PhaseController",
    "PhaseStateValidator",
    "ChangeNotifier",
]
