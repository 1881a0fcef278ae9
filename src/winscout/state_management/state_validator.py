"""Structural validation of phase controller state.

Each phase carries an invariant over the region lists, the navigation
index and the processing flag. Tests check it after every transition.
"""

import logging

from .phase import Phase, PhaseState

logger = logging.getLogger(__name__)


class PhaseStateValidator:
    """Checks the per-phase structural invariant of a :class:`PhaseState`.

    Example:
        >>> PhaseStateValidator().validate(PhaseState())
        True
    """

    def validate(self, state: PhaseState) -> bool:
        """Return whether ``state`` satisfies the invariant of its phase."""
        violations = self.violations(state)
        if violations:
            logger.debug(f"Invalid {state.phase.value} state: {'; '.join(violations)}")
        return not violations

    def violations(self, state: PhaseState) -> list[str]:
        """List every broken condition of the state's phase invariant."""
        problems: list[str] = []

        if state.phase is Phase.NORMAL:
            if state.detected:
                problems.append("detected regions must be empty")
            if state.selected:
                problems.append("selected regions must be empty")
            if state.processing:
                problems.append("must not be processing")
            if state.current_index != 0:
                problems.append("current index must be 0")

        elif state.phase is Phase.DETECTING:
            if not state.processing:
                problems.append("must be processing")
            if state.selected:
                problems.append("selected regions must be empty")

        elif state.phase is Phase.SELECTING:
            if not state.detected:
                problems.append("detected regions must not be empty")
            if state.processing:
                problems.append("must not be processing")

        elif state.phase is Phase.NAVIGATING:
            if not state.selected:
                problems.append("selected regions must not be empty")
            if not 0 <= state.current_index < len(state.selected):
                problems.append(
                    f"current index {state.current_index} outside 0..{len(state.selected) - 1}"
                )

        return problems
