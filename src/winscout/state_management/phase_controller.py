"""Phase state machine coordinating detection, selection and navigation.

Architecture:
    - PhaseController: owns the PhaseState and applies transitions
    - DetectionSession: runs the cycling detection for the DETECTING phase
    - ICycler: replays recorded cycle offsets while NAVIGATING
    - ChangeNotifier: tells observers about every completed transition

Transitions:
    NORMAL      --start_window_detection-->  DETECTING
    DETECTING   --regions found-->           SELECTING
    DETECTING   --empty / failure / cancel-> NORMAL (error message set)
    any         --select_windows(non-empty)->NAVIGATING
    any         --select_windows([])-->      NORMAL (error message set)
    NAVIGATING  --navigate_to_window(i)-->   NAVIGATING
    any         --restart_detection-->       DETECTING
    any         --exit_window_mode-->        NORMAL

The ``processing`` flag is a single-flight gate: while it is set, new
navigation and selection commands are rejected rather than queued.

Example:
    >>> controller = PhaseController(frame_source, cycler)
    >>> await controller.start_window_detection()
    >>> controller.select_windows(controller.detected[:2])
    >>> await controller.navigate_to_window(1)
"""

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import replace
from typing import Any

from ..base_exceptions import WinscoutException
from ..config import WinscoutSettings, get_settings
from ..detection import DetectionSession
from ..detection_exceptions import EmptyDetectionResult
from ..hal.interfaces import ICycler, IFrameSource
from ..logging import StateLogger, get_logger
from ..model import DetectedRegion, RegionCategory
from ..state_exceptions import EmptySelection, NavigationError
from .change_notifier import ChangeNotifier, Listener
from .phase import Phase, PhaseState
from .state_validator import PhaseStateValidator

logger = get_logger(__name__)


class PhaseController:
    """State machine behind the window-mode user interface.

    All collaborators are injected; the controller never looks up a
    frame source or cycler globally.
    """

    def __init__(
        self,
        frame_source: IFrameSource,
        cycler: ICycler,
        *,
        detection_session: DetectionSession | None = None,
        settings: WinscoutSettings | None = None,
    ) -> None:
        """Initialize PhaseController.

        Args:
            frame_source: Source of full-screen frames for detection
            cycler: Surface cycler used by detection and navigation
            detection_session: Session to run instead of one built from
                ``frame_source`` and ``cycler``
            settings: Settings. Uses the global settings if not provided.
        """
        self.settings = settings or get_settings()
        self.cycler = cycler
        self.detection_session = detection_session or DetectionSession(
            frame_source, cycler, settings=self.settings
        )

        self._state = PhaseState()
        # Bumped by exit/restart so results of superseded runs are dropped
        self._generation = 0
        self._notifier = ChangeNotifier()
        self._validator = PhaseStateValidator()
        self._state_logger = StateLogger(logger)

    # ---- observers ---------------------------------------------------

    @property
    def state(self) -> PhaseState:
        """Immutable snapshot of the current state."""
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def phase_name(self) -> str:
        return self._state.phase.value

    @property
    def detected(self) -> list[DetectedRegion]:
        return list(self._state.detected)

    @property
    def selected(self) -> list[DetectedRegion]:
        return list(self._state.selected)

    @property
    def current_index(self) -> int:
        return self._state.current_index

    @property
    def processing(self) -> bool:
        return self._state.processing

    @property
    def error_message(self) -> str:
        return self._state.error_message

    @property
    def is_normal(self) -> bool:
        return self._state.phase is Phase.NORMAL

    @property
    def is_detecting(self) -> bool:
        return self._state.phase is Phase.DETECTING

    @property
    def is_selecting(self) -> bool:
        return self._state.phase is Phase.SELECTING

    @property
    def is_navigating(self) -> bool:
        return self._state.phase is Phase.NAVIGATING

    @property
    def current_region(self) -> DetectedRegion | None:
        """Region shown while navigating, otherwise None."""
        state = self._state
        if state.phase is not Phase.NAVIGATING or state.current_index >= len(state.selected):
            return None
        return state.selected[state.current_index]

    def category_counts(self) -> dict[RegionCategory, int]:
        """Count detected regions per category, including empty categories."""
        counts = {category: 0 for category in RegionCategory}
        for region in self._state.detected:
            counts[region.category] += 1
        return counts

    def can_navigate_to_window(self, index: int) -> bool:
        state = self._state
        return (
            state.phase is Phase.NAVIGATING
            and not state.processing
            and 0 <= index < len(state.selected)
        )

    def validate_state(self) -> bool:
        """Check the structural invariant of the current phase."""
        return self._validator.validate(self._state)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns its unsubscribe function."""
        return self._notifier.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._notifier.unsubscribe(listener)

    # ---- commands ----------------------------------------------------

    async def start_window_detection(self) -> None:
        """Run a detection pass and move to SELECTING with its result.

        Ignored unless the controller is in NORMAL and idle. Failures and
        empty results return to NORMAL with an error message, as does
        cancelling the awaiting task.
        """
        if self._state.phase is not Phase.NORMAL or self._state.processing:
            logger.debug("detection_start_ignored", phase=self.phase_name)
            return

        generation = self._generation
        self._transition("start_window_detection", PhaseState(Phase.DETECTING, processing=True))

        try:
            regions = await self.detection_session.run()
        except asyncio.CancelledError:
            if self._is_current(generation, "detection_cancelled"):
                self._fail("start_window_detection", "Detection cancelled")
            raise
        except Exception as e:
            if self._is_current(generation, "detection_failed"):
                if isinstance(e, WinscoutException):
                    message = e.message
                else:
                    message = f"Detection failed: {e}"
                self._fail("start_window_detection", message)
            return

        if not self._is_current(generation, "detection_result"):
            return

        if not regions:
            self._fail("start_window_detection", EmptyDetectionResult().message)
            return

        self._transition(
            "start_window_detection",
            PhaseState(Phase.SELECTING, detected=tuple(regions)),
        )

    def select_windows(self, regions: Sequence[DetectedRegion]) -> None:
        """Accept the user's selection and start navigating at index 0.

        An empty selection returns to NORMAL with an error message.
        Ignored while a detection or navigation is in flight.
        """
        if self._state.processing:
            logger.debug("selection_ignored_while_processing", phase=self.phase_name)
            return

        if not regions:
            self._fail("select_windows", EmptySelection().message)
            return

        self._transition(
            "select_windows",
            replace(
                self._state,
                phase=Phase.NAVIGATING,
                selected=tuple(regions),
                current_index=0,
                error_message="",
            ),
        )

    async def navigate_to_window(self, index: int) -> bool:
        """Cycle back to the surface of ``selected[index]`` and show it.

        Replays the region's recorded cycle offset, one settle delay after
        each cycle. A no-op when :meth:`can_navigate_to_window` is false.
        Cancelling the awaiting task keeps the selection and the current
        index and clears ``processing``.

        Returns:
            True if navigation completed
        """
        if not self.can_navigate_to_window(index):
            logger.debug("navigation_rejected", index=index, phase=self.phase_name)
            return False

        generation = self._generation
        region = self._state.selected[index]
        self._transition("navigate_to_window", replace(self._state, processing=True))

        try:
            await self._perform_window_cycling(region.cycle_position)
        except asyncio.CancelledError:
            # Selection and index stay; only the gate reopens
            if self._is_current(generation, "navigation_cancelled"):
                self._transition(
                    "navigate_to_window",
                    replace(self._state, processing=False),
                    success=False,
                )
            raise
        except Exception as e:
            if self._is_current(generation, "navigation_failed"):
                self._fail("navigate_to_window", NavigationError(index, str(e)).message)
            return False

        if not self._is_current(generation, "navigation_result"):
            return False

        self._transition(
            "navigate_to_window",
            replace(self._state, current_index=index, processing=False),
        )
        return True

    async def restart_detection(self) -> None:
        """Discard all session state and run detection again."""
        self._generation += 1
        # Reset silently; start_window_detection notifies on entering DETECTING
        self._state = PhaseState()
        await self.start_window_detection()

    def exit_window_mode(self) -> None:
        """Return to NORMAL, dropping session state and any in-flight result."""
        self._generation += 1
        self._transition("exit_window_mode", PhaseState())

    def dispose(self) -> None:
        """Clear all state and subscribers without notifying."""
        self._generation += 1
        self._notifier.clear()
        self._state = PhaseState()

    # ---- internals ---------------------------------------------------

    async def _perform_window_cycling(self, cycles: int) -> None:
        settle = self.settings.settle_delay_seconds
        for _ in range(cycles):
            await self.cycler.advance()
            await asyncio.sleep(settle)

    def _is_current(self, generation: int, event: str) -> bool:
        if generation == self._generation:
            return True
        logger.info("stale_result_discarded", event=event, phase=self.phase_name)
        return False

    def _fail(self, trigger: str, message: str) -> None:
        self._transition(trigger, PhaseState(error_message=message), success=False)

    def _transition(self, trigger: str, new_state: PhaseState, success: bool = True) -> None:
        previous = self._state.phase
        self._state = new_state
        log_context: dict[str, Any] = {
            "detected": len(new_state.detected),
            "selected": len(new_state.selected),
            "processing": new_state.processing,
        }
        if new_state.error_message:
            log_context["error"] = new_state.error_message
        self._state_logger.log_transition(
            previous.value, new_state.phase.value, trigger=trigger, success=success, **log_context
        )
        self._notifier.notify()

    def __repr__(self) -> str:
        state = self._state
        return (
            f"PhaseController(state: {state.phase.value}, "
            f"detected: {len(state.detected)}, "
            f"selected: {len(state.selected)}, "
            f"processing: {state.processing})"
        )
