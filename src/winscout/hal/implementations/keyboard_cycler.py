"""Pynput-based surface cycler implementation."""

from collections.abc import Sequence

from pynput import keyboard
from pynput.keyboard import Key as PynputKey

from ...logging import get_logger
from ..interfaces.cycler import ICycler

logger = get_logger(__name__)

# Alt+Page Up switches surfaces in the remote session
DEFAULT_CYCLE_CHORD = ("alt", "page_up")


class KeyComboCycler(ICycler):
    """Cycler that presses a hotkey chord with pynput.

    Modifiers are held in order and released in reverse order, so the
    chord behaves like a person pressing it.
    """

    def __init__(
        self,
        chord: Sequence[str] = DEFAULT_CYCLE_CHORD,
        controller: keyboard.Controller | None = None,
    ):
        """Initialize the cycler.

        Args:
            chord: Key names, either pynput special key names or single characters
            controller: Keyboard controller to use (a new one by default)

        Raises:
            ValueError: If the chord is empty or names an unknown key
        """
        if not chord:
            raise ValueError("Cycle chord must contain at least one key")
        self.chord = tuple(chord)
        self._keys = [self._resolve_key(name) for name in self.chord]
        self.keyboard_controller = controller or keyboard.Controller()
        logger.info("key_combo_cycler_initialized", chord="+".join(self.chord))

    @staticmethod
    def _resolve_key(name: str):
        if len(name) == 1:
            return name
        try:
            return getattr(PynputKey, name)
        except AttributeError:
            raise ValueError(f"Unknown key name: {name}") from None

    async def advance(self) -> None:
        """Press and release the chord once."""
        for key in self._keys:
            self.keyboard_controller.press(key)
        for key in reversed(self._keys):
            self.keyboard_controller.release(key)
        logger.debug("surface_cycled", chord="+".join(self.chord))
