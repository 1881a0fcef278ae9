"""Change notification for phase controller observers.

Observers register a zero-argument callback and are called once after
every completed state mutation. The notifier has no dependency on any UI
framework.

Example:
    >>> notifier = ChangeNotifier()
    >>> unsubscribe = notifier.subscribe(lambda: print("changed"))
    >>> notifier.notify()
    changed
    >>> unsubscribe()
"""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class ChangeNotifier:
    """Publish/subscribe registry of change listeners."""

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Callback invoked after each change

        Returns:
            Function that unsubscribes the listener
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def notify(self) -> None:
        """Call every listener registered at the time of the call.

        A failing listener is logged and does not prevent the others from
        being called.
        """
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Change listener %r failed", listener)

    def clear(self) -> None:
        """Remove all listeners."""
        self._listeners.clear()
