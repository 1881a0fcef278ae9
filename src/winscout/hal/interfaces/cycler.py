"""Surface cycler interface definition."""

from abc import ABC, abstractmethod


class ICycler(ABC):
    """Interface for the "switch to next surface" side effect.

    Implementations send one keystroke-equivalent per call and return
    immediately. Callers supply their own settle delay afterwards.
    """

    @abstractmethod
    async def advance(self) -> None:
        """Switch the remote session to its next surface."""
        pass
