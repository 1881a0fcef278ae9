"""Frame source interface definition."""

from abc import ABC, abstractmethod

from ...model import Frame


class IFrameSource(ABC):
    """Interface for capturing full-screen frames of a remote session."""

    @abstractmethod
    async def capture(self) -> Frame | None:
        """Capture the current screen.

        Returns:
            The captured frame, or None when no frame is available yet
        """
        pass
