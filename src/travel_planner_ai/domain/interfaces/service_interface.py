"""Lifecycle of components that own background tasks."""

from abc import ABC, abstractmethod


class IService(ABC):
    """Component whose work runs on its own asyncio tasks.

    ``start`` launches the background work and ``drain`` waits until the work
    accepted so far has finished. ``cleanup`` cancels whatever is still
    running; the service can be started again afterwards.
    """

    @abstractmethod
    async def start(self) -> None:
        pass

    @abstractmethod
    async def drain(self) -> None:
        """Wait for accepted work to finish."""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Cancel running work and release its tasks."""
        pass

    @property
    @abstractmethod
    def is_running(self) -> bool:
        pass
