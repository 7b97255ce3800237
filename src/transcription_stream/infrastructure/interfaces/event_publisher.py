"""Abstract interface for publishing events to a connected caller."""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class EventPublisher(ABC):
    """Abstract base class for outbound event channels."""

    @abstractmethod
    async def publish(self, event: str, payload: BaseModel) -> None:
        """
        Publishes one event to the caller.

        Safe to call from many concurrent tasks.

        Args:
            event: The event name.
            payload: The event data.

        Raises:
            EventPublishError: If publishing fails.
        """
