"""WebSocket implementation of the EventPublisher interface."""

import asyncio

from fastapi import WebSocket
from pydantic import BaseModel

from transcription_stream.exceptions import EventPublishError
from transcription_stream.logging import setup_logging

from .interfaces import EventPublisher

logger = setup_logging()


class WebSocketEventPublisher(EventPublisher):
    """Sends `{"event", "data"}` JSON frames to one connected client."""

    def __init__(self, websocket: WebSocket):
        self._websocket = websocket
        self._lock = asyncio.Lock()

    async def publish(self, event: str, payload: BaseModel) -> None:
        name = str(getattr(event, "value", event))
        message = {"event": name, "data": payload.model_dump(mode="json")}
        try:
            async with self._lock:
                await self._websocket.send_json(message)
        except Exception as e:
            logger.warning(
                "WebSocket send failed", extra={"event": name, "error": str(e)}
            )
            raise EventPublishError(name, e) from e
