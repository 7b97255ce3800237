"""Transcription WebSocket endpoint."""

import asyncio
import json
import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from transcription_stream.dependencies import get_handler
from transcription_stream.domain import (
    ProcessFinishedPayload,
    ProcessStartedPayload,
    TranscriptionEvent,
)
from transcription_stream.exceptions import EventPublishError
from transcription_stream.handlers import TranscriptionHandler
from transcription_stream.infrastructure import WebSocketEventPublisher
from transcription_stream.logging import setup_logging
from transcription_stream.request_models import TranscriptionRequest

logger = setup_logging()

router = APIRouter(tags=["transcription"])

HandlerDep = Annotated[TranscriptionHandler, Depends(get_handler)]

STARTED_MESSAGE = "Processing started"


@router.websocket("/ws")
async def transcription_socket(websocket: WebSocket, handler: HandlerDep) -> None:
    """
    Accepts transcription requests from one client.

    Each request runs as its own task, so a client may have several requests
    in flight. Text frames carry a JSON `TranscriptionRequest`; binary frames
    are treated as a transcription request for the raw bytes.
    """
    await websocket.accept()
    client_id = uuid.uuid4().hex
    logger.info("Client connected", extra={"client_id": client_id})

    publisher = WebSocketEventPublisher(websocket)
    requests: set[asyncio.Task] = set()

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break

            audio_data = await _read_audio(message, publisher)
            if audio_data is None:
                continue

            task = asyncio.create_task(
                _transcribe(handler, publisher, audio_data, client_id)
            )
            requests.add(task)
            task.add_done_callback(requests.discard)
    except (WebSocketDisconnect, EventPublishError):
        pass
    finally:
        logger.info("Client disconnected", extra={"client_id": client_id})
        # Running requests still clean up their working areas.
        if requests:
            await asyncio.gather(*requests, return_exceptions=True)


async def _read_audio(
    message: dict, publisher: WebSocketEventPublisher
) -> bytes | None:
    """Extracts request audio from a frame, rejecting invalid requests."""
    if message.get("bytes") is not None:
        return message["bytes"]

    try:
        request = TranscriptionRequest.model_validate(
            json.loads(message.get("text") or "")
        )
    except (ValueError, ValidationError) as e:
        logger.warning("Invalid transcription request", extra={"error": str(e)})
        await publisher.publish(
            TranscriptionEvent.PROCESS_FINISHED,
            ProcessFinishedPayload(message="Invalid request", error=str(e)),
        )
        return None

    return request.audio_data


async def _transcribe(
    handler: TranscriptionHandler,
    publisher: WebSocketEventPublisher,
    audio_data: bytes,
    client_id: str,
) -> None:
    try:
        await publisher.publish(
            TranscriptionEvent.PROCESS_STARTED,
            ProcessStartedPayload(message=STARTED_MESSAGE),
        )
        await handler.process(audio_data, publisher)
    except Exception as e:
        logger.warning(
            "Transcription request failed",
            extra={"client_id": client_id, "error": str(e)},
        )
