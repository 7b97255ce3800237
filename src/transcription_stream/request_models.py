"""Inbound message models for the transcription WebSocket."""

from enum import Enum

from pydantic import Base64Bytes, BaseModel


class RequestEvent(str, Enum):
    """Inbound event names."""

    REQUEST_TRANSCRIPTION = "REQUEST_TRANSCRIPTION"


class TranscriptionRequest(BaseModel, frozen=True):
    """A request to transcribe base64-encoded audio."""

    event: RequestEvent
    audio_data: Base64Bytes
