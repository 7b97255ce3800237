"""Domain models for the transcription service."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, model_validator


class Segment(BaseModel, frozen=True):
    """A bounded time range of the source audio, extracted to its own file."""

    index: int
    start: float
    end: float
    path: Path

    @model_validator(mode="after")
    def _check_bounds(self) -> "Segment":
        if self.end <= self.start:
            raise ValueError("Segment end must be greater than start")
        return self

    @property
    def duration(self) -> float:
        return self.end - self.start


class ChunkStatus(str, Enum):
    """Progress stages of a single segment."""

    SPLITTING = "splitting"
    TRANSCRIBING = "transcribing"
    CORRECTING = "correcting"
    FINISHED = "finished"


class ChunkState(BaseModel, frozen=True):
    """Caller-visible progress of one segment."""

    id: int
    status: ChunkStatus
    transcription: str | None = None
    correction: str | None = None


class TranscriptionEvent(str, Enum):
    """Outbound event names."""

    PROCESS_STARTED = "PROCESS_STARTED"
    PROCESSING = "PROCESSING"
    PROCESS_FINISHED = "PROCESS_FINISHED"


class ProcessStartedPayload(BaseModel, frozen=True):
    message: str


class ProcessingPayload(BaseModel, frozen=True):
    chunks: list[ChunkState]


class ProcessFinishedPayload(BaseModel, frozen=True):
    message: str
    error: str | None = None


class ProcessingResult(BaseModel, frozen=True):
    """Result of a completed processing request."""

    request_id: str
    chunks: list[ChunkState]
