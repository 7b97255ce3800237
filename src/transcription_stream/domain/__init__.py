"""Domain layer exports."""

from .models import (
    ChunkState,
    ChunkStatus,
    ProcessFinishedPayload,
    ProcessingPayload,
    ProcessingResult,
    ProcessStartedPayload,
    Segment,
    TranscriptionEvent,
)
from .progress import ProgressTracker
from .segment_pipeline import SegmentPipeline
from .segmenter import AudioSegmenter

__all__ = [
    "AudioSegmenter",
    "ChunkState",
    "ChunkStatus",
    "ProcessFinishedPayload",
    "ProcessingPayload",
    "ProcessingResult",
    "ProcessStartedPayload",
    "ProgressTracker",
    "Segment",
    "SegmentPipeline",
    "TranscriptionEvent",
]
