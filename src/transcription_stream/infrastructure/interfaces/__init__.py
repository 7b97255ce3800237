"""Infrastructure interface exports."""

from .correction_service import CorrectionService
from .event_publisher import EventPublisher
from .media_toolkit import MediaToolkit
from .transcription_service import TranscriptionService

__all__ = [
    "CorrectionService",
    "EventPublisher",
    "MediaToolkit",
    "TranscriptionService",
]
