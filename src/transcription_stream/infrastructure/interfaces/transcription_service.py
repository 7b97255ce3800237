"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod
from pathlib import Path


class TranscriptionService(ABC):
    """Abstract base class for speech recognition backends."""

    @abstractmethod
    async def transcribe(self, audio_path: Path) -> str:
        """
        Transcribes one audio file into raw text.

        Args:
            audio_path: Path to a decodable audio segment.

        Returns:
            The recognized text.

        Raises:
            SpeechRecognitionError: If the engine call fails.
        """
