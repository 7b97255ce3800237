"""Abstract interface for streaming text correction."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class CorrectionService(ABC):
    """Abstract base class for text completion backends used for correction."""

    @abstractmethod
    def correct(self, text: str) -> AsyncIterator[str]:
        """
        Streams a grammar and punctuation corrected version of `text`.

        The returned iterator is finite and can be consumed once.
        Concatenating every fragment in order gives the corrected text.

        Args:
            text: Raw transcription text.

        Returns:
            Async iterator of text fragments.

        Raises:
            TextCompletionError: If the engine fails mid-stream.
        """
