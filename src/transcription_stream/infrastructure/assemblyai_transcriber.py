"""AssemblyAI implementation of the TranscriptionService interface."""

import asyncio
from pathlib import Path

import assemblyai as aai

from transcription_stream.exceptions import SpeechRecognitionError
from transcription_stream.logging import setup_logging

from .interfaces import TranscriptionService

logger = setup_logging()


class AssemblyAITranscriber(TranscriptionService):
    """Handles segment transcription using AssemblyAI."""

    def __init__(self, transcriber: aai.Transcriber):
        self._transcriber = transcriber

    async def transcribe(self, audio_path: Path) -> str:
        """
        Transcribes one audio segment using AssemblyAI.

        The SDK call blocks until the transcript is ready, so it runs in a
        worker thread. There is no retry.
        """
        logger.info("Transcribing segment", extra={"file_name": audio_path.name})
        try:
            transcript = await asyncio.to_thread(
                self._transcriber.transcribe, str(audio_path)
            )
        except Exception as e:
            logger.warning(
                "AssemblyAI transcription failed",
                extra={"file_name": audio_path.name, "error": str(e)},
            )
            raise SpeechRecognitionError(
                f"AssemblyAI request failed for '{audio_path.name}'", e
            ) from e

        if transcript.status == aai.TranscriptStatus.error:
            raise SpeechRecognitionError(
                f"AssemblyAI returned an error for '{audio_path.name}': {transcript.error}"
            )

        if transcript.text is None:
            raise SpeechRecognitionError(
                f"AssemblyAI returned no text for '{audio_path.name}'"
            )

        logger.info(
            "Transcription completed",
            extra={"file_name": audio_path.name, "text_length": len(transcript.text)},
        )
        return transcript.text
