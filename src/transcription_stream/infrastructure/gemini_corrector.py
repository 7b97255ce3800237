"""Gemini implementation of the CorrectionService interface."""

from collections.abc import AsyncIterator

from google import genai

from transcription_stream.exceptions import TextCompletionError
from transcription_stream.logging import setup_logging

from .interfaces import CorrectionService

logger = setup_logging()


class GeminiCorrector(CorrectionService):
    """Streams corrected transcriptions from Google Gemini."""

    def __init__(self, client: genai.Client, model_name: str, system_prompt: str):
        self._client = client
        self._model_name = model_name
        self._system_prompt = system_prompt

    async def correct(self, text: str) -> AsyncIterator[str]:
        """
        Streams the corrected text as Gemini produces it.

        Raises:
            TextCompletionError: If the request or the stream fails.
        """
        logger.info("Starting transcription correction", extra={"text_length": len(text)})
        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=self._model_name,
                contents=text,
                config={"system_instruction": self._system_prompt},
            )
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except Exception as e:
            logger.warning("Gemini correction stream failed", extra={"error": str(e)})
            raise TextCompletionError(f"Gemini correction failed: {e}", cause=e) from e
