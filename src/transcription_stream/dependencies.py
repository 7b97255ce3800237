"""Dependency injection configuration for the transcription service."""

from functools import lru_cache

import assemblyai as aai
from google import genai

from transcription_stream.config import AppConfig, load_config
from transcription_stream.domain import AudioSegmenter, SegmentPipeline
from transcription_stream.handlers import TranscriptionHandler
from transcription_stream.infrastructure import (
    AssemblyAITranscriber,
    GeminiCorrector,
    MoviePyMediaToolkit,
)
from transcription_stream.infrastructure.interfaces import (
    CorrectionService,
    TranscriptionService,
)


@lru_cache
def get_config() -> AppConfig:
    """Returns the application configuration."""
    return load_config()


@lru_cache
def get_transcription_service() -> TranscriptionService:
    """Returns the configured AssemblyAI transcription service."""
    config = get_config().assemblyai
    aai.settings.api_key = config.api_key
    aai_config = aai.TranscriptionConfig(
        speech_model=aai.SpeechModel(config.speech_model)
        if config.speech_model
        else None
    )
    return AssemblyAITranscriber(aai.Transcriber(config=aai_config))


@lru_cache
def get_correction_service() -> CorrectionService:
    """Returns the configured Gemini correction service."""
    config = get_config().gemini
    client = genai.Client(api_key=config.api_key)
    return GeminiCorrector(client, config.model_name, config.system_prompt)


@lru_cache
def get_handler() -> TranscriptionHandler:
    """Returns the configured transcription handler."""
    processing = get_config().processing
    segmenter = AudioSegmenter(MoviePyMediaToolkit(), processing.audio_extension)
    pipeline = SegmentPipeline(get_transcription_service(), get_correction_service())
    return TranscriptionHandler(segmenter, pipeline, processing)
