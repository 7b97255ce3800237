"""Application configuration loaded from environment variables."""

import os
import tempfile
from pathlib import Path

from pydantic import BaseModel, Field

CORRECTION_SYSTEM_PROMPT = (
    "You are a professional transcription editor. Correct any errors in the "
    "following transcription while maintaining the original meaning. Focus on "
    "grammar, punctuation, and clarity."
)


class ProcessingConfig(BaseModel, frozen=True):
    """Segmentation and working storage configuration."""

    segment_duration_seconds: float = Field(default=30.0, gt=0)
    work_root: Path = Path(tempfile.gettempdir())
    audio_extension: str = "mp3"
    max_concurrent_segments: int | None = Field(default=None, gt=0)


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    speech_model: str | None = None


class GeminiConfig(BaseModel, frozen=True):
    """Gemini LLM configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash-lite"
    system_prompt: str = CORRECTION_SYSTEM_PROMPT


class ServerConfig(BaseModel, frozen=True):
    """WebSocket server configuration."""

    cors_origins: list[str] = ["*"]


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    processing: ProcessingConfig
    assemblyai: AssemblyAIConfig
    gemini: GeminiConfig
    server: ServerConfig


def _optional_int(value: str | None) -> int | None:
    return int(value) if value else None


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        processing=ProcessingConfig(
            segment_duration_seconds=float(
                os.getenv("SEGMENT_DURATION_SECONDS", "30")
            ),
            work_root=Path(os.getenv("WORK_ROOT", tempfile.gettempdir())),
            audio_extension=os.getenv("AUDIO_EXTENSION", "mp3"),
            max_concurrent_segments=_optional_int(
                os.getenv("MAX_CONCURRENT_SEGMENTS")
            ),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY", ""),
            speech_model=os.getenv("ASSEMBLYAI_SPEECH_MODEL") or None,
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL_NAME", "gemini-2.5-flash-lite"),
        ),
        server=ServerConfig(
            cors_origins=_split_origins(os.getenv("CORS_ORIGINS", "*")),
        ),
    )
