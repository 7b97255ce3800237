"""Route exports."""

from .transcription import router as transcription_router

__all__ = ["transcription_router"]
