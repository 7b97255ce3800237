"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .gemini_corrector import GeminiCorrector
from .moviepy_media import MoviePyMediaToolkit
from .websocket_publisher import WebSocketEventPublisher
from .workspace import RequestWorkspace

__all__ = [
    "AssemblyAITranscriber",
    "GeminiCorrector",
    "MoviePyMediaToolkit",
    "RequestWorkspace",
    "WebSocketEventPublisher",
]
