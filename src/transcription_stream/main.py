"""FastAPI application entry point."""

from ddtrace import patch_all
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from transcription_stream.dependencies import get_config
from transcription_stream.routes import transcription_router

patch_all()

app = FastAPI(title="Transcription Stream Service")
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().server.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(transcription_router)
