"""Streaming audio transcription service."""
