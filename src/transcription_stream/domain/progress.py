"""Shared progress view for one processing request."""

import asyncio

from transcription_stream.infrastructure.interfaces import EventPublisher

from .models import ChunkState, ChunkStatus, ProcessingPayload, TranscriptionEvent


class ProgressTracker:
    """
    Owns the canonical list of chunk states for one request.

    Pipelines hand in replacement states for their own slot. Each update
    and the publication of the resulting snapshot happen under one lock, so
    every published snapshot is a consistent copy of all slots.
    """

    def __init__(self, segment_count: int, publisher: EventPublisher):
        self._states: list[ChunkState] = [
            ChunkState(id=index, status=ChunkStatus.SPLITTING)
            for index in range(segment_count)
        ]
        self._publisher = publisher
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._states)

    def snapshot(self) -> list[ChunkState]:
        """Returns a copy of the current states."""
        return list(self._states)

    async def update(self, state: ChunkState) -> None:
        """Replaces the state at `state.id` and publishes the full snapshot."""
        if not 0 <= state.id < len(self._states):
            raise IndexError(f"No chunk slot with id {state.id}")

        async with self._lock:
            self._states[state.id] = state
            payload = ProcessingPayload(chunks=list(self._states))
            await self._publisher.publish(TranscriptionEvent.PROCESSING, payload)
