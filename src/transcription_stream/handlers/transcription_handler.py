"""Coordinates one end-to-end transcription request."""

import asyncio
import uuid

from transcription_stream.config import ProcessingConfig
from transcription_stream.domain import (
    AudioSegmenter,
    ChunkState,
    ProcessFinishedPayload,
    ProcessingResult,
    ProgressTracker,
    Segment,
    SegmentPipeline,
    TranscriptionEvent,
)
from transcription_stream.infrastructure import RequestWorkspace
from transcription_stream.infrastructure.interfaces import EventPublisher
from transcription_stream.logging import setup_logging

logger = setup_logging()

FINISHED_MESSAGE = "Processing finished"
FAILED_MESSAGE = "Processing failed"


class TranscriptionHandler:
    """Splits raw audio and fans the segments out to concurrent pipelines."""

    def __init__(
        self,
        segmenter: AudioSegmenter,
        pipeline: SegmentPipeline,
        config: ProcessingConfig,
    ):
        self._segmenter = segmenter
        self._pipeline = pipeline
        self._config = config

    async def process(
        self, audio_data: bytes, publisher: EventPublisher
    ) -> ProcessingResult:
        """
        Processes raw audio end to end and reports the outcome.

        Exactly one PROCESS_FINISHED event is published, after the working
        area has been removed, carrying the error message on failure.

        Args:
            audio_data: Raw audio bytes received from the caller.
            publisher: Outbound channel for progress and completion events.

        Returns:
            ProcessingResult with the final chunk states.

        Raises:
            DurationUnavailableError: If the audio duration cannot be probed.
            SegmentExtractionError: If splitting fails.
            TranscriptionError: If any segment fails to transcribe.
            CorrectionError: If any segment fails to correct.
        """
        request_id = uuid.uuid4().hex
        logger.info("Starting audio processing", extra={"request_id": request_id})

        try:
            async with RequestWorkspace(
                self._config.work_root, request_id, self._config.audio_extension
            ) as workspace:
                chunks = await self._run(workspace, audio_data, publisher)
        except Exception as e:
            logger.exception(
                "Failed to process audio", extra={"request_id": request_id}
            )
            await self._finish(publisher, request_id, error=str(e) or type(e).__name__)
            raise

        await self._finish(publisher, request_id)
        return ProcessingResult(request_id=request_id, chunks=chunks)

    async def _run(
        self,
        workspace: RequestWorkspace,
        audio_data: bytes,
        publisher: EventPublisher,
    ) -> list[ChunkState]:
        input_file = await workspace.write_input(audio_data)
        segments = await self._segmenter.split(
            input_file, self._config.segment_duration_seconds, workspace.directory
        )
        logger.info(
            "Split audio into segments",
            extra={"request_id": workspace.request_id, "segments": len(segments)},
        )

        tracker = ProgressTracker(len(segments), publisher)
        await self._run_pipelines(segments, tracker)
        return tracker.snapshot()

    async def _run_pipelines(
        self, segments: list[Segment], tracker: ProgressTracker
    ) -> None:
        """
        Runs every segment pipeline and waits for all that started.

        After the first failure no further pipeline starts; pipelines already
        running finish on their own before the first error is re-raised.
        """
        errors: list[Exception] = []
        limit = self._config.max_concurrent_segments or max(len(segments), 1)
        slots = asyncio.Semaphore(limit)

        async def run_one(segment: Segment) -> None:
            async with slots:
                if errors:
                    logger.info(
                        "Skipping segment after earlier failure",
                        extra={"segment_index": segment.index},
                    )
                    return
                try:
                    await self._pipeline.run(segment, tracker)
                except Exception as e:
                    errors.append(e)

        await asyncio.gather(*(run_one(segment) for segment in segments))

        if errors:
            raise errors[0]

    async def _finish(
        self, publisher: EventPublisher, request_id: str, error: str | None = None
    ) -> None:
        payload = ProcessFinishedPayload(
            message=FAILED_MESSAGE if error else FINISHED_MESSAGE, error=error
        )
        try:
            await publisher.publish(TranscriptionEvent.PROCESS_FINISHED, payload)
        except Exception:
            logger.exception(
                "Failed to publish completion event", extra={"request_id": request_id}
            )
