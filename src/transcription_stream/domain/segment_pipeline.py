"""Drives one segment through transcription and correction."""

from transcription_stream.exceptions import (
    CorrectionError,
    EventPublishError,
    TranscriptionError,
)
from transcription_stream.infrastructure.interfaces import (
    CorrectionService,
    TranscriptionService,
)
from transcription_stream.logging import setup_logging

from .models import ChunkState, ChunkStatus, Segment
from .progress import ProgressTracker

logger = setup_logging()


class SegmentPipeline:
    """Transcribes then stream-corrects a single segment, publishing each step."""

    def __init__(
        self,
        transcription_service: TranscriptionService,
        correction_service: CorrectionService,
    ):
        self._transcription_service = transcription_service
        self._correction_service = correction_service

    async def run(self, segment: Segment, tracker: ProgressTracker) -> ChunkState:
        """
        Runs the segment through TRANSCRIBING, CORRECTING and FINISHED.

        Args:
            segment: The extracted segment to process.
            tracker: Shared progress view that publishes snapshots.

        Returns:
            The final FINISHED state of the segment.

        Raises:
            TranscriptionError: If speech recognition fails.
            CorrectionError: If the correction stream fails.
        """
        index = segment.index
        await tracker.update(ChunkState(id=index, status=ChunkStatus.TRANSCRIBING))

        transcription = await self._transcribe(segment)
        await tracker.update(
            ChunkState(
                id=index,
                status=ChunkStatus.TRANSCRIBING,
                transcription=transcription,
            )
        )

        await tracker.update(
            ChunkState(
                id=index, status=ChunkStatus.CORRECTING, transcription=transcription
            )
        )

        correction = ""
        try:
            async for fragment in self._correction_service.correct(transcription):
                if not fragment:
                    continue
                correction += fragment
                await tracker.update(
                    ChunkState(
                        id=index,
                        status=ChunkStatus.CORRECTING,
                        transcription=transcription,
                        correction=correction,
                    )
                )
        except EventPublishError:
            raise
        except Exception as e:
            logger.warning(
                "Segment correction failed",
                extra={
                    "segment_index": index,
                    "corrected_length": len(correction),
                    "error": str(e),
                },
            )
            raise CorrectionError(index, e) from e

        final_state = ChunkState(
            id=index,
            status=ChunkStatus.FINISHED,
            transcription=transcription,
            correction=correction,
        )
        await tracker.update(final_state)

        logger.info(
            "Segment finished",
            extra={"segment_index": index, "corrected_length": len(correction)},
        )
        return final_state

    async def _transcribe(self, segment: Segment) -> str:
        try:
            transcription = await self._transcription_service.transcribe(segment.path)
        except Exception as e:
            logger.warning(
                "Segment transcription failed",
                extra={"segment_index": segment.index, "error": str(e)},
            )
            raise TranscriptionError(segment.index, e) from e
        finally:
            # The segment audio is not needed once transcription is over.
            self._release(segment)
        return transcription

    def _release(self, segment: Segment) -> None:
        try:
            segment.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(
                "Failed to release segment audio",
                extra={"segment_index": segment.index, "error": str(e)},
            )
