"""Splits source audio into fixed-length segments."""

import asyncio
from decimal import Decimal
from pathlib import Path

from transcription_stream.exceptions import (
    DurationUnavailableError,
    SegmentExtractionError,
)
from transcription_stream.infrastructure.interfaces import MediaToolkit
from transcription_stream.logging import setup_logging

from .models import Segment

logger = setup_logging()


class AudioSegmenter:
    """Cuts audio into equal-length segments, dropping a short remainder."""

    def __init__(self, media: MediaToolkit, extension: str = "mp3"):
        self._media = media
        self._extension = extension

    async def split(
        self, source: Path, segment_duration: float, work_dir: Path
    ) -> list[Segment]:
        """
        Splits the source audio into segments of exactly `segment_duration`.

        Args:
            source: Path to the decodable source audio.
            segment_duration: Length of every produced segment, in seconds.
            work_dir: Directory that receives one file per segment.

        Returns:
            Segments ordered by start offset, indexed from 0.

        Raises:
            DurationUnavailableError: If the source duration cannot be probed.
            SegmentExtractionError: If cutting any segment fails.
        """
        if segment_duration <= 0:
            raise ValueError("segment_duration must be positive")

        duration = await self._probe(source)
        logger.info(
            "Starting audio splitting",
            extra={"duration": duration, "segment_duration": segment_duration},
        )

        segments: list[Segment] = []
        for start, end in self.plan(duration, segment_duration):
            output = work_dir / self._file_name(start, end)
            try:
                await asyncio.to_thread(self._media.cut, source, output, start, end)
            except Exception as e:
                logger.warning(
                    "Segment extraction failed",
                    extra={"start": start, "end": end, "error": str(e)},
                )
                raise SegmentExtractionError(start, end, e) from e
            segments.append(
                Segment(index=len(segments), start=start, end=end, path=output)
            )

        logger.info("Finished splitting audio", extra={"segments": len(segments)})
        return segments

    @staticmethod
    def plan(duration: float, segment_duration: float) -> list[tuple[float, float]]:
        """
        Returns the `[start, end)` bounds of every full-length segment.

        Offsets are computed in decimal so that fractional lengths give
        exactly `floor(duration / segment_duration)` segments of equal size.
        """
        length = Decimal(str(segment_duration))
        total = Decimal(str(duration))
        count = int(total // length)

        remainder = total - count * length
        if remainder > 0:
            logger.info(
                "Dropping short trailing audio",
                extra={"start": float(count * length), "end": duration},
            )

        return [
            (float(position * length), float((position + 1) * length))
            for position in range(count)
        ]

    async def _probe(self, source: Path) -> float:
        try:
            duration = await asyncio.to_thread(self._media.probe_duration, source)
        except Exception as e:
            logger.warning(
                "Duration probe failed",
                extra={"file_name": source.name, "error": str(e)},
            )
            raise DurationUnavailableError(source.name, e) from e

        if not duration or duration <= 0:
            raise DurationUnavailableError(source.name)
        return float(duration)

    def _file_name(self, start: float, end: float) -> str:
        return f"chunk_{_format_offset(start)}_{_format_offset(end)}.{self._extension}"


def _format_offset(seconds: float) -> str:
    return f"{seconds:.3f}".rstrip("0").rstrip(".") or "0"
