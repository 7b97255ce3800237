import asyncio
from pathlib import Path

from pydantic import BaseModel

from transcription_stream.config import ProcessingConfig
from transcription_stream.domain import AudioSegmenter, SegmentPipeline
from transcription_stream.handlers import TranscriptionHandler
from transcription_stream.infrastructure.interfaces import (
    CorrectionService,
    EventPublisher,
    MediaToolkit,
    TranscriptionService,
)


class FakeMediaToolkit(MediaToolkit):
    def __init__(self, duration: float | None | Exception, fail_at: float | None = None):
        self.duration = duration
        self.fail_at = fail_at
        self.probed: list[bytes] = []
        self.cuts: list[tuple[float, float]] = []

    def probe_duration(self, source: Path) -> float | None:
        self.probed.append(source.read_bytes())
        if isinstance(self.duration, Exception):
            raise self.duration
        return self.duration

    def cut(self, source: Path, output: Path, start: float, end: float) -> None:
        if self.fail_at is not None and start == self.fail_at:
            raise RuntimeError("ffmpeg exploded")
        self.cuts.append((start, end))
        output.write_bytes(f"audio {start}-{end}".encode())


class FakeTranscriptionService(TranscriptionService):
    def __init__(self, fail_on: set[str] | None = None):
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    async def transcribe(self, audio_path: Path) -> str:
        self.calls.append(audio_path.name)
        content = audio_path.read_bytes().decode()
        await asyncio.sleep(0)
        if audio_path.name in self.fail_on:
            raise RuntimeError(f"engine down for {audio_path.name}")
        return f"raw {content}"


class FakeCorrectionService(CorrectionService):
    def __init__(self, fragments: list[str] | None = None, fail_after: int | None = None):
        self.fragments = fragments
        self.fail_after = fail_after
        self.calls: list[str] = []

    async def correct(self, text: str):
        self.calls.append(text)
        fragments = self.fragments if self.fragments is not None else [
            f"{word} " for word in text.split()
        ]
        for count, fragment in enumerate(fragments):
            if self.fail_after is not None and count == self.fail_after:
                raise RuntimeError("stream interrupted")
            await asyncio.sleep(0)
            yield fragment


class RecordingPublisher(EventPublisher):
    def __init__(self, fail_on: str | None = None):
        self.events: list[tuple[str, BaseModel]] = []
        self.fail_on = fail_on

    async def publish(self, event: str, payload: BaseModel) -> None:
        if self.fail_on is not None and event == self.fail_on:
            raise RuntimeError("client went away")
        self.events.append((event, payload))

    def payloads(self, event: str) -> list[BaseModel]:
        return [payload for name, payload in self.events if name == event]


def build_handler(
    work_root: Path,
    media: MediaToolkit,
    transcriber: TranscriptionService | None = None,
    corrector: CorrectionService | None = None,
    segment_duration: float = 60.0,
    max_concurrent_segments: int | None = None,
) -> TranscriptionHandler:
    config = ProcessingConfig(
        segment_duration_seconds=segment_duration,
        work_root=work_root,
        max_concurrent_segments=max_concurrent_segments,
    )
    pipeline = SegmentPipeline(
        transcriber or FakeTranscriptionService(),
        corrector or FakeCorrectionService(),
    )
    return TranscriptionHandler(AudioSegmenter(media), pipeline, config)
