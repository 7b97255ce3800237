import types
from pathlib import Path

import assemblyai as aai
import pytest

from transcription_stream.domain import ChunkState, ChunkStatus, ProcessingPayload
from transcription_stream.exceptions import (
    EventPublishError,
    SpeechRecognitionError,
    TextCompletionError,
)
from transcription_stream.infrastructure import (
    AssemblyAITranscriber,
    GeminiCorrector,
    MoviePyMediaToolkit,
    RequestWorkspace,
    WebSocketEventPublisher,
)
from transcription_stream.infrastructure import moviepy_media, workspace


class FakeTranscriber:
    def __init__(self, result):
        self.result = result
        self.calls: list[str] = []

    def transcribe(self, path: str):
        self.calls.append(path)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def _transcript(status, text=None, error=None):
    return types.SimpleNamespace(status=status, text=text, error=error)


async def test_assemblyai_transcriber_returns_text(tmp_path: Path):
    fake = FakeTranscriber(_transcript(aai.TranscriptStatus.completed, text="hello there"))

    text = await AssemblyAITranscriber(fake).transcribe(tmp_path / "chunk_0_30.mp3")

    assert text == "hello there"
    assert fake.calls == [str(tmp_path / "chunk_0_30.mp3")]


async def test_assemblyai_transcriber_raises_on_error_status(tmp_path: Path):
    fake = FakeTranscriber(_transcript(aai.TranscriptStatus.error, error="bad audio"))

    with pytest.raises(SpeechRecognitionError, match="bad audio"):
        await AssemblyAITranscriber(fake).transcribe(tmp_path / "chunk_0_30.mp3")


async def test_assemblyai_transcriber_raises_on_missing_text(tmp_path: Path):
    fake = FakeTranscriber(_transcript(aai.TranscriptStatus.completed, text=None))

    with pytest.raises(SpeechRecognitionError):
        await AssemblyAITranscriber(fake).transcribe(tmp_path / "chunk_0_30.mp3")


async def test_assemblyai_transcriber_does_not_retry(tmp_path: Path):
    failure = ConnectionError("reset by peer")
    fake = FakeTranscriber(failure)

    with pytest.raises(SpeechRecognitionError) as exc_info:
        await AssemblyAITranscriber(fake).transcribe(tmp_path / "chunk_0_30.mp3")

    assert exc_info.value.cause is failure
    assert len(fake.calls) == 1


class FakeModels:
    def __init__(self, texts, error=None):
        self.texts = texts
        self.error = error
        self.calls: list[dict] = []

    async def generate_content_stream(self, **kwargs):
        self.calls.append(kwargs)

        async def stream():
            for text in self.texts:
                yield types.SimpleNamespace(text=text)
            if self.error is not None:
                raise self.error

        return stream()


def _gemini_client(models: FakeModels):
    return types.SimpleNamespace(aio=types.SimpleNamespace(models=models))


async def test_gemini_corrector_streams_fragments():
    models = FakeModels(["Hello", None, ", world", ""])
    corrector = GeminiCorrector(_gemini_client(models), "gemini-test", "fix it")

    fragments = [fragment async for fragment in corrector.correct("hello world")]

    assert fragments == ["Hello", ", world"]
    [call] = models.calls
    assert call["model"] == "gemini-test"
    assert call["contents"] == "hello world"
    assert call["config"] == {"system_instruction": "fix it"}


async def test_gemini_corrector_wraps_mid_stream_errors():
    models = FakeModels(["Partial"], error=RuntimeError("quota exceeded"))
    corrector = GeminiCorrector(_gemini_client(models), "gemini-test", "fix it")
    received: list[str] = []

    with pytest.raises(TextCompletionError, match="quota exceeded"):
        async for fragment in corrector.correct("text"):
            received.append(fragment)

    assert received == ["Partial"]


class FakeClip:
    instances: list["FakeClip"] = []

    def __init__(self, path: str, duration: float = 42.0):
        self.path = path
        self.duration = duration
        self.closed = False
        self.subclips: list[tuple[float, float]] = []
        self.written: list[str] = []
        FakeClip.instances.append(self)

    def subclipped(self, start, end):
        self.subclips.append((start, end))
        return self

    def write_audiofile(self, path, logger=None):
        self.written.append(path)

    def close(self):
        self.closed = True


def test_moviepy_toolkit_probes_and_cuts(monkeypatch, tmp_path: Path):
    FakeClip.instances = []
    monkeypatch.setattr(moviepy_media.moviepy, "AudioFileClip", FakeClip)
    media = MoviePyMediaToolkit()

    duration = media.probe_duration(tmp_path / "in.mp3")
    media.cut(tmp_path / "in.mp3", tmp_path / "out.mp3", 30.0, 60.0)

    assert duration == 42.0
    probe_clip, cut_clip = FakeClip.instances
    assert cut_clip.subclips == [(30.0, 60.0)]
    assert cut_clip.written == [str(tmp_path / "out.mp3")]
    assert probe_clip.closed and cut_clip.closed


async def test_workspace_removes_files_on_error(tmp_path: Path):
    with pytest.raises(RuntimeError):
        async with RequestWorkspace(tmp_path, "req1") as area:
            await area.write_input(b"audio")
            (area.directory / "chunk_0_30.mp3").write_bytes(b"segment")
            assert area.input_file.read_bytes() == b"audio"
            raise RuntimeError("boom")

    assert list(tmp_path.iterdir()) == []


async def test_workspace_cleanup_failure_is_not_raised(monkeypatch, tmp_path: Path):
    def broken_rmtree(path):
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(workspace.shutil, "rmtree", broken_rmtree)

    async with RequestWorkspace(tmp_path, "req2") as area:
        await area.write_input(b"audio")

    assert not area.input_file.exists()
    assert area.directory.exists()


class FakeWebSocket:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[dict] = []

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("Cannot call send once a close message has been sent")
        self.sent.append(data)


async def test_websocket_publisher_sends_event_envelope():
    socket = FakeWebSocket()
    payload = ProcessingPayload(
        chunks=[ChunkState(id=0, status=ChunkStatus.CORRECTING, transcription="hi")]
    )

    await WebSocketEventPublisher(socket).publish("PROCESSING", payload)

    assert socket.sent == [
        {
            "event": "PROCESSING",
            "data": {
                "chunks": [
                    {
                        "id": 0,
                        "status": "correcting",
                        "transcription": "hi",
                        "correction": None,
                    }
                ]
            },
        }
    ]


async def test_websocket_publisher_wraps_send_failures():
    publisher = WebSocketEventPublisher(FakeWebSocket(fail=True))

    with pytest.raises(EventPublishError):
        await publisher.publish("PROCESSING", ProcessingPayload(chunks=[]))
