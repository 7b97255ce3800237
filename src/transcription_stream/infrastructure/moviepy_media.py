"""moviepy implementation of the MediaToolkit interface."""

from pathlib import Path

import moviepy

from .interfaces import MediaToolkit


class MoviePyMediaToolkit(MediaToolkit):
    """Probes and cuts audio files with moviepy (ffmpeg underneath)."""

    def probe_duration(self, source: Path) -> float | None:
        clip = moviepy.AudioFileClip(str(source))
        try:
            return clip.duration
        finally:
            clip.close()

    def cut(self, source: Path, output: Path, start: float, end: float) -> None:
        clip = moviepy.AudioFileClip(str(source))
        try:
            clip.subclipped(start, end).write_audiofile(str(output), logger=None)
        finally:
            clip.close()
