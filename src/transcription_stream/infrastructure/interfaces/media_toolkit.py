"""Abstract interface for audio probing and cutting."""

from abc import ABC, abstractmethod
from pathlib import Path


class MediaToolkit(ABC):
    """Abstract base class for media utilities. Calls are blocking."""

    @abstractmethod
    def probe_duration(self, source: Path) -> float | None:
        """Returns the duration of `source` in seconds, or None if unknown."""

    @abstractmethod
    def cut(self, source: Path, output: Path, start: float, end: float) -> None:
        """Writes the `[start, end)` range of `source` to `output`."""
