"""Per-request working area on the local filesystem."""

import asyncio
import shutil
from pathlib import Path

from transcription_stream.exceptions import CleanupError
from transcription_stream.logging import setup_logging

logger = setup_logging()


class RequestWorkspace:
    """
    Scoped working area for one processing request.

    Entering creates `<root>/<request_id>/` and writes the raw audio to
    `<root>/<request_id>_input.<extension>`. Exiting removes both on every
    path. Cleanup failures are logged and never raised.
    """

    def __init__(self, root: Path, request_id: str, extension: str = "mp3"):
        self.request_id = request_id
        self.directory = root / request_id
        self.input_file = root / f"{request_id}_input.{extension}"

    async def __aenter__(self) -> "RequestWorkspace":
        logger.info(
            "Creating working directory",
            extra={"request_id": self.request_id, "path": str(self.directory)},
        )
        await asyncio.to_thread(self.directory.mkdir, parents=True, exist_ok=True)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        await self.cleanup()
        return False

    async def write_input(self, audio_data: bytes) -> Path:
        """Writes the raw request audio to the input file."""
        logger.info(
            "Writing input file",
            extra={"request_id": self.request_id, "size": len(audio_data)},
        )
        await asyncio.to_thread(self.input_file.write_bytes, audio_data)
        return self.input_file

    async def cleanup(self) -> None:
        """Deletes the input file and the working directory."""
        logger.info("Cleaning up temporary files", extra={"request_id": self.request_id})
        failed = False
        for remove in (self._remove_input, self._remove_directory):
            try:
                await asyncio.to_thread(remove)
            except CleanupError as e:
                failed = True
                logger.error(
                    str(e),
                    exc_info=e.cause,
                    extra={"request_id": self.request_id, "path": e.path},
                )
        if not failed:
            logger.info("Cleanup completed", extra={"request_id": self.request_id})

    def _remove_input(self) -> None:
        try:
            self.input_file.unlink(missing_ok=True)
        except OSError as e:
            raise CleanupError(str(self.input_file), e) from e

    def _remove_directory(self) -> None:
        try:
            shutil.rmtree(self.directory)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise CleanupError(str(self.directory), e) from e
