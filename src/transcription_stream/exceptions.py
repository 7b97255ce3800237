"""Custom exceptions for the transcription service."""


class DurationUnavailableError(Exception):
    """Raised when the total duration of the source audio cannot be probed."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        super().__init__(f"Could not determine duration of '{file_name}'")


class SegmentExtractionError(Exception):
    """Raised when cutting a segment out of the source audio fails."""

    def __init__(self, start: float, end: float, cause: Exception | None = None):
        self.start = start
        self.end = end
        self.cause = cause
        super().__init__(f"Failed to extract segment [{start:g}, {end:g})")


class TranscriptionError(Exception):
    """Raised when transcribing a segment fails."""

    def __init__(self, segment_index: int, cause: Exception | None = None):
        self.segment_index = segment_index
        self.cause = cause
        message = f"Failed to transcribe segment {segment_index}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class CorrectionError(Exception):
    """Raised when correcting a segment's transcription fails."""

    def __init__(self, segment_index: int, cause: Exception | None = None):
        self.segment_index = segment_index
        self.cause = cause
        message = f"Failed to correct segment {segment_index}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class CleanupError(Exception):
    """Raised when removing a request's working files fails. Logged, never propagated."""

    def __init__(self, path: str, cause: Exception | None = None):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to clean up '{path}'")


class SpeechRecognitionError(Exception):
    """Raised when the speech recognition engine fails."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class TextCompletionError(Exception):
    """Raised when the text completion engine fails."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class EventPublishError(Exception):
    """Raised when publishing an event to the caller fails."""

    def __init__(self, event: str, cause: Exception | None = None):
        self.event = event
        self.cause = cause
        super().__init__(f"Failed to publish event '{event}'")
