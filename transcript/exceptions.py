"""Custom exceptions for the transcript toolkit."""


class AudioValidationError(Exception):
    """Raised when an input media file is missing, empty or unsupported."""


class AudioPreprocessError(Exception):
    """Raised when ffmpeg/ffprobe cannot extract, probe or split audio."""


class ConfigError(Exception):
    """Raised when required configuration (API key, model) is missing or invalid."""


class GpuError(Exception):
    """Raised when GPU is unavailable for the local transcriber."""


class ModelError(Exception):
    """Raised when model loading or inference fails."""


class TranscriptionError(Exception):
    """Raised when a chunk cannot be transcribed."""


class ProviderError(TranscriptionError):
    """Raised when the transcription service answers with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"Transcription API failed ({status_code}): {message}")
