"""Media transcription to WebVTT subtitles."""

__version__ = "1.0.0"
