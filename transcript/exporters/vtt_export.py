"""WebVTT exporter for transcription results."""

from __future__ import annotations

from typing import IO

from transcript.core.vtt import serialize_vtt
from transcript.data_models import TranscriptResult


def export_vtt(result: TranscriptResult, output: IO[str]) -> None:
    """Write transcription result as a WebVTT document to the given output stream."""
    output.write(serialize_vtt(result.cues))
