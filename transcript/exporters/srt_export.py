"""SRT exporter for transcription results."""

from __future__ import annotations

from typing import IO

from transcript.core.timestamps import format_timestamp
from transcript.data_models import TranscriptResult


def _format_srt_timestamp(seconds: float) -> str:
    """Format seconds as HH:MM:SS,mmm for SRT."""
    return format_timestamp(seconds).replace(".", ",")


def export_srt(result: TranscriptResult, output: IO[str]) -> None:
    """Write transcription result as SRT subtitles to the given output stream."""
    entries = []
    for i, cue in enumerate(result.cues, start=1):
        start_ts = _format_srt_timestamp(cue.start)
        end_ts = _format_srt_timestamp(cue.end)
        if cue.speaker is not None:
            text = f"[{cue.speaker}] {cue.text}"
        else:
            text = cue.text
        entries.append(f"{i}\n{start_ts} --> {end_ts}\n{text}")
    output.write("\n\n".join(entries) + "\n")
