"""Data models for cues, audio chunks and transcription results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path


@dataclass
class Cue:
    """One timed subtitle entry.

    ``end >= start`` is not enforced: parsed documents are passed through
    as-is, producers are expected to emit well-formed cues.
    """

    start: float
    end: float
    text: str
    speaker: str | None = None


@dataclass
class ChunkPlan:
    offset: float
    duration: float


@dataclass
class AudioChunk:
    """A planned slice of the recording together with the media that holds it."""

    file: Path
    offset: float
    duration: float


@dataclass
class VttChunk:
    vtt: str
    offset: float


@dataclass
class TranscriptionSegment:
    start: float
    end: float
    text: str
    speaker: str | None = None


@dataclass
class TranscriptionWord:
    word: str
    start: float
    end: float


@dataclass
class TranscriptMetadata:
    source_file: str
    duration_seconds: float
    model: str = "gpt-4o-transcribe-diarize"
    language: str | None = None
    format_version: str = "1.0"
    num_chunks: int = 0
    processing_time_seconds: float = 0.0
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass
class TranscriptResult:
    metadata: TranscriptMetadata
    cues: list[Cue]

    @property
    def full_text(self) -> str:
        return " ".join(c.text for c in self.cues)

    @property
    def speakers(self) -> list[str]:
        seen: list[str] = []
        for cue in self.cues:
            if cue.speaker and cue.speaker not in seen:
                seen.append(cue.speaker)
        return seen
