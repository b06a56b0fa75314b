"""WebVTT parsing, serialization and merging of chunk transcripts."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

from transcript.core.timestamps import format_timestamp, parse_timestamp
from transcript.data_models import Cue, VttChunk

WEBVTT_HEADER = "WEBVTT"
TIMING_DELIMITER = "-->"

_SPEAKER_RE = re.compile(r"^<v\s+([^>]+)>(.*)")


class LineKind(Enum):
    TIMING = "timing"
    SPEAKER_TEXT = "speaker_text"
    TEXT = "text"
    BLANK = "blank"


@dataclass(frozen=True)
class Line:
    kind: LineKind
    raw: str = ""
    text: str = ""
    speaker: str | None = None
    start: str = ""
    end: str = ""


def classify_line(raw: str) -> Line:
    """Recognize what a single document line is."""
    stripped = raw.strip()
    if not stripped:
        return Line(LineKind.BLANK)
    # A leading <v> tag wins over the arrow, so voiced text may contain it.
    match = _SPEAKER_RE.match(stripped)
    if match:
        return Line(
            LineKind.SPEAKER_TEXT,
            raw=stripped,
            text=match.group(2).strip(),
            speaker=match.group(1).strip(),
        )
    if TIMING_DELIMITER in stripped:
        left, _, right = stripped.partition(TIMING_DELIMITER)
        # Cue settings (align:start, line:0 ...) may follow the end time.
        end_fields = right.split()
        return Line(
            LineKind.TIMING,
            raw=stripped,
            text=stripped,
            start=left.strip(),
            end=end_fields[0] if end_fields else "",
        )
    return Line(LineKind.TEXT, raw=stripped, text=stripped)


@dataclass
class _PendingCue:
    start: float
    end: float
    speaker: str | None = None
    lines_seen: int = 0
    text_lines: list[str] = field(default_factory=list)

    def add(self, text: str) -> None:
        self.lines_seen += 1
        if text:
            self.text_lines.append(text)

    def to_cue(self) -> Cue | None:
        if not self.text_lines:
            return None
        return Cue(
            start=self.start,
            end=self.end,
            text=" ".join(self.text_lines),
            speaker=self.speaker,
        )


def parse_vtt(content: str) -> list[Cue]:
    """Parse a WebVTT document into cues, in source order.

    Anything before the first timing line is ignored, as are cue
    identifiers and NOTE blocks between cues. A cue's text runs until the
    next blank line and is flattened into one space-joined line. Only the
    first text line may carry a ``<v NAME>`` speaker tag; tags on later
    lines are kept as text. Cues without any text are dropped.
    """
    cues: list[Cue] = []
    pending: _PendingCue | None = None

    for raw in content.splitlines():
        line = classify_line(raw)

        if pending is None:
            if line.kind is LineKind.TIMING:
                pending = _PendingCue(
                    start=parse_timestamp(line.start),
                    end=parse_timestamp(line.end),
                )
            continue

        if line.kind is LineKind.BLANK:
            cue = pending.to_cue()
            if cue is not None:
                cues.append(cue)
            pending = None
        elif line.kind is LineKind.SPEAKER_TEXT and pending.lines_seen == 0:
            pending.speaker = line.speaker
            pending.add(line.text)
        else:
            pending.add(line.raw)

    if pending is not None:
        cue = pending.to_cue()
        if cue is not None:
            cues.append(cue)

    return cues


def serialize_vtt(cues: Iterable[Cue]) -> str:
    """Render cues as a WebVTT document in the order given.

    Text is written verbatim. A cue without a speaker whose text itself
    starts with a ``<v NAME>`` tag reads back with that speaker.
    """
    parts = [f"{WEBVTT_HEADER}\n\n"]
    for cue in cues:
        start = format_timestamp(cue.start)
        end = format_timestamp(cue.end)
        parts.append(f"{start} {TIMING_DELIMITER} {end}\n")
        if cue.speaker:
            parts.append(f"<v {cue.speaker}>{cue.text}\n\n")
        else:
            parts.append(f"{cue.text}\n\n")
    return "".join(parts)


def offset_cues(cues: Iterable[Cue], offset: float) -> list[Cue]:
    """Return copies of ``cues`` moved ``offset`` seconds later."""
    return [
        replace(cue, start=cue.start + offset, end=cue.end + offset)
        for cue in cues
    ]


def merge_cues(chunks: Iterable[tuple[Sequence[Cue], float]]) -> list[Cue]:
    """Re-anchor per-chunk cues onto one timeline, ordered by start.

    The sort is stable: cues with equal start keep their input order.
    """
    merged: list[Cue] = []
    for cues, offset in chunks:
        merged.extend(offset_cues(cues, offset))
    merged.sort(key=lambda cue: cue.start)
    return merged


def merge_vtt(chunks: Iterable[VttChunk]) -> str:
    """Merge several WebVTT documents, each shifted by its own offset."""
    return serialize_vtt(
        merge_cues((parse_vtt(chunk.vtt), chunk.offset) for chunk in chunks)
    )
