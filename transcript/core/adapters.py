"""Normalization of transcription provider output into cues.

Providers answer in one of three shapes: timed segments (optionally with
speakers), timed words, or free text with embedded ``[HH:MM:SS]`` marks.
Each shape is a small dataclass; ``to_cues`` turns any of them into the
``Cue`` list the subtitle engine consumes, with chunk-local timestamps.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from transcript.core.timestamps import parse_timestamp
from transcript.data_models import Cue, TranscriptionSegment, TranscriptionWord

WORD_GROUP_SECONDS = 5.0
READING_RATE_WPS = 2.5
MIN_CUE_SECONDS = 1.0

_TEXT_TIMESTAMP_RE = re.compile(r"^\[(\d{1,2}:\d{2}(?::\d{2})?)\]\s*(.*)$")
# A label is one capitalized name, optionally followed by a second
# capitalized word or a number ("Alice", "Speaker A", "Speaker 2").
_TEXT_SPEAKER_RE = re.compile(r"^([A-Z][\w.'-]*(?: (?:[A-Z][\w.'-]*|\d+))?):\s+(.*)$")


@dataclass
class SegmentTranscript:
    segments: list[TranscriptionSegment]


@dataclass
class WordTranscript:
    words: list[TranscriptionWord]


@dataclass
class TextTranscript:
    text: str


ProviderTranscript = SegmentTranscript | WordTranscript | TextTranscript


def segments_to_cues(segments: list[TranscriptionSegment]) -> list[Cue]:
    cues: list[Cue] = []
    for seg in segments:
        text = seg.text.strip()
        if not text:
            continue
        cues.append(
            Cue(start=seg.start, end=seg.end, text=text, speaker=seg.speaker or None)
        )
    return cues


def _append_word(text: str, word: str) -> str:
    if not text or word[:1].isspace():
        return text + word
    return f"{text} {word}"


def group_words(
    words: list[TranscriptionWord],
    max_span: float = WORD_GROUP_SECONDS,
) -> list[Cue]:
    """Group word timings into cues of roughly ``max_span`` seconds.

    A word opens a new cue when it starts more than ``max_span`` seconds
    after the start of the cue being built.
    """
    cues: list[Cue] = []
    current: Cue | None = None
    for word in words:
        if current is None or word.start - current.start > max_span:
            if current is not None and current.text.strip():
                current.text = current.text.strip()
                cues.append(current)
            current = Cue(start=word.start, end=word.end, text=word.word)
        else:
            current.end = word.end
            current.text = _append_word(current.text, word.word)
    if current is not None and current.text.strip():
        current.text = current.text.strip()
        cues.append(current)
    return cues


def _split_speaker(text: str) -> tuple[str | None, str]:
    match = _TEXT_SPEAKER_RE.match(text)
    if match:
        return match.group(1), match.group(2).strip()
    return None, text


def parse_timestamped_text(
    text: str,
    reading_rate: float = READING_RATE_WPS,
) -> list[Cue]:
    """Extract cues from free text such as ``[00:01:15] Speaker A: Hi``.

    Lines without a leading timestamp continue the previous cue, or start
    a cue at 0 when nothing precedes them. Each cue ends where the next
    one starts; the last one gets a duration estimated from its word count.
    """
    starts: list[float] = []
    speakers: list[str | None] = []
    bodies: list[list[str]] = []

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        match = _TEXT_TIMESTAMP_RE.match(line)
        if match:
            speaker, body = _split_speaker(match.group(2).strip())
            starts.append(parse_timestamp(match.group(1)))
            speakers.append(speaker)
            bodies.append([body] if body else [])
        elif bodies:
            bodies[-1].append(line)
        else:
            speaker, body = _split_speaker(line)
            starts.append(0.0)
            speakers.append(speaker)
            bodies.append([body])

    cues: list[Cue] = []
    for i, start in enumerate(starts):
        body = " ".join(bodies[i])
        if i + 1 < len(starts):
            end = max(starts[i + 1], start)
        else:
            end = start + _estimate_duration(body, reading_rate)
        if body:
            cues.append(Cue(start=start, end=end, text=body, speaker=speakers[i]))
    return cues


def _estimate_duration(text: str, reading_rate: float) -> float:
    if reading_rate <= 0:
        return MIN_CUE_SECONDS
    return max(len(text.split()) / reading_rate, MIN_CUE_SECONDS)


def response_from_openai(payload: dict[str, Any]) -> ProviderTranscript:
    """Pick the richest shape present in an OpenAI transcription body."""
    segments = payload.get("segments") or []
    if segments:
        return SegmentTranscript(
            segments=[
                TranscriptionSegment(
                    start=float(seg["start"]),
                    end=float(seg["end"]),
                    text=seg.get("text", ""),
                    speaker=seg.get("speaker"),
                )
                for seg in segments
            ]
        )
    words = payload.get("words") or []
    if words:
        return WordTranscript(
            words=[
                TranscriptionWord(
                    word=w.get("word", ""),
                    start=float(w["start"]),
                    end=float(w["end"]),
                )
                for w in words
            ]
        )
    return TextTranscript(text=payload.get("text") or "")


def to_cues(transcript: ProviderTranscript) -> list[Cue]:
    if isinstance(transcript, SegmentTranscript):
        return segments_to_cues(transcript.segments)
    if isinstance(transcript, WordTranscript):
        return group_words(transcript.words)
    if isinstance(transcript, TextTranscript):
        return parse_timestamped_text(transcript.text)
    raise TypeError(f"Unsupported transcript type: {type(transcript).__name__}")
