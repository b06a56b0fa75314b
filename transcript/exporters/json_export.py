"""JSON exporter for transcription results."""

from __future__ import annotations

import json
from typing import IO

from transcript.data_models import TranscriptResult


def export_json(result: TranscriptResult, output: IO[str]) -> None:
    """Write transcription result as JSON to the given output stream."""
    meta = result.metadata
    metadata_dict = {
        "format_version": meta.format_version,
        "source_file": meta.source_file,
        "duration_seconds": meta.duration_seconds,
        "language": meta.language,
        "model": meta.model,
        "num_chunks": meta.num_chunks,
        "speakers": result.speakers,
        "processing_time_seconds": meta.processing_time_seconds,
        "created_at": meta.created_at.isoformat(),
    }

    cues_list = []
    for cue in result.cues:
        cue_dict: dict[str, object] = {
            "start": cue.start,
            "end": cue.end,
            "text": cue.text,
        }
        if cue.speaker is not None:
            cue_dict["speaker"] = cue.speaker
        cues_list.append(cue_dict)

    data = {
        "metadata": metadata_dict,
        "cues": cues_list,
        "full_text": result.full_text,
    }

    json.dump(data, output, indent=2, ensure_ascii=False)
