"""Export dispatch for transcription results."""

from __future__ import annotations

from collections.abc import Callable
from io import StringIO
from pathlib import Path

from transcript.data_models import TranscriptResult
from transcript.exporters.json_export import export_json
from transcript.exporters.srt_export import export_srt
from transcript.exporters.txt_export import export_txt
from transcript.exporters.vtt_export import export_vtt

_EXPORTERS: dict[str, Callable[..., None]] = {
    "vtt": export_vtt,
    "json": export_json,
    "txt": export_txt,
    "srt": export_srt,
}


def export_transcript(
    result: TranscriptResult,
    formats: str,
    output_dir: Path | None = None,
) -> str | None:
    """Export transcription result in the specified formats.

    Without an output directory a single format is rendered and returned
    as text instead of being written.
    """
    format_list = [f.strip() for f in formats.split(",") if f.strip()]

    for fmt in format_list:
        if fmt not in _EXPORTERS:
            raise ValueError(f"Unknown export format: {fmt!r}")

    if output_dir is None and len(format_list) == 1:
        buf = StringIO()
        _EXPORTERS[format_list[0]](result, buf)
        return buf.getvalue()

    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        stem = Path(result.metadata.source_file).stem
        for fmt in format_list:
            out_path = output_dir / f"{stem}-transcript.{fmt}"
            with open(out_path, "w", encoding="utf-8") as f:
                _EXPORTERS[fmt](result, f)

    return None
