"""Input validation and ffmpeg/ffprobe audio handling."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from transcript.core.chunking import plan_chunks
from transcript.data_models import AudioChunk
from transcript.exceptions import AudioPreprocessError, AudioValidationError

logger = logging.getLogger(__name__)

SUPPORTED_AUDIO_EXTENSIONS: set[str] = {".wav", ".mp3", ".m4a", ".ogg", ".flac", ".aac"}

_FFMPEG_TIMEOUT = 600


def is_audio_file(path: Path | str) -> bool:
    return Path(path).suffix.lower() in SUPPORTED_AUDIO_EXTENSIONS


def validate_input_file(path: Path) -> None:
    if not path.exists():
        raise AudioValidationError(f"File not found: {path}")

    if not path.is_file():
        raise AudioValidationError(f"Not a file: {path}")

    if path.stat().st_size == 0:
        raise AudioValidationError(f"File is empty: {path}")


def _run(cmd: list[str], what: str) -> subprocess.CompletedProcess[str]:
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=_FFMPEG_TIMEOUT,
            check=False,
        )
    except FileNotFoundError:
        raise AudioPreprocessError(
            f"{cmd[0]} not found. Install ffmpeg to process media files."
        ) from None
    except subprocess.TimeoutExpired:
        raise AudioPreprocessError(
            f"{cmd[0]} timed out after {_FFMPEG_TIMEOUT}s while {what}"
        ) from None
    if result.returncode != 0:
        raise AudioPreprocessError(
            f"{cmd[0]} failed while {what}: {result.stderr.strip()[-500:]}"
        )
    return result


def extract_audio(source: Path, target: Path) -> Path:
    """Extract the audio track of ``source`` as WAV 16kHz mono PCM_S16LE."""
    _run(
        [
            "ffmpeg",
            "-i", str(source),
            "-vn",
            "-acodec", "pcm_s16le",
            "-ar", "16000",
            "-ac", "1",
            "-y",
            str(target),
        ],
        f"extracting audio from {source.name}",
    )
    if not target.exists() or target.stat().st_size == 0:
        raise AudioPreprocessError(
            f"ffmpeg produced no audio for {source.name}."
        )
    return target


def get_audio_duration(path: Path) -> float:
    result = _run(
        [
            "ffprobe",
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            str(path),
        ],
        f"probing {path.name}",
    )
    output = result.stdout.strip()
    try:
        return float(output)
    except ValueError:
        raise AudioPreprocessError(
            f"ffprobe returned no duration for {path.name}: {output!r}"
        ) from None


def split_audio(
    audio_file: Path,
    total_duration: float,
    max_chunk_duration: float,
    work_dir: Path,
) -> list[AudioChunk]:
    """Cut ``audio_file`` into planned chunks encoded as Ogg/Opus.

    A recording that fits in one chunk is returned as-is without
    re-encoding. The last chunk is cut to end of file.
    """
    plans = plan_chunks(total_duration, max_chunk_duration)
    if len(plans) <= 1:
        return [
            AudioChunk(file=audio_file, offset=p.offset, duration=p.duration)
            for p in plans
        ]

    chunks: list[AudioChunk] = []
    for i, plan in enumerate(plans):
        chunk_file = work_dir / f"chunk_{i + 1:02d}.ogg"
        cmd = ["ffmpeg", "-i", str(audio_file), "-ss", f"{plan.offset:.3f}"]
        if i < len(plans) - 1:
            cmd += ["-t", f"{plan.duration:.3f}"]
        # 32 kbps mono Opus, 16 kHz.
        cmd += [
            "-c:a", "libopus",
            "-b:a", "32k",
            "-ar", "16000",
            "-ac", "1",
            "-y",
            str(chunk_file),
        ]
        _run(cmd, f"writing chunk {i + 1}/{len(plans)}")
        logger.debug(
            "Chunk %d: offset=%.3fs duration=%.3fs -> %s",
            i + 1, plan.offset, plan.duration, chunk_file,
        )
        chunks.append(
            AudioChunk(file=chunk_file, offset=plan.offset, duration=plan.duration)
        )
    return chunks
