"""Local faster-whisper transcription provider."""

from __future__ import annotations

import gc
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import torch
from faster_whisper import WhisperModel

from transcript.core.adapters import (
    ProviderTranscript,
    SegmentTranscript,
    WordTranscript,
)
from transcript.data_models import AudioChunk, TranscriptionSegment, TranscriptionWord
from transcript.exceptions import GpuError, ModelError, TranscriptionError

logger = logging.getLogger(__name__)


@dataclass
class TranscriberConfig:
    model_size: str = "large-v3"
    device: str = "cpu"
    compute_type: str = "int8"
    model_dir: str | None = None
    language: str | None = None
    vad_filter: bool = True
    word_timestamps: bool = False


class LocalTranscriber:
    def __init__(self, config: TranscriberConfig) -> None:
        self._config = config
        self._model: WhisperModel | None = None

    def load_model(self) -> None:
        if self._config.device == "cuda" and not torch.cuda.is_available():
            raise GpuError("CUDA is not available")
        try:
            kwargs: dict[str, Any] = {
                "device": self._config.device,
                "compute_type": self._config.compute_type,
            }
            if self._config.model_dir is not None:
                kwargs["download_root"] = str(
                    Path(self._config.model_dir).expanduser().resolve()
                )
            self._model = WhisperModel(self._config.model_size, **kwargs)
        except Exception as e:
            raise ModelError(f"Failed to load model: {e}") from e
        logger.info("Loaded faster-whisper model %s", self._config.model_size)

    def unload_model(self) -> None:
        self._model = None
        gc.collect()
        if torch.cuda.is_available():
            torch.cuda.empty_cache()

    def transcribe(self, chunk: AudioChunk) -> ProviderTranscript:
        if self._model is None:
            raise RuntimeError("Model not loaded. Call load_model() first.")
        try:
            segments_iter, _info = self._model.transcribe(
                str(chunk.file),
                language=self._config.language,
                vad_filter=self._config.vad_filter,
                vad_parameters={"min_silence_duration_ms": 500},
                word_timestamps=self._config.word_timestamps,
            )
            if self._config.word_timestamps:
                words = [
                    TranscriptionWord(word=w.word, start=w.start, end=w.end)
                    for seg in segments_iter
                    for w in (seg.words or [])
                ]
                return WordTranscript(words=words)
            segments = [
                TranscriptionSegment(start=seg.start, end=seg.end, text=seg.text)
                for seg in segments_iter
            ]
        except torch.cuda.OutOfMemoryError as e:
            raise GpuError(f"CUDA OOM during transcription: {e}") from e
        except RuntimeError as e:
            if "out of memory" in str(e).lower():
                raise GpuError(f"CUDA OOM during transcription: {e}") from e
            raise TranscriptionError(f"Transcription failed: {e}") from e
        return SegmentTranscript(segments=segments)
