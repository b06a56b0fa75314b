"""Transcription pipeline orchestrator."""

from __future__ import annotations

import logging
import tempfile
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from transcript.config import (
    DEFAULT_TRANSCRIPTION_MODEL,
    MAX_AUDIO_DURATION,
    ModelConfig,
    get_model_config,
)
from transcript.core.adapters import ProviderTranscript, to_cues
from transcript.core.audio import (
    extract_audio,
    get_audio_duration,
    is_audio_file,
    split_audio,
    validate_input_file,
)
from transcript.core.openai_client import HttpConfig, OpenAITranscriber
from transcript.core.transcriber import LocalTranscriber, TranscriberConfig
from transcript.core.vtt import merge_cues
from transcript.data_models import AudioChunk, Cue, TranscriptMetadata, TranscriptResult
from transcript.exceptions import ConfigError
from transcript.exporters import export_transcript

logger = logging.getLogger(__name__)


class TranscriptionProvider(Protocol):
    def transcribe(self, chunk: AudioChunk) -> ProviderTranscript: ...


@dataclass
class PipelineConfig:
    model: ModelConfig = field(
        default_factory=lambda: get_model_config(DEFAULT_TRANSCRIPTION_MODEL)
    )
    language: str | None = None
    formats: str = "vtt"
    output_dir: str = "."
    max_chunk_duration: float = MAX_AUDIO_DURATION
    concurrency: int = 1
    api_key: str | None = None
    http: HttpConfig = field(default_factory=HttpConfig)
    local: TranscriberConfig = field(default_factory=TranscriberConfig)


class TranscriptionPipeline:
    def __init__(
        self,
        config: PipelineConfig,
        provider: TranscriptionProvider | None = None,
    ) -> None:
        self._config = config
        self._provider = provider

    def _build_provider(self) -> TranscriptionProvider:
        if self._config.model.provider == "local":
            return LocalTranscriber(self._config.local)
        if not self._config.api_key:
            raise ConfigError("An API key is required for OpenAI models.")
        return OpenAITranscriber(
            api_key=self._config.api_key,
            model=self._config.model,
            language=self._config.language,
            http=self._config.http,
        )

    def transcribe_chunks(self, chunks: list[AudioChunk]) -> list[Cue]:
        """Transcribe every chunk and merge the results onto one timeline.

        Chunks may finish in any order; results are merged by chunk index
        and offset, so the output does not depend on completion order.
        """
        provider = self._provider or self._build_provider()
        local = provider if isinstance(provider, LocalTranscriber) else None
        results: list[list[Cue]] = [[] for _ in chunks]

        if local is not None:
            local.load_model()
        try:
            workers = min(max(self._config.concurrency, 1), len(chunks))
            if workers > 1:
                with ThreadPoolExecutor(max_workers=workers) as pool:
                    futures = {
                        pool.submit(provider.transcribe, chunk): i
                        for i, chunk in enumerate(chunks)
                    }
                    for future in as_completed(futures):
                        i = futures[future]
                        results[i] = to_cues(future.result())
                        logger.info(
                            "Transcribed chunk %d/%d (%d cues)",
                            i + 1, len(chunks), len(results[i]),
                        )
            else:
                for i, chunk in enumerate(chunks):
                    logger.info("Transcribing chunk %d/%d...", i + 1, len(chunks))
                    results[i] = to_cues(provider.transcribe(chunk))
        finally:
            if local is not None:
                try:
                    local.unload_model()
                except Exception:
                    logger.exception("Failed to unload transcriber")

        return merge_cues(
            (cues, chunk.offset) for cues, chunk in zip(results, chunks)
        )

    def run(self, input_path: str, output_dir: str | None = None) -> TranscriptResult:
        start_time = time.monotonic()
        source = Path(input_path)

        # 1. Validate input
        validate_input_file(source)

        with tempfile.TemporaryDirectory(prefix="transcript-") as tmp:
            work_dir = Path(tmp)

            # 2. Extract audio track from video containers
            audio_file = source
            if not is_audio_file(source):
                audio_file = extract_audio(source, work_dir / f"{source.stem}-audio.wav")
                logger.info("Extracted audio to %s", audio_file)

            # 3. Probe duration and split into chunks
            duration = get_audio_duration(audio_file)
            logger.info(
                "Audio duration: %dm %ds", int(duration // 60), int(duration % 60),
            )
            chunks = split_audio(
                audio_file, duration, self._config.max_chunk_duration, work_dir,
            )
            logger.info("Created %d chunk(s)", len(chunks))

            # 4. Transcribe and merge
            t1 = time.monotonic()
            cues = self.transcribe_chunks(chunks)
            logger.info(
                "Transcription completed in %.1fs (%d cues)",
                time.monotonic() - t1, len(cues),
            )

        # 5. Build result
        elapsed = time.monotonic() - start_time
        metadata = TranscriptMetadata(
            source_file=input_path,
            duration_seconds=duration,
            model=self._config.model.name,
            language=self._config.language,
            num_chunks=len(chunks),
            processing_time_seconds=elapsed,
        )
        result = TranscriptResult(metadata=metadata, cues=cues)

        # 6. Export
        resolved_dir = output_dir if output_dir is not None else self._config.output_dir
        export_transcript(result, self._config.formats, Path(resolved_dir))

        return result
