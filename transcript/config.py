"""Configuration loading and management."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from dotenv import load_dotenv

from transcript.exceptions import ConfigError

if TYPE_CHECKING:
    from transcript.core.pipeline import PipelineConfig

load_dotenv()

# 23 minutes keeps each upload under the OpenAI per-request audio limit.
MAX_AUDIO_DURATION = 1380.0

OPENAI_TRANSCRIPTION_URL = "https://api.openai.com/v1/audio/transcriptions"
OPENAI_API_KEY_URL = "https://platform.openai.com/api-keys"
ENV_OPENAI_API_KEY = "OPENAI_API_KEY"

DEFAULT_TRANSCRIPTION_MODEL = "gpt-4o-transcribe-diarize"


@dataclass(frozen=True)
class ModelConfig:
    name: str
    provider: str
    supports_diarization: bool
    response_format: str
    description: str = ""


MODELS: dict[str, ModelConfig] = {
    "whisper-1": ModelConfig(
        name="whisper-1",
        provider="openai",
        supports_diarization=False,
        response_format="verbose_json",
        description="Word-level timestamps, no speakers.",
    ),
    "gpt-4o-transcribe": ModelConfig(
        name="gpt-4o-transcribe",
        provider="openai",
        supports_diarization=False,
        response_format="json",
        description="Plain text only, one cue per chunk.",
    ),
    "gpt-4o-transcribe-diarize": ModelConfig(
        name="gpt-4o-transcribe-diarize",
        provider="openai",
        supports_diarization=True,
        response_format="diarized_json",
        description="Timed segments with speaker labels.",
    ),
    "small": ModelConfig(
        name="small",
        provider="local",
        supports_diarization=False,
        response_format="segments",
        description="Local faster-whisper, good balance of speed and quality.",
    ),
    "medium": ModelConfig(
        name="medium",
        provider="local",
        supports_diarization=False,
        response_format="segments",
        description="Local faster-whisper, high quality, slower.",
    ),
    "large-v3": ModelConfig(
        name="large-v3",
        provider="local",
        supports_diarization=False,
        response_format="segments",
        description="Local faster-whisper, best quality, requires good GPU.",
    ),
    "large-v3-turbo": ModelConfig(
        name="large-v3-turbo",
        provider="local",
        supports_diarization=False,
        response_format="segments",
        description="Local faster-whisper, fast large model variant.",
    ),
}


def get_model_config(name: str) -> ModelConfig:
    try:
        return MODELS[name]
    except KeyError:
        raise ConfigError(
            f"Unknown model {name!r}. Available: {', '.join(MODELS)}"
        ) from None


@dataclass
class TranscriptConfig:
    model: str = DEFAULT_TRANSCRIPTION_MODEL
    language: str | None = None
    format: str = "vtt"
    output_dir: str = "."
    max_chunk_duration: float = MAX_AUDIO_DURATION
    concurrency: int = 1
    api_key: str | None = None
    api_url: str = OPENAI_TRANSCRIPTION_URL
    request_timeout: float | None = None
    connect_timeout: float = 30.0
    max_retries: int = 3
    backoff_base: float = 1.0
    device: str = "cpu"
    compute_type: str = "int8"
    model_dir: str = "models"
    word_timestamps: bool = False

    def with_overrides(self, **kwargs: Any) -> TranscriptConfig:
        return replace(self, **kwargs)


def _apply_env_overrides(config: TranscriptConfig) -> TranscriptConfig:
    overrides: dict[str, Any] = {}
    api_key = os.environ.get(ENV_OPENAI_API_KEY)
    if api_key:
        overrides["api_key"] = api_key
    model_dir = os.environ.get("TRANSCRIPT_MODEL_DIR")
    if model_dir:
        overrides["model_dir"] = model_dir
    if overrides:
        return replace(config, **overrides)
    return config


def load_config(path: Path | None = None) -> TranscriptConfig:
    if path is None:
        env_path = os.environ.get("TRANSCRIPT_CONFIG")
        if env_path:
            path = Path(env_path)

    if path is None:
        cwd_config = Path("config.yaml")
        if cwd_config.exists():
            path = cwd_config

    if path is None or not path.exists():
        return _apply_env_overrides(TranscriptConfig())

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    http = data.pop("http", None)
    local = data.pop("local", None)
    kwargs: dict[str, Any] = {}

    for key in (
        "model",
        "language",
        "format",
        "output_dir",
        "max_chunk_duration",
        "concurrency",
    ):
        if key in data:
            kwargs[key] = data[key]

    if isinstance(http, dict):
        if "url" in http:
            kwargs["api_url"] = http["url"]
        if "timeout" in http:
            kwargs["request_timeout"] = http["timeout"]
        for key in ("connect_timeout", "max_retries", "backoff_base"):
            if key in http:
                kwargs[key] = http[key]

    if isinstance(local, dict):
        for key in ("device", "compute_type", "model_dir", "word_timestamps"):
            if key in local:
                kwargs[key] = local[key]

    return _apply_env_overrides(TranscriptConfig(**kwargs))


def resolve_config(
    config: TranscriptConfig,
    *,
    model: str | None = None,
    language: str | None = None,
    format: str | None = None,
    output_dir: str | None = None,
    max_chunk_duration: float | None = None,
    concurrency: int | None = None,
    device: str | None = None,
    compute_type: str | None = None,
    model_dir: str | None = None,
) -> TranscriptConfig:
    """Resolve config priority: CLI args > YAML > defaults."""
    overrides: dict[str, Any] = {}
    if model is not None:
        overrides["model"] = model
    if language is not None:
        overrides["language"] = language
    if format is not None:
        overrides["format"] = format
    if output_dir is not None:
        overrides["output_dir"] = output_dir
    if max_chunk_duration is not None:
        overrides["max_chunk_duration"] = max_chunk_duration
    if concurrency is not None:
        overrides["concurrency"] = concurrency
    if device is not None:
        overrides["device"] = device
    if compute_type is not None:
        overrides["compute_type"] = compute_type
    if model_dir is not None:
        overrides["model_dir"] = model_dir
    if overrides:
        return config.with_overrides(**overrides)
    return config


def build_pipeline_config(config: TranscriptConfig) -> PipelineConfig:
    """Convert TranscriptConfig to PipelineConfig.

    Raises ConfigError for an unknown model or a missing API key when the
    model is served by OpenAI.
    """
    from transcript.core.openai_client import HttpConfig
    from transcript.core.pipeline import PipelineConfig
    from transcript.core.transcriber import TranscriberConfig

    model = get_model_config(config.model)
    if model.provider == "openai" and not config.api_key:
        raise ConfigError(
            f"{ENV_OPENAI_API_KEY} environment variable is not set. "
            f"Get your API key at: {OPENAI_API_KEY_URL}"
        )

    return PipelineConfig(
        model=model,
        language=config.language,
        formats=config.format,
        output_dir=config.output_dir,
        max_chunk_duration=config.max_chunk_duration,
        concurrency=config.concurrency,
        api_key=config.api_key,
        http=HttpConfig(
            url=config.api_url,
            timeout=config.request_timeout,
            connect_timeout=config.connect_timeout,
            max_retries=config.max_retries,
            backoff_base=config.backoff_base,
        ),
        local=TranscriberConfig(
            model_size=config.model,
            device=config.device,
            compute_type=config.compute_type,
            model_dir=config.model_dir,
            language=config.language,
            word_timestamps=config.word_timestamps,
        ),
    )
