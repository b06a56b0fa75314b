"""Transcribe command for the transcript CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from transcript.config import build_pipeline_config, load_config, resolve_config
from transcript.core.audio import validate_input_file
from transcript.core.pipeline import TranscriptionPipeline
from transcript.exceptions import (
    AudioPreprocessError,
    AudioValidationError,
    ConfigError,
    GpuError,
    ModelError,
    ProviderError,
    TranscriptionError,
)
from transcript.exit_codes import ExitCode


def transcribe_cmd(
    input_file: Annotated[
        Path, typer.Argument(help="Path to the audio or video file."),
    ],
    model: Annotated[
        str | None,
        typer.Option("--model", "-m", help="Transcription model."),
    ] = None,
    language: Annotated[
        str | None,
        typer.Option("--language", "-l", help="Language code (e.g. en, es, ru)."),
    ] = None,
    format: Annotated[
        str | None,
        typer.Option(
            "--format", "-f",
            help="Output format(s): vtt,json,txt,srt.",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output directory."),
    ] = None,
    max_chunk: Annotated[
        float | None,
        typer.Option(
            "--max-chunk",
            help="Maximum chunk length in seconds.",
        ),
    ] = None,
    concurrency: Annotated[
        int | None,
        typer.Option(
            "--concurrency", "-j",
            help="Number of chunks transcribed in parallel.",
        ),
    ] = None,
    device: Annotated[
        str | None,
        typer.Option("--device", help="Device for local models: cuda or cpu."),
    ] = None,
    compute_type: Annotated[
        str | None,
        typer.Option("--compute-type", help="Compute type for local models."),
    ] = None,
    model_dir: Annotated[
        str | None,
        typer.Option(
            "--model-dir",
            help="Directory for local model storage.",
        ),
    ] = None,
) -> None:
    """Transcribe a single audio or video file."""
    try:
        validate_input_file(input_file)
    except AudioValidationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=ExitCode.ERROR_FILE) from None

    if max_chunk is not None and max_chunk <= 0:
        typer.echo("Error: --max-chunk must be positive.", err=True)
        raise typer.Exit(code=ExitCode.ERROR_ARGS)

    # Load YAML config, resolve CLI overrides, build pipeline config
    transcript_config = resolve_config(
        load_config(),
        model=model,
        language=language,
        format=format,
        output_dir=str(output) if output is not None else None,
        max_chunk_duration=max_chunk,
        concurrency=concurrency,
        device=device,
        compute_type=compute_type,
        model_dir=model_dir,
    )
    try:
        config = build_pipeline_config(transcript_config)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=ExitCode.ERROR_CONFIG) from None

    try:
        pipeline = TranscriptionPipeline(config)
        result = pipeline.run(str(input_file))
    except AudioPreprocessError as e:
        typer.echo(f"Audio preprocessing error: {e}", err=True)
        raise typer.Exit(code=ExitCode.ERROR_FILE) from None
    except GpuError as e:
        typer.echo(f"GPU error: {e}", err=True)
        raise typer.Exit(code=ExitCode.ERROR_GPU) from None
    except ModelError as e:
        typer.echo(f"Model error: {e}", err=True)
        raise typer.Exit(code=ExitCode.ERROR_MODEL) from None
    except (ProviderError, TranscriptionError) as e:
        typer.echo(f"Transcription error: {e}", err=True)
        raise typer.Exit(code=ExitCode.ERROR_API) from None
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=ExitCode.ERROR_GENERAL) from None

    typer.echo(
        f"Transcribed {input_file.name}: {len(result.cues)} cues "
        f"from {result.metadata.num_chunks} chunk(s).",
        err=True,
    )
