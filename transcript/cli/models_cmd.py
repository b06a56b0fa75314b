"""Models subcommands for the transcript CLI."""

from __future__ import annotations

import typer

from transcript.config import DEFAULT_TRANSCRIPTION_MODEL, MODELS
from transcript.exit_codes import ExitCode

models_app = typer.Typer(name="models", help="List transcription models.")


@models_app.command("list")
def list_models() -> None:
    """List available transcription models."""
    typer.echo(
        f"{'Model':<28} {'Provider':<10} {'Speakers':<10} Description"
    )
    typer.echo("-" * 80)
    for name, info in MODELS.items():
        marker = "*" if name == DEFAULT_TRANSCRIPTION_MODEL else " "
        speakers = "yes" if info.supports_diarization else "no"
        typer.echo(
            f"{name + marker:<28} {info.provider:<10} {speakers:<10} "
            f"{info.description}"
        )


@models_app.command("info")
def model_info(
    model: str = typer.Argument(..., help="Model name."),
) -> None:
    """Show details for a specific model."""
    if model not in MODELS:
        typer.echo(f"Error: Unknown model '{model}'.", err=True)
        raise typer.Exit(code=ExitCode.ERROR_MODEL)

    info = MODELS[model]
    typer.echo(f"Model:           {info.name}")
    typer.echo(f"Provider:        {info.provider}")
    typer.echo(f"Speakers:        {'yes' if info.supports_diarization else 'no'}")
    typer.echo(f"Response format: {info.response_format}")
    typer.echo(f"Description:     {info.description}")
