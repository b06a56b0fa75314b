"""Chunks command: show how a recording would be split."""

from __future__ import annotations

from typing import Annotated

import typer

from transcript.config import MAX_AUDIO_DURATION
from transcript.core.chunking import plan_chunks
from transcript.core.timestamps import format_timestamp


def chunks_cmd(
    duration: Annotated[
        float,
        typer.Argument(help="Total duration in seconds."),
    ],
    max_chunk: Annotated[
        float,
        typer.Option("--max-chunk", help="Maximum chunk length in seconds."),
    ] = MAX_AUDIO_DURATION,
) -> None:
    """Print the chunk plan for a recording of the given duration."""
    plans = plan_chunks(duration, max_chunk)
    typer.echo(f"{'#':<4} {'Offset':<14} {'Duration':<14}")
    typer.echo("-" * 32)
    for i, plan in enumerate(plans, start=1):
        typer.echo(
            f"{i:<4} {format_timestamp(plan.offset):<14} "
            f"{format_timestamp(plan.duration):<14}"
        )
    typer.echo(f"{len(plans)} chunk(s)")
