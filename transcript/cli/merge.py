"""Merge command: stitch chunk-local WebVTT files into one document."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from transcript.core.vtt import merge_vtt
from transcript.data_models import VttChunk
from transcript.exit_codes import ExitCode


def merge_cmd(
    files: Annotated[
        list[Path],
        typer.Argument(help="WebVTT files, one per chunk."),
    ],
    offset: Annotated[
        list[float] | None,
        typer.Option(
            "--offset",
            help="Offset in seconds for each file, in the same order. Defaults to 0.",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file. Prints to stdout if omitted."),
    ] = None,
) -> None:
    """Merge WebVTT files, shifting each by its offset and ordering by start."""
    offsets = offset or []
    if offsets and len(offsets) != len(files):
        typer.echo(
            f"Error: got {len(offsets)} offset(s) for {len(files)} file(s).",
            err=True,
        )
        raise typer.Exit(code=ExitCode.ERROR_ARGS)

    chunks: list[VttChunk] = []
    for i, path in enumerate(files):
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            typer.echo(f"Error: cannot read {path}: {e}", err=True)
            raise typer.Exit(code=ExitCode.ERROR_FILE) from None
        chunks.append(VttChunk(vtt=content, offset=offsets[i] if offsets else 0.0))

    try:
        merged = merge_vtt(chunks)
    except ValueError as e:
        typer.echo(f"Error: malformed timestamp: {e}", err=True)
        raise typer.Exit(code=ExitCode.ERROR_FILE) from None

    if output is None:
        typer.echo(merged, nl=False)
    else:
        output.write_text(merged, encoding="utf-8")
