"""Convert command: timestamped plain-text transcript to WebVTT."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from transcript.core.adapters import parse_timestamped_text
from transcript.core.vtt import serialize_vtt
from transcript.exit_codes import ExitCode


def convert_cmd(
    input_file: Annotated[
        Path,
        typer.Argument(help="Text transcript with [HH:MM:SS] marks."),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file. Prints to stdout if omitted."),
    ] = None,
) -> None:
    """Convert a ``[HH:MM:SS] Speaker: text`` transcript into WebVTT."""
    try:
        content = input_file.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Error: cannot read {input_file}: {e}", err=True)
        raise typer.Exit(code=ExitCode.ERROR_FILE) from None

    cues = parse_timestamped_text(content)
    cues.sort(key=lambda cue: cue.start)
    document = serialize_vtt(cues)

    if output is None:
        typer.echo(document, nl=False)
    else:
        output.write_text(document, encoding="utf-8")
