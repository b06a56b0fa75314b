"""Main CLI application."""

from __future__ import annotations

import logging

import typer

from transcript import __version__
from transcript.cli.chunks import chunks_cmd
from transcript.cli.convert import convert_cmd
from transcript.cli.merge import merge_cmd
from transcript.cli.models_cmd import models_app
from transcript.cli.transcribe import transcribe_cmd

app = typer.Typer(
    name="transcript",
    help="Transcribe audio and video into WebVTT subtitles.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"transcript {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase log output (-v info, -vv debug).",
    ),
) -> None:
    """Transcribe audio and video into WebVTT subtitles."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


app.command("transcribe")(transcribe_cmd)
app.command("merge")(merge_cmd)
app.command("convert")(convert_cmd)
app.command("chunks")(chunks_cmd)
app.add_typer(models_app)
