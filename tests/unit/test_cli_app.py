"""Tests for transcript.cli.app: top-level CLI wiring."""

from __future__ import annotations

from typer.testing import CliRunner

from transcript import __version__
from transcript.cli.app import app

runner = CliRunner()


class TestCliHelp:
    def test_help_shows_transcribe_command(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "transcribe" in result.output.lower()

    def test_help_shows_models_command(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "models" in result.output.lower()

    def test_help_shows_subtitle_commands(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("merge", "convert", "chunks"):
            assert command in result.output.lower()


class TestCliVersion:
    def test_version_flag(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"transcript {__version__}" in result.output

    def test_version_short_flag(self) -> None:
        result = runner.invoke(app, ["-V"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output


class TestVerbose:
    def test_verbose_flag_accepted(self) -> None:
        result = runner.invoke(app, ["-vv", "chunks", "10"])
        assert result.exit_code == 0
        assert "1 chunk(s)" in result.output


class TestTranscribeHelp:
    def test_transcribe_help_shows_options(self) -> None:
        result = runner.invoke(app, ["transcribe", "--help"])
        assert result.exit_code == 0
        assert "audio" in result.output.lower()

    def test_transcribe_help_shows_model_option(self) -> None:
        result = runner.invoke(app, ["transcribe", "--help"])
        assert result.exit_code == 0
        assert "--model" in result.output

    def test_transcribe_help_shows_chunk_options(self) -> None:
        result = runner.invoke(app, ["transcribe", "--help"])
        assert result.exit_code == 0
        assert "--max-chunk" in result.output
        assert "--concurrency" in result.output
