"""Tests for edge cases."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from transcript.cli.app import app
from transcript.config import TranscriptConfig
from transcript.core.vtt import merge_vtt, parse_vtt
from transcript.data_models import VttChunk
from transcript.exit_codes import ExitCode

runner = CliRunner()


class TestEmptyFile:
    def test_empty_file_exits_3(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.wav"
        empty.write_bytes(b"")
        result = runner.invoke(app, ["transcribe", str(empty)])
        assert result.exit_code == ExitCode.ERROR_FILE


class TestDirectoryInput:
    def test_directory_exits_3(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["transcribe", str(tmp_path)])
        assert result.exit_code == ExitCode.ERROR_FILE


class TestGpuOom:
    @patch("transcript.cli.transcribe.TranscriptionPipeline")
    @patch("transcript.cli.transcribe.load_config")
    def test_gpu_oom_exits_5(
        self, mock_load_config: MagicMock, mock_cls: MagicMock, tmp_path: Path,
    ) -> None:
        from transcript.exceptions import GpuError

        mock_load_config.return_value = TranscriptConfig(model="large-v3", device="cuda")
        audio = tmp_path / "test.wav"
        audio.write_bytes(b"\x00" * 100)
        mock_cls.return_value.run.side_effect = GpuError("CUDA OOM")

        result = runner.invoke(app, ["transcribe", str(audio)])
        assert result.exit_code == ExitCode.ERROR_GPU


class TestOddDocuments:
    def test_windows_line_endings(self) -> None:
        doc = "WEBVTT\r\n\r\n00:00:01.000 --> 00:00:02.000\r\n<v A>Hi\r\n\r\n"
        cues = parse_vtt(doc)
        assert len(cues) == 1
        assert cues[0].speaker == "A"
        assert cues[0].text == "Hi"

    def test_cue_without_trailing_blank_line(self) -> None:
        cues = parse_vtt("WEBVTT\n\n00:00:01.000 --> 00:00:02.000\nlast words")
        assert cues[0].text == "last words"

    def test_header_only_chunks_merge_to_empty_document(self) -> None:
        merged = merge_vtt([VttChunk("WEBVTT\n\n", 0.0), VttChunk("", 1380.0)])
        assert merged == "WEBVTT\n\n"

    def test_unicode_text_survives_merge(self) -> None:
        doc = "WEBVTT\n\n00:00:00.000 --> 00:00:01.000\n<v Аня>Привет, мир 👋\n\n"
        merged = merge_vtt([VttChunk(doc, 10.0)])
        assert "00:00:10.000 --> 00:00:11.000\n<v Аня>Привет, мир 👋\n" in merged
