"""Tests for transcript.core.transcriber: local faster-whisper provider."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from transcript.core.adapters import SegmentTranscript, WordTranscript
from transcript.core.transcriber import LocalTranscriber, TranscriberConfig
from transcript.data_models import AudioChunk
from transcript.exceptions import GpuError, ModelError, TranscriptionError

CHUNK = AudioChunk(file=Path("/fake/chunk_01.ogg"), offset=0.0, duration=10.0)


def _segment(start: float, end: float, text: str, words: list | None = None) -> MagicMock:
    seg = MagicMock()
    seg.start = start
    seg.end = end
    seg.text = text
    seg.words = words
    return seg


def _word(word: str, start: float, end: float) -> MagicMock:
    w = MagicMock()
    w.word = word
    w.start = start
    w.end = end
    return w


def _loaded(mock_torch: MagicMock, mock_whisper_cls: MagicMock, segments: list, **kwargs) -> LocalTranscriber:
    mock_torch.cuda.is_available.return_value = False
    mock_torch.cuda.OutOfMemoryError = type("OutOfMemoryError", (Exception,), {})
    mock_model = MagicMock()
    mock_model.transcribe.return_value = (iter(segments), MagicMock())
    mock_whisper_cls.return_value = mock_model
    t = LocalTranscriber(TranscriberConfig(model_size="small", **kwargs))
    t.load_model()
    return t


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

class TestLocalTranscriberLifecycle:
    def test_transcribe_without_load_raises(self) -> None:
        t = LocalTranscriber(TranscriberConfig())
        with pytest.raises(RuntimeError):
            t.transcribe(CHUNK)

    @patch("transcript.core.transcriber.WhisperModel")
    @patch("transcript.core.transcriber.torch")
    def test_load_passes_device_and_compute_type(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock,
    ) -> None:
        mock_torch.cuda.is_available.return_value = True
        t = LocalTranscriber(
            TranscriberConfig(model_size="large-v3", device="cuda", compute_type="float16")
        )
        t.load_model()
        mock_whisper_cls.assert_called_once_with(
            "large-v3", device="cuda", compute_type="float16",
        )

    @patch("transcript.core.transcriber.WhisperModel")
    @patch("transcript.core.transcriber.torch")
    def test_load_uses_model_dir_as_download_root(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock, tmp_path: Path,
    ) -> None:
        t = LocalTranscriber(TranscriberConfig(model_dir=str(tmp_path)))
        t.load_model()
        kwargs = mock_whisper_cls.call_args.kwargs
        assert kwargs["download_root"] == str(tmp_path.resolve())

    @patch("transcript.core.transcriber.WhisperModel")
    @patch("transcript.core.transcriber.torch")
    def test_cuda_unavailable_raises_gpu_error(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock,
    ) -> None:
        mock_torch.cuda.is_available.return_value = False
        t = LocalTranscriber(TranscriberConfig(device="cuda"))
        with pytest.raises(GpuError, match="CUDA"):
            t.load_model()
        mock_whisper_cls.assert_not_called()

    @patch("transcript.core.transcriber.WhisperModel")
    @patch("transcript.core.transcriber.torch")
    def test_load_failure_raises_model_error(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock,
    ) -> None:
        mock_whisper_cls.side_effect = OSError("model not found")
        t = LocalTranscriber(TranscriberConfig(device="cpu"))
        with pytest.raises(ModelError, match="model not found"):
            t.load_model()

    @patch("transcript.core.transcriber.WhisperModel")
    @patch("transcript.core.transcriber.torch")
    def test_unload_model_sets_none(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock,
    ) -> None:
        mock_torch.cuda.is_available.return_value = True
        t = LocalTranscriber(TranscriberConfig(device="cuda"))
        t.load_model()
        t.unload_model()
        assert t._model is None
        mock_torch.cuda.empty_cache.assert_called_once()

    @patch("transcript.core.transcriber.WhisperModel")
    @patch("transcript.core.transcriber.torch")
    def test_unload_skips_cache_without_cuda(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock,
    ) -> None:
        mock_torch.cuda.is_available.return_value = False
        t = LocalTranscriber(TranscriberConfig())
        t.load_model()
        t.unload_model()
        mock_torch.cuda.empty_cache.assert_not_called()


# ---------------------------------------------------------------------------
# LocalTranscriber.transcribe() output
# ---------------------------------------------------------------------------

@patch("transcript.core.transcriber.WhisperModel")
@patch("transcript.core.transcriber.torch")
class TestLocalTranscriberTranscribe:
    def test_returns_segments(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock,
    ) -> None:
        t = _loaded(
            mock_torch, mock_whisper_cls,
            [_segment(0.0, 2.0, " First"), _segment(2.5, 5.0, " Second")],
        )
        result = t.transcribe(CHUNK)

        assert isinstance(result, SegmentTranscript)
        assert [s.text for s in result.segments] == [" First", " Second"]
        assert result.segments[1].start == 2.5
        assert all(s.speaker is None for s in result.segments)

    def test_passes_chunk_path_and_options(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock,
    ) -> None:
        t = _loaded(mock_torch, mock_whisper_cls, [], language="en")
        t.transcribe(CHUNK)

        call = mock_whisper_cls.return_value.transcribe.call_args
        assert call.args[0] == str(CHUNK.file)
        assert call.kwargs["language"] == "en"
        assert call.kwargs["vad_filter"] is True
        assert call.kwargs["word_timestamps"] is False

    def test_word_timestamps_returns_words(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock,
    ) -> None:
        seg = _segment(0.0, 1.0, " Hi there", words=[_word(" Hi", 0.0, 0.4), _word(" there", 0.5, 1.0)])
        t = _loaded(mock_torch, mock_whisper_cls, [seg], word_timestamps=True)
        result = t.transcribe(CHUNK)

        assert isinstance(result, WordTranscript)
        assert [w.word for w in result.words] == [" Hi", " there"]
        assert result.words[1].start == 0.5

    def test_oom_runtime_error_raises_gpu_error(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock,
    ) -> None:
        t = _loaded(mock_torch, mock_whisper_cls, [])
        mock_whisper_cls.return_value.transcribe.side_effect = RuntimeError(
            "CUDA out of memory. Tried to allocate 2.00 GiB"
        )
        with pytest.raises(GpuError, match="OOM"):
            t.transcribe(CHUNK)

    def test_cuda_oom_exception_raises_gpu_error(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock,
    ) -> None:
        t = _loaded(mock_torch, mock_whisper_cls, [])
        mock_whisper_cls.return_value.transcribe.side_effect = (
            mock_torch.cuda.OutOfMemoryError("boom")
        )
        with pytest.raises(GpuError):
            t.transcribe(CHUNK)

    def test_other_runtime_error_raises_transcription_error(
        self, mock_torch: MagicMock, mock_whisper_cls: MagicMock,
    ) -> None:
        t = _loaded(mock_torch, mock_whisper_cls, [])
        mock_whisper_cls.return_value.transcribe.side_effect = RuntimeError("bad audio")
        with pytest.raises(TranscriptionError, match="bad audio"):
            t.transcribe(CHUNK)
