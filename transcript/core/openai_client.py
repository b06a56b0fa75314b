"""OpenAI speech-to-text client for a single audio chunk."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from transcript.config import OPENAI_TRANSCRIPTION_URL, ModelConfig
from transcript.core.adapters import ProviderTranscript, response_from_openai
from transcript.data_models import AudioChunk
from transcript.exceptions import ProviderError, TranscriptionError

logger = logging.getLogger(__name__)

AUDIO_MIME_TYPES: dict[str, str] = {
    ".wav": "audio/wav",
    ".mp3": "audio/mpeg",
    ".m4a": "audio/m4a",
    ".ogg": "audio/ogg",
    ".flac": "audio/flac",
    ".aac": "audio/aac",
}


@dataclass(frozen=True)
class HttpConfig:
    """Per-client HTTP settings.

    ``timeout=None`` disables the read timeout; long chunks can take
    several minutes to come back.
    """

    url: str = OPENAI_TRANSCRIPTION_URL
    timeout: float | None = None
    connect_timeout: float = 30.0
    max_retries: int = 3
    backoff_base: float = 1.0


def _is_retryable(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or "Empty response body"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return response.text


class OpenAITranscriber:
    def __init__(
        self,
        api_key: str,
        model: ModelConfig,
        language: str | None = None,
        http: HttpConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._language = language
        self._http = http or HttpConfig()
        self._transport = transport

    def _form_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {"model": self._model.name}
        if self._model.response_format == "diarized_json":
            fields["response_format"] = "diarized_json"
            fields["chunking_strategy"] = "auto"
        elif self._model.response_format == "verbose_json":
            fields["response_format"] = "verbose_json"
            fields["timestamp_granularities[]"] = "word"
        else:
            fields["response_format"] = "json"
        if self._language:
            fields["language"] = self._language
        return fields

    def _post(self, client: httpx.Client, chunk: AudioChunk) -> httpx.Response:
        mime = AUDIO_MIME_TYPES.get(chunk.file.suffix.lower(), "application/octet-stream")
        with open(chunk.file, "rb") as f:
            return client.post(
                self._http.url,
                data=self._form_fields(),
                files={"file": (chunk.file.name, f, mime)},
            )

    def transcribe(self, chunk: AudioChunk) -> ProviderTranscript:
        """Upload one chunk and return its chunk-local transcript.

        Rate limits, server errors and network failures are retried with
        exponential backoff; other client errors fail immediately.
        """
        attempts = max(self._http.max_retries, 1)
        timeout = httpx.Timeout(self._http.timeout, connect=self._http.connect_timeout)
        headers = {"Authorization": f"Bearer {self._api_key}"}

        with httpx.Client(
            timeout=timeout, headers=headers, transport=self._transport,
        ) as client:
            for attempt in range(1, attempts + 1):
                delay = self._http.backoff_base * 2 ** (attempt - 1)
                try:
                    response = self._post(client, chunk)
                except httpx.TransportError as e:
                    if attempt < attempts:
                        logger.warning(
                            "Network error on %s, retrying in %.1fs (attempt %d/%d): %s",
                            chunk.file.name, delay, attempt, attempts, e,
                        )
                        time.sleep(delay)
                        continue
                    raise TranscriptionError(
                        f"Network error transcribing {chunk.file.name}: {e}"
                    ) from e

                if response.is_success:
                    try:
                        payload = response.json()
                    except ValueError as e:
                        raise TranscriptionError(
                            f"Invalid JSON response for {chunk.file.name}: {e}"
                        ) from e
                    return response_from_openai(payload)

                if _is_retryable(response.status_code) and attempt < attempts:
                    logger.warning(
                        "API returned %d for %s, retrying in %.1fs (attempt %d/%d)",
                        response.status_code, chunk.file.name, delay, attempt, attempts,
                    )
                    time.sleep(delay)
                    continue

                raise ProviderError(response.status_code, _error_message(response))

        raise TranscriptionError(f"Failed to transcribe {chunk.file.name}")
