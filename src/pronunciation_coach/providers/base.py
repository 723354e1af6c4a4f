"""Transcription provider ABC and shared data classes."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from ..config import TranscriptionConfig

# extension -> (upload filename, MIME type); anything else is sent as m4a
AUDIO_FORMATS: dict[str, tuple[str, str]] = {
    ".wav": ("recording.wav", "audio/wav"),
    ".mp3": ("recording.mp3", "audio/mp3"),
    ".mp4": ("recording.mp4", "audio/mp4"),
}
DEFAULT_AUDIO_FORMAT = ("recording.m4a", "audio/m4a")


class TranscriptionError(Exception):
    """Raised when a provider cannot turn audio into text."""

    def __init__(self, provider: str, message: str, status_code: int | None = None) -> None:
        super().__init__(f"[{provider}] {message}")
        self.provider = provider
        self.status_code = status_code
        self.metrics: TranscriptionMetrics | None = None


@dataclass
class TranscriptionMetrics:
    """Timing for one transcription request."""

    latency_seconds: float = 0.0
    error: str | None = None


def audio_upload_info(audio: Path) -> tuple[str, str]:
    """Return the (filename, content type) to upload a recording as."""
    return AUDIO_FORMATS.get(audio.suffix.lower(), DEFAULT_AUDIO_FORMAT)


class TranscriptionProvider(ABC):
    """Abstract speech-to-text backend.

    Credentials and endpoints come from the ``TranscriptionConfig`` handed to
    the constructor; providers never read process-wide state.
    """

    name: str = ""
    description: str = ""

    def __init__(self, config: TranscriptionConfig) -> None:
        self._config = config

    @property
    def config(self) -> TranscriptionConfig:
        return self._config

    @abstractmethod
    async def transcribe(self, audio: Path, language: str | None = None) -> str:
        """Return best-effort text for the recording.

        Raises:
            TranscriptionError: the audio could not be transcribed.
        """

    async def transcribe_timed(
        self, audio: Path, language: str | None = None
    ) -> tuple[str, TranscriptionMetrics]:
        """Transcribe and return (text, metrics); errors propagate after timing is recorded."""
        metrics = TranscriptionMetrics()
        start = time.perf_counter()
        try:
            text = await self.transcribe(audio, language)
        except TranscriptionError as exc:
            metrics.error = str(exc)
            metrics.latency_seconds = time.perf_counter() - start
            exc.metrics = metrics
            raise
        metrics.latency_seconds = time.perf_counter() - start
        return text, metrics

    async def aclose(self) -> None:
        """Release any network resources held by the provider."""
