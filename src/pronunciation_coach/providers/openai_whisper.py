"""Direct OpenAI Whisper transcription."""

from __future__ import annotations

from pathlib import Path

from openai import APIStatusError, AsyncOpenAI, OpenAIError
from rich.console import Console
from rich.markup import escape

from ..config import TranscriptionConfig
from . import register
from .base import TranscriptionError, TranscriptionProvider, audio_upload_info

console = Console(stderr=True)


@register
class OpenAIWhisperProvider(TranscriptionProvider):
    name = "openai"
    description = "OpenAI audio transcriptions API (or any compatible endpoint)"

    def __init__(self, config: TranscriptionConfig) -> None:
        super().__init__(config)
        if not config.api_key:
            raise TranscriptionError(self.name, "no API key configured")
        self._client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    @property
    def client(self) -> AsyncOpenAI:
        return self._client

    async def transcribe(self, audio: Path, language: str | None = None) -> str:
        filename, content_type = audio_upload_info(audio)
        try:
            payload = audio.read_bytes()
        except OSError as exc:
            raise TranscriptionError(self.name, f"cannot read {audio}: {exc}") from exc

        try:
            response = await self._client.audio.transcriptions.create(
                model=self._config.model,
                file=(filename, payload, content_type),
                language=language or self._config.language,
                response_format="text",
            )
        except APIStatusError as exc:
            console.print(f"[red]Whisper API error {exc.status_code}:[/] {escape(exc.message)}")
            raise TranscriptionError(self.name, exc.message, status_code=exc.status_code) from exc
        except OpenAIError as exc:
            raise TranscriptionError(self.name, str(exc)) from exc

        # response_format="text" yields a bare string; older SDKs wrap it
        text = response if isinstance(response, str) else getattr(response, "text", "")
        return (text or "").strip()

    async def aclose(self) -> None:
        await self._client.close()
