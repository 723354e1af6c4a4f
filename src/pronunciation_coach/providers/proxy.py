"""Transcription through a backend function that holds the provider key."""

from __future__ import annotations

from pathlib import Path

import httpx

from ..config import TranscriptionConfig
from . import register
from .base import TranscriptionError, TranscriptionProvider, audio_upload_info


@register
class ProxyProvider(TranscriptionProvider):
    name = "proxy"
    description = "Backend-proxied Whisper call (multipart upload, JSON reply)"

    def __init__(
        self,
        config: TranscriptionConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(config)
        if not config.proxy_url:
            raise TranscriptionError(self.name, "no proxy_url configured")
        headers = {}
        if config.api_key:
            headers["Authorization"] = f"Bearer {config.api_key}"
        self._client = client or httpx.AsyncClient(timeout=config.timeout)
        self._headers = headers

    async def transcribe(self, audio: Path, language: str | None = None) -> str:
        filename, content_type = audio_upload_info(audio)
        try:
            payload = audio.read_bytes()
        except OSError as exc:
            raise TranscriptionError(self.name, f"cannot read {audio}: {exc}") from exc

        try:
            resp = await self._client.post(
                self._config.proxy_url,
                headers=self._headers,
                files={"file": (filename, payload, content_type)},
                data={"language": language or self._config.language},
            )
        except httpx.HTTPError as exc:
            raise TranscriptionError(self.name, f"request failed: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if resp.status_code >= 400 or "error" in data:
            detail = data.get("details") or data.get("error") or resp.text
            raise TranscriptionError(self.name, str(detail), status_code=resp.status_code)

        return (data.get("text") or "").strip()

    async def aclose(self) -> None:
        await self._client.aclose()
