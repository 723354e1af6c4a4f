"""Offline provider returning fixed or sidecar transcripts."""

from __future__ import annotations

from pathlib import Path

from . import register
from .base import TranscriptionError, TranscriptionProvider


@register
class StaticProvider(TranscriptionProvider):
    name = "static"
    description = "Reads <audio>.txt beside the recording, else the configured static_text"

    async def transcribe(self, audio: Path, language: str | None = None) -> str:
        sidecar = audio.with_suffix(".txt")
        if sidecar.is_file():
            try:
                return sidecar.read_text(encoding="utf-8").strip()
            except (OSError, UnicodeDecodeError) as exc:
                raise TranscriptionError(self.name, f"cannot read {sidecar}: {exc}") from exc
        if self._config.static_text is not None:
            return self._config.static_text.strip()
        raise TranscriptionError(self.name, f"no transcript for {audio}")
