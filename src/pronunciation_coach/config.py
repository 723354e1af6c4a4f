"""Pydantic configuration models."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator


class MatchConfig(BaseModel):
    """Grading thresholds for the matcher."""

    great_threshold: int = Field(default=80, ge=0, le=100)
    close_threshold: int = Field(default=60, ge=0, le=100)

    @model_validator(mode="after")
    def _check_order(self) -> MatchConfig:
        if self.close_threshold > self.great_threshold:
            raise ValueError(
                f"close_threshold ({self.close_threshold}) must not exceed "
                f"great_threshold ({self.great_threshold})"
            )
        return self


class TranscriptionConfig(BaseModel):
    """Settings for the speech-to-text provider."""

    provider: Literal["openai", "proxy", "static"] = "openai"
    api_key: str | None = None
    base_url: str | None = None
    proxy_url: str | None = None
    model: str = "whisper-1"
    language: str = "es"
    timeout: float = 60.0
    static_text: str | None = None


class DrillConfig(BaseModel):
    """Execution settings for a vocabulary drill."""

    concurrency: int = Field(default=4, ge=1)
    word_points: int = Field(default=5, ge=0)
    phrase_points: int = Field(default=10, ge=0)
    output_dir: Path = Path("results")


class CoachConfig(BaseModel):
    """Combined config passed to drills and the CLI."""

    match: MatchConfig = Field(default_factory=MatchConfig)
    transcription: TranscriptionConfig = Field(default_factory=TranscriptionConfig)
    drill: DrillConfig = Field(default_factory=DrillConfig)
