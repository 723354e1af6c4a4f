"""Transcription provider registry with decorator-based registration."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import TranscriptionConfig
    from .base import TranscriptionProvider

_REGISTRY: dict[str, type[TranscriptionProvider]] = {}


def register(cls: type[TranscriptionProvider]) -> type[TranscriptionProvider]:
    """Class decorator that registers a provider by its ``name`` attribute."""
    _REGISTRY[cls.name] = cls
    return cls


def get_provider(name: str, config: TranscriptionConfig) -> TranscriptionProvider:
    """Instantiate a registered provider by name with the given config."""
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY))
        raise KeyError(f"Unknown provider {name!r}. Available: {available}")
    return _REGISTRY[name](config)


def provider_from_config(config: TranscriptionConfig) -> TranscriptionProvider:
    """Instantiate the provider selected by ``config.provider``."""
    return get_provider(config.provider, config)


def list_providers() -> list[dict[str, str]]:
    """Return metadata for all registered providers."""
    return [
        {"name": cls.name, "description": cls.description}
        for _, cls in sorted(_REGISTRY.items())
    ]


# Import provider modules to trigger registration.
from . import (  # noqa: E402, F401
    openai_whisper,
    proxy,
    static,
)
