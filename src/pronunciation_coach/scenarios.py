"""Scenario content: vocabulary, goals, and scripted partner lines."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

DEFAULT_SCENARIOS_PATH = Path(__file__).parent / "data" / "scenarios.json"


@dataclass(frozen=True)
class VocabItem:
    """A word or phrase the learner practices saying."""

    text: str
    translation: str
    kind: Literal["word", "phrase"] = "word"


@dataclass(frozen=True)
class Goal:
    """A conversational objective, completed when the learner says a key phrase."""

    id: int
    content: str
    key_phrases: tuple[str, ...] = ()


@dataclass
class Scenario:
    id: int
    slug: str
    title: str
    description: str
    partner_name: str
    duration_seconds: int = 300
    words: list[VocabItem] = field(default_factory=list)
    phrases: list[VocabItem] = field(default_factory=list)
    goals: list[Goal] = field(default_factory=list)
    partner_lines: list[str] = field(default_factory=list)

    def learning_items(self) -> list[VocabItem]:
        """Words first, then phrases."""
        return [*self.words, *self.phrases]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scenario:
        return cls(
            id=int(data["id"]),
            slug=data.get("slug", str(data["id"])),
            title=data["title"],
            description=data.get("description", ""),
            partner_name=data.get("partner_name", ""),
            duration_seconds=int(data.get("duration_seconds", 300)),
            words=[VocabItem(w["text"], w.get("translation", ""), "word") for w in data.get("words", [])],
            phrases=[VocabItem(p["text"], p.get("translation", ""), "phrase") for p in data.get("phrases", [])],
            goals=[
                Goal(int(g["id"]), g["content"], tuple(g.get("key_phrases", ())))
                for g in data.get("goals", [])
            ],
            partner_lines=list(data.get("partner_lines", [])),
        )


def load_scenarios(path: Path | None = None) -> list[Scenario]:
    """Load scenarios from a JSON file (bundled set by default)."""
    source = path or DEFAULT_SCENARIOS_PATH
    raw = json.loads(source.read_text(encoding="utf-8"))
    return [Scenario.from_dict(item) for item in raw]


def get_scenario(key: str | int, path: Path | None = None) -> Scenario:
    """Look up a scenario by numeric id or slug."""
    scenarios = load_scenarios(path)
    for scenario in scenarios:
        if str(scenario.id) == str(key) or scenario.slug == key:
            return scenario
    available = ", ".join(s.slug for s in scenarios)
    raise KeyError(f"Unknown scenario {key!r}. Available: {available}")
