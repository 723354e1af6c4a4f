"""Vocabulary drill: transcribe recordings and grade them against scenario items."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from .config import CoachConfig
from .matcher import Matcher, MatchResult
from .metrics import AggregatedMetrics, aggregate_attempts
from .providers.base import TranscriptionError, TranscriptionMetrics, TranscriptionProvider
from .scenarios import Scenario, VocabItem

console = Console()


@dataclass
class AttemptResult:
    """Outcome of one recording graded against one item."""

    item: VocabItem
    audio: str
    verdict: MatchResult | None = None
    points: int = 0
    error: str | None = None
    metrics: TranscriptionMetrics | None = None

    @property
    def is_correct(self) -> bool:
        return self.verdict is not None and self.verdict.is_correct

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "expected": self.item.text,
            "kind": self.item.kind,
            "audio": self.audio,
            "correct": self.is_correct,
            "points": self.points,
        }
        if self.verdict:
            d.update(self.verdict.to_dict())
        if self.error:
            d["error"] = self.error
        if self.metrics:
            d["latency_seconds"] = self.metrics.latency_seconds
        return d


@dataclass
class DrillResult:
    """Aggregated result of a drill over one scenario."""

    scenario: str
    attempts: list[AttemptResult] = field(default_factory=list)
    aggregated_metrics: AggregatedMetrics | None = None

    @property
    def points(self) -> int:
        return sum(a.points for a in self.attempts)

    @property
    def accuracy(self) -> float:
        if not self.attempts:
            return 0.0
        return sum(1 for a in self.attempts if a.is_correct) / len(self.attempts)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "scenario": self.scenario,
            "num_attempts": len(self.attempts),
            "accuracy": self.accuracy,
            "points": self.points,
        }
        if self.aggregated_metrics:
            d["aggregated_metrics"] = self.aggregated_metrics.to_dict()
        d["attempts"] = [a.to_dict() for a in self.attempts]
        return d


class VocabularyDrill:
    """Grades learner recordings with controlled concurrency using asyncio."""

    def __init__(self, provider: TranscriptionProvider, config: CoachConfig | None = None) -> None:
        self._provider = provider
        self._config = config or CoachConfig()
        self._matcher = Matcher(self._config.match)
        self._semaphore = asyncio.Semaphore(self._config.drill.concurrency)

    def points_for(self, item: VocabItem) -> int:
        if item.kind == "phrase":
            return self._config.drill.phrase_points
        return self._config.drill.word_points

    async def attempt(self, item: VocabItem, audio: Path) -> AttemptResult:
        """Transcribe one recording and grade it; failed transcriptions are never matched."""
        async with self._semaphore:
            try:
                text, metrics = await self._provider.transcribe_timed(
                    audio, self._config.transcription.language
                )
            except TranscriptionError as exc:
                return AttemptResult(item=item, audio=str(audio), error=str(exc), metrics=exc.metrics)

        verdict = self._matcher.match(text, item.text)
        return AttemptResult(
            item=item,
            audio=str(audio),
            verdict=verdict,
            points=self.points_for(item) if verdict.is_correct else 0,
            metrics=metrics,
        )

    async def run(self, scenario: Scenario, recordings: list[tuple[VocabItem, Path]]) -> DrillResult:
        """Grade all (item, recording) pairs for a scenario."""
        console.print(f"\n[bold blue]Drill:[/] {scenario.title}")
        console.print(
            f"  {len(recordings)} recordings via {self._provider.name} "
            f"(concurrency={self._config.drill.concurrency})"
        )

        wall_start = time.perf_counter()

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            console=console,
        ) as progress:
            task = progress.add_task(scenario.slug, total=len(recordings))

            async def _run_one(item: VocabItem, audio: Path) -> AttemptResult:
                result = await self.attempt(item, audio)
                progress.advance(task)
                return result

            attempts = await asyncio.gather(*[_run_one(item, audio) for item, audio in recordings])

        wall_time = time.perf_counter() - wall_start
        result = DrillResult(
            scenario=scenario.slug,
            attempts=list(attempts),
            aggregated_metrics=aggregate_attempts(list(attempts), wall_time),
        )

        correct = sum(1 for a in result.attempts if a.is_correct)
        console.print(
            f"  [green]Done:[/] accuracy={result.accuracy:.2f} ({correct}/{len(result.attempts)}), "
            f"points={result.points}"
        )
        return result


def pair_recordings(scenario: Scenario, recordings: list[Path]) -> list[tuple[VocabItem, Path]]:
    """Pair recordings with the scenario's learning items in order."""
    items = scenario.learning_items()
    if len(recordings) > len(items):
        raise ValueError(
            f"{len(recordings)} recordings given but scenario {scenario.slug!r} "
            f"has only {len(items)} items"
        )
    return list(zip(items, recordings))
