"""Drill statistics and aggregation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from .drill import AttemptResult


@dataclass
class AggregatedMetrics:
    """Summary statistics across all attempts in a drill."""

    score_mean: float | None = None
    score_p50: float | None = None
    accuracy: float | None = None
    tier_counts: dict[str, int] = field(default_factory=dict)

    latency_p50: float | None = None
    latency_p95: float | None = None
    latency_mean: float | None = None

    total_attempts: int = 0
    failed_transcriptions: int = 0
    wall_time_seconds: float = 0.0

    def to_dict(self) -> dict:
        return {k: v for k, v in self.__dict__.items() if v is not None}


def aggregate_attempts(
    attempts: list[AttemptResult],
    wall_time: float = 0.0,
) -> AggregatedMetrics:
    """Compute summary statistics from a list of drill attempts."""
    agg = AggregatedMetrics()
    agg.total_attempts = len(attempts)
    agg.wall_time_seconds = wall_time

    graded = [a for a in attempts if a.verdict is not None]
    agg.failed_transcriptions = agg.total_attempts - len(graded)

    if attempts:
        agg.accuracy = sum(1 for a in attempts if a.is_correct) / len(attempts)

    if graded:
        scores = np.array([a.verdict.score for a in graded])
        agg.score_mean = float(np.mean(scores))
        agg.score_p50 = float(np.percentile(scores, 50))
        agg.tier_counts = dict(Counter(a.verdict.tier.name.lower() for a in graded))

    latencies = [a.metrics.latency_seconds for a in attempts if a.metrics is not None]
    if latencies:
        arr = np.array(latencies)
        agg.latency_p50 = float(np.percentile(arr, 50))
        agg.latency_p95 = float(np.percentile(arr, 95))
        agg.latency_mean = float(np.mean(arr))

    return agg


def confidence_interval_95(scores: list[float]) -> tuple[float, float]:
    """Compute 95% confidence interval using normal approximation."""
    arr = np.array(scores)
    n = len(arr)
    if n < 2:
        mean = float(np.mean(arr))
        return (mean, mean)
    mean = float(np.mean(arr))
    se = float(np.std(arr, ddof=1) / np.sqrt(n))
    return (mean - 1.96 * se, mean + 1.96 * se)
