"""Grade a transcribed attempt against the expected phrase."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .config import MatchConfig
from .evaluators.edit_distance import similarity_score
from .evaluators.normalize import normalize_phrase


class MatchTier(str, Enum):
    """Feedback tiers, valued by the label shown to the learner."""

    PERFECT = "Perfect!"
    GREAT = "Great job!"
    CLOSE = "Close, but try again!"
    RETRY = "Try again!"


@dataclass(frozen=True)
class MatchResult:
    """Verdict for a single pronunciation attempt."""

    is_correct: bool
    score: int
    feedback: str
    transcribed: str
    tier: MatchTier

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_correct": self.is_correct,
            "score": self.score,
            "feedback": self.feedback,
            "transcribed": self.transcribed,
            "tier": self.tier.name.lower(),
        }


def _verdict(tier: MatchTier, is_correct: bool, score: int, transcribed: str) -> MatchResult:
    return MatchResult(
        is_correct=is_correct,
        score=score,
        feedback=tier.value,
        transcribed=transcribed,
        tier=tier,
    )


class Matcher:
    """Stateless matcher bound to a set of thresholds."""

    def __init__(self, config: MatchConfig | None = None) -> None:
        self._config = config or MatchConfig()

    @property
    def config(self) -> MatchConfig:
        return self._config

    def match(self, transcribed: str, expected: str) -> MatchResult:
        """Compare a learner's transcript with the target phrase."""
        heard = normalize_phrase(transcribed)
        target = normalize_phrase(expected)

        if heard == target:
            return _verdict(MatchTier.PERFECT, True, 100, transcribed)

        score = similarity_score(heard, target)
        if score >= self._config.great_threshold:
            return _verdict(MatchTier.GREAT, True, score, transcribed)
        if score >= self._config.close_threshold:
            return _verdict(MatchTier.CLOSE, False, score, transcribed)
        return _verdict(MatchTier.RETRY, False, score, transcribed)


_DEFAULT_MATCHER = Matcher()


def match(transcribed: str, expected: str, config: MatchConfig | None = None) -> MatchResult:
    """Module-level shortcut for ``Matcher(config).match``."""
    matcher = Matcher(config) if config is not None else _DEFAULT_MATCHER
    return matcher.match(transcribed, expected)
