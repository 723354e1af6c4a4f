"""Role-play conversation session with content-based goal tracking."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .evaluators.normalize import contains_phrase
from .matcher import Matcher
from .scenarios import Goal, Scenario

LEARNER = "You"
FAILED_TURN_PLACEHOLDER = "[Audio recorded]"

# (minimum percentage, title) evaluated top-down
SUMMARY_TIERS = (
    (90, "Excellent Work!"),
    (70, "Great Job!"),
    (0, "Keep Going!"),
)


@dataclass
class TranscriptLine:
    speaker: str
    message: str
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict[str, str]:
        return {"speaker": self.speaker, "message": self.message, "timestamp": self.timestamp}


@dataclass
class TurnResult:
    """What happened after one learner utterance."""

    utterance: str
    newly_completed: list[Goal] = field(default_factory=list)
    partner_line: str | None = None


@dataclass
class SessionSummary:
    scenario: str
    completed_goals: int
    total_goals: int
    percentage: int
    title: str
    time_used_seconds: int = 0
    transcript: list[TranscriptLine] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "scenario": self.scenario,
            "completed_goals": self.completed_goals,
            "total_goals": self.total_goals,
            "percentage": self.percentage,
            "title": self.title,
            "time_used_seconds": self.time_used_seconds,
            "transcript": [line.to_dict() for line in self.transcript],
        }


def summary_title(percentage: int) -> str:
    for minimum, title in SUMMARY_TIERS:
        if percentage >= minimum:
            return title
    return SUMMARY_TIERS[-1][1]


class RolePlaySession:
    """Scripted conversation with a partner; goals complete from what the learner says."""

    def __init__(self, scenario: Scenario, matcher: Matcher | None = None) -> None:
        self._scenario = scenario
        self._matcher = matcher or Matcher()
        # -1 until the partner has spoken, so a first respond() says line 0
        self._line_index = -1
        self._completed: set[int] = set()
        self.transcript: list[TranscriptLine] = []

    @property
    def scenario(self) -> Scenario:
        return self._scenario

    @property
    def completed_goals(self) -> list[Goal]:
        return [g for g in self._scenario.goals if g.id in self._completed]

    @property
    def all_goals_completed(self) -> bool:
        return len(self._completed) == len(self._scenario.goals)

    def opening_line(self) -> str | None:
        """Speak the first partner line, if the script has one."""
        if not self._scenario.partner_lines:
            return None
        self._line_index = 0
        return self._say(self._scenario.partner_lines[0])

    def goal_met(self, goal: Goal, utterance: str) -> bool:
        for phrase in goal.key_phrases:
            if contains_phrase(utterance, phrase):
                return True
            if self._matcher.match(utterance, phrase).is_correct:
                return True
        return False

    def respond(self, utterance: str) -> TurnResult:
        """Record a learner turn, evaluate goals, and advance the partner script."""
        self.transcript.append(TranscriptLine(LEARNER, utterance))

        turn = TurnResult(utterance=utterance)
        for goal in self._scenario.goals:
            if goal.id not in self._completed and self.goal_met(goal, utterance):
                self._completed.add(goal.id)
                turn.newly_completed.append(goal)

        turn.partner_line = self._advance()
        return turn

    def record_failed_turn(self) -> TurnResult:
        """The recording could not be transcribed; keep the conversation moving."""
        self.transcript.append(TranscriptLine(LEARNER, FAILED_TURN_PLACEHOLDER))
        return TurnResult(utterance=FAILED_TURN_PLACEHOLDER, partner_line=self._advance())

    def summary(self, time_used_seconds: int = 0) -> SessionSummary:
        total = len(self._scenario.goals)
        completed = len(self._completed)
        percentage = round(completed / total * 100) if total else 0
        return SessionSummary(
            scenario=self._scenario.slug,
            completed_goals=completed,
            total_goals=total,
            percentage=percentage,
            title=summary_title(percentage),
            time_used_seconds=time_used_seconds,
            transcript=list(self.transcript),
        )

    def _advance(self) -> str | None:
        next_index = self._line_index + 1
        if next_index >= len(self._scenario.partner_lines):
            return None
        self._line_index = next_index
        return self._say(self._scenario.partner_lines[next_index])

    def _say(self, line: str) -> str:
        self.transcript.append(TranscriptLine(self._scenario.partner_name, line))
        return line
