"""Tests for role-play sessions and goal evaluation."""

import pytest

from pronunciation_coach.roleplay import FAILED_TURN_PLACEHOLDER, RolePlaySession, summary_title
from pronunciation_coach.scenarios import get_scenario


@pytest.fixture
def session():
    return RolePlaySession(get_scenario("airplane"))


class TestRolePlaySession:
    def test_opening_line(self, session):
        line = session.opening_line()
        assert line == "¡Hola! ¿A dónde vas?"
        assert session.transcript[0].speaker == "Carlos"

    def test_goal_completed_by_content(self, session):
        session.opening_line()
        turn = session.respond("Voy a México de vacaciones")

        assert [g.id for g in turn.newly_completed] == [1]
        assert turn.partner_line == "¡Qué emocionante! ¿Es tu primera vez en México?"
        assert [line.speaker for line in session.transcript] == ["Carlos", "You", "Carlos"]

    def test_goal_completed_by_close_pronunciation(self, session):
        turn = session.respond("primera ves")
        assert [g.id for g in turn.newly_completed] == [3]

    def test_unrelated_utterance_completes_nothing(self, session):
        turn = session.respond("me gusta el chocolate")
        assert turn.newly_completed == []
        assert session.completed_goals == []

    def test_goals_stay_completed(self, session):
        session.respond("Es mi primera vez")
        turn = session.respond("Sí, es mi primera vez")
        assert turn.newly_completed == []
        assert [g.id for g in session.completed_goals] == [3]

    def test_several_goals_in_one_turn(self, session):
        turn = session.respond("Voy a México una semana y estoy emocionado")
        assert sorted(g.id for g in turn.newly_completed) == [1, 2, 4]

    def test_script_runs_out(self, session):
        session.opening_line()
        lines = [session.respond("sí").partner_line for _ in range(6)]
        assert lines[3] == "¡Perfecto! Te va a encantar México."
        assert lines[4] is None
        assert lines[5] is None

    def test_respond_before_opening_line(self, session):
        turn = session.respond("Hola")
        assert turn.partner_line == "¡Hola! ¿A dónde vas?"
        assert [line.speaker for line in session.transcript] == ["You", "Carlos"]

        turn = session.respond("Voy a México")
        assert turn.partner_line == "¡Qué emocionante! ¿Es tu primera vez en México?"

    def test_greeting_does_not_complete_duration_goal(self, session):
        turn = session.respond("Buenos días")
        assert turn.newly_completed == []

    def test_duration_in_days(self, session):
        turn = session.respond("Me quedo quince días")
        assert [g.id for g in turn.newly_completed] == [2]

    def test_failed_turn_placeholder(self, session):
        session.opening_line()
        turn = session.record_failed_turn()
        assert turn.utterance == FAILED_TURN_PLACEHOLDER
        assert session.transcript[1].message == FAILED_TURN_PLACEHOLDER
        assert turn.partner_line is not None
        assert session.completed_goals == []


class TestSummary:
    def test_all_goals(self, session):
        for utterance in ("Voy a México", "Una semana", "Es mi primera vez", "Estoy emocionado"):
            session.respond(utterance)
        assert session.all_goals_completed

        summary = session.summary(time_used_seconds=120)
        assert summary.completed_goals == 4
        assert summary.percentage == 100
        assert summary.title == "Excellent Work!"
        assert summary.to_dict()["time_used_seconds"] == 120

    def test_partial(self, session):
        for utterance in ("Voy a México", "Una semana", "Es mi primera vez"):
            session.respond(utterance)
        summary = session.summary()
        assert summary.percentage == 75
        assert summary.title == "Great Job!"
        assert [line.speaker for line in summary.transcript].count("You") == 3
        assert len(summary.transcript) == 6

    @pytest.mark.parametrize("percentage,title", [
        (100, "Excellent Work!"),
        (90, "Excellent Work!"),
        (89, "Great Job!"),
        (70, "Great Job!"),
        (50, "Keep Going!"),
        (0, "Keep Going!"),
    ])
    def test_titles(self, percentage, title):
        assert summary_title(percentage) == title
