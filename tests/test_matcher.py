"""Tests for the verdict classifier."""

import pytest
from pydantic import ValidationError

from pronunciation_coach.config import MatchConfig
from pronunciation_coach.matcher import Matcher, MatchTier, match


class TestExactMatch:
    @pytest.mark.parametrize("phrase", [
        "hola",
        "¿Cuánto tiempo vas a estar?",
        "Tengo una reservación",
        "",
    ])
    def test_self_match_is_perfect(self, phrase):
        result = match(phrase, phrase)
        assert result.is_correct
        assert result.score == 100
        assert result.feedback == "Perfect!"
        assert result.tier is MatchTier.PERFECT

    def test_case_and_punctuation_only(self):
        result = match("Hola!", "hola")
        assert result.is_correct
        assert result.score == 100
        assert result.feedback == "Perfect!"

    def test_case_only_with_accent(self):
        result = match("México", "méxico")
        assert result.is_correct
        assert result.score == 100

    def test_empty_strings(self):
        result = match("", "")
        assert result.is_correct
        assert result.score == 100

    def test_transcribed_passed_through(self):
        result = match("  ¡HOLA!  ", "hola")
        assert result.transcribed == "  ¡HOLA!  "


class TestTiers:
    def test_accent_difference_is_great(self):
        result = match("Voy a Mexico de vacaciones", "Voy a México de vacaciones")
        assert result.is_correct
        assert result.score == 96
        assert result.feedback == "Great job!"

    def test_word_substitution_is_incorrect(self):
        result = match("una semana", "dos semanas")
        assert not result.is_correct
        assert result.score < 80
        assert result.score == 64
        assert result.feedback == "Close, but try again!"

    def test_unrelated_is_retry(self):
        result = match("buenas noches", "la cuenta por favor")
        assert not result.is_correct
        assert result.score < 60
        assert result.feedback == "Try again!"

    def test_empty_transcript(self):
        result = match("", "hola")
        assert not result.is_correct
        assert result.score == 0
        assert result.feedback == "Try again!"

    def test_boundary_80_is_correct(self):
        result = match("gatas", "gatos")
        assert result.score == 80
        assert result.is_correct
        assert result.feedback == "Great job!"

    def test_boundary_60_is_close(self):
        result = match("patas", "gatos")
        assert result.score == 60
        assert not result.is_correct
        assert result.feedback == "Close, but try again!"

    def test_below_60_is_retry(self):
        result = match("pitis", "gatos")
        assert result.score == 40
        assert result.feedback == "Try again!"

    def test_monotonic_scores(self):
        scores = [match(t, "vacaciones").score for t in ("vacacionez", "vacacionaz", "vacacuonaz")]
        assert scores[0] > scores[1] > scores[2]

    @pytest.mark.parametrize("transcribed,expected", [
        ("gatas", "gatos"),
        ("patas", "gatos"),
        ("una semana", "dos semanas"),
        ("", "hola"),
        ("elevadores", "elevador"),
    ])
    def test_correct_iff_score_reaches_threshold(self, transcribed, expected):
        result = match(transcribed, expected)
        assert result.is_correct == (result.score >= 80)
        assert 0 <= result.score <= 100


class TestConfiguredThresholds:
    def test_custom_thresholds(self):
        matcher = Matcher(MatchConfig(great_threshold=60, close_threshold=40))
        assert matcher.match("patas", "gatos").is_correct
        assert matcher.match("pitis", "gatos").feedback == "Close, but try again!"

    def test_default_config(self):
        assert Matcher().config.great_threshold == 80
        assert Matcher().config.close_threshold == 60

    def test_invalid_order(self):
        with pytest.raises(ValidationError):
            MatchConfig(great_threshold=50, close_threshold=70)

    def test_out_of_range(self):
        with pytest.raises(ValidationError):
            MatchConfig(great_threshold=120)

    def test_to_dict(self):
        d = match("gatas", "gatos").to_dict()
        assert d == {
            "is_correct": True,
            "score": 80,
            "feedback": "Great job!",
            "transcribed": "gatas",
            "tier": "great",
        }
