"""Tests for the command-line interface."""

import json

from click.testing import CliRunner

from pronunciation_coach.cli import cli


def _write_take(tmp_path, name, transcript):
    audio = tmp_path / f"{name}.wav"
    audio.write_bytes(b"audio")
    if transcript is not None:
        audio.with_suffix(".txt").write_text(transcript, encoding="utf-8")
    return audio


class TestMatchCommand:
    def test_match(self):
        result = CliRunner().invoke(cli, ["match", "Voy a Mexico de vacaciones", "Voy a México de vacaciones"])
        assert result.exit_code == 0
        assert "96" in result.output
        assert "Great job!" in result.output

    def test_invalid_thresholds(self):
        result = CliRunner().invoke(cli, ["match", "a", "b", "--great-threshold", "50", "--close-threshold", "70"])
        assert result.exit_code != 0


class TestListingCommands:
    def test_list(self):
        result = CliRunner().invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "airplane" in result.output
        assert "hotel" in result.output

    def test_providers(self):
        result = CliRunner().invoke(cli, ["providers"])
        assert result.exit_code == 0
        for name in ("openai", "proxy", "static"):
            assert name in result.output


class TestProviderCommands:
    def test_transcribe_and_grade(self, tmp_path):
        audio = _write_take(tmp_path, "take", "Tengo una reservacion")
        result = CliRunner().invoke(
            cli, ["--provider", "static", "transcribe", str(audio), "--expected", "Tengo una reservación"]
        )
        assert result.exit_code == 0
        assert "Great job!" in result.output

    def test_transcribe_failure(self, tmp_path):
        audio = _write_take(tmp_path, "take", None)
        result = CliRunner().invoke(cli, ["--provider", "static", "transcribe", str(audio)])
        assert result.exit_code == 1
        assert "Transcription failed" in result.output

    def test_openai_without_key(self, tmp_path):
        audio = _write_take(tmp_path, "take", None)
        result = CliRunner().invoke(cli, ["--provider", "openai", "transcribe", str(audio)], env={"OPENAI_API_KEY": None})
        assert result.exit_code == 2
        assert "no API key" in result.output

    def test_drill_saves_results(self, tmp_path):
        takes = [
            _write_take(tmp_path, "0", "reservación"),
            _write_take(tmp_path, "1", "desayuno"),
            _write_take(tmp_path, "2", "ascensor"),
        ]
        out_dir = tmp_path / "results"
        result = CliRunner().invoke(
            cli,
            ["--provider", "static", "--output-dir", str(out_dir), "drill", "hotel", *map(str, takes)],
        )
        assert result.exit_code == 0, result.output

        [saved] = list(out_dir.glob("hotel_static_*.json"))
        data = json.loads(saved.read_text(encoding="utf-8"))
        assert [a["correct"] for a in data["attempts"]] == [True, True, False]
        assert data["points"] == 10

    def test_drill_unknown_scenario(self, tmp_path):
        take = _write_take(tmp_path, "0", "hola")
        result = CliRunner().invoke(cli, ["--provider", "static", "drill", "spaceship", str(take)])
        assert result.exit_code == 2
        assert "Unknown scenario" in result.output

    def test_roleplay(self, tmp_path):
        takes = [
            _write_take(tmp_path, "0", "Tengo una reservación"),
            _write_take(tmp_path, "1", None),
            _write_take(tmp_path, "2", "¿A qué hora es el desayuno?"),
        ]
        result = CliRunner().invoke(cli, ["--provider", "static", "roleplay", "hotel", *map(str, takes)])
        assert result.exit_code == 0, result.output
        assert "[Audio recorded]" in result.output
        assert "2/4 goals" in result.output
        assert "Keep Going!" in result.output
