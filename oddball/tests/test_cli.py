"""
Tests for the terminal game.
"""

import argparse

import pytest

from ..cli import cmd_play, main, render, run_command
from ..config import PuzzleConfig
from ..engine_core import init_session
from .conftest import ScriptedRandom


def _state():
    return init_session(12, ScriptedRandom(5, heavier=False))


class TestRunCommand:
    def test_pan_and_add(self):
        state, _ = run_command(_state(), ["pan", "0"])
        state, message = run_command(state, ["add", "1", "2", "3"])

        assert state.left == (1, 2, 3)
        assert "*Left pan (0):  [1, 2, 3]" in message

    def test_add_without_pan_reports_ignored(self):
        state, message = run_command(_state(), ["add", "1"])
        assert state.left == ()
        assert "No pan selected" in message

    def test_weigh(self):
        state, _ = run_command(_state(), ["pan", "1"])
        state, _ = run_command(state, ["add", "5"])
        state, message = run_command(state, ["weigh"])

        # Ball 5 is light but still outweighs an empty pan
        assert message == "Result: [] < [5]"
        assert len(state.history) == 1

    def test_guess_refused_early(self):
        state, message = run_command(_state(), ["guess", "5", "lighter"])
        assert state.last_guess_correct is None
        assert "2 more" in message

    def test_guess_after_weighings(self):
        state = _state()
        state, _ = run_command(state, ["weigh"])
        state, _ = run_command(state, ["weigh"])
        state, _ = run_command(state, ["guess", "5", "lighter"])
        assert state.last_guess_correct is True

    def test_bad_input(self):
        state = _state()
        assert run_command(state, ["pan", "7"])[1].startswith("Error:")
        assert run_command(state, ["add", "x"])[1].startswith("Error:")
        assert run_command(state, ["dance"])[1].startswith("Unknown command")

    def test_show_history(self):
        state, _ = run_command(_state(), ["weigh"])
        _, message = run_command(state, ["show"])
        assert "1. [] = []" in message


class TestPlay:
    def test_scripted_game(self, monkeypatch):
        import oddball.cli as cli

        monkeypatch.setattr(cli, "init_session", lambda *a, **kw: _state())
        lines = iter([
            "pan 0", "add 1 2 3 4", "pan 1", "add 5 6 7 8", "weigh",
            "", "weigh", "guess 5 lighter",
        ])
        output = []

        state = cmd_play(
            argparse.Namespace(balls=None, seed=None),
            PuzzleConfig(),
            input_fn=lambda prompt: next(lines),
            output_fn=output.append,
        )

        assert state.last_guess_correct is True
        assert output[-1] == "Correct!"
        assert "Result: [1, 2, 3, 4] > [5, 6, 7, 8]" in output

    def test_quit(self):
        lines = iter(["quit"])
        output = []
        state = cmd_play(
            argparse.Namespace(balls=3, seed=1),
            PuzzleConfig(),
            input_fn=lambda prompt: next(lines),
            output_fn=output.append,
        )
        assert len(state.balls) == 3
        assert state.last_guess_correct is None

    def test_render_marks_active_pan(self):
        state, _ = run_command(_state(), ["pan", "1"])
        assert "*Right pan (1)" in render(state)
        assert " Left pan (0)" in render(state)


class TestMain:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in [
            "ODDBALL_BALL_COUNT",
            "ODDBALL_ANOMALY_OFFSET",
            "ODDBALL_BASELINE_WEIGHT",
            "ODDBALL_MIN_WEIGHINGS_TO_GUESS",
            "ODDBALL_LOG_LEVEL",
        ]:
            monkeypatch.delenv(name, raising=False)

    def test_zero_balls(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["play", "--balls", "0"])

        assert exc.value.code == 1
        assert "Error: Ball count must be at least 1" in capsys.readouterr().out

    def test_bad_ball_count_env(self, monkeypatch, capsys):
        monkeypatch.setenv("ODDBALL_BALL_COUNT", "twelve")
        with pytest.raises(SystemExit) as exc:
            main(["play"])

        assert exc.value.code == 1
        assert "ODDBALL_BALL_COUNT" in capsys.readouterr().out

    def test_no_command(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main([])

        assert exc.value.code == 1
        assert "usage: oddball" in capsys.readouterr().out
