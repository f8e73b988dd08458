"""
Tests for the command-line interface.
"""

import argparse

import pytest

from ..cli import cmd_play, main, parse_zone, render
from ..engine_core import GameController, ZoneId


class TestParseZone:
    @pytest.mark.parametrize("text,expected", [
        ("w", ZoneId.waste()),
        ("s", ZoneId.stock()),
        ("t3", ZoneId.tableau(3)),
        ("f2", ZoneId.foundation(2)),
        ("tableau:6", ZoneId.tableau(6)),
        ("foundation:hearts", ZoneId.foundation(2)),
        ("Waste", ZoneId.waste()),
    ])
    def test_short_and_long_forms(self, text, expected):
        assert parse_zone(text) == expected

    @pytest.mark.parametrize("text", ["x1", "t9", "t", "wxyz", "s1", "ftwo"])
    def test_bad_zone(self, text):
        with pytest.raises(ValueError):
            parse_zone(text)


class TestPlay:
    """Tests for the interactive loop, driven by scripted input."""

    @staticmethod
    def feed(*lines):
        remaining = list(lines)

        def input_fn(prompt):
            if not remaining:
                raise EOFError
            return remaining.pop(0)

        return input_fn

    def test_draw_and_undo(self, capsys):
        args = argparse.Namespace(seed=42, max_recycles=None)

        cmd_play(args, input_fn=self.feed("d", "u", "q"))

        out = capsys.readouterr().out
        assert "moves: 1" in out
        assert out.count("moves: 0") == 2

    def test_rejection_is_reported(self, capsys):
        args = argparse.Namespace(seed=42, max_recycles=None)

        cmd_play(args, input_fn=self.feed("m w t0"))

        assert "[EMPTY_SOURCE_SELECTION]" in capsys.readouterr().out

    def test_undo_with_nothing_to_undo(self, capsys):
        args = argparse.Namespace(seed=42, max_recycles=None)

        cmd_play(args, input_fn=self.feed("u"))

        assert "Nothing to undo" in capsys.readouterr().out

    def test_bad_input_keeps_playing(self, capsys):
        args = argparse.Namespace(seed=42, max_recycles=None)

        cmd_play(args, input_fn=self.feed("m", "m zz t1", "d"))

        out = capsys.readouterr().out
        assert out.count("Error:") == 2
        assert "moves: 1" in out


class TestRender:
    def test_render_hides_face_down_cards(self):
        text = render(GameController(seed=42).snapshot())

        assert "stock: 24" in text
        assert "##" in text
        assert "seed: 42" in text


class TestMain:
    def test_deal(self, capsys):
        main(["deal", "--seed", "3"])
        assert "seed: 3" in capsys.readouterr().out

    def test_no_command(self):
        with pytest.raises(SystemExit):
            main([])
