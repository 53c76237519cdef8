"""Tests for the command-line entry point."""

import pytest

from hallchess.app import main


class TestMain:
    def test_prints_best_move(self, capsys: pytest.CaptureFixture[str]) -> None:
        status = main(["k7/8/8/8/4r3/3P4/8/7K w - - 0 1", "--depth", "1"])
        out = capsys.readouterr().out
        assert status == 0
        assert "d3e4 value=5 depth=1" in out

    def test_placement_only_needs_side(self, capsys: pytest.CaptureFixture[str]) -> None:
        status = main(["k7/8/8/8/4r3/3P4/8/7K", "--side", "white", "--depth", "1"])
        assert status == 0
        assert "d3e4" in capsys.readouterr().out

    def test_invalid_fen(self) -> None:
        assert main(["not/a/fen"]) == 2

    def test_invalid_depth(self) -> None:
        assert main(["--depth", "0"]) == 2

    def test_no_legal_move(self, capsys: pytest.CaptureFixture[str]) -> None:
        status = main(["7k/8/6Q1/8/8/8/8/K7 b - - 0 1", "--depth", "1"])
        assert status == 1
        assert "No legal move" in capsys.readouterr().out
