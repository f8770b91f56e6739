#!/usr/bin/env python
"""
Tests for the command line front end.

Output goes to an in-memory rich console so the tests can inspect what a
player would see.
"""
import io
import unittest
from unittest import mock

from rich.console import Console

from connect_four_mcts import play
from connect_four_mcts.core.board import Board, GameState
from connect_four_mcts.core.constants import Player, ANALYZE_MCTS_ITERATIONS, DEFAULT_MCTS_ITERATIONS


def quiet_console() -> Console:
    return Console(file=io.StringIO(), width=100)


class TestArguments(unittest.TestCase):
    """Test case for argument parsing and search configuration."""

    def test_defaults(self):
        args = play.parse_args([])
        self.assertEqual(args.mode, "human-vs-ai")
        self.assertIsNone(args.iterations)
        self.assertFalse(args.first)
        self.assertEqual(play.build_config(args).iterations, DEFAULT_MCTS_ITERATIONS)

    def test_analyze_uses_deep_default(self):
        args = play.parse_args(["--mode", "analyze"])
        self.assertEqual(play.build_config(args).iterations, ANALYZE_MCTS_ITERATIONS)

    def test_explicit_options(self):
        args = play.parse_args(["--mode", "ai-vs-ai", "--iterations", "25",
                                "--time-limit", "0.5", "--seed", "7"])
        config = play.build_config(args)
        self.assertEqual(config.iterations, 25)
        self.assertEqual(config.time_limit, 0.5)
        self.assertEqual(config.seed, 7)

    def test_unknown_mode_is_rejected(self):
        with mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit):
                play.parse_args(["--mode", "solo"])


class TestRendering(unittest.TestCase):
    """Test case for board rendering and input parsing."""

    def test_render_board(self):
        board = Board()
        board.apply(Player.ONE, 0)
        board.apply(Player.TWO, 6)
        lines = play.render_board(board).plain.rstrip("\n").split("\n")
        self.assertEqual(lines[0], "| 0 | 1 | 2 | 3 | 4 | 5 | 6 |")
        self.assertEqual(lines[-1], "| X |   |   |   |   |   | O |")

    def test_parse_move(self):
        self.assertEqual(play.parse_move(" 3\n"), 3)
        self.assertEqual(play.parse_move("-1"), -1)
        self.assertIsNone(play.parse_move("three"))
        self.assertIsNone(play.parse_move(""))

    def test_human_move_asks_again_on_garbage(self):
        console = quiet_console()
        with mock.patch.object(console, "input", side_effect=["abc", "", "4"]) as prompt:
            self.assertEqual(play.get_human_move(console, Player.ONE), 4)
        self.assertEqual(prompt.call_count, 3)
        self.assertIn("Please enter a column number", console.file.getvalue())


class TestModes(unittest.TestCase):
    """Test case for the four ways of running the program."""

    def test_human_vs_human_forfeit(self):
        console = quiet_console()
        args = play.parse_args(["--mode", "human-vs-human"])
        with mock.patch.object(console, "input", side_effect=["x", "9"]):
            game = play.play_game(console, args)

        self.assertIs(game.forfeited_by, Player.ONE)
        self.assertEqual(game.state, GameState.win(Player.TWO))
        output = console.file.getvalue()
        self.assertIn("GAME OVER", output)
        self.assertIn("Invalid move by Player 1", output)

    def test_human_vs_ai_human_forfeits_after_ai_move(self):
        console = quiet_console()
        args = play.parse_args(["--mode", "human-vs-ai", "--iterations", "30", "--seed", "2"])
        with mock.patch.object(console, "input", side_effect=["-1"]):
            game = play.play_game(console, args)

        self.assertEqual(len(game.history), 1)
        self.assertIs(game.history[0][0], Player.ONE)
        self.assertIs(game.forfeited_by, Player.TWO)
        self.assertIs(game.winner, Player.ONE)

    def test_ai_vs_ai_finishes(self):
        console = quiet_console()
        args = play.parse_args(["--mode", "ai-vs-ai", "--iterations", "40", "--seed", "1"])
        game = play.play_game(console, args)

        self.assertTrue(game.game_over)
        self.assertIsNone(game.forfeited_by)
        self.assertIn("GAME OVER", console.file.getvalue())

    def test_analyze(self):
        console = quiet_console()
        args = play.parse_args(["--mode", "analyze", "--iterations", "50", "--seed", "1"])
        root = play.analyze(console, args)

        self.assertEqual(root.visit_count(), 50)
        self.assertEqual(len(root.children), 7)
        output = console.file.getvalue()
        self.assertIn("Opening moves after 50 simulations", output)
        self.assertIn("Best move:", output)

    def test_main_runs_analysis(self):
        console = quiet_console()
        with mock.patch.object(play, "Console", return_value=console):
            play.main(["--mode", "analyze", "--iterations", "20", "--seed", "0"])
        self.assertIn("Best move:", console.file.getvalue())

    def test_main_exits_cleanly_on_end_of_input(self):
        console = quiet_console()
        with mock.patch.object(play, "Console", return_value=console), \
                mock.patch.object(console, "input", side_effect=EOFError):
            with self.assertRaises(SystemExit) as ctx:
                play.main(["--mode", "human-vs-human"])
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn("Game interrupted", console.file.getvalue())


if __name__ == "__main__":
    unittest.main()
