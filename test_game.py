#!/usr/bin/env python
"""
Tests for Connect Four game flow.

Covers turn alternation, agent callbacks and observers, the rule that an
invalid move loses the game, and complete games between MCTS agents.
"""
import unittest

from connect_four_mcts.core.board import GameResult, GameState
from connect_four_mcts.core.constants import Player
from connect_four_mcts.core.game import Game
from connect_four_mcts.mcts.agent import MCTSAgent
from connect_four_mcts.mcts.config import MCTSConfig


class TestGameFlow(unittest.TestCase):
    """Test case for turn management."""

    def setUp(self):
        self.game = Game()

    def test_players_alternate(self):
        self.assertIs(self.game.current_player, Player.ONE)
        state, over = self.game.step(3)
        self.assertEqual(state, GameState.ongoing())
        self.assertFalse(over)
        self.assertIs(self.game.current_player, Player.TWO)
        self.game.step(4)
        self.assertEqual(self.game.history, [(Player.ONE, 3), (Player.TWO, 4)])
        self.assertIs(self.game.current_player, Player.ONE)

    def test_second_player_can_start(self):
        game = Game(first_player=Player.TWO)
        game.step(0)
        self.assertEqual(game.history, [(Player.TWO, 0)])

    def test_vertical_win_ends_game(self):
        for move in [3, 4, 3, 4, 3, 4]:
            self.game.step(move)
        state, over = self.game.step(3)
        self.assertTrue(over)
        self.assertEqual(state, GameState.win(Player.ONE))
        self.assertIs(self.game.winner, Player.ONE)
        self.assertIsNone(self.game.forfeited_by)

        # Further steps are no-ops
        self.assertEqual(self.game.step(0), (state, True))
        self.assertEqual(len(self.game.history), 7)

    def test_out_of_range_move_forfeits(self):
        self.game.step(0)
        state, over = self.game.step(9)
        self.assertTrue(over)
        self.assertEqual(state, GameState.win(Player.ONE))
        self.assertIs(self.game.forfeited_by, Player.TWO)
        self.assertEqual(self.game.result, GameResult.WIN)

    def test_full_column_forfeits(self):
        for _ in range(6):
            self.game.step(2)
        state, over = self.game.step(2)
        self.assertTrue(over)
        self.assertIs(self.game.winner, Player.TWO)
        self.assertIs(self.game.forfeited_by, Player.ONE)
        self.assertIn("forfeited", str(self.game))

    def test_step_requires_move_or_agent(self):
        with self.assertRaises(ValueError):
            self.game.step()

    def test_agent_callback_and_observers(self):
        seen = []
        self.game.register_agent(Player.ONE, lambda board, player: 5)
        self.game.add_observer(lambda player, move: seen.append((player, move)))
        self.game.step()
        self.game.step(1)
        self.assertEqual(seen, [(Player.ONE, 5), (Player.TWO, 1)])

    def test_observers_skip_forfeited_moves(self):
        seen = []
        self.game.add_observer(lambda player, move: seen.append(move))
        self.game.step(-1)
        self.assertEqual(seen, [])

    def test_reset(self):
        self.game.step(1)
        self.game.reset()
        self.assertEqual(self.game.history, [])
        self.assertEqual(self.game.board.stone_count, 0)
        self.assertIs(self.game.current_player, Player.ONE)
        self.assertFalse(self.game.game_over)

    def test_run_game_requires_both_agents(self):
        self.game.register_agent(Player.ONE, lambda board, player: 0)
        with self.assertRaises(ValueError):
            self.game.run_game()


class TestAgentGames(unittest.TestCase):
    """Test case for complete games between MCTS agents."""

    def test_agents_play_to_completion(self):
        game = Game()
        agents = {
            Player.ONE: MCTSAgent(MCTSConfig(iterations=150, seed=1), name="One"),
            Player.TWO: MCTSAgent(MCTSConfig(iterations=150, seed=2), name="Two"),
        }
        for player, agent in agents.items():
            agent.register_with_game(game, player)

        state = game.run_game()

        self.assertTrue(state.is_terminal)
        self.assertIsNone(game.forfeited_by)
        for agent in agents.values():
            self.assertEqual(agent.root.board, game.board)

    def test_strong_agent_beats_weak_agent(self):
        game = Game()
        MCTSAgent(MCTSConfig(iterations=1000, seed=3), name="Strong").register_with_game(
            game, Player.ONE
        )
        game.register_agent(Player.TWO, lambda board, player: board.legal_moves()[0])

        state = game.run_game()

        self.assertEqual(state, GameState.win(Player.ONE))


if __name__ == "__main__":
    unittest.main()
