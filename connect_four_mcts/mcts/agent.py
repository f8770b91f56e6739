"""
Monte Carlo Tree Search Agent for Connect Four.

This module provides the MCTSAgent class, a ready-to-use AI player. The agent
keeps its search tree alive between turns: every move played in the real game
is committed to the tree, so the statistics gathered under that branch are
reused on the next decision instead of being rebuilt from scratch.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import time

from connect_four_mcts.core.board import Board, InvalidMove
from connect_four_mcts.core.constants import Player
from connect_four_mcts.core.game import Game
from connect_four_mcts.mcts.node import MCTSNode
from connect_four_mcts.mcts.config import MCTSConfig
from connect_four_mcts.mcts.search import (
    mcts_search, get_action_statistics, get_principal_variation
)

logger = logging.getLogger(__name__)


class MCTSAgent:
    """
    Monte Carlo Tree Search agent for playing Connect Four.

    This agent uses MCTS to select moves. It can be configured with
    different parameters and provides statistics about its search process.
    """

    def __init__(
        self,
        config: Optional[MCTSConfig] = None,
        name: str = "MCTS Agent",
        verbose: bool = False
    ):
        """
        Initialize an MCTS agent.

        Args:
            config: MCTS configuration parameters
            name: Name of the agent
            verbose: Whether to print detailed information after each search
        """
        self.config = config or MCTSConfig()
        self.name = name
        self.verbose = verbose or self.config.verbose
        self.rng = self.config.make_rng()

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

        # History of all moves and their statistics
        self.action_history: List[Tuple[int, Dict[str, Any]]] = []

        # Live search tree, advanced by observe_move
        self.root: Optional[MCTSNode] = None

    def _root_for(self, board: Board, player: Player) -> MCTSNode:
        """Reuse the live tree when it matches the position, else start a new one."""
        if self.root is not None and self.root.player is player and self.root.board == board:
            logger.debug("Reusing search tree with %d visits", self.root.sample_count)
        else:
            self.root = MCTSNode(board.clone(), player, rng=self.rng)
        return self.root

    def select_action(
        self,
        board: Board,
        player: Player,
        progress: Optional[Callable[[int], Any]] = None
    ) -> int:
        """
        Select a move using Monte Carlo Tree Search.

        Args:
            board: Current board
            player: Player to move
            progress: Optional callback invoked with 1 after every simulation

        Returns:
            Selected column
        """
        if board.game_state().is_terminal:
            raise ValueError(f"Game is already over ({board.game_state()})")

        root = self._root_for(board, player)

        # If there's only one legal move, no need to search
        legal_moves = board.legal_moves()
        if len(legal_moves) == 1:
            self.last_stats = {"iterations": 0, "forced_move": True}
            return legal_moves[0]

        start_time = time.time()
        move, stats = mcts_search(root, self.config, progress)
        stats["total_time"] = time.time() - start_time

        self.last_stats = stats
        self.action_history.append((move, stats))

        if self.verbose:
            self._print_search_info(move, stats)

        return move

    def observe_move(self, move: int) -> None:
        """
        Advance the live tree past a move played in the real game.

        Args:
            move: Column that was played
        """
        if self.root is None:
            return
        try:
            self.root = self.root.commit_move(move)
        except InvalidMove as exc:
            logger.warning("%s lost track of the game (%s); dropping search tree", self.name, exc)
            self.root = None

    def _print_search_info(self, move: int, stats: Dict[str, Any]) -> None:
        """
        Print information about the search.

        Args:
            move: Selected move
            stats: Search statistics
        """
        print(f"\n{self.name} selected column {move}")
        print(f"Simulations: {stats['iterations']} "
              f"(tree already had {stats['initial_visits']} visits)")
        print(f"Time: {stats['time_elapsed']:.3f}s ({stats['iterations_per_second']:.1f} sims/s)")
        print(f"Nodes: {stats['node_count']}")
        print(f"Max depth: {stats['max_depth']}")

        print("\nTop moves:")
        moves_by_visits = sorted(
            stats['action_visits'].items(),
            key=lambda x: x[1],
            reverse=True
        )
        for i, (column, visits) in enumerate(moves_by_visits[:5]):
            win_rate = stats['action_win_rates'].get(column, 0.0)
            print(f"{i+1}. column {column} - {visits} visits, {win_rate:.3f} win rate")

    def get_action_callback(self) -> Callable[[Board, Player], int]:
        """
        Get a callback function for selecting moves.

        This is useful for registering the agent with a Game object.

        Returns:
            Callback function that takes a board and player and returns a column
        """
        return lambda board, player: self.select_action(board, player)

    def register_with_game(self, game: Game, player: Player) -> None:
        """
        Register this agent with a game.

        The agent plays for the given player and observes every move so
        its live tree follows the game.

        Args:
            game: Game object
            player: Player to register as
        """
        game.register_agent(player, self.get_action_callback())
        game.add_observer(lambda _player, move: self.observe_move(move))

    def get_last_statistics(self) -> Dict[str, Any]:
        return self.last_stats

    def get_principal_variation(self) -> List[Tuple[int, float]]:
        """
        Get the principal variation (most visited path) of the live tree.

        Returns:
            List of (move, win rate) pairs representing the principal variation
        """
        if self.root is None:
            return []

        return get_principal_variation(self.root)

    def get_action_statistics(self) -> Dict[int, Dict[str, float]]:
        """
        Get statistics for all moves from the live tree's root.

        Returns:
            Dictionary mapping columns to statistics
        """
        if self.root is None:
            return {}

        return get_action_statistics(self.root)

    def reset(self) -> None:
        """Drop the live tree and all statistics."""
        self.last_stats = {}
        self.action_history = []
        self.root = None

    def __str__(self) -> str:
        return f"{self.name} (MCTS, {self.config.iterations} simulations)"


class MCTSAgentFactory:
    """
    Factory for creating MCTS agents with different configurations.

    This class provides methods for creating MCTS agents with different
    strengths and configurations.
    """

    @staticmethod
    def create_fast() -> MCTSAgent:
        return MCTSAgent(config=MCTSConfig.fast(), name="Fast MCTS")

    @staticmethod
    def create_standard() -> MCTSAgent:
        return MCTSAgent(config=MCTSConfig.default(), name="Standard MCTS")

    @staticmethod
    def create_strong() -> MCTSAgent:
        return MCTSAgent(config=MCTSConfig.deep(), name="Strong MCTS")

    @staticmethod
    def create_custom(
        iterations: int = 10000,
        time_limit: Optional[float] = None,
        seed: Optional[int] = None,
        name: str = "Custom MCTS"
    ) -> MCTSAgent:
        """
        Create a custom MCTS agent.

        Args:
            iterations: Maximum number of simulations per move
            time_limit: Optional time limit in seconds
            seed: Seed for the rollout randomness
            name: Name of the agent

        Returns:
            MCTSAgent
        """
        config = MCTSConfig(
            iterations=iterations,
            time_limit=time_limit,
            seed=seed
        )
        return MCTSAgent(config=config, name=name)
