"""
Connect Four MCTS - a Monte Carlo Tree Search player for Connect Four.

This package provides a complete implementation of the Connect Four rules,
along with an AI agent that plays by growing a UCT search tree with random
rollouts.
"""

__version__ = "0.1.0"
__author__ = "Connect Four MCTS Team"

# Make key components available at package level
from connect_four_mcts.core.board import Board, GameState, GameResult, InvalidMove
from connect_four_mcts.core.constants import Player, ROWS, COLS, CONNECT
from connect_four_mcts.core.game import Game
from connect_four_mcts.mcts.node import MCTSNode

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))

# Fixed game parameters
DEFAULT_CONFIG = {
    "rows": ROWS,
    "cols": COLS,
    "connect": CONNECT
}
