"""
Connect Four Core Package

This package contains the core game logic, including:
- Board representation, stone placement and win/draw detection
- Game flow and turn management
- Constants and enums

All core components can be imported directly from this package.
"""

# Board and game state
from connect_four_mcts.core.board import (
    Board, Coordinate, GameResult, GameState, InvalidMove, Line
)

# Game flow
from connect_four_mcts.core.game import Game

# Constants
from connect_four_mcts.core.constants import (
    Player, ROWS, COLS, CONNECT, EXPLORATION_WEIGHT, PLAYER_SYMBOLS
)

__all__ = [
    # Board
    'Board', 'Coordinate', 'GameResult', 'GameState', 'InvalidMove', 'Line',

    # Game
    'Game',

    # Constants
    'Player', 'ROWS', 'COLS', 'CONNECT', 'EXPLORATION_WEIGHT', 'PLAYER_SYMBOLS'
]
