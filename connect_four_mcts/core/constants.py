"""
Constants for the Connect Four game.

This module defines the game constants used throughout the implementation,
including board dimensions, the players, win length and search defaults.
"""
from enum import Enum
from typing import Dict, Final
import math


class Player(Enum):
    """Enum representing the two players."""
    ONE = 1
    TWO = 2

    @property
    def opponent(self) -> 'Player':
        """The other player."""
        return Player.TWO if self is Player.ONE else Player.ONE

    def __str__(self) -> str:
        return PLAYER_NAMES[self]


# Display names for players (for pretty printing)
PLAYER_NAMES: Final[Dict[Player, str]] = {
    Player.ONE: "Player 1",
    Player.TWO: "Player 2",
}

# Stone symbols for terminal display
PLAYER_SYMBOLS: Final[Dict[Player, str]] = {
    Player.ONE: "X",
    Player.TWO: "O",
}

# Board dimensions (fixed, row 0 is the bottom row)
ROWS: Final[int] = 6
COLS: Final[int] = 7

# Number of stones in a line needed to win
CONNECT: Final[int] = 4

# Rollout outcome values, absolute (not relative to the mover)
DRAW_VALUE: Final[float] = 0.0
WIN_VALUES: Final[Dict[Player, float]] = {
    Player.ONE: 1.0,
    Player.TWO: -1.0,
}

# UCT exploration constant (UCB1 value for rewards in [0, 1])
EXPLORATION_WEIGHT: Final[float] = math.sqrt(2)

# Search defaults
DEFAULT_MCTS_ITERATIONS: Final[int] = 10000
ANALYZE_MCTS_ITERATIONS: Final[int] = 1000000
