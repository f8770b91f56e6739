"""
Board engine for Connect Four.

This module owns the authoritative game-state transitions:
- Board: the 6x7 grid, gravity stone placement and legal move enumeration
- GameState: the cached Ongoing/Draw/Win result of a board
- Win detection restricted to the lines through the last placed stone

It also supplies the random playout helper used by the search to evaluate
unexpanded leaves.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Final, Iterable, List, NamedTuple, Optional, Sequence, Tuple
import random

from connect_four_mcts.core.constants import (
    Player, ROWS, COLS, CONNECT, DRAW_VALUE, WIN_VALUES, PLAYER_SYMBOLS
)

Delta = Tuple[int, int]


class InvalidMove(ValueError):
    """Raised when a stone cannot be dropped into the requested column."""

    def __init__(self, move: int, reason: str):
        self.move = move
        self.reason = reason
        super().__init__(f"Invalid move {move}: {reason}")


class GameResult(Enum):
    """Enum representing possible game results."""
    IN_PROGRESS = auto()
    DRAW = auto()
    WIN = auto()


@dataclass(frozen=True)
class GameState:
    """
    Result of a board: ongoing, drawn, or won by a player.

    The winner is set only when the result is WIN.
    """
    result: GameResult = GameResult.IN_PROGRESS
    winner: Optional[Player] = None

    @classmethod
    def ongoing(cls) -> 'GameState':
        return cls(GameResult.IN_PROGRESS)

    @classmethod
    def draw(cls) -> 'GameState':
        return cls(GameResult.DRAW)

    @classmethod
    def win(cls, player: Player) -> 'GameState':
        return cls(GameResult.WIN, player)

    @property
    def is_terminal(self) -> bool:
        return self.result is not GameResult.IN_PROGRESS

    @property
    def outcome_value(self) -> float:
        """
        Absolute scalar value of a finished game.

        Draw maps to 0.0, a win for Player ONE to +1.0 and a win for
        Player TWO to -1.0.

        Raises:
            RuntimeError: If the game is still in progress
        """
        if self.result is GameResult.DRAW:
            return DRAW_VALUE
        if self.result is GameResult.WIN:
            return WIN_VALUES[self.winner]
        raise RuntimeError("An ongoing game has no outcome value")

    def __str__(self) -> str:
        if self.result is GameResult.WIN:
            return f"Win({self.winner})"
        if self.result is GameResult.DRAW:
            return "Draw"
        return "Ongoing"


class Coordinate(NamedTuple):
    """A cell position; row 0 is the bottom row."""
    row: int
    col: int

    def in_bounds(self) -> bool:
        return 0 <= self.row < ROWS and 0 <= self.col < COLS

    def step(self, delta: Delta) -> Optional['Coordinate']:
        """
        Shift the coordinate by one unit delta.

        Returns:
            The neighbouring coordinate, or None when it lies past any edge
            of the grid (negative indices included)
        """
        row = self.row + delta[0]
        col = self.col + delta[1]
        if 0 <= row < ROWS and 0 <= col < COLS:
            return Coordinate(row, col)
        return None


class Line(Enum):
    """The four lines through a cell, each as a pair of opposite unit steps."""
    HORIZONTAL = ((0, 1), (0, -1))
    RISING_DIAGONAL = ((1, 1), (-1, -1))
    FALLING_DIAGONAL = ((-1, 1), (1, -1))
    VERTICAL = ((1, 0), (-1, 0))


# Nothing can sit above a stone that was just dropped
DOWN: Final[Delta] = Line.VERTICAL.value[1]


class Board:
    """
    A Connect Four grid of ROWS x COLS cells.

    Each cell is None (empty) or the Player owning it. Columns fill from
    row 0 upwards without gaps. The game state is cached and refreshed
    after every placement; once terminal, the board accepts no more moves.
    """

    def __init__(self):
        self._grid: List[List[Optional[Player]]] = [
            [None] * COLS for _ in range(ROWS)
        ]
        self._heights: List[int] = [0] * COLS
        self._state = GameState.ongoing()

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> 'Board':
        """
        Build a board from a textual picture, top row first.

        Each row is a string of COLS characters: '.' for empty, and the
        player symbols ('X' for Player ONE, 'O' for Player TWO).

        Args:
            rows: ROWS strings describing the grid from top to bottom

        Returns:
            Board with the cached state computed from the picture

        Raises:
            ValueError: If the picture has the wrong shape, an unknown
                symbol, or a stone floating above an empty cell
        """
        if len(rows) != ROWS or any(len(row) != COLS for row in rows):
            raise ValueError(f"Board picture must be {ROWS} rows of {COLS} cells")

        symbols = {symbol: player for player, symbol in PLAYER_SYMBOLS.items()}
        board = cls()
        for row_index, line in enumerate(reversed(rows)):
            for col, char in enumerate(line):
                if char == '.':
                    continue
                if char not in symbols:
                    raise ValueError(f"Unknown cell symbol {char!r}")
                if board._heights[col] != row_index:
                    raise ValueError(f"Stone floating in column {col}")
                board._grid[row_index][col] = symbols[char]
                board._heights[col] = row_index + 1

        board._state = board._scan_state()
        return board

    def _scan_state(self) -> GameState:
        for row in range(ROWS):
            for col in range(COLS):
                owner = self._grid[row][col]
                if owner is not None and self._completes_line(owner, Coordinate(row, col)):
                    return GameState.win(owner)
        if self.is_draw():
            return GameState.draw()
        return GameState.ongoing()

    def dimensions(self) -> Tuple[int, int]:
        """Get the (rows, cols) extents of the grid."""
        return len(self._grid), len(self._grid[0])

    def cell_at(self, coordinate: Coordinate) -> Optional[Player]:
        """
        Get the owner of a cell.

        Raises:
            IndexError: If the coordinate lies outside the grid
        """
        if not coordinate.in_bounds():
            raise IndexError(f"Coordinate {tuple(coordinate)} is outside the board")
        return self._grid[coordinate.row][coordinate.col]

    def column_height(self, col: int) -> int:
        """Number of stones in a column."""
        return self._heights[col]

    @property
    def stone_count(self) -> int:
        return sum(self._heights)

    def legal_moves(self) -> List[int]:
        """Columns whose top cell is empty, in ascending order."""
        top = self._grid[ROWS - 1]
        return [col for col in range(COLS) if top[col] is None]

    def is_legal(self, move: int) -> bool:
        return (
            not self._state.is_terminal
            and 0 <= move < COLS
            and self._grid[ROWS - 1][move] is None
        )

    def apply(self, player: Player, move: int) -> bool:
        """
        Drop a stone for a player into a column.

        Args:
            player: Owner of the new stone
            move: Target column

        Returns:
            True if this placement wins the game for the player

        Raises:
            InvalidMove: If the column is out of range or full, or the game
                is already over
        """
        if self._state.is_terminal:
            raise InvalidMove(move, f"game is already over ({self._state})")
        if not 0 <= move < COLS:
            raise InvalidMove(move, f"column must be between 0 and {COLS - 1}")

        row = self._heights[move]
        if row >= ROWS:
            raise InvalidMove(move, "column is full")

        self._grid[row][move] = player
        self._heights[move] = row + 1

        won = self.check_win(player, Coordinate(row, move))
        if won:
            self._state = GameState.win(player)
        elif self.is_draw():
            self._state = GameState.draw()
        return won

    def is_draw(self) -> bool:
        """True when the top row is completely occupied."""
        return all(cell is not None for cell in self._grid[ROWS - 1])

    def game_state(self) -> GameState:
        return self._state

    def check_win(self, player: Player, coordinate: Coordinate) -> bool:
        """
        Check whether the stone at a coordinate completes a line for a player.

        Only the four lines through the coordinate are examined, since no
        other line can have just become CONNECT in a row.
        """
        return self._completes_line(player, coordinate)

    def _completes_line(self, player: Player, coordinate: Coordinate) -> bool:
        for line in Line:
            if line is Line.VERTICAL:
                count = 1 + self._run_length(player, coordinate, DOWN)
            else:
                forward, backward = line.value
                count = (
                    1
                    + self._run_length(player, coordinate, forward)
                    + self._run_length(player, coordinate, backward)
                )
            if count >= CONNECT:
                return True
        return False

    def _run_length(self, player: Player, start: Coordinate, delta: Delta) -> int:
        """Contiguous stones of a player walking away from start (exclusive)."""
        count = 0
        current = start.step(delta)
        while current is not None and self._grid[current.row][current.col] is player:
            count += 1
            current = current.step(delta)
        return count

    def clone(self) -> 'Board':
        """Create a full value copy of the board."""
        other = Board.__new__(Board)
        other._grid = [row[:] for row in self._grid]
        other._heights = self._heights[:]
        other._state = self._state
        return other

    def random_simulation(
        self,
        player: Player,
        rng: Optional[random.Random] = None
    ) -> float:
        """
        Play uniformly random moves on a copy of the board until the game ends.

        Args:
            player: Player to move first
            rng: Randomness source (defaults to the random module)

        Returns:
            Outcome value of the finished game (see GameState.outcome_value)
        """
        choice = (rng or random).choice
        board = self.clone()
        mover = player
        while not board._state.is_terminal:
            moves = board.legal_moves()
            if not moves:
                raise RuntimeError("Ongoing board has no legal moves")
            board.apply(mover, choice(moves))
            mover = mover.opponent
        return board._state.outcome_value

    def rows_top_down(self) -> Iterable[Sequence[Optional[Player]]]:
        """Rows of the grid from the top row to the bottom row."""
        return reversed(self._grid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid and self._state == other._state

    __hash__ = None

    def __str__(self) -> str:
        lines = ["| " + " | ".join(str(col) for col in range(COLS)) + " |", ""]
        for row in self.rows_top_down():
            cells = (PLAYER_SYMBOLS[cell] if cell is not None else " " for cell in row)
            lines.append("| " + " | ".join(cells) + " |")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board(stones={self.stone_count}, state={self._state})"
