"""
Game flow management for Connect Four.

This module defines the Game class, which alternates the two players on a
Board, asks registered agents for their moves, and enforces the rule that an
invalid move loses the game for the player who made it.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Optional, Tuple
import logging

from connect_four_mcts.core.board import Board, GameState, GameResult, InvalidMove
from connect_four_mcts.core.constants import Player

logger = logging.getLogger(__name__)

AgentCallback = Callable[[Board, Player], int]
MoveObserver = Callable[[Player, int], None]


class Game:
    """
    Manager for Connect Four game flow and rules.

    This class handles turn management and provides interfaces for
    different types of players (human input, AI agents).
    """

    def __init__(self, first_player: Player = Player.ONE):
        """
        Initialize a new game.

        Args:
            first_player: Player who drops the first stone
        """
        self.first_player = first_player
        self.agent_callbacks: Dict[Player, AgentCallback] = {}
        self.observers: List[MoveObserver] = []
        self.reset()

    def reset(self) -> Board:
        """
        Reset the game to an empty board.

        Returns:
            The new board
        """
        self.board = Board()
        self.current_player = self.first_player
        self.history: List[Tuple[Player, int]] = []
        self.forfeited_by: Optional[Player] = None
        self._state = self.board.game_state()
        return self.board

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def game_over(self) -> bool:
        return self._state.is_terminal

    @property
    def result(self) -> GameResult:
        return self._state.result

    @property
    def winner(self) -> Optional[Player]:
        return self._state.winner

    def register_agent(self, player: Player, agent_callback: AgentCallback) -> None:
        """
        Register an AI agent for a player.

        The agent callback takes the board and the player to move and
        returns a column.
        """
        self.agent_callbacks[player] = agent_callback

    def add_observer(self, observer: MoveObserver) -> None:
        """Register a callback notified with (player, move) after every applied move."""
        self.observers.append(observer)

    def step(self, move: Optional[int] = None) -> Tuple[GameState, bool]:
        """
        Advance the game by one move.

        If a move is provided it is applied for the current player.
        Otherwise the current player's registered agent is asked for one.
        An invalid move ends the game as a win for the opponent.

        Args:
            move: Optional column to drop into

        Returns:
            Tuple of (game state, whether the game is over)
        """
        if self.game_over:
            return self._state, True

        player = self.current_player

        if move is None and player in self.agent_callbacks:
            move = self.agent_callbacks[player](self.board, player)

        if move is None:
            raise ValueError(f"No move provided and no agent registered for {player}")

        try:
            self.board.apply(player, move)
        except InvalidMove as exc:
            logger.info("%s forfeits the game: %s", player, exc)
            self.forfeited_by = player
            self._state = GameState.win(player.opponent)
            return self._state, True

        self.history.append((player, move))
        for observer in self.observers:
            observer(player, move)

        self._state = self.board.game_state()
        self.current_player = player.opponent
        return self._state, self._state.is_terminal

    def run_game(self) -> GameState:
        """
        Run the game until completion.

        This method requires both players to have agent callbacks registered.

        Returns:
            Final game state
        """
        for player in Player:
            if player not in self.agent_callbacks:
                raise ValueError(f"No agent callback registered for {player}")

        while not self.game_over:
            self.step()

        return self._state

    def __str__(self) -> str:
        result = f"Connect Four (Moves: {len(self.history)}, State: {self._state})\n"
        result += str(self.board) + "\n"
        if self.forfeited_by is not None:
            result += f"{self.forfeited_by} forfeited with an invalid move\n"
        elif not self.game_over:
            result += f"{self.current_player} to move\n"
        return result
