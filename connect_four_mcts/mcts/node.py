"""
Monte Carlo Tree Search Node for Connect Four.

This module defines the MCTSNode class which represents a node in the MCTS tree.
Each node owns a board snapshot, the player to move, its statistics (visits,
weight), and its children. A node exclusively owns its children; there are no
parent pointers, so one simulation is a single recursive descent and return.

Statistics are kept relative to the mover: a node's weight counts the
simulations won by the player who moved *into* the node (the player to move
at its parent). UCT at the parent can then maximize weight / visits directly.
"""
from __future__ import annotations
from typing import List, Optional
import logging
import math
import random

from connect_four_mcts.core.board import Board, InvalidMove
from connect_four_mcts.core.constants import Player, EXPLORATION_WEIGHT, WIN_VALUES

logger = logging.getLogger(__name__)


class MCTSNode:
    """
    A node in the Monte Carlo Tree Search.

    A node is an unexpanded leaf until its second visit, when it creates one
    child per legal move in a single batch. Terminal nodes never expand.
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        player: Player = Player.ONE,
        move: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize an MCTS node.

        Args:
            board: Board snapshot owned by this node (empty board if None)
            player: Player to move at this node
            move: Column that led to this node from its parent (None for the root)
            rng: Randomness source shared by the whole tree
        """
        self.board = board if board is not None else Board()
        self.player = player
        self.move = move
        self.rng = rng if rng is not None else random.Random()

        # Node statistics
        self.sample_count = 0
        self.weight = 0.0
        self.children: List[MCTSNode] = []

    def is_terminal(self) -> bool:
        return self.board.game_state().is_terminal

    def is_expanded(self) -> bool:
        return bool(self.children)

    def visit_count(self) -> int:
        return self.sample_count

    def win_rate_estimate(self) -> float:
        """
        Fraction of simulations won by the player who moved into this node.

        Returns:
            Win rate in [0, 1], or 0.0 for a node that was never visited
        """
        if self.sample_count == 0:
            return 0.0
        return self.weight / self.sample_count

    def uct_score(self, parent_sample_count: int) -> float:
        """
        Calculate the UCT score of this node as seen from its parent.

        UCT = weight / visits + C * sqrt(ln(parent_visits) / visits)

        Args:
            parent_sample_count: Parent's visit count before the current simulation

        Returns:
            UCT score, infinite for a node that was never visited
        """
        if self.sample_count == 0:
            return math.inf

        exploitation = self.weight / self.sample_count
        exploration = math.sqrt(math.log(parent_sample_count) / self.sample_count)
        return exploitation + EXPLORATION_WEIGHT * exploration

    def select_child(self) -> 'MCTSNode':
        """
        Select the child with the highest UCT score.

        Ties go to the first child in enumeration order.
        """
        if not self.children:
            raise ValueError("Cannot select child from node with no children")

        parent_sample_count = self.sample_count
        return max(self.children, key=lambda child: child.uct_score(parent_sample_count))

    def expand(self) -> List['MCTSNode']:
        """
        Create one child per legal move, in ascending column order.

        Returns:
            The new children
        """
        moves = self.board.legal_moves()
        if not moves:
            raise RuntimeError("Cannot expand a node without legal moves")

        opponent = self.player.opponent
        children = []
        for move in moves:
            board = self.board.clone()
            board.apply(self.player, move)
            children.append(MCTSNode(board, opponent, move, self.rng))

        self.children = children
        return children

    def credit_for(self, result: float) -> float:
        """
        Convert an absolute simulation result into this node's weight credit.

        Args:
            result: Outcome value (+1.0 Player ONE wins, -1.0 Player TWO wins, 0.0 draw)

        Returns:
            1.0 if the winner is not the player to move here, else 0.0
        """
        return 1.0 if result == WIN_VALUES[self.player.opponent] else 0.0

    def run_one_simulation(self) -> float:
        """
        Run one selection, expansion, simulation and backpropagation pass.

        Returns:
            Absolute outcome value of the simulation
        """
        if self.children:
            result = self.select_child().run_one_simulation()
        else:
            state = self.board.game_state()
            if state.is_terminal:
                result = state.outcome_value
            elif self.sample_count == 0:
                result = self.board.random_simulation(self.player, self.rng)
            else:
                result = self.expand()[0].run_one_simulation()

        self.sample_count += 1
        self.weight += self.credit_for(result)
        return result

    def best_move(self) -> int:
        """
        Get the move of the most visited child (robust child).

        Returns:
            Column of the most visited child; ties go to the first child

        Raises:
            ValueError: If the node has not been expanded yet
        """
        if not self.children:
            raise ValueError("Cannot pick a move from a node with no children")

        return max(self.children, key=lambda child: child.sample_count).move

    def commit_move(self, move: int) -> 'MCTSNode':
        """
        Advance to the subtree for a move that was actually played.

        The chosen child keeps its statistics; sibling subtrees are dropped.
        If this node was never expanded, a fresh child is built for the move.

        Args:
            move: Column that was played

        Returns:
            Node for the position after the move

        Raises:
            InvalidMove: If the move is illegal for this node's board
        """
        if self.children:
            chosen = next((c for c in self.children if c.move == move), None)
            if chosen is None:
                raise InvalidMove(move, "not a legal move for this position")
        else:
            board = self.board.clone()
            board.apply(self.player, move)
            chosen = MCTSNode(board, self.player.opponent, move, self.rng)

        logger.debug(
            "Committed move %d, keeping subtree with %d visits",
            move, chosen.sample_count
        )
        self.children = []
        return chosen

    def __repr__(self) -> str:
        return (f"MCTSNode(player={self.player.name}, "
                f"move={self.move}, "
                f"visits={self.sample_count}, "
                f"weight={self.weight:.1f}, "
                f"children={len(self.children)})")

    def __str__(self) -> str:
        """One line per child: move, UCT score and visits."""
        lines = []
        for child in self.children:
            lines.append(
                f"{child.move}: {child.uct_score(self.sample_count):.4f} - {child.sample_count}"
            )
        return "\n".join(lines) + "\n"
