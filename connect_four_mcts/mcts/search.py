"""
Monte Carlo Tree Search driving loop for Connect Four.

Each simulation is one call to MCTSNode.run_one_simulation, which performs
the four standard phases in a single recursive pass:
1. Selection: Descend through expanded nodes by UCT score
2. Expansion: Create all children of a leaf on its second visit
3. Simulation: Play a random game out from a fresh leaf
4. Backpropagation: Update visits and weights on the way back up

This module runs whole simulations under an iteration and time budget and
provides diagnostics over the resulting tree.
"""
from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import time

from connect_four_mcts.mcts.node import MCTSNode
from connect_four_mcts.mcts.config import MCTSConfig

logger = logging.getLogger(__name__)


def mcts_search(
    root: MCTSNode,
    config: Optional[MCTSConfig] = None,
    progress: Optional[Callable[[int], Any]] = None
) -> Tuple[int, Dict[str, Any]]:
    """
    Run Monte Carlo Tree Search from a root node to find the best move.

    The deadline, if any, is only checked between simulations; a simulation
    is never interrupted.

    Args:
        root: Root node of the tree (grown in place)
        config: MCTS configuration parameters
        progress: Optional callback invoked with 1 after every simulation

    Returns:
        Tuple of (best move, search statistics)
    """
    if config is None:
        config = MCTSConfig()

    if root.is_terminal():
        raise ValueError(f"Cannot search a finished game ({root.board.game_state()})")

    stats: Dict[str, Any] = {
        "iterations": 0,
        "stopped_early": False,
        "initial_visits": root.sample_count,
    }

    start_time = time.time()

    for _ in range(config.iterations):
        if config.time_limit is not None and time.time() - start_time > config.time_limit:
            stats["stopped_early"] = True
            break

        root.run_one_simulation()
        stats["iterations"] += 1

        if progress is not None:
            progress(1)

    stats["time_elapsed"] = time.time() - start_time
    stats["iterations_per_second"] = stats["iterations"] / max(0.001, stats["time_elapsed"])

    if root.children:
        best_move = root.best_move()
    else:
        # Too few simulations to expand the root
        best_move = root.rng.choice(root.board.legal_moves())
        stats["used_fallback"] = True

    stats["node_count"] = count_nodes(root)
    stats["max_depth"] = tree_depth(root)
    stats["action_visits"] = {child.move: child.sample_count for child in root.children}
    stats["action_win_rates"] = {
        child.move: child.win_rate_estimate() for child in root.children
    }

    logger.info(
        "Search finished: %d simulations in %.3fs (%.0f/s), %d nodes, best move %d",
        stats["iterations"], stats["time_elapsed"], stats["iterations_per_second"],
        stats["node_count"], best_move
    )

    return best_move, stats


def count_nodes(node: MCTSNode) -> int:
    """
    Count the total number of nodes in the tree.

    Args:
        node: Root node of the tree

    Returns:
        Total number of nodes
    """
    count = 1
    for child in node.children:
        count += count_nodes(child)
    return count


def tree_depth(node: MCTSNode) -> int:
    """Number of edges on the longest path below a node."""
    if not node.children:
        return 0
    return 1 + max(tree_depth(child) for child in node.children)


def get_principal_variation(root: MCTSNode, max_depth: int = 10) -> List[Tuple[int, float]]:
    """
    Get the principal variation (most visited path) from the root.

    Args:
        root: Root node of the MCTS tree
        max_depth: Maximum depth to explore

    Returns:
        List of (move, win rate) pairs representing the principal variation
    """
    result = []
    current = root

    while current.children and len(result) < max_depth:
        best_child = max(current.children, key=lambda c: c.sample_count)
        if best_child.sample_count == 0:
            break
        result.append((best_child.move, best_child.win_rate_estimate()))
        current = best_child

    return result


def get_action_statistics(root: MCTSNode) -> Dict[int, Dict[str, float]]:
    """
    Get statistics for all moves from the root.

    Args:
        root: Root node of the MCTS tree

    Returns:
        Dictionary mapping columns to visits, weight, win rate and UCT score
    """
    return {
        child.move: {
            "visits": child.sample_count,
            "weight": child.weight,
            "win_rate": child.win_rate_estimate(),
            "uct": child.uct_score(root.sample_count),
        }
        for child in root.children
    }
