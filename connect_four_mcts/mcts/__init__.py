"""
Monte Carlo Tree Search (MCTS) implementation for Connect Four.

This package provides a complete MCTS agent that plays Connect Four without
any training. Each simulation works through the tree in one recursive pass:

1. Selection: Starting from the root node, descend into the child with the
   highest UCT score until reaching a node without children.
2. Expansion: On a leaf's second visit, create one child per legal move and
   continue into the first of them.
3. Simulation: From a leaf visited for the first time, play random moves to
   the end of the game.
4. Backpropagation: Update visit counts and weights on every node of the path.

The agent reuses its tree across turns by committing the moves actually played.
"""

from connect_four_mcts.mcts.node import MCTSNode
from connect_four_mcts.mcts.agent import MCTSAgent, MCTSAgentFactory
from connect_four_mcts.mcts.search import (
    mcts_search,
    count_nodes,
    tree_depth,
    get_principal_variation,
    get_action_statistics
)
from connect_four_mcts.mcts.config import MCTSConfig

# Default configuration
DEFAULT_CONFIG = MCTSConfig(
    iterations=10000,   # Simulations per move
    time_limit=None,    # Optional time limit in seconds (None = no limit)
    seed=None           # Fresh randomness every run
)

__all__ = [
    'MCTSAgent',
    'MCTSAgentFactory',
    'MCTSNode',
    'MCTSConfig',
    'mcts_search',
    'count_nodes',
    'tree_depth',
    'get_principal_variation',
    'get_action_statistics',
    'DEFAULT_CONFIG'
]
