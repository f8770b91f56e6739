"""
Configuration for Monte Carlo Tree Search (MCTS).

This module defines the parameters of the search driving loop: how many
simulations to run, an optional wall-clock budget, and the random seed.
The UCT exploration constant is fixed in core.constants and is not part
of the configuration.
"""
from dataclasses import dataclass, fields
from typing import Optional
import random

from connect_four_mcts.core.constants import DEFAULT_MCTS_ITERATIONS


@dataclass
class MCTSConfig:
    """
    Configuration parameters for the MCTS driving loop.

    This class defines the tunable parameters of a search,
    with validation and sensible defaults.
    """
    # Search parameters
    iterations: int = DEFAULT_MCTS_ITERATIONS
    """Maximum number of simulations to run per move decision"""

    time_limit: Optional[float] = None
    """Optional time limit in seconds, checked between simulations (None = no limit)"""

    # Reproducibility
    seed: Optional[int] = None
    """Seed for the rollout randomness (None = fresh entropy)"""

    verbose: bool = False
    """Whether agents print search information after each decision"""

    def __post_init__(self):
        """Validate configuration parameters."""
        if self.iterations <= 0:
            raise ValueError("iterations must be positive")

        if self.time_limit is not None and self.time_limit <= 0:
            raise ValueError("time_limit must be positive or None")

    def make_rng(self) -> random.Random:
        """Create the random source for a search tree."""
        return random.Random(self.seed)

    @classmethod
    def default(cls) -> 'MCTSConfig':
        """
        Get the default configuration.

        Returns:
            Default MCTSConfig object
        """
        return cls()

    @classmethod
    def fast(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for speed (fewer simulations).

        Returns:
            Fast MCTSConfig object
        """
        return cls(iterations=1000)

    @classmethod
    def deep(cls) -> 'MCTSConfig':
        """
        Get a configuration optimized for deep search.

        Returns:
            Deep MCTSConfig object
        """
        return cls(iterations=100000)

    @classmethod
    def from_dict(cls, config_dict: dict) -> 'MCTSConfig':
        """
        Create a configuration from a dictionary.

        Args:
            config_dict: Dictionary of configuration parameters

        Returns:
            MCTSConfig object
        """
        # Filter out any keys that aren't valid parameters
        valid_names = {f.name for f in fields(cls)}
        valid_params = {k: v for k, v in config_dict.items() if k in valid_names}
        return cls(**valid_params)

    def to_dict(self) -> dict:
        """
        Convert the configuration to a dictionary.

        Returns:
            Dictionary of configuration parameters
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def __str__(self) -> str:
        params = ", ".join(f"{name}={value}" for name, value in self.to_dict().items())
        return f"MCTSConfig({params})"
