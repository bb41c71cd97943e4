"""
Base agent interface for N-dimensional Minesweeper AI.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence

import numpy as np

from ndmines.cell import HIDDEN_OBSERVATION
from ndmines.coordinates import Coordinate, to_coord, to_index, total_cells


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for Minesweeper agents.

    All agents must implement the select_action method to choose
    which cell to reveal based on the current observation.
    """

    def __init__(self, dimensions: Sequence[int]) -> None:
        """
        Initialize the agent.

        Args:
            dimensions: Extent of each board axis.
        """
        self.dimensions = tuple(dimensions)
        self.total_cells = total_cells(self.dimensions)

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: N-D array of cell states.
            valid_actions: Optional mask of valid actions.

        Returns:
            Flat index of the cell to reveal.
        """

    def action_to_coord(self, action: int) -> Coordinate:
        """Convert flat action index to a coordinate."""
        return to_coord(int(action), self.dimensions)

    def coord_to_action(self, coord: Sequence[int]) -> int:
        """Convert a coordinate to its flat action index."""
        return to_index(coord, self.dimensions)

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """
        Get valid actions mask from observation.

        Args:
            observation: N-D array of cell states.

        Returns:
            Boolean mask over flat indices where True = valid action.
        """
        # Flat indices run first-axis-fastest, i.e. Fortran order
        flat_obs = observation.flatten(order="F")
        return flat_obs == HIDDEN_OBSERVATION

    def reset(self) -> None:
        """Reset agent state for new episode."""

    def update(
        self,
        observation: np.ndarray,
        action: int,
        reward: float,
        next_observation: np.ndarray,
        done: bool,
    ) -> None:
        """
        Update agent with experience (for learning agents).

        Args:
            observation: State before action.
            action: Action taken.
            reward: Reward received.
            next_observation: State after action.
            done: Whether episode ended.
        """
