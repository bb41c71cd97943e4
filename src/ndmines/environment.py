"""
Gymnasium environment wrapper for N-dimensional Minesweeper.

Provides a standard RL interface for agents. Actions are flat indices,
so the action space is the same for any number of dimensions.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, observation_dtype
from .cell import FLAGGED_OBSERVATION, HIDDEN_OBSERVATION, MINE_OBSERVATION
from .coordinates import Coordinate, to_coord
from .errors import MinesweeperError
from .game import Game

# Rewards
SAFE_REWARD = 1.0
WIN_REWARD = 10.0
MINE_REWARD = -10.0
INVALID_REWARD = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for N-dimensional Minesweeper.

    Observation:
        Array of shape ``config.dimensions`` where:
        - -1 = hidden cell
        - -2 = flagged cell
        - -3 = revealed mine
        - 0.. = revealed cell with adjacent mine count

    Actions:
        Discrete action space of size ``total_cells``.
        Action i reveals the cell whose flat index is i.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.game = Game(self.config)
        self.render_mode = render_mode

        max_count = min(3 ** self.config.num_dimensions - 1, self.config.total_cells - 1)
        self.observation_space = spaces.Box(
            low=MINE_OBSERVATION,
            high=max_count,
            shape=self.config.dimensions,
            dtype=observation_dtype(self.config.num_dimensions),
        )

        # One action per cell
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new episode on a fresh game.

        Args:
            seed: Random seed; mine placement is drawn from the
                environment's generator so episodes are reproducible.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        mine_seed = int(self.np_random.integers(0, 2 ** 31 - 1))
        self.game = Game(BoardConfig(self.config.dimensions, self.config.num_mines, mine_seed))
        self._steps = 0

        return self.game.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat index of the cell to reveal.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        coord = self._action_to_coord(action)
        self._steps += 1

        reward = self._calculate_reward(coord)

        observation = self.game.board.get_observation()
        terminated = self.game.is_over
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _action_to_coord(self, action: int) -> Coordinate:
        """Convert flat action index to a coordinate."""
        return to_coord(int(action), self.config.dimensions)

    def _calculate_reward(self, coord: Coordinate) -> float:
        """
        Reveal a cell and score the result.

        Args:
            coord: Coordinate to reveal.

        Returns:
            Reward value.
        """
        try:
            outcome = self.game.reveal(coord)
        except MinesweeperError:
            return INVALID_REWARD

        if outcome.is_noop:
            return INVALID_REWARD
        if self.game.is_won:
            return WIN_REWARD
        if self.game.is_lost:
            return MINE_REWARD
        return SAFE_REWARD

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.game.board
        return {
            "steps": self._steps,
            "revealed": board.safe_revealed_count,
            "total_safe": self.config.safe_cells,
            "game_state": self.game.phase.name,
            "valid_actions": int(board.get_action_mask().sum()),
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        return self.game.board.get_action_mask()

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """
        Render board as ASCII, one 2-D block per slice of the higher axes.

        Axis 0 runs along each line and axis 1 down the block.
        """
        obs = self.game.board.get_observation()
        if obs.ndim == 1:
            obs = obs.reshape(obs.shape[0], 1)

        width = len(str(max(0, int(obs.max()))))
        blocks = []
        for higher in np.ndindex(*obs.shape[2:]):
            lines = []
            if higher:
                lines.append("[:, :, " + ", ".join(str(i) for i in higher) + "]")
            for y in range(obs.shape[1]):
                row = [_symbol(int(obs[(x, y) + higher])).rjust(width) for x in range(obs.shape[0])]
                lines.append(" ".join(row))
            blocks.append("\n".join(lines))

        return "\n\n".join(blocks)


def _symbol(value: int) -> str:
    """ASCII symbol for one observation value."""
    if value == HIDDEN_OBSERVATION:
        return "."
    if value == FLAGGED_OBSERVATION:
        return "F"
    if value == MINE_OBSERVATION:
        return "*"
    if value == 0:
        return " "
    return str(value)
