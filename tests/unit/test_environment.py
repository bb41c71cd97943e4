"""
Unit tests for MinesweeperEnv.

Tests spaces, reset/step behavior, rewards and rendering on
N-dimensional boards.
"""
import pytest
import numpy as np
from ndmines import BoardConfig, GamePhase, MinesweeperEnv
from ndmines.coordinates import to_index
from ndmines.environment import INVALID_REWARD, SAFE_REWARD, WIN_REWARD


@pytest.fixture
def cube_env(cube_config: BoardConfig) -> MinesweeperEnv:
    """3x3x3 environment rendering to a string."""
    return MinesweeperEnv(config=cube_config, render_mode="ansi")


# ============================================================================
# Space Tests
# ============================================================================

class TestSpaces:
    """Test observation and action spaces."""

    def test_action_space_is_one_per_cell(self, cube_env: MinesweeperEnv) -> None:
        assert cube_env.action_space.n == 27

    def test_observation_shape_matches_dimensions(self, cube_env: MinesweeperEnv) -> None:
        assert cube_env.observation_space.shape == (3, 3, 3)

    def test_reset_observation_is_in_space(self, cube_env: MinesweeperEnv) -> None:
        obs, info = cube_env.reset(seed=0)
        assert cube_env.observation_space.contains(obs)
        assert np.all(obs == -1)
        assert info["game_state"] == GamePhase.AWAITING_FIRST_MOVE.name
        assert info["valid_actions"] == 27

    def test_default_config(self) -> None:
        env = MinesweeperEnv()
        assert env.observation_space.shape == (9, 9)
        assert env.action_space.n == 81


# ============================================================================
# Step Tests
# ============================================================================

class TestStep:
    """Test stepping through a game."""

    def test_first_step_is_safe(self, cube_env: MinesweeperEnv) -> None:
        cube_env.reset(seed=1)
        obs, reward, terminated, truncated, info = cube_env.step(13)
        assert reward in (SAFE_REWARD, WIN_REWARD)
        assert obs[1, 1, 1] >= 0
        assert truncated is False
        assert info["steps"] == 1

    def test_repeated_action_is_invalid(self, cube_env: MinesweeperEnv) -> None:
        cube_env.reset(seed=1)
        cube_env.step(0)
        _, reward, _, _, _ = cube_env.step(0)
        assert reward == INVALID_REWARD

    def test_win_reward(self) -> None:
        env = MinesweeperEnv(BoardConfig((3, 3), 8))
        env.reset(seed=0)
        _, reward, terminated, _, info = env.step(4)
        assert reward == WIN_REWARD
        assert terminated is True
        assert info["game_state"] == "WON"

    def test_episode_ends(self, cube_env: MinesweeperEnv) -> None:
        """Revealing hidden cells one at a time always terminates."""
        cube_env.reset(seed=2)
        terminated = False
        for _ in range(27):
            action = int(np.flatnonzero(cube_env.get_action_mask())[0])
            _, _, terminated, _, info = cube_env.step(action)
            if terminated:
                break
        assert terminated is True
        assert info["game_state"] in ("WON", "LOST")

    def test_revealed_info_counts_safe_cells_only(self, cube_env: MinesweeperEnv) -> None:
        """A hit mine is not counted alongside total_safe."""
        for seed in range(100):
            cube_env.reset(seed=seed)
            cube_env.step(0)
            if not cube_env.game.is_over:
                break
        board = cube_env.game.board
        action = to_index(board.mine_coordinates()[0], board.dimensions)
        _, _, terminated, _, info = cube_env.step(action)
        assert terminated is True
        assert info["game_state"] == "LOST"
        assert info["revealed"] == board.revealed_count - 1
        assert info["revealed"] <= info["total_safe"]

    def test_same_seed_same_episode(self, cube_config: BoardConfig) -> None:
        first = MinesweeperEnv(cube_config)
        second = MinesweeperEnv(cube_config)
        first.reset(seed=5)
        second.reset(seed=5)
        assert np.array_equal(first.step(0)[0], second.step(0)[0])
        assert first.game.board.mine_coordinates() == second.game.board.mine_coordinates()

    def test_reset_starts_new_game(self, cube_env: MinesweeperEnv) -> None:
        cube_env.reset(seed=3)
        old_game = cube_env.game
        cube_env.step(0)
        cube_env.reset()
        assert cube_env.game is not old_game
        assert cube_env.game.phase == GamePhase.AWAITING_FIRST_MOVE


# ============================================================================
# Render Tests
# ============================================================================

class TestRender:
    """Test ASCII rendering."""

    def test_3d_render_has_one_block_per_slice(self, cube_env: MinesweeperEnv) -> None:
        cube_env.reset(seed=0)
        text = cube_env.render()
        blocks = text.split("\n\n")
        assert len(blocks) == 3
        assert blocks[0].splitlines()[0] == "[:, :, 0]"
        assert blocks[2].splitlines()[1:] == [". . ."] * 3

    def test_2d_render(self) -> None:
        env = MinesweeperEnv(BoardConfig((4, 2), 1), render_mode="ansi")
        env.reset(seed=0)
        assert env.render() == ". . . .\n. . . ."

    def test_1d_render_is_single_line(self) -> None:
        env = MinesweeperEnv(BoardConfig((5,), 1), render_mode="ansi")
        env.reset(seed=0)
        assert env.render() == ". . . . ."

    def test_no_render_mode_returns_none(self) -> None:
        env = MinesweeperEnv(BoardConfig((3, 3), 1))
        assert env.render() is None
