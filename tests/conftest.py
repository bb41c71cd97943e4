"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from ndmines import Board, BoardConfig, Cell, Game, GamePhase, new_game


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board()


@pytest.fixture
def cube_board() -> Board:
    """Create a 3x3x3 board with 3 mines."""
    return Board(BoardConfig((3, 3, 3), 3))


@pytest.fixture
def line_board() -> Board:
    """Create a 1-D board of 7 cells with a mine at (3,)."""
    board = Board(BoardConfig((7,), 1))
    board.place_mines_at([(3,)])
    return board


@pytest.fixture
def wall_board() -> Board:
    """Create a 5x5 board with a wall of mines along x == 2."""
    board = Board(BoardConfig((5, 5), 5))
    board.place_mines_at([(2, y) for y in range(5)])
    return board


@pytest.fixture
def corner_board() -> Board:
    """Create a 3x2 board with a single mine at (2, 1)."""
    board = Board(BoardConfig((3, 2), 1))
    board.place_mines_at([(2, 1)])
    return board


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Game Fixtures
# ============================================================================

@pytest.fixture
def fresh_game() -> Game:
    """Create a seeded 4x4x4 game awaiting its first move."""
    return new_game((4, 4, 4), 8, seed=42)


@pytest.fixture
def in_progress_game() -> Game:
    """Create a 4x4 game that is in progress after one safe reveal."""
    for seed in range(100):
        game = new_game((4, 4), 6, seed=seed)
        game.reveal((0, 0))
        if game.phase == GamePhase.IN_PROGRESS:
            return game
    raise RuntimeError("No seed left the game in progress")


@pytest.fixture
def lost_game(in_progress_game: Game) -> Game:
    """Create a game lost by revealing a mine."""
    in_progress_game.reveal(in_progress_game.board.mine_coordinates()[0])
    return in_progress_game


@pytest.fixture
def won_game() -> Game:
    """Create a 3x3 game with 8 mines, won by revealing the centre."""
    game = new_game((3, 3), 8, seed=1)
    game.reveal((1, 1))
    return game


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig((9, 9), 10)


@pytest.fixture
def cube_config() -> BoardConfig:
    """3x3x3 configuration with 3 mines."""
    return BoardConfig((3, 3, 3), 3)
