"""
N-dimensional Minesweeper engine.

Provides coordinate mapping, board and game logic for boards with any
number of dimensions, plus a gymnasium environment for agents.
"""
from .errors import (
    MinesweeperError,
    OutOfBounds,
    InvalidConfiguration,
    AlreadyPlaced,
    MinesNotPlaced,
    AlreadyRevealed,
    GameOver,
)
from .coordinates import to_index, to_coord, neighbors, neighbor_indices, offsets
from .cell import Cell, CellState, CellView
from .board import (
    Board,
    BoardConfig,
    RevealOutcome,
    RevealResult,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    CUBE,
    TESSERACT,
)
from .game import Game, GamePhase, new_game
from .environment import MinesweeperEnv

__all__ = [
    "MinesweeperError",
    "OutOfBounds",
    "InvalidConfiguration",
    "AlreadyPlaced",
    "MinesNotPlaced",
    "AlreadyRevealed",
    "GameOver",
    "to_index",
    "to_coord",
    "neighbors",
    "neighbor_indices",
    "offsets",
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "RevealOutcome",
    "RevealResult",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "CUBE",
    "TESSERACT",
    "Game",
    "GamePhase",
    "new_game",
    "MinesweeperEnv",
]
