"""
Cell module for N-dimensional Minesweeper.

Represents individual cells on the game board with their state
(hidden/revealed/flagged) and content (mine/number), plus the
read-only view handed to presentation layers.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional

from .coordinates import Coordinate


# ============================================================================
# Constants
# ============================================================================

HIDDEN_OBSERVATION = -1
FLAGGED_OBSERVATION = -2
# Negative so it never collides with an adjacency count (up to 3^N - 1).
MINE_OBSERVATION = -3


class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the flat board storage.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in the Moore neighbourhood
            (0 to 3^N - 1). Meaningful only for non-mine cells.
        state: Current visual state (hidden, revealed, or flagged).
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return True

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    def to_observation(self) -> int:
        """
        Convert cell to observation value for agents.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            -3: Revealed mine (game over state)
            0..3^N-1: Revealed cell with adjacent mine count
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_OBSERVATION
        if self.state == CellState.FLAGGED:
            return FLAGGED_OBSERVATION
        if self.is_mine:
            return MINE_OBSERVATION
        return self.adjacent_mines


# ============================================================================
# Cell View
# ============================================================================

@dataclass(frozen=True)
class CellView:
    """
    Read-only view of one cell for presentation layers.

    Attributes:
        coord: Coordinate of the cell.
        state: Visual state.
        adjacent_mines: Count, only for a revealed non-mine cell.
        is_mine: Mine status, only when revealed or once the game is lost.
    """

    coord: Coordinate
    state: CellState
    adjacent_mines: Optional[int] = None
    is_mine: Optional[bool] = None

    @classmethod
    def of(cls, coord: Coordinate, cell: Cell, expose_mines: bool = False) -> "CellView":
        """Build a view of ``cell``, hiding what the player cannot know."""
        adjacent = None
        if cell.is_revealed and not cell.is_mine:
            adjacent = cell.adjacent_mines
        is_mine = None
        if cell.is_revealed or expose_mines:
            is_mine = cell.is_mine
        return cls(coord=coord, state=cell.state, adjacent_mines=adjacent, is_mine=is_mine)
