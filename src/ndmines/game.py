"""
Game module for N-dimensional Minesweeper.

Wraps a Board with phase tracking and turn sequencing: the first
reveal places the mines, a revealed mine loses, revealing every safe
cell wins, and nothing changes once the game is over.
"""
import logging
from enum import Enum, auto
from typing import Iterator, Optional, Sequence

from .board import Board, BoardConfig, RevealOutcome
from .cell import CellView
from .coordinates import Dimensions, to_coord
from .errors import GameOver

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GamePhase(Enum):
    """Lifecycle phases of a game."""

    AWAITING_FIRST_MOVE = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        """Check if no further moves are accepted."""
        return self in (GamePhase.WON, GamePhase.LOST)


# ============================================================================
# Game Class
# ============================================================================

class Game:
    """
    A single game of N-dimensional Minesweeper.

    A new game replaces the whole Game instance; there is no reset.
    The instance is not thread-safe, so callers sharing it must
    serialise access themselves.
    """

    def __init__(self, config: Optional[BoardConfig] = None) -> None:
        """
        Initialize the game.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
        """
        self.config = config or BoardConfig()
        self.board = Board(self.config)
        self._phase = GamePhase.AWAITING_FIRST_MOVE

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal(self, coord: Sequence[int]) -> RevealOutcome:
        """
        Reveal a cell, placing mines first on the opening move.

        Args:
            coord: Coordinate to reveal.

        Returns:
            The board's reveal outcome.

        Raises:
            GameOver: If the game was already won or lost.
            OutOfBounds: If the coordinate is off the board.
            AlreadyRevealed: If the cell is already revealed.
        """
        self._ensure_not_over()
        if self._phase == GamePhase.AWAITING_FIRST_MOVE:
            if self.board.get_cell(coord).is_flagged:
                return self.board.reveal(coord)
            self.board.place_mines(coord, self.config.seed)
            self._set_phase(GamePhase.IN_PROGRESS)

        outcome = self.board.reveal(coord)
        self._update_phase(outcome)
        return outcome

    def chord(self, coord: Sequence[int]) -> RevealOutcome:
        """
        Reveal the hidden neighbours of a satisfied numbered cell.

        Raises:
            GameOver: If the game was already won or lost.
            OutOfBounds: If the coordinate is off the board.
        """
        self._ensure_not_over()
        outcome = self.board.chord(coord)
        self._update_phase(outcome)
        return outcome

    def toggle_flag(self, coord: Sequence[int]) -> bool:
        """
        Toggle the flag on a hidden cell.

        Returns:
            True if the cell is now flagged.

        Raises:
            GameOver: If the game was already won or lost.
            AlreadyRevealed: If the cell is revealed.
        """
        self._ensure_not_over()
        return self.board.toggle_flag(coord)

    def _ensure_not_over(self) -> None:
        """Raise GameOver once the game is won or lost."""
        if self._phase.is_terminal:
            raise GameOver(self._phase)

    def _update_phase(self, outcome: RevealOutcome) -> None:
        """Derive win or loss from a reveal outcome."""
        if outcome.hit_mine:
            self._set_phase(GamePhase.LOST)
        elif self.board.is_won():
            self._set_phase(GamePhase.WON)

    def _set_phase(self, phase: GamePhase) -> None:
        """Move to a new phase."""
        logger.debug("Game phase %s -> %s", self._phase.name, phase.name)
        self._phase = phase

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def phase(self) -> GamePhase:
        """Get current game phase."""
        return self._phase

    @property
    def is_over(self) -> bool:
        """Check if the game was won or lost."""
        return self._phase.is_terminal

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._phase == GamePhase.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._phase == GamePhase.LOST

    @property
    def dimensions(self) -> Dimensions:
        """Extent of each board axis."""
        return self.board.dimensions

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return self.board.total_cells

    @property
    def flagged_count(self) -> int:
        """Number of flagged cells."""
        return self.board.flagged_count

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells, mines included."""
        return self.board.revealed_count

    def remaining_mine_estimate(self) -> int:
        """Mines minus flags, for display."""
        return self.board.remaining_mine_estimate()

    def cell_view(self, coord: Sequence[int]) -> CellView:
        """
        Get what a player may see of one cell.

        Once the game is lost every mine is exposed in the view; the
        board itself is not changed.
        """
        return self.board.cell_view(coord, expose_mines=self.is_lost)

    def iter_cell_views(self) -> Iterator[CellView]:
        """Yield a view of every cell in flat-index order."""
        for index in range(self.total_cells):
            yield self.cell_view(to_coord(index, self.dimensions))


def new_game(
    dimensions: Sequence[int], mine_count: int, seed: Optional[int] = None
) -> Game:
    """
    Create a game on a fresh board.

    Args:
        dimensions: Extent of each axis.
        mine_count: Number of mines, strictly between 0 and the cell count.
        seed: Seed for mine placement.

    Raises:
        InvalidConfiguration: If the dimensions or mine count are invalid.
    """
    return Game(BoardConfig(tuple(dimensions), mine_count, seed))
