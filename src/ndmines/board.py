"""
Board module for N-dimensional Minesweeper.

Implements the game board with flat cell storage, deferred mine
placement, adjacency counting, cascading reveal and flagging.
The board reports structural outcomes; deciding win or loss from
them is left to the game.
"""
import logging
import numbers
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell, CellView
from .coordinates import (
    Coordinate,
    Dimensions,
    neighbor_indices,
    to_coord,
    to_index,
    total_cells,
    validate_dimensions,
)
from .errors import (
    AlreadyPlaced,
    AlreadyRevealed,
    InvalidConfiguration,
    MinesNotPlaced,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class RevealResult(Enum):
    """Structural result of a reveal."""

    REVEALED = auto()
    HIT_MINE = auto()
    FLAGGED = auto()


@dataclass(frozen=True)
class RevealOutcome:
    """
    Outcome of a reveal or chord action.

    Attributes:
        result: What happened.
        revealed: Coordinates newly revealed by this action.
    """

    result: RevealResult
    revealed: FrozenSet[Coordinate] = frozenset()

    @property
    def hit_mine(self) -> bool:
        """Check if a mine was revealed."""
        return self.result == RevealResult.HIT_MINE

    @property
    def is_noop(self) -> bool:
        """Check if nothing changed on the board."""
        return not self.revealed


@dataclass
class BoardConfig:
    """
    Configuration for an N-dimensional Minesweeper board.

    Attributes:
        dimensions: Extent of each axis, first axis varying fastest.
        num_mines: Total mines to place.
        seed: Seed for mine placement, None for fresh entropy.
    """

    dimensions: Tuple[int, ...] = (9, 9)
    num_mines: int = 10
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self.dimensions = validate_dimensions(self.dimensions)
        self._validate()

    def _validate(self) -> None:
        """Ensure the mine count fits the board."""
        if isinstance(self.num_mines, bool) or not isinstance(self.num_mines, numbers.Integral):
            raise InvalidConfiguration(f"Number of mines must be an integer, got {self.num_mines!r}")
        self.num_mines = int(self.num_mines)
        if self.num_mines < 1:
            raise InvalidConfiguration("Number of mines must be positive")
        max_mines = self.total_cells - 1
        if self.num_mines > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def num_dimensions(self) -> int:
        """Number of axes."""
        return len(self.dimensions)

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return total_cells(self.dimensions)

    @property
    def safe_cells(self) -> int:
        """Number of cells without a mine."""
        return self.total_cells - self.num_mines


# Preset difficulty levels
BEGINNER = BoardConfig((9, 9), 10)
INTERMEDIATE = BoardConfig((16, 16), 40)
EXPERT = BoardConfig((30, 16), 99)
CUBE = BoardConfig((5, 5, 5), 15)
TESSERACT = BoardConfig((4, 4, 4, 4), 20)


def observation_dtype(num_dimensions: int) -> type:
    """Smallest signed integer type holding every adjacency count."""
    max_count = 3 ** num_dimensions - 1
    if max_count <= np.iinfo(np.int8).max:
        return np.int8
    if max_count <= np.iinfo(np.int16).max:
        return np.int16
    return np.int32


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    N-dimensional Minesweeper board.

    Cells live in one flat list indexed by flat index. Mines are placed
    exactly once, after construction, so the first revealed cell can be
    kept clear.
    """

    config: BoardConfig = field(default_factory=lambda: BoardConfig())
    _cells: List[Cell] = field(default_factory=list, repr=False)
    _mines_placed: bool = False
    _flagged_count: int = 0
    _revealed_count: int = 0
    _safe_revealed: int = 0

    def __post_init__(self) -> None:
        """Initialize the flat storage after dataclass creation."""
        self._cells = [Cell() for _ in range(self.config.total_cells)]

    # ========================================================================
    # Mine Placement (Low-level)
    # ========================================================================

    def place_mines(self, exclude: Sequence[int], seed: Optional[int] = None) -> None:
        """
        Place mines uniformly at random, keeping one cell clear.

        Only ``exclude`` itself is kept mine-free; its neighbours may
        hold mines.

        Args:
            exclude: Coordinate that must not hold a mine.
            seed: Seed for the random generator.

        Raises:
            AlreadyPlaced: If mines were already placed.
            OutOfBounds: If ``exclude`` is off the board.
        """
        if self._mines_placed:
            raise AlreadyPlaced("Mines have already been placed on this board")
        excluded = self._index(exclude)

        candidates = np.delete(np.arange(self.total_cells), excluded)
        rng = np.random.default_rng(seed)
        chosen = rng.choice(candidates, size=self.num_mines, replace=False)

        self._set_mines(int(index) for index in chosen)
        logger.debug(
            "Placed %d mines on %s board, excluding %s (seed=%s)",
            self.num_mines, self.dimensions, tuple(exclude), seed,
        )

    def place_mines_at(self, mines: Iterable[Sequence[int]]) -> None:
        """
        Place mines at explicit coordinates.

        Args:
            mines: Exactly ``num_mines`` distinct coordinates.

        Raises:
            AlreadyPlaced: If mines were already placed.
            InvalidConfiguration: If the layout has the wrong size.
            OutOfBounds: If any coordinate is off the board.
        """
        if self._mines_placed:
            raise AlreadyPlaced("Mines have already been placed on this board")
        indices = {self._index(coord) for coord in mines}
        if len(indices) != self.num_mines:
            raise InvalidConfiguration(
                f"Expected {self.num_mines} distinct mines, got {len(indices)}"
            )
        self._set_mines(sorted(indices))

    def _set_mines(self, indices: Iterable[int]) -> None:
        """Mark mines and compute adjacency counts."""
        mine_indices = list(indices)
        for index in mine_indices:
            self._cells[index].is_mine = True
        self._calculate_adjacent_mines(mine_indices)
        self._mines_placed = True

    def _calculate_adjacent_mines(self, mine_indices: Iterable[int]) -> None:
        """Increment the count of every neighbour of every mine."""
        for index in mine_indices:
            for neighbor in neighbor_indices(index, self.dimensions):
                self._cells[neighbor].adjacent_mines += 1

    # ========================================================================
    # Index Utilities (Low-level)
    # ========================================================================

    def _index(self, coord: Sequence[int]) -> int:
        """Validated flat index of a coordinate."""
        index = to_index(coord, self.dimensions)
        assert 0 <= index < len(self._cells), "flat index outside storage"
        return index

    def _coord(self, index: int) -> Coordinate:
        """Coordinate of a flat index."""
        return to_coord(index, self.dimensions)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, coord: Sequence[int]) -> RevealOutcome:
        """
        Reveal a cell at the given coordinate.

        A mine is revealed and reported as HIT_MINE. A cell with no
        adjacent mines cascades through every connected zero cell and
        the numbered cells bordering them. A flagged cell is left alone
        and reported as FLAGGED.

        Args:
            coord: Coordinate to reveal.

        Returns:
            Outcome with the set of newly revealed coordinates.

        Raises:
            OutOfBounds: If the coordinate is off the board.
            AlreadyRevealed: If the cell is already revealed.
            MinesNotPlaced: If mines have not been placed yet.
        """
        index = self._index(coord)
        cell = self._cells[index]
        if cell.is_revealed:
            raise AlreadyRevealed(f"Cell {tuple(coord)} is already revealed")
        if cell.is_flagged:
            return RevealOutcome(RevealResult.FLAGGED)
        if not self._mines_placed:
            raise MinesNotPlaced("Mines must be placed before revealing")

        if cell.is_mine:
            self._reveal_mine(index)
            return RevealOutcome(RevealResult.HIT_MINE, frozenset([self._coord(index)]))

        revealed = self._cascade(index)
        return RevealOutcome(RevealResult.REVEALED, self._coords(revealed))

    def _reveal_mine(self, index: int) -> None:
        """Reveal the mine at a flat index."""
        self._cells[index].reveal()
        self._revealed_count += 1
        logger.debug("Mine revealed at %s", self._coord(index))

    def _cascade(self, start: int) -> List[int]:
        """
        Reveal ``start`` and flood outwards from zero cells.

        Breadth-first over flat indices with a visited set, so every
        cell is considered at most once. Numbered cells are revealed
        but not expanded; flagged cells are skipped.

        Returns:
            Flat indices revealed, in visiting order.
        """
        revealed = []
        visited = {start}
        queue = deque([start])

        while queue:
            index = queue.popleft()
            cell = self._cells[index]
            assert not cell.is_mine, "cascade reached a mine"
            if not cell.reveal():
                continue
            self._revealed_count += 1
            self._safe_revealed += 1
            revealed.append(index)

            if cell.adjacent_mines != 0:
                continue
            for neighbor in neighbor_indices(index, self.dimensions):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                if self._cells[neighbor].is_hidden:
                    queue.append(neighbor)

        if len(revealed) > 1:
            logger.debug("Cascade from %s revealed %d cells", self._coord(start), len(revealed))
        return revealed

    def chord(self, coord: Sequence[int]) -> RevealOutcome:
        """
        Chord action: reveal all hidden neighbours if flag count matches.

        Applies to a revealed numbered cell whose flagged neighbours
        equal its adjacent mine count. Misplaced flags can make this
        reveal a mine.

        Args:
            coord: Coordinate of a revealed numbered cell.

        Returns:
            Outcome with every coordinate revealed; HIT_MINE if any
            revealed neighbour was a mine. An empty REVEALED outcome
            when the chord does not apply.
        """
        index = self._index(coord)
        if not self._can_chord(index):
            return RevealOutcome(RevealResult.REVEALED)

        revealed: List[int] = []
        hit_mine = False
        for neighbor in neighbor_indices(index, self.dimensions):
            cell = self._cells[neighbor]
            if not cell.is_hidden:
                continue
            if cell.is_mine:
                self._reveal_mine(neighbor)
                revealed.append(neighbor)
                hit_mine = True
            else:
                revealed.extend(self._cascade(neighbor))

        result = RevealResult.HIT_MINE if hit_mine else RevealResult.REVEALED
        return RevealOutcome(result, self._coords(revealed))

    def _can_chord(self, index: int) -> bool:
        """Check if chord action is valid."""
        cell = self._cells[index]
        if not cell.is_revealed or cell.is_mine or cell.adjacent_mines == 0:
            return False
        return self._count_adjacent_flags(index) == cell.adjacent_mines

    def _count_adjacent_flags(self, index: int) -> int:
        """Count flagged cells adjacent to a flat index."""
        return sum(
            1 for neighbor in neighbor_indices(index, self.dimensions)
            if self._cells[neighbor].is_flagged
        )

    def toggle_flag(self, coord: Sequence[int]) -> bool:
        """
        Toggle flag on a cell.

        Args:
            coord: Coordinate to flag or unflag.

        Returns:
            True if the cell is now flagged, False if unflagged.

        Raises:
            OutOfBounds: If the coordinate is off the board.
            AlreadyRevealed: If the cell is revealed.
        """
        cell = self._cells[self._index(coord)]
        if not cell.toggle_flag():
            raise AlreadyRevealed(f"Cannot flag revealed cell {tuple(coord)}")
        self._flagged_count += 1 if cell.is_flagged else -1
        return cell.is_flagged

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def dimensions(self) -> Dimensions:
        """Extent of each axis."""
        return self.config.dimensions

    @property
    def num_mines(self) -> int:
        """Total mines on the board."""
        return self.config.num_mines

    @property
    def total_cells(self) -> int:
        """Number of cells on the board."""
        return len(self._cells)

    @property
    def mines_placed(self) -> bool:
        """Check if mines have been placed."""
        return self._mines_placed

    @property
    def flagged_count(self) -> int:
        """Number of flagged cells."""
        return self._flagged_count

    @property
    def revealed_count(self) -> int:
        """Number of revealed cells, mines included."""
        return self._revealed_count

    @property
    def safe_revealed_count(self) -> int:
        """Number of revealed cells without a mine."""
        return self._safe_revealed

    def remaining_mine_estimate(self) -> int:
        """Mines minus flags; negative when over-flagged."""
        return self.num_mines - self._flagged_count

    def is_won(self) -> bool:
        """Check if every non-mine cell is revealed."""
        return self._safe_revealed == self.config.safe_cells

    def get_cell(self, coord: Sequence[int]) -> Cell:
        """Get the cell at a coordinate."""
        return self._cells[self._index(coord)]

    def cell_view(self, coord: Sequence[int], expose_mines: bool = False) -> CellView:
        """Get a read-only view of the cell at a coordinate."""
        index = self._index(coord)
        return CellView.of(self._coord(index), self._cells[index], expose_mines)

    def mine_coordinates(self) -> List[Coordinate]:
        """Coordinates of every mine, in flat-index order."""
        return [self._coord(i) for i, cell in enumerate(self._cells) if cell.is_mine]

    def hidden_coordinates(self) -> List[Coordinate]:
        """
        Get coordinates that can still be revealed.

        Returns:
            Hidden (unflagged, unrevealed) coordinates in flat-index order.
        """
        return [self._coord(i) for i, cell in enumerate(self._cells) if cell.is_hidden]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array for agents.

        Returns:
            Array of shape ``dimensions`` where ``obs[coord]`` is the
            observation of the cell at ``coord``:
                -1 = hidden
                -2 = flagged
                -3 = revealed mine
                0.. = revealed with adjacent count
        """
        flat = np.fromiter(
            (cell.to_observation() for cell in self._cells),
            dtype=observation_dtype(len(self.dimensions)),
            count=len(self._cells),
        )
        # First axis varies fastest in flat storage, which is Fortran order.
        return flat.reshape(self.dimensions, order="F")

    def get_action_mask(self) -> np.ndarray:
        """Boolean mask over flat indices, True where a cell is hidden."""
        return np.fromiter(
            (cell.is_hidden for cell in self._cells), dtype=bool, count=len(self._cells)
        )

    def _coords(self, indices: Iterable[int]) -> FrozenSet[Coordinate]:
        """Coordinates of several flat indices."""
        return frozenset(self._coord(index) for index in indices)
