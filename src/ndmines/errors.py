"""
Exception types raised by the Minesweeper engine.

Every mutator either succeeds with an outcome or raises one of these.
"""


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class OutOfBounds(MinesweeperError, IndexError):
    """Coordinate or flat index lies outside the board."""


class InvalidConfiguration(MinesweeperError, ValueError):
    """Board dimensions or mine count are not usable."""


class AlreadyPlaced(MinesweeperError, RuntimeError):
    """Mines were already placed on this board."""


class MinesNotPlaced(MinesweeperError, RuntimeError):
    """A reveal was attempted before mines were placed."""


class AlreadyRevealed(MinesweeperError):
    """The targeted cell is already revealed."""


class GameOver(MinesweeperError):
    """An action was attempted after the game was won or lost."""

    def __init__(self, phase) -> None:
        super().__init__(f"Game is over ({phase.name})")
        self.phase = phase
