"""
Exceptions raised by the Minesweeper engine.

Only invalid input is an error. Moves that simply have no effect
(reopening a revealed cell, opening a flagged cell, marking after the
game ended) are reported through return values instead.
"""
from typing import Optional, Tuple


class MinesweeperError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(MinesweeperError, ValueError):
    """Board dimensions, mine count or fixed layout are invalid."""


class OutOfRangeError(MinesweeperError, IndexError):
    """A cell index or (row, col) position lies outside the board."""

    def __init__(
        self,
        index: Optional[int],
        size: int,
        position: Optional[Tuple[int, int]] = None,
    ) -> None:
        if position is None:
            message = f"Cell index {index} out of range [0, {size})"
        else:
            row, col = position
            message = f"Cell (row {row}, col {col}) is outside the board"
        super().__init__(message)
        self.index = index
        self.size = size
        self.position = position
