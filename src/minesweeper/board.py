"""
Board module for Minesweeper game.

Implements the game board with random mine placement, adjacency
counting, flood revealing, the game clock, and game state management.

Cells are stored in a flat list addressed by ``index = col + row * width``.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from functools import partial
from threading import RLock
from typing import Iterable, List, Optional, Tuple

import numpy as np

from .cell import Cell, CellValue, MINE
from .errors import ConfigurationError, OutOfRangeError
from .timer import GameTimer

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    IDLE = auto()
    ACTIVE = auto()
    WON = auto()
    LOST = auto()


TERMINAL_STATES = (GameState.WON, GameState.LOST)


@dataclass
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines to place.
    """

    width: int = 19
    height: int = 19
    num_mines: int = 99

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ConfigurationError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ConfigurationError("Number of mines cannot be negative")
        if self.num_mines > self.size:
            raise ConfigurationError(
                f"Too many mines ({self.num_mines} for {self.size} cells)"
            )

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self.width * self.height

    def check_generatable(self) -> None:
        """Ensure a random layout would leave at least one safe cell."""
        max_mines = self.size - 1
        if self.num_mines > max_mines:
            raise ConfigurationError(f"Too many mines (max {max_mines})")


# ============================================================================
# Adjacency
# ============================================================================

def adjacent_indices(index: int, width: int, height: int) -> List[int]:
    """
    Get the linear indices of the up-to-8 neighbours of a cell.

    Neighbours share an edge or a corner and are clipped at the grid
    boundary: corners have 3, edges 5, interior cells 8.
    """
    col = index % width
    row = index // width
    neighbors = []
    for delta_col in (-1, 0, 1):
        for delta_row in (-1, 0, 1):
            if delta_col == 0 and delta_row == 0:
                continue
            new_col = col + delta_col
            new_row = row + delta_row
            if 0 <= new_col < width and 0 <= new_row < height:
                neighbors.append(new_col + new_row * width)
    return neighbors


def count_adjacent_mines(
    slots: List[CellValue], width: int, height: int
) -> List[CellValue]:
    """Replace every non-mine slot with its count of mined neighbours."""
    values: List[CellValue] = []
    for index, slot in enumerate(slots):
        if slot is MINE:
            values.append(MINE)
            continue
        count = sum(
            1 for neighbor in adjacent_indices(index, width, height)
            if slots[neighbor] is MINE
        )
        values.append(count)
    return values


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Minesweeper game board.

    Owns the grid of cells, the mine layout, the game clock and the
    game state. All mutators and the clock tick run under one lock.

    State machine:
        IDLE --open--> ACTIVE --open mine--> LOST
                              --all safe cells revealed--> WON
        any --init/reset--> IDLE
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        *,
        seed: Optional[int] = None,
        tick_interval: Optional[float] = 1.0,
        mine_indices: Optional[Iterable[int]] = None,
    ) -> None:
        """
        Create a board and generate its first layout.

        Args:
            config: Board configuration (default: 19x19 with 99 mines).
            seed: Seed for the layout RNG.
            tick_interval: Seconds per clock tick, or None to disable the
                background clock (the host then calls tick() itself).
            mine_indices: Fixed mine positions instead of a random layout.
        """
        self._lock = RLock()
        self._rng = random.Random(seed)
        self.tick_interval = tick_interval
        self._timer: Optional[GameTimer] = None
        self._session = 0
        self._cells: List[Cell] = []
        self._state = GameState.IDLE
        self._elapsed_seconds = 0
        self._safe_revealed = 0

        config = config or BoardConfig()
        if mine_indices is None:
            self.init(config)
        else:
            self._init_layout(config, mine_indices)

    @classmethod
    def from_layout(
        cls,
        width: int,
        height: int,
        mine_indices: Iterable[int],
        *,
        tick_interval: Optional[float] = 1.0,
    ) -> "Board":
        """
        Build a board with mines at fixed indices.

        Unlike random generation, a layout may mine every cell.
        """
        mines = list(mine_indices)
        config = BoardConfig(width, height, len(mines))
        return cls(config, tick_interval=tick_interval, mine_indices=mines)

    # ========================================================================
    # Generation (Low-level)
    # ========================================================================

    def init(self, config: Optional[BoardConfig] = None) -> None:
        """
        Generate a fresh random layout and return to IDLE.

        Args:
            config: New dimensions and mine count; the current ones are
                reused when omitted.

        Raises:
            ConfigurationError: If no safe cell would remain.
        """
        with self._lock:
            config = config or self.config
            config.check_generatable()
            slots: List[CellValue] = [
                MINE if i < config.num_mines else 0
                for i in range(config.size)
            ]
            self._rng.shuffle(slots)
            self._install(config, slots)

    def reset(self) -> None:
        """Regenerate the board with the last used configuration."""
        self.init()

    def _init_layout(
        self, config: BoardConfig, mine_indices: Iterable[int]
    ) -> None:
        """Install a fixed mine layout."""
        mines = set()
        for index in mine_indices:
            if not 0 <= index < config.size:
                raise ConfigurationError(
                    f"Mine index {index} outside board of {config.size} cells"
                )
            if index in mines:
                raise ConfigurationError(f"Duplicate mine index {index}")
            mines.add(index)
        if len(mines) != config.num_mines:
            raise ConfigurationError(
                f"Layout has {len(mines)} mines, expected {config.num_mines}"
            )

        slots: List[CellValue] = [
            MINE if i in mines else 0 for i in range(config.size)
        ]
        with self._lock:
            self._install(config, slots)

    def _install(self, config: BoardConfig, slots: List[CellValue]) -> None:
        """Count adjacency, wrap cells and clear the clock and state."""
        values = count_adjacent_mines(slots, config.width, config.height)
        self.config = config
        self._cells = [Cell(value) for value in values]
        self._state = GameState.IDLE
        self._elapsed_seconds = 0
        self._safe_revealed = 0
        self._stop_timer()
        self._session += 1
        logger.debug(
            "Generated %dx%d board with %d mines",
            config.width, config.height, config.num_mines,
        )

    # ========================================================================
    # Clock
    # ========================================================================

    def tick(self) -> None:
        """Advance the clock by one second while the game is ACTIVE."""
        with self._lock:
            if self._state is GameState.ACTIVE:
                self._elapsed_seconds += 1

    def _on_timer(self, session: int) -> None:
        with self._lock:
            if session == self._session:
                self.tick()

    def _start_timer(self) -> None:
        if self._timer is not None or self.tick_interval is None:
            return
        self._timer = GameTimer(
            partial(self._on_timer, self._session), self.tick_interval
        )
        self._timer.start()

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None

    def close(self) -> None:
        """Stop the background clock."""
        with self._lock:
            self._stop_timer()

    # ========================================================================
    # Index Utilities
    # ========================================================================

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._cells):
            raise OutOfRangeError(index, len(self._cells))

    def index_of(self, row: int, col: int) -> int:
        """Convert (row, col) to a linear cell index."""
        if not self._is_valid_position(row, col):
            raise OutOfRangeError(None, len(self._cells), position=(row, col))
        return col + row * self.width

    def position_of(self, index: int) -> Tuple[int, int]:
        """Convert a linear cell index to (row, col)."""
        self._check_index(index)
        return index // self.width, index % self.width

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    def adjacent_indices(self, index: int) -> List[int]:
        """Get the neighbour indices of a cell."""
        self._check_index(index)
        return adjacent_indices(index, self.width, self.height)

    def adjacent_cells(self, index: int) -> List[Cell]:
        """Get the neighbour cells of a cell."""
        return [self._cells[i] for i in self.adjacent_indices(index)]

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def open(self, index: int) -> bool:
        """
        Open the cell at the given index.

        The first open of a game starts the clock. Opening a mine loses
        the game and reveals the whole board. Opening a zero cell floods
        through the connected zero region and its numbered border.

        Args:
            index: Linear cell index.

        Returns:
            True if any cell was revealed, False for a no-op (cell already
            revealed or flagged, or game over).

        Raises:
            OutOfRangeError: If index is outside the board.
        """
        with self._lock:
            self._check_index(index)
            if self._state in TERMINAL_STATES:
                return False
            if self._state is GameState.IDLE:
                self._state = GameState.ACTIVE
                self._start_timer()
            return self._reveal_at(index)

    def _reveal_at(self, index: int) -> bool:
        """Reveal one cell and handle consequences."""
        cell = self._cells[index]
        if not cell.reveal():
            return False

        if cell.is_mine:
            self._lose(index)
            return True

        self._safe_revealed += 1
        if cell.value == 0:
            self._flood_reveal(index)
        self._check_win_condition()
        return True

    def _flood_reveal(self, start: int) -> None:
        """
        Reveal the zero region containing ``start`` and its border.

        Hidden numbered neighbours are revealed but not expanded; hidden
        zero neighbours are revealed and queued. Flagged cells are kept.
        """
        queue = deque([start])
        opened = 0
        while queue:
            current = queue.popleft()
            for neighbor in adjacent_indices(current, self.width, self.height):
                cell = self._cells[neighbor]
                if not cell.reveal():
                    continue
                self._safe_revealed += 1
                opened += 1
                if cell.value == 0:
                    queue.append(neighbor)
        logger.debug("Flood reveal from %d opened %d cells", start, opened)

    def _lose(self, index: int) -> None:
        self._state = GameState.LOST
        for cell in self._cells:
            cell.force_reveal()
        self._stop_timer()
        logger.debug(
            "Mine opened at %d after %d seconds", index, self._elapsed_seconds
        )

    def _check_win_condition(self) -> None:
        """Check if all non-mine cells are revealed."""
        if self._safe_revealed >= self.config.size - self.config.num_mines:
            self._state = GameState.WON
            self._stop_timer()
            logger.debug("Board cleared in %d seconds", self._elapsed_seconds)

    def mark(self, index: int) -> bool:
        """
        Toggle a flag on a hidden cell.

        Args:
            index: Linear cell index.

        Returns:
            True if flag was toggled, False otherwise.

        Raises:
            OutOfRangeError: If index is outside the board.
        """
        with self._lock:
            self._check_index(index)
            if self._state in TERMINAL_STATES:
                return False
            return self._cells[index].toggle_flag()

    def chord(self, index: int) -> bool:
        """
        Chord action: open all hidden neighbours if flag count matches.

        Applies to a revealed numbered cell whose flagged neighbours
        equal its count. A wrongly placed flag loses the game.

        Args:
            index: Linear cell index.

        Returns:
            True if any neighbour was opened, False otherwise.

        Raises:
            OutOfRangeError: If index is outside the board.
        """
        with self._lock:
            self._check_index(index)
            if not self._can_chord(index):
                return False

            revealed_any = False
            for neighbor in adjacent_indices(index, self.width, self.height):
                if self._state is not GameState.ACTIVE:
                    break
                if self._cells[neighbor].is_hidden:
                    revealed_any = self._reveal_at(neighbor) or revealed_any
            return revealed_any

    def _can_chord(self, index: int) -> bool:
        """Check if chord action is valid."""
        if self._state is not GameState.ACTIVE:
            return False
        cell = self._cells[index]
        if not cell.is_revealed or cell.adjacent_mines == 0:
            return False
        flag_count = sum(
            1 for neighbor in adjacent_indices(index, self.width, self.height)
            if self._cells[neighbor].is_flagged
        )
        return flag_count == cell.adjacent_mines

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    @property
    def mine_count(self) -> int:
        return self.config.num_mines

    @property
    def size(self) -> int:
        return self.config.size

    @property
    def lock(self) -> RLock:
        """Lock serializing board mutation; hold it to read several values together."""
        return self._lock

    @property
    def cells(self) -> List[Cell]:
        """All cells in index order."""
        with self._lock:
            return list(self._cells)

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed_seconds

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def is_idle(self) -> bool:
        return self._state is GameState.IDLE

    @property
    def is_active(self) -> bool:
        return self._state is GameState.ACTIVE

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._state is GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._state is GameState.LOST

    @property
    def is_over(self) -> bool:
        """Check if game has ended, won or lost."""
        return self._state in TERMINAL_STATES

    @property
    def is_clock_running(self) -> bool:
        return self._timer is not None and self._timer.is_running

    @property
    def flagged_count(self) -> int:
        with self._lock:
            return sum(1 for cell in self._cells if cell.is_flagged)

    @property
    def revealed_count(self) -> int:
        with self._lock:
            return sum(1 for cell in self._cells if cell.is_revealed)

    @property
    def safe_revealed(self) -> int:
        """Safe cells opened by play, not counting the reveal on loss."""
        return self._safe_revealed

    @property
    def remaining_mines(self) -> int:
        """Mine count minus flags placed; negative when over-flagged."""
        return self.mine_count - self.flagged_count

    def cell_at(self, index: int) -> Cell:
        """Get cell at a linear index."""
        self._check_index(index)
        return self._cells[index]

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._cells[col + row * self.width]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array for rendering or agents.

        Returns:
            2D numpy array of shape (height, width) where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        with self._lock:
            flat = [cell.to_observation() for cell in self._cells]
        return np.array(flat, dtype=np.int8).reshape(self.height, self.width)

    def get_valid_actions(self) -> List[int]:
        """
        Get indices of cells that can still be opened.

        Returns:
            Hidden cell indices; empty once the game is over.
        """
        with self._lock:
            if self._state in TERMINAL_STATES:
                return []
            return [
                index for index, cell in enumerate(self._cells)
                if cell.is_hidden
            ]
