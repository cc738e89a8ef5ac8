"""
Host controller for a Minesweeper board.

Holds the single live Board for a UI, forwards user intents to it and
exposes the derived values a display needs.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import Board, BoardConfig, GameState
from .cell import Cell

logger = logging.getLogger(__name__)


# ============================================================================
# View Snapshot
# ============================================================================

@dataclass(frozen=True)
class GameView:
    """
    Immutable snapshot of everything a renderer shows.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mines: Total mines on the board.
        remains: Mines minus flags placed.
        seconds: Elapsed game time.
        state: Current game state.
        cells: Per-cell observation codes in index order
            (-1 hidden, -2 flagged, 0-8 count, 9 mine).
    """

    width: int
    height: int
    mines: int
    remains: int
    seconds: int
    state: GameState
    cells: Tuple[int, ...]

    @property
    def over(self) -> bool:
        return self.state in (GameState.WON, GameState.LOST)


# ============================================================================
# Game Controller
# ============================================================================

class GameController:
    """
    Owns one Board and routes intents to it.

    The board is replaced on init() and regenerated in place on reset().
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        *,
        seed: Optional[int] = None,
        tick_interval: Optional[float] = 1.0,
    ) -> None:
        self.seed = seed
        self.tick_interval = tick_interval
        self.board = Board(config, seed=seed, tick_interval=tick_interval)

    # ========================================================================
    # Actions
    # ========================================================================

    def init(self, width: int, height: int, mines: int) -> None:
        """Discard the current board and start one with new parameters."""
        config = BoardConfig(width, height, mines)
        board = Board(config, seed=self.seed, tick_interval=self.tick_interval)
        self.board.close()
        self.board = board
        logger.debug("New %dx%d board with %d mines", width, height, mines)

    def reset(self) -> None:
        """Start a new game with the same parameters."""
        self.board.reset()
        logger.debug("Board reset")

    def open(self, index: int) -> bool:
        logger.debug("Open %d", index)
        changed = self.board.open(index)
        if changed and self.board.is_over:
            logger.info(
                "Game %s after %d seconds",
                self.board.state.name.lower(), self.board.elapsed_seconds,
            )
        return changed

    def mark(self, index: int) -> bool:
        logger.debug("Mark %d", index)
        return self.board.mark(index)

    def chord(self, index: int) -> bool:
        logger.debug("Chord %d", index)
        changed = self.board.chord(index)
        if changed and self.board.is_over:
            logger.info(
                "Game %s after %d seconds",
                self.board.state.name.lower(), self.board.elapsed_seconds,
            )
        return changed

    def shutdown(self) -> None:
        """Stop the board clock before discarding the controller."""
        self.board.close()

    # ========================================================================
    # Getters
    # ========================================================================

    @property
    def over(self) -> bool:
        return self.board.is_over

    @property
    def won(self) -> bool:
        return self.board.is_won

    @property
    def state(self) -> GameState:
        return self.board.state

    @property
    def seconds(self) -> int:
        return self.board.elapsed_seconds

    @property
    def mines(self) -> int:
        return self.board.mine_count

    @property
    def width(self) -> int:
        return self.board.width

    @property
    def height(self) -> int:
        return self.board.height

    @property
    def remains(self) -> int:
        return self.board.remaining_mines

    @property
    def cells(self) -> List[Cell]:
        return self.board.cells

    def view(self) -> GameView:
        """Take a consistent snapshot of the board for rendering."""
        board = self.board
        with board.lock:
            return GameView(
                width=board.width,
                height=board.height,
                mines=board.mine_count,
                remains=board.remaining_mines,
                seconds=board.elapsed_seconds,
                state=board.state,
                cells=tuple(cell.to_observation() for cell in board.cells),
            )
