"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports, and the repo root for main.py
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / "src"))

from minesweeper import Board, BoardConfig, Cell, GameController, MINE


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 19x19 board with 99 mines and no background clock."""
    board = Board(tick_interval=None)
    yield board
    board.close()


@pytest.fixture
def empty_board() -> Board:
    """Create a 3x3 board with no mines for cascade testing."""
    return Board(BoardConfig(3, 3, 0), tick_interval=None)


@pytest.fixture
def corner_mine_board() -> Board:
    """Create a 19x19 board with a single mine at index 0."""
    return Board.from_layout(19, 19, [0], tick_interval=None)


@pytest.fixture
def ring_board() -> Board:
    """
    Create a 5x5 board with a wall of mines in column 2.

    Columns 0-1 form a zero/one region separated from columns 3-4.
    """
    mines = [2 + row * 5 for row in range(5)]
    return Board.from_layout(5, 5, mines, tick_interval=None)


@pytest.fixture
def fast_board() -> Board:
    """Create a 3x3 board with mines down the middle column and a 10 ms clock."""
    board = Board.from_layout(3, 3, [1, 4, 7], tick_interval=0.01)
    yield board
    board.close()


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
    return Cell(MINE)


# ============================================================================
# Controller Fixtures
# ============================================================================

@pytest.fixture
def controller() -> GameController:
    """Create a controller over a small seeded board."""
    controller = GameController(BoardConfig(5, 5, 3), seed=1, tick_interval=None)
    yield controller
    controller.shutdown()
