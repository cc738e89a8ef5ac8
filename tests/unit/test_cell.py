"""
Unit tests for Cell class.

Tests cell value handling, reveal/flag behavior, and observation codes.
"""
import pytest
from minesweeper import Cell, CellState, MINE


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_hidden_zero(self) -> None:
        """New cell should be a hidden zero."""
        cell = Cell()
        assert cell.value == 0
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True
        assert cell.is_mine is False

    def test_mine_cell_creation(self, mine_cell: Cell) -> None:
        """Cell holding the marker is a mine with no count."""
        assert mine_cell.is_mine is True
        assert mine_cell.value is MINE
        assert mine_cell.adjacent_mines == 0

    def test_cell_with_adjacent_mines(self) -> None:
        """Numbered cell reports its count and is not a mine."""
        cell = Cell(5)
        assert cell.adjacent_mines == 5
        assert cell.is_mine is False


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed once."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True
        assert hidden_cell.reveal() is False

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True

    def test_force_reveal_overrides_flag(self, hidden_cell: Cell) -> None:
        """End-of-game reveal applies to flagged cells too."""
        hidden_cell.toggle_flag()
        hidden_cell.force_reveal()
        assert hidden_cell.is_revealed is True


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_flag_toggles_between_hidden_and_flagged(
        self, hidden_cell: Cell
    ) -> None:
        """Flag toggles back and forth on a hidden cell."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.FLAGGED
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.state == CellState.HIDDEN

    def test_flag_revealed_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Revealed cells stay revealed."""
        hidden_cell.reveal()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_revealed is True


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation codes."""

    def test_hidden_and_flagged_codes(self, hidden_cell: Cell) -> None:
        """Hidden is -1, flagged is -2."""
        assert hidden_cell.to_observation() == -1
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_revealed_cell_observation_matches_count(self, count: int) -> None:
        """Revealed cell returns its adjacent mine count."""
        cell = Cell(count)
        cell.reveal()
        assert cell.to_observation() == count

    def test_revealed_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        """Revealed mine should return 9."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9
