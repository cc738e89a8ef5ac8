"""
Unit tests for GameController.

Tests intent forwarding, board replacement and derived getters.
"""
import threading

import pytest
from minesweeper import (
    Board,
    ConfigurationError,
    GameController,
    GameState,
    OutOfRangeError,
)


class TestControllerActions:
    """Test intents forwarded to the board."""

    def test_controller_owns_a_fresh_board(
        self, controller: GameController
    ) -> None:
        """Controller starts with an idle board of the given size."""
        assert isinstance(controller.board, Board)
        assert (controller.width, controller.height, controller.mines) == (5, 5, 3)
        assert controller.state == GameState.IDLE
        assert controller.over is False
        assert controller.seconds == 0

    def test_open_forwards_to_board(self, controller: GameController) -> None:
        """open() reveals on the owned board."""
        index = next(i for i, c in enumerate(controller.cells) if not c.is_mine)
        assert controller.open(index) is True
        assert controller.cells[index].is_revealed is True

    def test_open_mine_ends_game(self, controller: GameController) -> None:
        """Opening a mine is reported through over."""
        index = next(i for i, c in enumerate(controller.cells) if c.is_mine)
        controller.open(index)
        assert controller.over is True
        assert controller.won is False

    def test_mark_updates_remains(self, controller: GameController) -> None:
        """Flags lower the remaining-mines display."""
        controller.mark(0)
        controller.mark(1)
        assert controller.remains == 1
        controller.mark(1)
        assert controller.remains == 2

    def test_out_of_range_propagates(self, controller: GameController) -> None:
        """Invalid indices surface as OutOfRangeError."""
        with pytest.raises(OutOfRangeError):
            controller.open(25)
        with pytest.raises(OutOfRangeError):
            controller.mark(-1)

    def test_chord_forwards_to_board(self) -> None:
        """chord() opens neighbours through the board."""
        controller = GameController(tick_interval=None)
        controller.board = Board.from_layout(3, 3, [1, 4, 7], tick_interval=None)
        controller.open(0)  # value 2, mines at 1 and 4
        controller.mark(1)
        assert controller.chord(0) is False
        controller.mark(4)
        assert controller.chord(0) is True
        assert controller.cells[3].is_revealed is True
        assert controller.over is False


class TestControllerLifecycle:
    """Test init and reset."""

    def test_init_replaces_board(self, controller: GameController) -> None:
        """init() swaps in a board with new parameters."""
        old_board = controller.board
        controller.init(8, 6, 5)
        assert controller.board is not old_board
        assert (controller.width, controller.height, controller.mines) == (8, 6, 5)
        assert controller.state == GameState.IDLE

    def test_invalid_init_keeps_current_board(
        self, controller: GameController
    ) -> None:
        """Rejected parameters leave the running game alone."""
        old_board = controller.board
        with pytest.raises(ConfigurationError):
            controller.init(0, 5, 1)
        with pytest.raises(ConfigurationError):
            controller.init(2, 2, 4)
        assert controller.board is old_board

    def test_reset_keeps_parameters(self, controller: GameController) -> None:
        """reset() regenerates in place with the same size."""
        controller.open(0)
        controller.reset()
        assert controller.state == GameState.IDLE
        assert (controller.width, controller.height, controller.mines) == (5, 5, 3)
        assert all(cell.is_hidden for cell in controller.cells)


class TestGameView:
    """Test the rendering snapshot."""

    def test_view_reflects_board(self, controller: GameController) -> None:
        """Snapshot carries dimensions, counters and cell codes."""
        controller.mark(0)
        view = controller.view()
        assert (view.width, view.height, view.mines) == (5, 5, 3)
        assert view.remains == 2
        assert view.seconds == 0
        assert view.state == GameState.IDLE
        assert view.over is False
        assert len(view.cells) == 25
        assert view.cells[0] == -2
        assert set(view.cells[1:]) == {-1}

    def test_view_is_frozen(self, controller: GameController) -> None:
        """Snapshots cannot be modified."""
        view = controller.view()
        with pytest.raises(AttributeError):
            view.remains = 0

    def test_view_waits_for_board_lock(self, controller: GameController) -> None:
        """A view taken mid-update sees the update as a whole."""
        views = []
        with controller.board.lock:
            worker = threading.Thread(target=lambda: views.append(controller.view()))
            worker.start()
            worker.join(0.05)
            assert views == []
            controller.mark(0)
            controller.mark(1)
        worker.join(1.0)
        assert len(views) == 1
        assert views[0].remains == 1
        assert views[0].cells[:2] == (-2, -2)

    def test_view_remains_matches_board(self, controller: GameController) -> None:
        """Over-flagging shows the same negative count as the board."""
        for index in range(5):
            controller.mark(index)
        assert controller.view().remains == controller.board.remaining_mines == -2
