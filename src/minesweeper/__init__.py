"""
Minesweeper board engine.

Provides the board with mine generation, flood reveal and game clock,
plus the host-side controller and Gymnasium environment that drive it.
"""
from .cell import Cell, CellState, Marker, MINE
from .errors import MinesweeperError, ConfigurationError, OutOfRangeError
from .timer import GameTimer
from .board import Board, BoardConfig, GameState, adjacent_indices
from .controller import GameController, GameView
from .environment import MinesweeperEnv, render_board

__all__ = [
    "Cell",
    "CellState",
    "Marker",
    "MINE",
    "MinesweeperError",
    "ConfigurationError",
    "OutOfRangeError",
    "GameTimer",
    "Board",
    "BoardConfig",
    "GameState",
    "adjacent_indices",
    "GameController",
    "GameView",
    "MinesweeperEnv",
    "render_board",
]
