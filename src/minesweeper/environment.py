"""
Gymnasium environment wrapper for Minesweeper.

Drives a Board through the standard RL interface, and provides the
text renderer shared with the command-line player.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Board, BoardConfig


# ============================================================================
# Text Rendering
# ============================================================================

def render_board(board: Board, coordinates: bool = False) -> str:
    """
    Render board as ASCII string.

    Args:
        board: Board to draw.
        coordinates: Prefix rows and columns with their numbers.

    Returns:
        One line per row: '.' hidden, 'F' flagged, '*' mine,
        ' ' empty, digits for counts.
    """
    lines = []
    obs = board.get_observation()

    if coordinates:
        header = "    " + " ".join(
            str(col % 10) for col in range(board.width)
        )
        lines.append(header)

    for row in range(board.height):
        row_str = f"{row:>3} " if coordinates else ""
        for col in range(board.width):
            val = obs[row, col]
            if val == -1:
                row_str += "."
            elif val == -2:
                row_str += "F"
            elif val == 9:
                row_str += "*"
            elif val == 0:
                row_str += " "
            else:
                row_str += str(val)
            row_str += " "
        lines.append(row_str)

    return "\n".join(lines)


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine (after a loss)

    Actions:
        Discrete action space of size width * height.
        Action i opens the cell at index i (col + row * width).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for a no-op action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
        tick_interval: Optional[float] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 19x19 with 99 mines).
            render_mode: How to render the environment.
            tick_interval: Board clock period; None keeps the clock off,
                since episodes are stepped faster than real time.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.config.check_generatable()
        self.render_mode = render_mode
        self.tick_interval = tick_interval
        self.board = Board(self.config, tick_interval=tick_interval)

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.size)

        self._steps = 0
        self._total_safe_cells = self.config.size - self.config.num_mines

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for the mine layout.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.board.close()
            self.board = Board(
                self.config, seed=seed, tick_interval=self.tick_interval
            )
        else:
            self.board.reset()
        self._steps = 0

        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to open.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        reward = self._calculate_reward(int(action))

        observation = self.board.get_observation()
        terminated = self.board.is_over
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _calculate_reward(self, index: int) -> float:
        """Open a cell and score the outcome."""
        if not self.board.open(index):
            return -0.1
        if self.board.is_won:
            return 10.0
        if self.board.is_lost:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.board.safe_revealed,
            "total_safe": self._total_safe_cells,
            "game_state": self.board.state.name,
            "valid_actions": len(self.board.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return render_board(self.board)
        if self.render_mode == "human":
            print(render_board(self.board))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            int8 array where 1 = hidden cell that can be opened, usable
            directly as ``action_space.sample(mask=...)``.
        """
        mask = np.zeros(self.action_space.n, dtype=np.int8)
        mask[np.asarray(self.board.get_valid_actions(), dtype=np.intp)] = 1
        return mask

    def close(self) -> None:
        """Stop the board clock."""
        self.board.close()
        super().close()
