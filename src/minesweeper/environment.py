"""
Gymnasium environment wrapper for Minesweeper.

Exposes a game session through the standard Gymnasium interface so that
scripts and agents can play through the same operations a human uses.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig, DEFAULT_CONFIG, count_revealed_safe_cells
from .cell import FLAGGED_OBSERVATION, MINE_OBSERVATION
from .display import render_session
from .session import Session, on_reveal, on_toggle_flag, reset


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
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < rows * cols reveals cell (i // cols, i % cols);
        the second half toggles the flag on the same cells.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for a flag toggle
        - -0.1 for a rejected action (revealed cell, flag budget, ...)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or DEFAULT_CONFIG
        self.session = Session.from_config(self.config)
        self.render_mode = render_mode
        self._cell_count = self.config.rows * self.config.cols
        self._rng = random.Random()

        self.observation_space = spaces.Box(
            low=FLAGGED_OBSERVATION,
            high=MINE_OBSERVATION,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        # One reveal and one flag action per cell
        self.action_space = spaces.Discrete(2 * self._cell_count)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self._rng = random.Random(int(self.np_random.integers(0, 2**31 - 1)))
        self.session = reset(self.session)
        self._steps = 0

        return self.session.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal, or cell index plus rows * cols
                to toggle a flag.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action {action!r}")

        self._steps += 1
        flag, row, col = self.action_to_move(int(action))

        if flag:
            reward = self._apply_flag(row, col)
        else:
            reward = self._apply_reveal(row, col)

        observation = self.session.board.get_observation()
        terminated = self.session.is_over
        truncated = False

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, self._get_info()

    def action_to_move(self, action: int) -> Tuple[bool, int, int]:
        """Convert flat action index to (is_flag, row, col)."""
        flag, cell_index = divmod(action, self._cell_count)
        row, col = divmod(cell_index, self.config.cols)
        return bool(flag), row, col

    def move_to_action(self, row: int, col: int, flag: bool = False) -> int:
        """Convert a move to its flat action index."""
        return int(flag) * self._cell_count + row * self.config.cols + col

    def _apply_reveal(self, row: int, col: int) -> float:
        previous = self.session
        self.session = on_reveal(previous, row, col, self._rng)

        if self.session is previous:
            return -0.1
        if self.session.is_won:
            return 10.0
        if self.session.is_lost:
            return -10.0
        return 1.0

    def _apply_flag(self, row: int, col: int) -> float:
        previous = self.session
        self.session = on_toggle_flag(previous, row, col)
        return -0.1 if self.session is previous else 0.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": count_revealed_safe_cells(self.session.board),
            "total_safe": self.config.safe_cells,
            "flags_remaining": self.session.flags_remaining,
            "game_state": self.session.status.name,
        }

    def render(self) -> Optional[str]:
        """Render the current session state."""
        if self.render_mode == "ansi":
            return render_session(self.session)
        if self.render_mode == "human":
            print(render_session(self.session))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action. A flag action is
            valid on a flagged cell, or on a hidden cell while flags remain.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.session.is_over:
            return mask
        can_flag = self.session.flags_remaining > 0
        for cell in self.session.board.iter_cells():
            if cell.is_revealed:
                continue
            if not cell.is_flagged:
                mask[self.move_to_action(cell.row, cell.col)] = True
            if cell.is_flagged or can_flag:
                mask[self.move_to_action(cell.row, cell.col, flag=True)] = True
        return mask
