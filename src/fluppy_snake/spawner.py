"""Free-cell search for food, poison and survival obstacles."""

from __future__ import annotations

import logging
from collections.abc import Collection

import numpy as np

from fluppy_snake.grid import CellType, Grid
from fluppy_snake.snake import Position

logger = logging.getLogger(__name__)


class CellSpawner:
    """Picks uniformly random unoccupied cells on a ``cols x rows`` board.

    Random draws are retried until a free cell is found, up to
    ``max_attempts``. After that the remaining free cells are enumerated
    and one is chosen uniformly, so a crowded board never loops forever.
    """

    def __init__(
        self,
        cols: int,
        rows: int,
        rng: np.random.Generator | None = None,
        max_attempts: int = 1000,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1.")
        self.cols = cols
        self.rows = rows
        self.rng = rng if rng is not None else np.random.default_rng()
        self.max_attempts = max_attempts

    def spawn(self, *blocked: Collection[Position]) -> Position | None:
        """Return a cell not contained in any of *blocked*, or ``None``."""
        for _ in range(self.max_attempts):
            pos = (
                int(self.rng.integers(self.cols)),
                int(self.rng.integers(self.rows)),
            )
            if not any(pos in group for group in blocked):
                return pos

        grid = Grid(self.cols, self.rows)
        for group in blocked:
            grid.fill(group, CellType.OBSTACLE)
        free = grid.empty_cells()
        if not free:
            logger.warning("No empty cells available for spawning.")
            return None
        logger.debug(
            "Random spawn gave up after %d attempts; %d free cells remain.",
            self.max_attempts, len(free),
        )
        return free[int(self.rng.integers(len(free)))]
