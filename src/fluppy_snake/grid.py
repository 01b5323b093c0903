"""Playfield dimensions, obstacle layouts and the cell raster."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

import numpy as np

from fluppy_snake.settings import GridSize, MapType

if TYPE_CHECKING:
    from fluppy_snake.snake import Position

logger = logging.getLogger(__name__)

# Largest canvas edge the presentation layer will draw, in pixels.
MAX_DISPLAY_PX = 800

_MAZE_SPACING = 4
_MAZE_MARGIN = 4


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE = 1
    HEAD = 2
    FOOD = 3
    POISON = 4
    OBSTACLE = 5


class Grid:
    """NumPy-backed raster of the playfield.

    Coordinates are (x, y); the array is indexed ``cells[y, x]``.
    """

    def __init__(self, cols: int, rows: int) -> None:
        if cols < 1 or rows < 1:
            raise ValueError("Grid dimensions must be at least 1x1.")
        self.cols = cols
        self.rows = rows
        self.cells = np.zeros((rows, cols), dtype=np.int8)

    def get(self, x: int, y: int) -> CellType:
        return CellType(self.cells[y, x])

    def set(self, x: int, y: int, cell_type: CellType) -> None:
        self.cells[y, x] = cell_type

    def fill(self, positions, cell_type: CellType) -> None:
        """Paint every position in *positions* with *cell_type*."""
        for x, y in positions:
            self.cells[y, x] = cell_type

    def empty_cells(self) -> list[Position]:
        """Return a list of all empty cell coordinates."""
        ys, xs = np.where(self.cells == CellType.EMPTY)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))


def compute_dimensions(
    size: GridSize, available_px: int | None = None,
) -> tuple[int, int, int]:
    """Return ``(cols, rows, cell_px)`` for a size option.

    ``cell_px`` fits the larger grid edge into the available display area,
    capped at :data:`MAX_DISPLAY_PX`.
    """
    area = MAX_DISPLAY_PX if available_px is None else min(available_px, MAX_DISPLAY_PX)
    cell_px = max(1, area // max(size.cols, size.rows))
    return size.cols, size.rows, cell_px


def generate_obstacles(
    map_type: MapType,
    cols: int,
    rows: int,
    rng: np.random.Generator,
    *,
    density: float = 0.05,
    safe_zone: int = 5,
) -> set[Position]:
    """Build the static obstacle set for a map layout.

    BOX and INFINITE have no obstacles; their edges are handled by the
    step's boundary policy.
    """
    obstacles: set[Position] = set()

    if map_type == MapType.MAZE:
        for x in range(_MAZE_SPACING, cols - _MAZE_MARGIN, _MAZE_SPACING):
            for y in range(_MAZE_MARGIN, rows - _MAZE_MARGIN):
                obstacles.add((x, y))

    elif map_type == MapType.OBSTACLES:
        count = int(cols * rows * density)
        xs = rng.integers(cols, size=count)
        ys = rng.integers(rows, size=count)
        for x, y in zip(xs.tolist(), ys.tolist(), strict=True):
            # Top-left corner stays clear.
            if x > safe_zone or y > safe_zone:
                obstacles.add((x, y))

    logger.debug(
        "Generated %d obstacles for %s map (%dx%d).",
        len(obstacles), map_type.value, cols, rows,
    )
    return obstacles
