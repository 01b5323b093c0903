"""Pure projection of game state to drawable primitives.

Nothing here makes game-logic decisions or mutates the state; colours and
pixel sizes belong to whoever draws the frame.
"""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

import numpy as np

from fluppy_snake.grid import CellType, Grid

if TYPE_CHECKING:
    from fluppy_snake.engine import GameState

FOOD_RADIUS = 1 / 3
POISON_RADIUS = 1 / 1.8
POISON_MARK = "×"


class Layer(enum.Enum):
    """Draw order, back to front."""

    OBSTACLE = "obstacle"
    FOOD = "food"
    POISON = "poison"
    BODY = "body"
    HEAD = "head"


@dataclass(frozen=True)
class Cell:
    """A filled grid cell."""

    layer: Layer
    x: int
    y: int


@dataclass(frozen=True)
class Circle:
    """A circle centred on a cell; ``radius`` is a fraction of the cell edge."""

    layer: Layer
    x: int
    y: int
    radius: float
    mark: str | None = None


@dataclass(frozen=True)
class FloatingText:
    """Short-lived feedback text anchored at a cell."""

    text: str
    x: int
    y: int


@dataclass(frozen=True)
class Frame:
    cols: int
    rows: int
    theme: str
    score: int
    tick: int
    cells: tuple[Cell, ...]
    circles: tuple[Circle, ...]
    texts: tuple[FloatingText, ...]

    def to_dict(self) -> dict:
        """Serialize to plain JSON-compatible types."""
        d = asdict(self)
        for item in d["cells"] + d["circles"]:
            item["layer"] = item["layer"].value
        return d


def render(state: GameState) -> Frame:
    """Project *state* onto drawable primitives."""
    cells: list[Cell] = [
        Cell(Layer.OBSTACLE, x, y) for x, y in sorted(state.obstacles)
    ]
    body = list(state.snake.body)
    cells.extend(Cell(Layer.BODY, x, y) for x, y in body[1:])
    # Head goes last so it stays visible where ZEN lets the body overlap it.
    cells.append(Cell(Layer.HEAD, *body[0]))

    circles: list[Circle] = []
    if state.food is not None:
        circles.append(Circle(Layer.FOOD, *state.food, FOOD_RADIUS))
    if state.poison is not None:
        circles.append(
            Circle(Layer.POISON, *state.poison, POISON_RADIUS, POISON_MARK),
        )

    penalty = state.config.poison_penalty
    texts = tuple(FloatingText(f"-{penalty}", x, y) for x, y in state.poison_hits)

    return Frame(
        cols=state.cols,
        rows=state.rows,
        theme=state.theme.value,
        score=state.score,
        tick=state.tick,
        cells=tuple(cells),
        circles=tuple(circles),
        texts=texts,
    )


def rasterize(state: GameState) -> np.ndarray:
    """Return an ``(rows, cols)`` array of :class:`CellType` codes.

    Later layers overwrite earlier ones: obstacles, food, poison, body, head.
    """
    grid = Grid(state.cols, state.rows)
    grid.fill(state.obstacles, CellType.OBSTACLE)
    if state.food is not None:
        grid.set(*state.food, CellType.FOOD)
    if state.poison is not None:
        grid.set(*state.poison, CellType.POISON)
    grid.fill(list(state.snake.body)[1:], CellType.SNAKE)
    grid.set(*state.snake.head, CellType.HEAD)
    return grid.cells
