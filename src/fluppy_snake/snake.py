"""Snake representation and direction vectors."""

from __future__ import annotations

import enum
from collections import deque

Position = tuple[int, int]


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downward, matching screen coordinates.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    def is_opposite(self, other: Direction) -> bool:
        """Return True when the two vectors sum to zero."""
        dx, dy = self.value
        ox, oy = other.value
        return dx + ox == 0 and dy + oy == 0


class Snake:
    """A snake represented as an ordered deque of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        start_x: int,
        start_y: int,
        direction: Direction = Direction.RIGHT,
        length: int = 3,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        self.body: deque[Position] = deque(
            (start_x - dx * i, start_y - dy * i) for i in range(length)
        )

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    def next_head(self, direction: Direction) -> Position:
        """Compute the unwrapped head position one step along *direction*."""
        dx, dy = direction.value
        x, y = self.head
        return x + dx, y + dy

    def push_head(self, pos: Position) -> None:
        self.body.appendleft(pos)

    def pop_tail(self) -> Position:
        """Remove and return the tail segment."""
        return self.body.pop()

    def shrink(self, min_length: int) -> bool:
        """Drop the tail if the snake is longer than *min_length*."""
        if len(self.body) > min_length:
            self.body.pop()
            return True
        return False

    def occupies(self, pos: Position) -> bool:
        """Check whether the snake occupies a given cell."""
        return pos in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {"body": [list(seg) for seg in self.body]}
