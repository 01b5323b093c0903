"""Map raw player input to movement directions."""

from __future__ import annotations

from fluppy_snake.snake import Direction

# Minimum swipe distance, in screen pixels, before a swipe counts.
SWIPE_THRESHOLD = 30

_KEY_MAP: dict[str, Direction] = {
    "arrowup": Direction.UP,
    "arrowdown": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def key_direction(key: str) -> Direction | None:
    """Translate a key or D-pad name; unknown keys give ``None``."""
    return _KEY_MAP.get(key.strip().lower())


def swipe_direction(
    dx: float, dy: float, threshold: float = SWIPE_THRESHOLD,
) -> Direction | None:
    """Translate a swipe vector in screen coordinates (+y is down)."""
    if abs(dx) <= threshold and abs(dy) <= threshold:
        return None
    if abs(dx) > abs(dy):
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return Direction.DOWN if dy > 0 else Direction.UP


def to_direction(raw) -> Direction | None:
    """Accept a :class:`Direction`, a key name or a ``(dx, dy)`` swipe."""
    if isinstance(raw, Direction):
        return raw
    if isinstance(raw, str):
        return key_direction(raw)
    if isinstance(raw, (tuple, list)) and len(raw) == 2:
        return swipe_direction(float(raw[0]), float(raw[1]))
    return None
