"""Discrete-time simulation step and game-state construction."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

import numpy as np

from fluppy_snake.config import GameConfig
from fluppy_snake.grid import compute_dimensions, generate_obstacles
from fluppy_snake.settings import Difficulty, GameMode, MapType, Settings, Theme
from fluppy_snake.snake import Direction, Position, Snake
from fluppy_snake.spawner import CellSpawner

logger = logging.getLogger(__name__)

INITIAL_LENGTH = 3


class GameStatus(enum.Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class StepOutcome(enum.Enum):
    """The single result reported for one tick, in collision priority order."""

    WALL_DEATH = "wall_death"
    SELF_DEATH = "self_death"
    OBSTACLE_DEATH = "obstacle_death"
    POISONED = "poisoned"
    ATE = "ate"
    MOVED = "moved"
    IDLE = "idle"

    @property
    def is_death(self) -> bool:
        return self in _DEATHS


_DEATHS = frozenset({
    StepOutcome.WALL_DEATH,
    StepOutcome.SELF_DEATH,
    StepOutcome.OBSTACLE_DEATH,
})


@dataclass
class GameState:
    """All mutable simulation state for one game.

    Created by :func:`new_game`, advanced in place by :func:`step`.
    """

    cols: int
    rows: int
    mode: GameMode
    map_type: MapType
    difficulty: Difficulty
    theme: Theme
    snake: Snake
    spawner: CellSpawner
    config: GameConfig
    direction: Direction = Direction.RIGHT
    next_direction: Direction | None = None
    food: Position | None = None
    poison: Position | None = None
    obstacles: set[Position] = field(default_factory=set)
    score: int = 0
    tick: int = 0
    tick_interval_ms: int = 100
    status: GameStatus = GameStatus.RUNNING
    last_outcome: StepOutcome = StepOutcome.IDLE
    # Positions where poison was eaten during the most recent tick.
    poison_hits: list[Position] = field(default_factory=list)

    @property
    def wraps(self) -> bool:
        """Whether the edges wrap around instead of killing the snake."""
        return self.map_type == MapType.INFINITE or self.mode == GameMode.PORTAL

    @property
    def running(self) -> bool:
        return self.status == GameStatus.RUNNING

    def to_dict(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "cols": self.cols,
            "rows": self.rows,
            "mode": self.mode.value,
            "map": self.map_type.value,
            "difficulty": self.difficulty.value,
            "theme": self.theme.value,
            "snake": self.snake.to_dict(),
            "direction": list(self.direction.value),
            "food": list(self.food) if self.food is not None else None,
            "poison": list(self.poison) if self.poison is not None else None,
            "obstacles": sorted(list(p) for p in self.obstacles),
            "score": self.score,
            "tick": self.tick,
            "tick_interval_ms": self.tick_interval_ms,
            "status": self.status.value,
            "last_outcome": self.last_outcome.value,
        }


def tick_interval_ms(
    difficulty: Difficulty,
    mode: GameMode,
    score: int = 0,
    config: GameConfig | None = None,
) -> int:
    """Milliseconds per tick for a difficulty, mode and score.

    CAMPAIGN shortens the interval by ``campaign_step_ms`` per completed
    milestone, never below ``campaign_min_ms``.
    """
    cfg = config or GameConfig()
    base = cfg.base_speed(difficulty)
    if mode == GameMode.CAMPAIGN and score >= cfg.campaign_milestone:
        milestones = score // cfg.campaign_milestone
        return max(cfg.campaign_min_ms, base - milestones * cfg.campaign_step_ms)
    return round(base * cfg.mode_multiplier(mode))


def new_game(
    settings: Settings,
    rng: np.random.Generator | None = None,
    config: GameConfig | None = None,
) -> GameState:
    """Create a RUNNING game from the selected settings."""
    cfg = config or GameConfig()
    rng = rng if rng is not None else np.random.default_rng()
    cols, rows, _ = compute_dimensions(settings.size_option)
    mode = settings.mode_option
    map_type = settings.map_option

    snake = Snake(cols // 2, rows // 2, Direction.RIGHT, length=INITIAL_LENGTH)
    obstacles = generate_obstacles(
        map_type, cols, rows, rng,
        density=cfg.obstacle_density, safe_zone=cfg.safe_zone,
    )
    obstacles.difference_update(snake.body)

    state = GameState(
        cols=cols,
        rows=rows,
        mode=mode,
        map_type=map_type,
        difficulty=settings.difficulty_option,
        theme=settings.theme_option,
        snake=snake,
        spawner=CellSpawner(cols, rows, rng, max_attempts=cfg.spawn_attempts),
        config=cfg,
        obstacles=obstacles,
        tick_interval_ms=tick_interval_ms(
            settings.difficulty_option, mode, 0, cfg,
        ),
    )
    state.food = _spawn_food(state)
    if mode == GameMode.POISON:
        state.poison = _spawn_hazard(state)

    logger.info(
        "New %s game on %s map (%dx%d, %s, %d ms/tick).",
        mode.value, map_type.value, cols, rows,
        state.difficulty.value, state.tick_interval_ms,
    )
    return state


def set_direction(state: GameState, direction: Direction) -> None:
    """Buffer a direction change for the next tick.

    Last write wins, reversals included; :func:`step` drops a buffered
    value that would reverse the heading.
    """
    state.next_direction = direction


def step(state: GameState) -> StepOutcome:
    """Advance the game by one tick and return what happened.

    Collisions resolve in the order boundary, self, obstacle, poison.
    Does nothing once the game is over.
    """
    if not state.running:
        return StepOutcome.IDLE

    state.poison_hits.clear()
    state.tick += 1

    if state.next_direction is not None:
        if not state.next_direction.is_opposite(state.direction):
            state.direction = state.next_direction
        state.next_direction = None

    x, y = state.snake.next_head(state.direction)

    # --- boundary ---
    if not (0 <= x < state.cols and 0 <= y < state.rows):
        if state.wraps or state.mode == GameMode.ZEN:
            x, y = x % state.cols, y % state.rows
        else:
            return _end(state, StepOutcome.WALL_DEATH)
    head = (x, y)

    # --- self ---
    if state.snake.occupies(head) and state.mode != GameMode.ZEN:
        return _end(state, StepOutcome.SELF_DEATH)

    # --- obstacles ---
    if head in state.obstacles:
        return _end(state, StepOutcome.OBSTACLE_DEATH)

    # --- poison: consumes the whole tick, no forward motion ---
    if state.poison is not None and head == state.poison:
        state.score = max(0, state.score - state.config.poison_penalty)
        state.poison_hits.append(head)
        state.poison = _spawn_hazard(state)
        state.snake.shrink(state.config.min_length)
        state.last_outcome = StepOutcome.POISONED
        return StepOutcome.POISONED

    # --- move ---
    state.snake.push_head(head)

    if head == state.food:
        _eat(state)
        state.last_outcome = StepOutcome.ATE
    else:
        state.snake.pop_tail()
        state.last_outcome = StepOutcome.MOVED
    return state.last_outcome


def _eat(state: GameState) -> None:
    cfg = state.config
    state.score += cfg.food_score

    if state.mode == GameMode.CAMPAIGN and state.score % cfg.campaign_milestone == 0:
        state.tick_interval_ms = tick_interval_ms(
            state.difficulty, state.mode, state.score, cfg,
        )
        logger.debug(
            "Campaign milestone at score %d: %d ms/tick.",
            state.score, state.tick_interval_ms,
        )

    state.food = _spawn_food(state)

    if state.mode == GameMode.SURVIVAL:
        obstacle = _spawn_hazard(state)
        if obstacle is not None:
            state.obstacles.add(obstacle)
    if state.mode == GameMode.POISON and state.poison is not None:
        state.poison = _spawn_hazard(state)


def _spawn_food(state: GameState) -> Position | None:
    return state.spawner.spawn(
        state.snake.body, state.obstacles, _as_group(state.poison),
    )


def _spawn_hazard(state: GameState) -> Position | None:
    """Place poison or a survival obstacle on a free cell.

    The current poison cell is excluded too, so relocation always moves it.
    """
    return state.spawner.spawn(
        state.snake.body,
        state.obstacles,
        _as_group(state.food),
        _as_group(state.poison),
    )


def _as_group(pos: Position | None) -> tuple[Position, ...]:
    return () if pos is None else (pos,)


def _end(state: GameState, outcome: StepOutcome) -> StepOutcome:
    state.status = GameStatus.GAME_OVER
    state.last_outcome = outcome
    logger.info(
        "Game over (%s) at tick %d with score %d.",
        outcome.value, state.tick, state.score,
    )
    return outcome
