"""Fluppy Snake: a configurable snake game engine."""

from fluppy_snake.config import GameConfig
from fluppy_snake.engine import GameState, GameStatus, StepOutcome, new_game, step
from fluppy_snake.grid import CellType, Grid, compute_dimensions, generate_obstacles
from fluppy_snake.render import Frame, rasterize, render
from fluppy_snake.session import GameSession, SessionListener
from fluppy_snake.settings import (
    Difficulty,
    GameMode,
    MapType,
    SettingField,
    Settings,
    Step,
    Theme,
)
from fluppy_snake.snake import Direction, Snake

__all__ = [
    "CellType",
    "Difficulty",
    "Direction",
    "Frame",
    "GameConfig",
    "GameMode",
    "GameSession",
    "GameState",
    "GameStatus",
    "Grid",
    "MapType",
    "SessionListener",
    "SettingField",
    "Settings",
    "Snake",
    "Step",
    "StepOutcome",
    "Theme",
    "compute_dimensions",
    "generate_obstacles",
    "new_game",
    "rasterize",
    "render",
    "step",
]
