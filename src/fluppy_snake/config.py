"""Tunable game constants with JSON persistence."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from fluppy_snake.settings import Difficulty, GameMode

logger = logging.getLogger(__name__)


def _default_base_speeds() -> dict[str, int]:
    return {
        Difficulty.EASY.value: 130,
        Difficulty.MEDIUM.value: 100,
        Difficulty.HARD.value: 70,
        Difficulty.EXTREME.value: 40,
    }


def _default_mode_multipliers() -> dict[str, float]:
    return {
        GameMode.SPEED.value: 0.7,
        GameMode.ZEN.value: 1.5,
    }


@dataclass(frozen=True)
class GameConfig:
    """Scoring, timing and spawning constants.

    Supports JSON serialization so a deployment can override defaults.
    """

    # Timing (milliseconds per tick)
    base_speeds: dict[str, int] = field(default_factory=_default_base_speeds)
    mode_multipliers: dict[str, float] = field(
        default_factory=_default_mode_multipliers,
    )
    campaign_milestone: int = 50
    campaign_step_ms: int = 5
    campaign_min_ms: int = 30

    # Scoring
    food_score: int = 10
    poison_penalty: int = 25
    min_length: int = 3

    # Spawning
    obstacle_density: float = 0.05
    safe_zone: int = 5
    spawn_attempts: int = 1000

    # Persistence
    high_score_path: str | None = None

    def __post_init__(self) -> None:
        missing = [d.value for d in Difficulty if d.value not in self.base_speeds]
        if missing:
            raise ValueError(f"base_speeds missing difficulties: {missing}.")
        if any(v <= 0 for v in self.base_speeds.values()):
            raise ValueError("base_speeds must be positive.")
        if any(v <= 0 for v in self.mode_multipliers.values()):
            raise ValueError("mode_multipliers must be positive.")
        if self.campaign_milestone < 1:
            raise ValueError("campaign_milestone must be at least 1.")
        if self.campaign_min_ms < 1:
            raise ValueError("campaign_min_ms must be at least 1.")
        if self.spawn_attempts < 1:
            raise ValueError("spawn_attempts must be at least 1.")
        if not 0.0 <= self.obstacle_density < 1.0:
            raise ValueError("obstacle_density must be in [0, 1).")

    def base_speed(self, difficulty: Difficulty) -> int:
        return self.base_speeds[difficulty.value]

    def mode_multiplier(self, mode: GameMode) -> float:
        return self.mode_multipliers.get(mode.value, 1.0)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
