"""Player-selectable game settings with cyclic option lists."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Theme(enum.Enum):
    """Colour themes. Purely presentational; the engine ignores them."""

    NEON = "NEON"
    CLASSIC = "CLASSIC"
    MINIMAL = "MINIMAL"
    BIO_HAZARD = "BIO-HAZARD"
    MATRIX = "MATRIX"
    SUNSET = "SUNSET"
    CANDY = "CANDY"
    GAMEBOY = "GAMEBOY"


class GameMode(enum.Enum):
    """Rule variations applied by the simulation step."""

    CLASSIC = "CLASSIC"
    SPEED = "SPEED"
    SURVIVAL = "SURVIVAL"
    ZEN = "ZEN"
    CAMPAIGN = "CAMPAIGN"
    PORTAL = "PORTAL"
    POISON = "POISON"


class MapType(enum.Enum):
    """Static playfield layouts."""

    BOX = "BOX"
    INFINITE = "INFINITE"
    MAZE = "MAZE"
    OBSTACLES = "OBSTACLES"


class Difficulty(enum.Enum):
    """Difficulty levels; base tick intervals are in :class:`GameConfig`."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"
    EXTREME = "EXTREME"


@dataclass(frozen=True)
class GridSize:
    """A selectable playfield size."""

    cols: int
    rows: int

    @property
    def label(self) -> str:
        return f"{self.cols}x{self.rows}"


SIZES: tuple[GridSize, ...] = (
    GridSize(10, 10),
    GridSize(15, 15),
    GridSize(20, 20),
    GridSize(25, 25),
    GridSize(30, 30),
    GridSize(40, 40),
)


class SettingField(enum.Enum):
    """Fields of :class:`Settings` that can be cycled."""

    THEME = "theme"
    MODE = "mode"
    MAP = "map"
    DIFFICULTY = "difficulty"
    SIZE = "size"


class Step(enum.Enum):
    """Cycling direction for :meth:`Settings.advance`."""

    NEXT = "next"
    PREV = "prev"


_OPTIONS: dict[SettingField, tuple] = {
    SettingField.THEME: tuple(Theme),
    SettingField.MODE: tuple(GameMode),
    SettingField.MAP: tuple(MapType),
    SettingField.DIFFICULTY: tuple(Difficulty),
    SettingField.SIZE: SIZES,
}


def options(field: SettingField) -> tuple:
    """Return the ordered option list for *field*."""
    return _OPTIONS[field]


@dataclass
class Settings:
    """Selected index for each setting field.

    Every combination of indices is a legal configuration.
    """

    theme: int = 0
    mode: int = 0
    map: int = 0
    difficulty: int = 1
    size: int = 3

    def advance(self, field: SettingField, step: Step = Step.NEXT) -> int:
        """Cycle *field* forward or backward, wrapping at both ends.

        Returns the new index.
        """
        length = len(_OPTIONS[field])
        delta = 1 if step == Step.NEXT else -1
        index = (getattr(self, field.value) + delta) % length
        setattr(self, field.value, index)
        return index

    @property
    def theme_option(self) -> Theme:
        return _OPTIONS[SettingField.THEME][self.theme]

    @property
    def mode_option(self) -> GameMode:
        return _OPTIONS[SettingField.MODE][self.mode]

    @property
    def map_option(self) -> MapType:
        return _OPTIONS[SettingField.MAP][self.map]

    @property
    def difficulty_option(self) -> Difficulty:
        return _OPTIONS[SettingField.DIFFICULTY][self.difficulty]

    @property
    def size_option(self) -> GridSize:
        return _OPTIONS[SettingField.SIZE][self.size]

    def labels(self) -> dict[str, str]:
        """Return display labels for every field."""
        return {
            "theme": self.theme_option.value,
            "mode": self.mode_option.value,
            "map": self.map_option.value,
            "difficulty": self.difficulty_option.value,
            "size": self.size_option.label,
        }

    def to_dict(self) -> dict:
        """Serialize indices and labels to a dictionary."""
        return {
            "indices": {f.value: getattr(self, f.value) for f in SettingField},
            "labels": self.labels(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Settings:
        """Build settings from a mapping of field name to index.

        Out-of-range indices are reduced modulo the option count.
        """
        kwargs = {}
        for f in SettingField:
            if f.value in data:
                kwargs[f.value] = int(data[f.value]) % len(_OPTIONS[f])
        return cls(**kwargs)
