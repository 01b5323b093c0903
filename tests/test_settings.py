"""Tests for the settings model."""

import pytest

from fluppy_snake.settings import (
    SIZES,
    Difficulty,
    GameMode,
    MapType,
    SettingField,
    Settings,
    Step,
    Theme,
    options,
)


class TestSettingsDefaults:
    def test_default_labels(self):
        labels = Settings().labels()
        assert labels == {
            "theme": "NEON",
            "mode": "CLASSIC",
            "map": "BOX",
            "difficulty": "MEDIUM",
            "size": "25x25",
        }

    def test_option_counts(self):
        assert len(options(SettingField.THEME)) == 8
        assert len(options(SettingField.MODE)) == 7
        assert len(options(SettingField.MAP)) == 4
        assert len(options(SettingField.DIFFICULTY)) == 4
        assert len(options(SettingField.SIZE)) == 6

    def test_size_range(self):
        assert SIZES[0].label == "10x10"
        assert SIZES[-1].label == "40x40"


class TestSettingsAdvance:
    def test_next_increments(self):
        s = Settings()
        assert s.advance(SettingField.MODE, Step.NEXT) == 1
        assert s.mode_option == GameMode.SPEED

    def test_next_wraps_to_start(self):
        s = Settings(map=3)
        s.advance(SettingField.MAP, Step.NEXT)
        assert s.map_option == MapType.BOX

    def test_prev_wraps_to_end(self):
        s = Settings(theme=0)
        s.advance(SettingField.THEME, Step.PREV)
        assert s.theme_option == Theme.GAMEBOY

    @pytest.mark.parametrize("field", list(SettingField))
    def test_full_cycle_returns_to_start(self, field):
        s = Settings()
        start = getattr(s, field.value)
        for _ in range(len(options(field))):
            s.advance(field)
        assert getattr(s, field.value) == start

    def test_fields_are_independent(self):
        s = Settings()
        s.advance(SettingField.DIFFICULTY, Step.NEXT)
        assert s.difficulty_option == Difficulty.HARD
        assert s.mode_option == GameMode.CLASSIC
        assert s.size == 3


class TestSettingsSerialization:
    def test_to_dict(self):
        d = Settings(mode=6).to_dict()
        assert d["indices"]["mode"] == 6
        assert d["labels"]["mode"] == "POISON"

    def test_from_dict_reduces_out_of_range(self):
        s = Settings.from_dict({"mode": 9, "size": 0})
        assert s.mode == 2
        assert s.size == 0
        assert s.difficulty == 1
