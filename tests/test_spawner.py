"""Tests for the free-cell spawner."""

import numpy as np
import pytest

from fluppy_snake.spawner import CellSpawner


def _all_cells(cols, rows):
    return {(x, y) for x in range(cols) for y in range(rows)}


class TestCellSpawner:
    def test_invalid_max_attempts(self):
        with pytest.raises(ValueError, match="at least 1"):
            CellSpawner(5, 5, max_attempts=0)

    def test_spawn_in_bounds(self):
        spawner = CellSpawner(6, 4, np.random.default_rng(0))
        for _ in range(50):
            x, y = spawner.spawn()
            assert 0 <= x < 6 and 0 <= y < 4

    def test_never_returns_blocked_cell(self):
        rng = np.random.default_rng(3)
        snake = [(0, 0), (1, 0), (2, 0)]
        walls = {(x, 1) for x in range(5)}
        poison = ((4, 4),)
        spawner = CellSpawner(5, 5, rng)
        for _ in range(200):
            pos = spawner.spawn(snake, walls, poison)
            assert pos not in snake
            assert pos not in walls
            assert pos not in poison

    def test_single_free_cell_found(self):
        blocked = _all_cells(5, 5) - {(3, 2)}
        spawner = CellSpawner(5, 5, np.random.default_rng(0))
        assert spawner.spawn(blocked) == (3, 2)

    def test_fallback_after_attempts_exhausted(self):
        blocked = _all_cells(10, 10) - {(7, 7)}
        spawner = CellSpawner(10, 10, np.random.default_rng(0), max_attempts=1)
        assert spawner.spawn(blocked) == (7, 7)

    def test_full_board_returns_none(self):
        spawner = CellSpawner(3, 3, np.random.default_rng(0), max_attempts=5)
        assert spawner.spawn(_all_cells(3, 3)) is None

    def test_deterministic_with_seed(self):
        a = CellSpawner(20, 20, np.random.default_rng(11))
        b = CellSpawner(20, 20, np.random.default_rng(11))
        assert [a.spawn() for _ in range(5)] == [b.spawn() for _ in range(5)]
