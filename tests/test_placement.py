import random

import pytest

from gridsnake.config import COLS, ROWS
from gridsnake.grid import Point
from gridsnake.placement import (
    Food, NoSpaceAvailable, compute_obstacles, free_cells, place_food,
)


class ScriptedRng:
    """randrange answers come from a script; random() from a fixed value."""

    def __init__(self, ranges, roll=0.5):
        self.ranges = list(ranges)
        self.roll = roll

    def randrange(self, n):
        return self.ranges.pop(0) % n

    def random(self):
        return self.roll


def test_food_never_lands_on_snake_or_obstacles():
    rng = random.Random(7)
    snake = [(x, 5) for x in range(10)]
    obstacles = compute_obstacles(300)
    for _ in range(300):
        food = place_food(snake, obstacles, rng=rng)
        assert food.position not in snake
        assert food.position not in obstacles
        assert 0 <= food.position.x < COLS and 0 <= food.position.y < ROWS


def test_first_free_random_candidate_wins():
    rng = ScriptedRng([1, 1, 2, 2])
    food = place_food([(1, 1)], [], width=5, height=5, rng=rng)
    assert food == Food(Point(2, 2), False)


def test_dense_board_falls_back_to_exhaustive_scan():
    # only (2, 3) is free on a 4x4 board
    occupied = [(x, y) for x in range(4) for y in range(4) if (x, y) != (2, 3)]
    rng = ScriptedRng([0] * 400 + [0])
    food = place_food(occupied[:8], occupied[8:], width=4, height=4, rng=rng)
    assert rng.ranges == []
    assert food.position == (2, 3)


def test_full_board_raises():
    occupied = [(x, y) for x in range(3) for y in range(3)]
    with pytest.raises(NoSpaceAvailable):
        place_food(occupied, [], width=3, height=3, rng=random.Random(0))


def test_bonus_flag_is_an_independent_draw():
    assert place_food([], [], rng=ScriptedRng([0, 0], roll=0.10)).bonus
    assert not place_food([], [], rng=ScriptedRng([0, 0], roll=0.15)).bonus


def test_bonus_rate_is_roughly_fifteen_percent():
    rng = random.Random(99)
    bonus = sum(place_food([], [], rng=rng).bonus for _ in range(4000))
    assert 0.12 < bonus / 4000 < 0.18


def test_free_cells_excludes_occupied():
    cells = free_cells({(0, 0), (1, 1)}, width=2, height=2)
    assert sorted(cells) == [(0, 1), (1, 0)]


def test_no_obstacles_at_start():
    assert compute_obstacles(0) == frozenset()
    assert compute_obstacles(99) == frozenset()


def test_cross_past_first_threshold():
    cells = compute_obstacles(100)
    mid_x, mid_y = COLS // 2, ROWS // 2
    assert (mid_x, mid_y) not in cells
    for i in (1, 4):
        assert {(mid_x + i, mid_y), (mid_x - i, mid_y),
                (mid_x, mid_y + i), (mid_x, mid_y - i)} <= cells
    assert len(cells) == 16


def test_corner_bars_past_second_threshold():
    cells = compute_obstacles(250)
    assert compute_obstacles(100) < cells
    for corner in [(2, 2), (7, 2), (COLS - 3, 2), (COLS - 8, 2),
                   (2, ROWS - 3), (COLS - 3, ROWS - 3)]:
        assert corner in cells
    assert len(cells) == 16 + 24


def test_obstacles_are_monotonic_and_deterministic():
    previous = frozenset()
    for score in range(0, 400, 10):
        cells = compute_obstacles(score)
        assert previous <= cells
        assert cells == compute_obstacles(score)
        previous = cells
