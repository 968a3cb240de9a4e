"""
placement.py — Food and obstacle placement.

Food uses reject-sampling with a bounded number of attempts, then falls
back to an exhaustive scan of the free cells so that a crowded board
still gets a uniformly chosen cell. Obstacles are a pure function of the
score: fixed shapes unlocked at fixed thresholds.
"""

import random
from dataclasses import dataclass
from typing import Iterable

from .config import (
    COLS, ROWS,
    BONUS_CHANCE, MAX_RANDOM_ATTEMPTS,
    CROSS_THRESHOLD, CORNER_THRESHOLD,
    CROSS_ARM, CORNER_BAR_LEN, CORNER_MARGIN,
)
from .grid import Point


class NoSpaceAvailable(Exception):
    """Every cell of the board is taken by the snake or an obstacle."""


@dataclass(frozen=True)
class Food:
    position: Point
    bonus: bool = False


def free_cells(
    occupied: set[tuple[int, int]],
    width: int = COLS,
    height: int = ROWS,
) -> list[Point]:
    return [
        Point(x, y)
        for x in range(width)
        for y in range(height)
        if (x, y) not in occupied
    ]


def place_food(
    snake: Iterable[tuple[int, int]],
    obstacles: Iterable[tuple[int, int]],
    width: int = COLS,
    height: int = ROWS,
    rng: random.Random = None,
) -> Food:
    """
    Pick a cell that is neither snake nor obstacle.

    Raises NoSpaceAvailable when the board is completely full.
    The bonus flag is an independent draw made after the cell is chosen.
    """
    rng = rng or random
    occupied = set(snake) | set(obstacles)

    for _ in range(MAX_RANDOM_ATTEMPTS):
        candidate = Point(rng.randrange(width), rng.randrange(height))
        if candidate not in occupied:
            return Food(candidate, rng.random() < BONUS_CHANCE)

    available = free_cells(occupied, width, height)
    if not available:
        raise NoSpaceAvailable(f"no free cell on a {width}x{height} board")
    picked = available[rng.randrange(len(available))]
    return Food(picked, rng.random() < BONUS_CHANCE)


# ── Obstacles ─────────────────────────────────────────────────────

def _cross(width: int, height: int) -> set[Point]:
    """Plus-shaped arms around the centre; the centre cell itself stays open."""
    mid_x, mid_y = width // 2, height // 2
    cells = set()
    for i in range(-CROSS_ARM, CROSS_ARM + 1):
        if i == 0:
            continue
        cells.add(Point(mid_x + i, mid_y))
        cells.add(Point(mid_x, mid_y + i))
    return cells


def _corner_bars(width: int, height: int) -> set[Point]:
    cells = set()
    top, bottom = CORNER_MARGIN, height - CORNER_MARGIN - 1
    for i in range(CORNER_BAR_LEN):
        left, right = CORNER_MARGIN + i, width - CORNER_MARGIN - 1 - i
        cells.update({
            Point(left, top), Point(right, top),
            Point(left, bottom), Point(right, bottom),
        })
    return cells


def compute_obstacles(score: int, width: int = COLS, height: int = ROWS) -> frozenset[Point]:
    """
    Obstacle cells for a given score.

    Monotonic in `score`: every threshold only ever adds cells.
    """
    cells: set[Point] = set()
    if score >= CROSS_THRESHOLD:
        cells |= _cross(width, height)
    if score >= CORNER_THRESHOLD:
        cells |= _corner_bars(width, height)
    return frozenset(cells)
