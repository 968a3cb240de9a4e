"""
grid.py — Coordinate space of the board.

Pure value types and helpers, no mutable state.

Classes:
    Point      — (x, y) cell coordinate, compares equal to plain tuples
    Direction  — one of the four unit headings
"""

from enum import Enum
from typing import NamedTuple

from .config import COLS, ROWS


class Point(NamedTuple):
    x: int
    y: int


# ─────────────────────────── Direction ───────────────────────────
class Direction(Enum):
    """Unit heading; y grows downwards like screen coordinates."""
    UP    = (0, -1)
    DOWN  = (0, 1)
    LEFT  = (-1, 0)
    RIGHT = (1, 0)

    @property
    def x(self) -> int:
        return self.value[0]

    @property
    def y(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> "Direction":
        return Direction((-self.x, -self.y))

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y


def in_bounds(p: tuple[int, int], width: int = COLS, height: int = ROWS) -> bool:
    return 0 <= p[0] < width and 0 <= p[1] < height


def equals(a: tuple[int, int], b: tuple[int, int]) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def step(p: tuple[int, int], direction: Direction) -> Point:
    """The neighbouring cell of `p` in `direction` (may lie off the grid)."""
    return Point(p[0] + direction.x, p[1] + direction.y)
