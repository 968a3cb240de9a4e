"""
simulation.py — Snake simulation.

Owns the body and heading, advances one cell per tick and reports what
happened. Zero rendering, zero scoring, zero audio: the caller reacts to
the returned outcome.

Classes:
    DeathCause       — why a run ended
    Moved / Ate / Died — tick outcomes
    SnakeSimulation  — body, committed heading, pending heading, alive flag
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Union

from .config import COLS, ROWS, INITIAL_SNAKE
from .grid import Direction, Point, in_bounds, step

log = logging.getLogger(__name__)


class SimulationOver(RuntimeError):
    """tick() was called after the snake died."""


class DeathCause(str, Enum):
    WALL       = "wall"
    SELF       = "self"
    OBSTACLE   = "obstacle"
    BOARD_FULL = "board_full"


# ─────────────────────────── Outcomes ────────────────────────────
@dataclass(frozen=True)
class Moved:
    head: Point


@dataclass(frozen=True)
class Ate:
    head: Point
    bonus: bool


@dataclass(frozen=True)
class Died:
    cause: DeathCause
    head: Point     # the cell the snake tried to enter


Outcome = Union[Moved, Ate, Died]


# ─────────────────────────── Simulation ──────────────────────────
class SnakeSimulation:
    """
    Pure game data for the snake.

    The self-collision test runs against the full pre-move body, tail
    included, so moving into the cell the tail is about to leave is fatal.
    """

    def __init__(
        self,
        body: Iterable[tuple[int, int]] = INITIAL_SNAKE,
        direction: Direction = Direction.RIGHT,
        width: int = COLS,
        height: int = ROWS,
    ):
        self.body: deque[Point] = deque(Point(*p) for p in body)
        if len(self.body) < 1:
            raise ValueError("snake needs at least one cell")
        self.width = width
        self.height = height
        self.direction: Direction = direction
        self.pending: Direction = direction
        self.alive: bool = True
        self.death: Optional[Died] = None

    # ── Accessors ────────────────────────────────────────────────
    @property
    def head(self) -> Point:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def occupies(self, p: tuple[int, int]) -> bool:
        return p in self.body

    # ── Commands ─────────────────────────────────────────────────
    def request_direction(self, new_dir: Direction) -> bool:
        """
        Queue a heading for the next tick.

        Compared against the committed heading, not the pending one, so two
        quick turns within one tick cannot fold the snake back on itself.
        Returns False when the request was rejected as a reversal.
        """
        if new_dir.is_opposite(self.direction):
            return False
        self.pending = new_dir
        return True

    def tick(
        self,
        food: Optional[tuple[int, int]] = None,
        bonus: bool = False,
        obstacles: Iterable[tuple[int, int]] = (),
    ) -> Outcome:
        """Advance one cell and report the outcome."""
        if not self.alive:
            raise SimulationOver("the snake is dead; reset before ticking again")

        if not self.pending.is_opposite(self.direction):
            self.direction = self.pending
        else:
            self.pending = self.direction

        new_head = step(self.head, self.direction)

        cause = None
        if not in_bounds(new_head, self.width, self.height):
            cause = DeathCause.WALL
        elif new_head in self.body:
            cause = DeathCause.SELF
        elif new_head in obstacles:
            cause = DeathCause.OBSTACLE

        if cause is not None:
            return self.kill(cause, new_head)

        self.body.appendleft(new_head)
        if food is not None and new_head == food:
            return Ate(new_head, bonus)
        self.body.pop()
        return Moved(new_head)

    def kill(self, cause: DeathCause, at: Optional[Point] = None) -> Died:
        """Mark the snake dead. The body stays frozen from here on."""
        self.alive = False
        self.death = Died(cause, at if at is not None else self.head)
        log.debug("snake died: %s at %s", cause.value, self.death.head)
        return self.death
