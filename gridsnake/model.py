"""
model.py — Model layer.

Owns ALL game state and rules. Zero rendering, zero input handling.
The controller feeds it Actions and the current time; the view reads
an immutable WorldSnapshot produced by snapshot().

Classes:
    SimulationState — snake simulation, food and obstacles of one run
    WorldSnapshot   — frozen picture of everything the renderer needs
    GameModel       — top-level model; owns the simulation, the screen
                      machine, the tick scheduler and the score tracker
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from .advice import AdviceService
from .audio import SilentCues
from .config import (
    COLS, ROWS, INITIAL_SNAKE,
    DIFFICULTIES, DEFAULT_DIFFICULTY, THEMES, DEFAULT_THEME,
    ADVICE_MILESTONE, ADVICE_READY,
)
from .grid import Direction
from .loop import TickScheduler
from .placement import Food, NoSpaceAvailable, compute_obstacles, place_food
from .screens import Action, ScreenMachine, ScreenState, Transition
from .session import HighScoreStore, PersistenceUnavailable, ScoreTracker, SessionStats
from .simulation import Ate, DeathCause, Died, Outcome, SnakeSimulation

log = logging.getLogger(__name__)

_MENU_ACTIONS = {
    Action.LAUNCH, Action.RETRY, Action.OPEN_LEVELS, Action.OPEN_SETTINGS,
    Action.CHOOSE, Action.MAIN_MENU, Action.RESET_RECORD, Action.CONFIRM,
    Action.BACK,
}


@dataclass
class SimulationState:
    snake: SnakeSimulation
    food: Optional[Food]
    obstacles: frozenset


@dataclass(frozen=True)
class WorldSnapshot:
    screen: ScreenState
    snake: tuple
    direction: Direction
    alive: bool
    death: Optional[Died]
    food: Optional[Food]
    obstacles: frozenset
    score: int
    high_score: int
    new_record: bool
    stats: Optional[SessionStats]
    countdown: int
    difficulty: int
    theme: int
    boosted: bool
    advice: str
    ticks: int


# ─────────────────────────── GameModel ───────────────────────────
class GameModel:
    """
    Top-level model.  Owns all game state.
    The controller calls update(now_ms) once per rendered frame.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        store=None,
        advice: Optional[AdviceService] = None,
        cues=None,
        width: int = COLS,
        height: int = ROWS,
    ):
        self.rng = rng or random.Random()
        self.store = store if store is not None else HighScoreStore()
        self.advice = advice or AdviceService()
        self.cues = cues or SilentCues()
        self.width = width
        self.height = height

        self.screens = ScreenMachine()
        self.difficulty: int = DEFAULT_DIFFICULTY
        self.theme: int = DEFAULT_THEME
        self.scheduler = TickScheduler(DIFFICULTIES[self.difficulty]["period"])
        self.tracker = ScoreTracker(self._load_high_score())
        self.ticks: int = 0
        self.sim: SimulationState = None
        self._reset_entities()

    # ── Accessors ────────────────────────────────────────────────
    @property
    def state(self) -> ScreenState:
        return self.screens.state

    @property
    def score(self) -> int:
        return self.tracker.score

    @property
    def diff_config(self) -> dict:
        return DIFFICULTIES[self.difficulty]

    # ── Public API ───────────────────────────────────────────────
    def handle(self, action: Action, now_ms: int) -> Optional[Transition]:
        """Route a player action through the screen machine."""
        target = self.screens.target_for(action)
        if target is None or target == self.state:
            return None

        if target == ScreenState.COUNTDOWN:
            self._reset_entities()
        elif self.state == ScreenState.CONFIRM_RESET and action == Action.CONFIRM:
            self.tracker.reset_high_score()
            self._save_high_score(0)

        transition = self.screens.dispatch(action, now_ms)
        if transition is not None:
            self._on_transition(transition, now_ms)
        return transition

    def steer(self, direction: Direction) -> bool:
        if self.state not in (ScreenState.COUNTDOWN, ScreenState.PLAYING):
            return False
        return self.sim.snake.request_direction(direction)

    def set_boost(self, held: bool) -> None:
        self.scheduler.set_boost(held and self.state == ScreenState.PLAYING)

    def choose(self, index: int, now_ms: int) -> bool:
        """
        Pick a menu entry by index: a difficulty on LEVEL_SELECT (which
        returns to START), a theme on SETTINGS (which stays put).
        """
        if self.state == ScreenState.LEVEL_SELECT and 0 <= index < len(DIFFICULTIES):
            self.difficulty = index
            self.scheduler.set_base_period(DIFFICULTIES[index]["period"])
            self.handle(Action.CHOOSE, now_ms)
            return True
        if self.state == ScreenState.SETTINGS and 0 <= index < len(THEMES):
            self.theme = index
            self.cues.play("menu_select")
            return True
        return False

    def update(self, now_ms: int) -> Optional[Outcome]:
        """Advance timers; run at most one simulation tick if one is due."""
        transition = self.screens.update(now_ms)
        if transition is not None:
            self._on_transition(transition, now_ms)

        if self.state != ScreenState.PLAYING:
            return None
        if not self.scheduler.due(now_ms):
            return None
        return self._step(now_ms)

    def snapshot(self) -> WorldSnapshot:
        snake = self.sim.snake
        return WorldSnapshot(
            screen=self.state,
            snake=tuple(snake.body),
            direction=snake.direction,
            alive=snake.alive,
            death=snake.death,
            food=self.sim.food,
            obstacles=self.sim.obstacles,
            score=self.tracker.score,
            high_score=self.tracker.high_score,
            new_record=self.tracker.new_record,
            stats=self.tracker.stats,
            countdown=self.screens.countdown,
            difficulty=self.difficulty,
            theme=self.theme,
            boosted=self.scheduler.boosted,
            advice=self.advice.text,
            ticks=self.ticks,
        )

    # ── Private helpers ──────────────────────────────────────────
    def _reset_entities(self) -> None:
        snake = SnakeSimulation(INITIAL_SNAKE, Direction.RIGHT, self.width, self.height)
        food = place_food(snake.body, (), self.width, self.height, self.rng)
        self.sim = SimulationState(snake=snake, food=food, obstacles=frozenset())
        self.tracker.reset()
        self.scheduler.set_boost(False)
        self.advice.set_text(ADVICE_READY)
        self.ticks = 0

    def _step(self, now_ms: int) -> Outcome:
        sim = self.sim
        food = sim.food
        outcome = sim.snake.tick(food.position, food.bonus, sim.obstacles)
        self.ticks += 1

        if isinstance(outcome, Died):
            self._finish(outcome, now_ms)
        elif isinstance(outcome, Ate):
            score = self.tracker.add_points(outcome.bonus)
            self.cues.play("eat")
            sim.obstacles = self._obstacles_for(score)
            try:
                sim.food = place_food(sim.snake.body, sim.obstacles,
                                      self.width, self.height, self.rng)
            except NoSpaceAvailable:
                log.warning("board is full at score %d", score)
                sim.food = None
                return self._finish(sim.snake.kill(DeathCause.BOARD_FULL), now_ms)
            if score > 0 and score % ADVICE_MILESTONE == 0:
                self.advice.request(score, self.diff_config["label"])
        return outcome

    def _obstacles_for(self, score: int) -> frozenset:
        """Score-keyed obstacles minus any cell the snake currently covers."""
        cells = compute_obstacles(score, self.width, self.height)
        return frozenset(c for c in cells if not self.sim.snake.occupies(c))

    def _finish(self, death: Died, now_ms: int) -> Died:
        snake = self.sim.snake
        stats = self.tracker.record_death(
            self.screens.play_start_ms, now_ms, self.tracker.score, len(snake),
        )
        self.cues.play("death")
        log.info(
            "run over: %s, score %d, %ds, growth %d",
            death.cause.value, self.tracker.score, stats.duration_seconds, stats.growth,
        )
        if self.tracker.commit_high_score(self.tracker.score):
            self._save_high_score(self.tracker.high_score)
        self.screens.dispatch(Action.DIE, now_ms)
        self.scheduler.set_boost(False)
        return death

    def _on_transition(self, t: Transition, now_ms: int) -> None:
        if t.action == Action.TIMER:
            self.cues.play("go" if t.target == ScreenState.PLAYING else "tick")
        elif t.target == ScreenState.COUNTDOWN:
            self.cues.play("menu_select")
            self.cues.play("tick")
        elif t.action in _MENU_ACTIONS:
            self.cues.play("menu_select")

        if t.target == ScreenState.PLAYING:
            self.scheduler.restart(now_ms)
            if t.source == ScreenState.PAUSED:
                self.cues.resume_music()
        elif t.target == ScreenState.PAUSED:
            self.cues.pause_music()
        if t.target != ScreenState.PLAYING:
            self.scheduler.set_boost(False)
        if t.source == ScreenState.PAUSED and t.target != ScreenState.PLAYING:
            self.cues.resume_music()

    def _load_high_score(self) -> int:
        try:
            value = self.store.load()
        except PersistenceUnavailable as exc:
            log.warning("high score unavailable, starting from 0: %s", exc)
            return 0
        return value or 0

    def _save_high_score(self, value: int) -> None:
        try:
            self.store.save(value)
        except PersistenceUnavailable as exc:
            log.warning("could not persist high score %d: %s", value, exc)
