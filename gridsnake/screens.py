"""
screens.py — Screen state machine.

Exactly one ScreenState is active at a time. Inputs arrive as Actions;
every (state, action) pair has a defined result, which is either a
Transition or None (no-op). The countdown is a timer owned by the machine
and driven by update(now_ms); it is disarmed whenever COUNTDOWN is left,
so a late step can never promote an abandoned countdown to PLAYING.

The machine performs no game side effects. The model inspects the
returned Transition and resets the run, plays cues, and so on.
"""

import logging
from enum import Enum, auto
from typing import NamedTuple, Optional

from .config import COUNTDOWN_START, COUNTDOWN_STEP_MS

log = logging.getLogger(__name__)


class ScreenState(Enum):
    SPLASH        = auto()
    START         = auto()
    LEVEL_SELECT  = auto()
    SETTINGS      = auto()
    CONFIRM_RESET = auto()
    COUNTDOWN     = auto()
    PLAYING       = auto()
    PAUSED        = auto()
    GAME_OVER     = auto()


class Action(Enum):
    ANY           = auto()   # any key; only meaningful on SPLASH
    LAUNCH        = auto()
    RETRY         = auto()
    OPEN_LEVELS   = auto()
    OPEN_SETTINGS = auto()
    CHOOSE        = auto()   # a difficulty was picked on LEVEL_SELECT
    BACK          = auto()
    MAIN_MENU     = auto()
    PAUSE         = auto()   # toggles PLAYING <-> PAUSED
    RESET_RECORD  = auto()
    CONFIRM       = auto()
    CANCEL        = auto()
    DIE           = auto()   # raised by the model, not by the player
    TIMER         = auto()   # countdown step, raised by update()


class Transition(NamedTuple):
    source: ScreenState
    target: ScreenState
    action: Action


S, A = ScreenState, Action

TRANSITIONS: dict[tuple[ScreenState, Action], ScreenState] = {
    (S.START,         A.LAUNCH):        S.COUNTDOWN,
    (S.START,         A.OPEN_LEVELS):   S.LEVEL_SELECT,
    (S.START,         A.OPEN_SETTINGS): S.SETTINGS,
    (S.LEVEL_SELECT,  A.CHOOSE):        S.START,
    (S.LEVEL_SELECT,  A.BACK):          S.START,
    (S.SETTINGS,      A.BACK):          S.START,
    (S.SETTINGS,      A.RESET_RECORD):  S.CONFIRM_RESET,
    (S.CONFIRM_RESET, A.CONFIRM):       S.SETTINGS,
    (S.CONFIRM_RESET, A.BACK):          S.SETTINGS,
    (S.PLAYING,       A.PAUSE):         S.PAUSED,
    (S.PLAYING,       A.DIE):           S.GAME_OVER,
    (S.PAUSED,        A.PAUSE):         S.PLAYING,
    (S.GAME_OVER,     A.RETRY):         S.COUNTDOWN,
    (S.GAME_OVER,     A.LAUNCH):        S.COUNTDOWN,
    (S.GAME_OVER,     A.MAIN_MENU):     S.START,
    (S.GAME_OVER,     A.OPEN_LEVELS):   S.LEVEL_SELECT,
    (S.GAME_OVER,     A.OPEN_SETTINGS): S.SETTINGS,
}


# ─────────────────────────── ScreenMachine ───────────────────────
class ScreenMachine:
    def __init__(self, initial: ScreenState = ScreenState.SPLASH):
        self.state: ScreenState = initial
        self.countdown: int = COUNTDOWN_START
        self.play_start_ms: int = 0
        self._next_step_ms: Optional[int] = None

    # ── Queries ──────────────────────────────────────────────────
    @property
    def countdown_armed(self) -> bool:
        return self._next_step_ms is not None

    def target_for(self, action: Action) -> Optional[ScreenState]:
        if self.state == ScreenState.SPLASH:
            return ScreenState.START
        if action == Action.CANCEL:
            return ScreenState.START
        return TRANSITIONS.get((self.state, action))

    # ── Commands ─────────────────────────────────────────────────
    def dispatch(self, action: Action, now_ms: int) -> Optional[Transition]:
        """Apply a player (or model) action. Returns None for a no-op."""
        target = self.target_for(action)
        if target is None or target == self.state:
            return None
        return self._enter(target, action, now_ms)

    def update(self, now_ms: int) -> Optional[Transition]:
        """
        Advance the countdown timer.

        At most one step per call, so every value 3, 2, 1 is observed
        even after a long stall between frames.
        """
        if self.state != ScreenState.COUNTDOWN or self._next_step_ms is None:
            return None
        if now_ms < self._next_step_ms:
            return None

        self._next_step_ms += COUNTDOWN_STEP_MS
        if self.countdown > 1:
            self.countdown -= 1
            return Transition(self.state, self.state, Action.TIMER)
        return self._enter(ScreenState.PLAYING, Action.TIMER, now_ms)

    # ── Private helpers ──────────────────────────────────────────
    def _enter(self, target: ScreenState, action: Action, now_ms: int) -> Transition:
        source = self.state
        self.state = target
        self._next_step_ms = None

        if target == ScreenState.COUNTDOWN:
            self.countdown = COUNTDOWN_START
            self._next_step_ms = now_ms + COUNTDOWN_STEP_MS
        elif target == ScreenState.PLAYING and source == ScreenState.COUNTDOWN:
            self.countdown = COUNTDOWN_START
            self.play_start_ms = now_ms

        log.info("screen %s -> %s (%s)", source.name, target.name, action.name)
        return Transition(source, target, action)
