"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Translate raw keyboard events into model actions and steering.
  - Sample the clock once per frame and hand it to the model.
  - Ask the view to render the model's snapshot.
  - Know nothing about rendering details (that's the View's job).
  - Know nothing about game rules (that's the Model's job).

The controller is the only layer that imports pygame directly for events.
"""

import logging
import sys

import pygame

from .audio import AudioCues
from .config import WIDTH, HEIGHT, FPS
from .grid import Direction
from .model import GameModel
from .screens import Action, ScreenState
from .view import GameView

log = logging.getLogger(__name__)

DIRECTION_KEYS = {
    pygame.K_UP:    Direction.UP,    pygame.K_w: Direction.UP,
    pygame.K_DOWN:  Direction.DOWN,  pygame.K_s: Direction.DOWN,
    pygame.K_LEFT:  Direction.LEFT,  pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT,
}

INDEX_KEYS = {pygame.K_1: 0, pygame.K_2: 1, pygame.K_3: 2}

# Keys that mean the same thing on every screen
GLOBAL_KEYS = {
    pygame.K_ESCAPE:    Action.CANCEL,
    pygame.K_p:         Action.PAUSE,
    pygame.K_BACKSPACE: Action.BACK,
}

SCREEN_KEYS = {
    ScreenState.START: {
        pygame.K_RETURN: Action.LAUNCH,
        pygame.K_l:      Action.OPEN_LEVELS,
        pygame.K_t:      Action.OPEN_SETTINGS,
    },
    ScreenState.SETTINGS: {
        pygame.K_x: Action.RESET_RECORD,
    },
    ScreenState.CONFIRM_RESET: {
        pygame.K_y:      Action.CONFIRM,
        pygame.K_RETURN: Action.CONFIRM,
        pygame.K_n:      Action.BACK,
    },
    ScreenState.GAME_OVER: {
        pygame.K_RETURN: Action.RETRY,
        pygame.K_r:      Action.RETRY,
        pygame.K_m:      Action.MAIN_MENU,
        pygame.K_l:      Action.OPEN_LEVELS,
        pygame.K_t:      Action.OPEN_SETTINGS,
    },
}


def action_for_key(state: ScreenState, key: int):
    """The Action a key press maps to on `state`, or None."""
    if state == ScreenState.SPLASH:
        return Action.ANY
    per_screen = SCREEN_KEYS.get(state, {})
    if key in per_screen:
        return per_screen[key]
    return GLOBAL_KEYS.get(key)


class GameController:
    """
    Owns the main loop.
    Glues Model <-> View without them knowing about each other.
    """

    def __init__(self, model: GameModel = None):
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("GRID SNAKE // AG~3")
        self.clock  = pygame.time.Clock()
        self.cues   = AudioCues()
        self.model  = model or GameModel(cues=self.cues)
        self.view   = GameView(self.screen)

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        self.cues.play_music()
        while True:
            self.clock.tick(FPS)
            now = pygame.time.get_ticks()
            self._handle_events(now)
            self.model.update(now)
            self.view.render(self.model.snapshot())

    # ── Event dispatch ────────────────────────────────────────────
    def _handle_events(self, now: int) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key, now)
            elif event.type == pygame.KEYUP and event.key == pygame.K_SPACE:
                self.model.set_boost(False)

    def _handle_keydown(self, key: int, now: int) -> None:
        state = self.model.state

        # Q quits from anywhere but the splash screen
        if key == pygame.K_q and state != ScreenState.SPLASH:
            self._quit()

        if key in DIRECTION_KEYS and state != ScreenState.SPLASH:
            self.model.steer(DIRECTION_KEYS[key])
            return
        if key == pygame.K_SPACE and state == ScreenState.PLAYING:
            self.model.set_boost(True)
            return
        if key in INDEX_KEYS and state in (ScreenState.LEVEL_SELECT, ScreenState.SETTINGS):
            self.model.choose(INDEX_KEYS[key], now)
            return

        action = action_for_key(state, key)
        if action is not None:
            self.model.handle(action, now)

    # ── Utilities ─────────────────────────────────────────────────
    def _quit(self) -> None:
        log.info("quitting")
        self.cues.stop()
        pygame.quit()
        sys.exit()
