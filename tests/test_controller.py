import pygame
import pytest

from gridsnake.controller import action_for_key
from gridsnake.screens import Action, ScreenState

S = ScreenState


def test_any_key_leaves_splash():
    for key in (pygame.K_a, pygame.K_ESCAPE, pygame.K_SPACE, pygame.K_RETURN):
        assert action_for_key(S.SPLASH, key) == Action.ANY


@pytest.mark.parametrize("state, key, action", [
    (S.START, pygame.K_RETURN, Action.LAUNCH),
    (S.START, pygame.K_l, Action.OPEN_LEVELS),
    (S.START, pygame.K_t, Action.OPEN_SETTINGS),
    (S.GAME_OVER, pygame.K_RETURN, Action.RETRY),
    (S.GAME_OVER, pygame.K_r, Action.RETRY),
    (S.GAME_OVER, pygame.K_m, Action.MAIN_MENU),
    (S.SETTINGS, pygame.K_x, Action.RESET_RECORD),
    (S.CONFIRM_RESET, pygame.K_y, Action.CONFIRM),
    (S.CONFIRM_RESET, pygame.K_n, Action.BACK),
    (S.PLAYING, pygame.K_p, Action.PAUSE),
    (S.PAUSED, pygame.K_p, Action.PAUSE),
    (S.COUNTDOWN, pygame.K_ESCAPE, Action.CANCEL),
    (S.LEVEL_SELECT, pygame.K_BACKSPACE, Action.BACK),
])
def test_key_map(state, key, action):
    assert action_for_key(state, key) == action


def test_unmapped_key():
    assert action_for_key(S.PLAYING, pygame.K_z) is None
