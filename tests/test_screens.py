import pytest

from gridsnake.screens import Action, ScreenMachine, ScreenState, Transition

S, A = ScreenState, Action


def machine_in(state):
    m = ScreenMachine()
    m.state = state
    return m


def test_starts_on_splash_and_any_input_leaves_it():
    for action in Action:
        m = ScreenMachine()
        assert m.state == S.SPLASH
        assert m.dispatch(action, 0) == Transition(S.SPLASH, S.START, action)


@pytest.mark.parametrize("source, action, target", [
    (S.START, A.LAUNCH, S.COUNTDOWN),
    (S.START, A.OPEN_LEVELS, S.LEVEL_SELECT),
    (S.START, A.OPEN_SETTINGS, S.SETTINGS),
    (S.LEVEL_SELECT, A.BACK, S.START),
    (S.LEVEL_SELECT, A.CHOOSE, S.START),
    (S.SETTINGS, A.BACK, S.START),
    (S.SETTINGS, A.RESET_RECORD, S.CONFIRM_RESET),
    (S.CONFIRM_RESET, A.CONFIRM, S.SETTINGS),
    (S.CONFIRM_RESET, A.BACK, S.SETTINGS),
    (S.PLAYING, A.PAUSE, S.PAUSED),
    (S.PAUSED, A.PAUSE, S.PLAYING),
    (S.PLAYING, A.DIE, S.GAME_OVER),
    (S.GAME_OVER, A.RETRY, S.COUNTDOWN),
    (S.GAME_OVER, A.MAIN_MENU, S.START),
    (S.GAME_OVER, A.OPEN_LEVELS, S.LEVEL_SELECT),
    (S.GAME_OVER, A.OPEN_SETTINGS, S.SETTINGS),
])
def test_legal_edges(source, action, target):
    m = machine_in(source)
    assert m.dispatch(action, 0) == Transition(source, target, action)
    assert m.state == target


@pytest.mark.parametrize("source", [s for s in ScreenState if s not in (S.SPLASH, S.START)])
def test_cancel_returns_to_start(source):
    m = machine_in(source)
    assert m.dispatch(A.CANCEL, 0).target == S.START


def test_cancel_on_start_is_a_no_op():
    m = machine_in(S.START)
    assert m.dispatch(A.CANCEL, 0) is None
    assert m.state == S.START


def test_every_other_input_is_a_no_op():
    legal = {(S.START, A.LAUNCH), (S.START, A.OPEN_LEVELS), (S.START, A.OPEN_SETTINGS)}
    for action in Action:
        m = machine_in(S.START)
        result = m.dispatch(action, 0)
        if (S.START, action) in legal:
            assert result is not None
        else:
            assert result is None
            assert m.state == S.START


def test_die_and_pause_ignored_outside_playing():
    for state in (S.COUNTDOWN, S.GAME_OVER, S.LEVEL_SELECT):
        m = machine_in(state)
        assert m.dispatch(A.DIE, 0) is None
        assert m.dispatch(A.PAUSE, 0) is None
        assert m.state == state


def test_countdown_visits_three_two_one_then_plays():
    m = machine_in(S.START)
    m.dispatch(A.LAUNCH, 1000)
    seen = [m.countdown]
    assert m.update(1799) is None
    for now in (1800, 2600):
        assert m.update(now) == Transition(S.COUNTDOWN, S.COUNTDOWN, A.TIMER)
        seen.append(m.countdown)
    assert m.update(3400) == Transition(S.COUNTDOWN, S.PLAYING, A.TIMER)
    assert seen == [3, 2, 1]
    assert m.play_start_ms == 3400
    assert not m.countdown_armed


def test_countdown_steps_once_per_update_despite_a_stall():
    m = machine_in(S.START)
    m.dispatch(A.LAUNCH, 0)
    seen = []
    # a single huge frame gap still yields one value per update
    while m.state == S.COUNTDOWN:
        m.update(60_000)
        seen.append(m.countdown if m.state == S.COUNTDOWN else "go")
    assert seen == [2, 1, "go"]


def test_cancelled_countdown_cannot_resurrect_playing():
    m = machine_in(S.START)
    m.dispatch(A.LAUNCH, 0)
    m.update(800)
    m.dispatch(A.CANCEL, 900)
    assert m.state == S.START
    assert not m.countdown_armed
    for now in (1600, 2400, 10_000):
        assert m.update(now) is None
    assert m.state == S.START


def test_relaunch_restarts_countdown_from_three():
    m = machine_in(S.START)
    m.dispatch(A.LAUNCH, 0)
    m.update(800)
    m.dispatch(A.CANCEL, 900)
    m.dispatch(A.LAUNCH, 1000)
    assert m.countdown == 3
    assert m.update(1700) is None
    m.update(1800)
    assert m.countdown == 2
