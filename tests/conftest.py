import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from gridsnake.advice import AdviceService
from gridsnake.model import GameModel
from gridsnake.screens import Action, ScreenState
from gridsnake.session import MemoryStore


class RecordingCues:
    def __init__(self):
        self.played = []
        self.music = []

    def play(self, name):
        self.played.append(name)

    def pause_music(self):
        self.music.append("pause")

    def resume_music(self):
        self.music.append("resume")

    def stop(self):
        pass


class FakeAdviceClient:
    def __init__(self, text="STAY SHARP."):
        self.text = text
        self.calls = []

    def fetch_advice(self, score, difficulty):
        self.calls.append((score, difficulty))
        return self.text


class DeferredRunner:
    """Collects background jobs so tests decide when (and in what order) they finish."""

    def __init__(self):
        self.jobs = []

    def __call__(self, work):
        self.jobs.append(work)


@pytest.fixture
def cues():
    return RecordingCues()


@pytest.fixture
def advice_client():
    return FakeAdviceClient()


@pytest.fixture
def advice(advice_client):
    return AdviceService(client=advice_client, runner=lambda work: work())


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def model(cues, advice, store):
    return GameModel(rng=random.Random(1234), store=store, advice=advice, cues=cues)


def start_playing(model, now=0):
    """SPLASH -> START -> COUNTDOWN -> PLAYING; returns the time play began."""
    if model.state == ScreenState.SPLASH:
        model.handle(Action.ANY, now)
    model.handle(Action.LAUNCH, now)
    for step in (1, 2, 3):
        model.update(now + 800 * step)
    assert model.state == ScreenState.PLAYING
    return now + 2400


@pytest.fixture
def playing(model):
    start = start_playing(model)
    return model, start
