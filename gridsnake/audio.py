"""
audio.py — Fire-and-forget sound cues.

Tones are synthesized once at start-up into pygame Sound objects; no
sample files are needed. Background music is optional: song.mp3 next to
this module is looped if present. If the mixer cannot be opened the game
runs silently with a logged warning, and a failing cue never propagates.
"""

import logging
import math
import os
from array import array

import pygame

log = logging.getLogger(__name__)

_MUSIC_PATH = os.path.join(os.path.dirname(__file__), "song.mp3")

SAMPLE_RATE = 22050

# cue -> list of (frequency Hz, waveform, seconds, volume); parts are mixed
CUES = {
    "eat":         [(600, "square", 0.10, 0.10), (800, "square", 0.05, 0.05)],
    "death":       [(150, "sawtooth", 0.50, 0.20), (100, "sine", 0.50, 0.30)],
    "tick":        [(1000, "sine", 0.02, 0.05)],
    "go":          [(1200, "square", 0.30, 0.10)],
    "menu_select": [(400, "sine", 0.10, 0.05)],
}


def _wave(kind: str, phase: float) -> float:
    """Phase in cycles -> sample in [-1, 1]."""
    frac = phase % 1.0
    if kind == "square":
        return 1.0 if frac < 0.5 else -1.0
    if kind == "sawtooth":
        return 2.0 * frac - 1.0
    return math.sin(2 * math.pi * frac)


def synthesize(parts: list, rate: int = SAMPLE_RATE) -> array:
    """Mono signed 16-bit samples with an exponential fade to 1% volume."""
    length = int(max(p[2] for p in parts) * rate)
    mix = [0.0] * length
    for freq, kind, seconds, volume in parts:
        n = int(seconds * rate)
        for i in range(n):
            gain = volume * (0.01 / volume) ** (i / n) if volume > 0.01 else volume
            mix[i] += _wave(kind, freq * i / rate) * gain
    return array("h", (int(max(-1.0, min(1.0, s)) * 32767) for s in mix))


class SilentCues:
    """Null sink: accepts every cue and does nothing."""

    def play(self, name: str) -> None:
        pass

    def pause_music(self) -> None:
        pass

    def resume_music(self) -> None:
        pass

    def stop(self) -> None:
        pass


# ─────────────────────────── AudioCues ───────────────────────────
class AudioCues(SilentCues):
    def __init__(self):
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        self._music_ok = False
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            self._build_sounds()
        except pygame.error as exc:
            log.warning("audio disabled: %s", exc)
            self._sounds = {}
            return
        self._music_ok = self._load_music()

    # ── Public API ───────────────────────────────────────────────
    def play(self, name: str) -> None:
        sound = self._sounds.get(name)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as exc:
            log.warning("could not play cue %r: %s", name, exc)

    def play_music(self) -> None:
        if self._music_ok:
            pygame.mixer.music.play(loops=-1)

    def pause_music(self) -> None:
        if self._music_ok and pygame.mixer.music.get_busy():
            pygame.mixer.music.pause()

    def resume_music(self) -> None:
        if self._music_ok:
            pygame.mixer.music.unpause()

    def stop(self) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.music.stop()

    # ── Private helpers ──────────────────────────────────────────
    def _build_sounds(self) -> None:
        rate, _, channels = pygame.mixer.get_init()
        for name, parts in CUES.items():
            samples = synthesize(parts, rate)
            if channels > 1:
                samples = array("h", (s for s in samples for _ in range(channels)))
            self._sounds[name] = pygame.mixer.Sound(buffer=samples.tobytes())

    def _load_music(self) -> bool:
        if not os.path.isfile(_MUSIC_PATH):
            log.info("no song.mp3 at %s, running without music", _MUSIC_PATH)
            return False
        try:
            pygame.mixer.music.load(_MUSIC_PATH)
            pygame.mixer.music.set_volume(0.6)
            return True
        except pygame.error as exc:
            log.warning("could not load song.mp3: %s", exc)
            return False
