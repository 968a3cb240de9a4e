"""
session.py — Score, high score and end-of-run statistics.

The tracker never touches the disk itself; HighScoreStore is the
persistence collaborator and the model decides when to call it.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

from .config import FOOD_POINTS, BONUS_POINTS, INITIAL_LENGTH, HIGHSCORE_FILE

log = logging.getLogger(__name__)


class PersistenceUnavailable(OSError):
    """The high-score file could not be read or written."""


@dataclass(frozen=True)
class SessionStats:
    duration_seconds: int
    growth: int
    efficiency: int


# ─────────────────────────── ScoreTracker ────────────────────────
class ScoreTracker:
    def __init__(self, high_score: int = 0):
        self.score: int = 0
        self.high_score: int = max(0, int(high_score))
        self.stats: Optional[SessionStats] = None
        self.new_record: bool = False

    def reset(self) -> None:
        """Start of a run: score back to zero, previous stats discarded."""
        self.score = 0
        self.stats = None
        self.new_record = False

    def add_points(self, is_bonus: bool) -> int:
        self.score += BONUS_POINTS if is_bonus else FOOD_POINTS
        return self.score

    def record_death(
        self,
        start_ms: int,
        now_ms: int,
        score: int,
        snake_length: int,
    ) -> SessionStats:
        duration = max(0, (now_ms - start_ms) // 1000)
        self.stats = SessionStats(
            duration_seconds=duration,
            growth=snake_length - INITIAL_LENGTH,
            efficiency=int(score / max(duration, 1) * 10),
        )
        return self.stats

    def commit_high_score(self, score: int) -> bool:
        """True when `score` beats the stored best (which is then updated)."""
        if score > self.high_score:
            self.high_score = score
            self.new_record = True
            return True
        return False

    def reset_high_score(self) -> None:
        self.high_score = 0
        self.new_record = False


# ─────────────────────────── HighScoreStore ──────────────────────
class HighScoreStore:
    """JSON file holding {"high_score": int}."""

    def __init__(self, path: str = HIGHSCORE_FILE):
        self.path = path

    def load(self) -> Optional[int]:
        """Stored best, or None when nothing has been saved yet."""
        if not os.path.isfile(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return max(0, int(data.get("high_score", 0)))
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            raise PersistenceUnavailable(f"cannot read {self.path}: {exc}") from exc

    def save(self, score: int) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({"high_score": int(score)}, f)
        except OSError as exc:
            raise PersistenceUnavailable(f"cannot write {self.path}: {exc}") from exc


class MemoryStore:
    """In-process store used when nothing should hit the disk."""

    def __init__(self, value: Optional[int] = None):
        self.value = value

    def load(self) -> Optional[int]:
        return self.value

    def save(self, score: int) -> None:
        self.value = int(score)
