import json

import pytest

from gridsnake.session import (
    HighScoreStore, PersistenceUnavailable, ScoreTracker, SessionStats,
)


def test_points_per_food_kind():
    tracker = ScoreTracker()
    assert tracker.add_points(False) == 10
    assert tracker.add_points(True) == 60
    assert tracker.score == 60


def test_reset_clears_score_and_stats():
    tracker = ScoreTracker(high_score=40)
    tracker.add_points(True)
    tracker.record_death(0, 5000, 50, 4)
    tracker.reset()
    assert tracker.score == 0
    assert tracker.stats is None
    assert tracker.high_score == 40


def test_record_death_statistics():
    tracker = ScoreTracker()
    stats = tracker.record_death(start_ms=1000, now_ms=13_999, score=120, snake_length=12)
    assert stats == SessionStats(duration_seconds=12, growth=9, efficiency=100)
    assert tracker.stats is stats


def test_efficiency_uses_at_least_one_second():
    stats = ScoreTracker().record_death(0, 400, 30, 4)
    assert stats.duration_seconds == 0
    assert stats.efficiency == 300


def test_efficiency_is_floored():
    stats = ScoreTracker().record_death(0, 7000, 10, 4)
    assert stats.efficiency == 14


def test_commit_high_score_only_on_strict_improvement():
    tracker = ScoreTracker(high_score=100)
    assert not tracker.commit_high_score(100)
    assert not tracker.new_record
    assert tracker.commit_high_score(110)
    assert tracker.high_score == 110
    assert tracker.new_record


def test_store_round_trip(tmp_path):
    store = HighScoreStore(str(tmp_path / "best.json"))
    assert store.load() is None
    store.save(230)
    assert json.loads((tmp_path / "best.json").read_text()) == {"high_score": 230}
    assert store.load() == 230


def test_store_rejects_garbage(tmp_path):
    path = tmp_path / "best.json"
    path.write_text("not json")
    with pytest.raises(PersistenceUnavailable):
        HighScoreStore(str(path)).load()


def test_store_write_failure(tmp_path):
    store = HighScoreStore(str(tmp_path / "missing-dir" / "best.json"))
    with pytest.raises(PersistenceUnavailable):
        store.save(10)
