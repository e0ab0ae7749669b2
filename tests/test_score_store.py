"""Test coverage for score records and persistence."""
from datetime import datetime

import pytest
from score_store import ScoreHistory, ScoreRecord, ScoreStore, ScoreStoreError


def _record(score):
    return ScoreRecord(label="TimedExam", score=score, timestamp=datetime(2026, 10, 19, 9, 30, 0))


class TestScoreRecord:
    def test_format(self):
        assert _record(25).format() == "TimedExam | score: 25 | date: 2026-10-19 09:30:00"


class TestScoreStore:
    """Test the plain-text score log."""

    def test_missing_file_reads_empty(self, tmp_path):
        assert ScoreStore(tmp_path / "scores.txt").read_lines() == []

    def test_append_then_read(self, tmp_path):
        store = ScoreStore(tmp_path / "scores.txt")
        store.append_lines(["one", "two"])
        store.append_lines(["three"])

        assert store.read_lines() == ["one", "two", "three"]

    def test_blank_lines_skipped(self, tmp_path):
        path = tmp_path / "scores.txt"
        path.write_text("first\n\n   \nsecond\n", encoding="utf-8")

        assert ScoreStore(path).read_lines() == ["first", "second"]

    def test_unwritable_path_raises(self, tmp_path):
        with pytest.raises(ScoreStoreError):
            ScoreStore(tmp_path).append_lines(["x"])

    def test_unreadable_path_raises(self, tmp_path):
        with pytest.raises(ScoreStoreError):
            ScoreStore(tmp_path).read_lines()


class TestScoreHistory:
    """Test pending/stored bookkeeping."""

    def test_lines_keep_order(self):
        history = ScoreHistory(stored=["old"])
        history.add(_record(5))

        assert history.lines() == ["old", _record(5).format()]

    def test_flush_moves_pending_to_stored(self, tmp_path):
        store = ScoreStore(tmp_path / "scores.txt")
        history = ScoreHistory()
        history.add(_record(5))
        history.add(_record(10))

        assert history.flush(store) == 2
        assert history.pending == []
        assert store.read_lines() == [_record(5).format(), _record(10).format()]

    def test_flush_twice_does_not_duplicate(self, tmp_path):
        store = ScoreStore(tmp_path / "scores.txt")
        history = ScoreHistory()
        history.load(store)
        history.add(_record(5))
        history.flush(store)

        assert history.flush(store) == 0
        assert store.read_lines() == [_record(5).format()]

    def test_failed_flush_keeps_pending(self, tmp_path):
        history = ScoreHistory()
        history.add(_record(7))

        with pytest.raises(ScoreStoreError):
            history.flush(ScoreStore(tmp_path))

        assert history.pending == [_record(7).format()]
        assert history.lines() == [_record(7).format()]

    def test_load_replaces_stored(self, tmp_path):
        store = ScoreStore(tmp_path / "scores.txt")
        store.append_lines(["a", "b"])
        history = ScoreHistory(stored=["stale"])

        history.load(store)

        assert history.stored == ["a", "b"]
