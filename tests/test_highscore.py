"""Tests for high-score persistence."""

import json

from fluppy_snake.highscore import (
    FileHighScoreStore,
    HighScoreStore,
    MemoryHighScoreStore,
    record_score,
)


class TestStoreProtocol:
    def test_both_stores_satisfy_protocol(self, tmp_path):
        assert isinstance(MemoryHighScoreStore(), HighScoreStore)
        assert isinstance(FileHighScoreStore(tmp_path / "hs.json"), HighScoreStore)

    def test_plain_object_does_not(self):
        assert not isinstance(object(), HighScoreStore)


class TestMemoryStore:
    def test_default_zero(self):
        assert MemoryHighScoreStore().read() == 0

    def test_write(self):
        store = MemoryHighScoreStore()
        store.write(120)
        assert store.read() == 120


class TestFileStore:
    def test_missing_file_reads_zero(self, tmp_path):
        assert FileHighScoreStore(tmp_path / "none.json").read() == 0

    def test_round_trip(self, tmp_path):
        store = FileHighScoreStore(tmp_path / "nested" / "score.json")
        store.write(70)
        assert store.read() == 70
        assert FileHighScoreStore(store.path).read() == 70

    def test_corrupt_file_reads_zero(self, tmp_path):
        path = tmp_path / "score.json"
        path.write_text("{not json")
        assert FileHighScoreStore(path).read() == 0

    def test_invalid_values_read_zero(self, tmp_path):
        path = tmp_path / "score.json"
        for bad in ({"high_score": "50"}, {"high_score": -5}, {"high_score": True}, [1]):
            path.write_text(json.dumps(bad))
            assert FileHighScoreStore(path).read() == 0

    def test_bare_integer_accepted(self, tmp_path):
        path = tmp_path / "score.json"
        path.write_text("40")
        assert FileHighScoreStore(path).read() == 40


class TestRecordScore:
    def test_higher_score_written(self):
        store = MemoryHighScoreStore(50)
        assert record_score(store, 60)
        assert store.read() == 60

    def test_equal_or_lower_not_written(self):
        store = MemoryHighScoreStore(50)
        assert not record_score(store, 50)
        assert not record_score(store, 10)
        assert store.read() == 50
