"""Tests for package defaults."""

from qchunk.config.defaults import DEFAULT_BATCH_SIZE, get_defaults


class TestDefaults:
    def test_keys(self):
        assert set(get_defaults()) == {"batch_size", "rate_per_second", "timeout", "log_level"}

    def test_batch_size_matches_batcher(self):
        from qchunk.concurrency.batcher import DEFAULT_BATCH_SIZE as BATCHER_DEFAULT

        assert DEFAULT_BATCH_SIZE == BATCHER_DEFAULT

    def test_returns_fresh_dict(self):
        first = get_defaults()
        first["batch_size"] = 99
        assert get_defaults()["batch_size"] == 5
