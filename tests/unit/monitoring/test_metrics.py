"""Unit tests for in-process counters."""

from file_cache.monitoring.metrics import Counter


class TestCounter:
    def test_inc_by_labels(self):
        """Test that label sets are counted independently."""
        counter = Counter("test_total", "test counter")

        counter.inc(outcome="hit")
        counter.inc(outcome="hit")
        counter.inc(2.0, outcome="miss")

        assert counter.get(outcome="hit") == 2.0
        assert counter.get(outcome="miss") == 2.0
        assert counter.get(outcome="expired") == 0.0

    def test_reset(self):
        """Test that reset drops all values."""
        counter = Counter("test_total", "test counter")
        counter.inc(outcome="hit")

        counter.reset()

        assert counter.values == {}
