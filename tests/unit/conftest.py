"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from file_cache.core.service import FileCacheService
from file_cache.monitoring.metrics import file_cache_lookups_total, file_cache_writes_total
from file_cache.shared import reset_shared_cache


class FakeClock:
    """Manually advanced clock returning seconds since the epoch."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache_root(tmp_path):
    return tmp_path / "cache-root"


@pytest.fixture
def cache_service(cache_root, clock):
    """Service over a not-yet-existing root with a fake clock."""
    return FileCacheService(cache_root, "test-instance", clock=clock)


@pytest.fixture(autouse=True)
def reset_metrics():
    file_cache_lookups_total.reset()
    file_cache_writes_total.reset()
    yield
    file_cache_lookups_total.reset()
    file_cache_writes_total.reset()


@pytest.fixture
def shared_cache_reset():
    reset_shared_cache()
    yield
    reset_shared_cache()
