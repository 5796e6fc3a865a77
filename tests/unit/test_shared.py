"""Unit tests for the process-wide cache instance."""

import pytest

from file_cache import configure_shared_cache, get_shared_cache
from file_cache.core.errors import InitializationError


@pytest.mark.usefixtures("shared_cache_reset")
class TestSharedCache:
    """Test shared cache initialization-once semantics."""

    def test_configure_then_get(self, tmp_path):
        """Test that get returns the configured instance."""
        service = configure_shared_cache(str(tmp_path), "app")

        assert get_shared_cache() is service
        assert get_shared_cache().instance_dir == tmp_path / "app"

    def test_configure_twice_fails(self, tmp_path):
        """Test that the shared instance is immutable once built."""
        configure_shared_cache(str(tmp_path), "app")

        with pytest.raises(InitializationError):
            configure_shared_cache(str(tmp_path), "other")

    def test_lazy_from_environment(self, tmp_path, monkeypatch):
        """Test first-use construction from FILE_CACHE_* variables."""
        monkeypatch.setenv("FILE_CACHE_ROOT", str(tmp_path))
        monkeypatch.setenv("FILE_CACHE_INSTANCE_NAME", "env-instance")

        service = get_shared_cache()

        assert service.instance_dir == tmp_path / "env-instance"
        assert get_shared_cache() is service
        with pytest.raises(InitializationError):
            configure_shared_cache(str(tmp_path), "late")

    def test_round_trip_through_shared_instance(self, tmp_path):
        """Test store/get through the shared instance."""
        configure_shared_cache(str(tmp_path), "app")

        get_shared_cache().store("ns", "key", {"answer": 42}, 0)

        assert get_shared_cache().get("ns", "key") == {"answer": 42}
