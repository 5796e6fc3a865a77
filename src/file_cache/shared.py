"""Process-wide cache instance.

The shared service is built once, either explicitly via
`configure_shared_cache` or on first `get_shared_cache()` call from the
`FILE_CACHE_*` environment variables, and is immutable afterwards.
"""

from __future__ import annotations

import threading
import typing as t

from .core.errors import InitializationError
from .core.service import FileCacheService
from .utils.config import CacheConfig

_lock = threading.Lock()
_shared: t.Optional[FileCacheService] = None


def configure_shared_cache(root: str, instance_name: str, **kwargs: t.Any) -> FileCacheService:
    global _shared
    with _lock:
        if _shared is not None:
            raise InitializationError("shared file cache is already initialized")
        _shared = FileCacheService(root, instance_name, **kwargs)
        return _shared


def get_shared_cache() -> FileCacheService:
    global _shared
    with _lock:
        if _shared is None:
            _shared = FileCacheService.from_config(CacheConfig.from_env())
        return _shared


def reset_shared_cache() -> None:
    """Drop the shared instance. Intended for tests."""
    global _shared
    with _lock:
        _shared = None
