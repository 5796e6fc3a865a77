"""file_cache

A process-local, filesystem-backed key-value cache with per-entry TTL
expiration and JSON-encoded values.

This package is self-contained and does not import non-stdlib dependencies.
"""

import logging

from .core import (
    CacheIOError,
    CacheMetadata,
    CorruptMetadataError,
    DeserializationError,
    EntryState,
    FileCacheError,
    FileCacheService,
    InitializationError,
    InvalidKeyError,
    SerializationError,
)
from .shared import configure_shared_cache, get_shared_cache, reset_shared_cache
from .utils import CacheConfig

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "FileCacheService",
    "CacheMetadata",
    "EntryState",
    "CacheConfig",
    "FileCacheError",
    "InitializationError",
    "InvalidKeyError",
    "CacheIOError",
    "SerializationError",
    "DeserializationError",
    "CorruptMetadataError",
    "configure_shared_cache",
    "get_shared_cache",
    "reset_shared_cache",
]

__version__ = "0.1.0"
