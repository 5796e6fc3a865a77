"""Core module for the file cache service, its models and errors."""

from .errors import (
    CacheIOError,
    CorruptMetadataError,
    DeserializationError,
    FileCacheError,
    InitializationError,
    InvalidKeyError,
    SerializationError,
)
from .models import CacheMetadata, EntryState
from .service import FileCacheService

__all__ = [
    # Service
    "FileCacheService",
    # Models
    "CacheMetadata",
    "EntryState",
    # Errors
    "FileCacheError",
    "InitializationError",
    "InvalidKeyError",
    "CacheIOError",
    "SerializationError",
    "DeserializationError",
    "CorruptMetadataError",
]
