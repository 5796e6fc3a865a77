from __future__ import annotations

import typing as t
from pathlib import Path


class FileCacheError(Exception):
    """Base class for every error raised by the file cache."""


class InitializationError(FileCacheError):
    pass


class InvalidKeyError(FileCacheError, ValueError):
    pass


class SerializationError(FileCacheError):
    pass


class DeserializationError(FileCacheError):
    def __init__(self, message: str, path: t.Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class CacheIOError(FileCacheError):
    """A filesystem operation failed. The original OSError is chained as __cause__."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class CorruptMetadataError(FileCacheError):
    def __init__(self, message: str, path: Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path
