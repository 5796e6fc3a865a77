"""Utility module for configuration."""

from .config import CacheConfig

__all__ = [
    "CacheConfig",
]
