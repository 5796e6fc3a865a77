from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from file_cache.core.errors import InitializationError


@dataclass
class CacheConfig:
    root: str = ".cache"
    instance_name: str = "default"
    default_ttl_secs: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CacheConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, prefix: str = "FILE_CACHE_") -> "CacheConfig":
        """Resolve configuration from environment variables.

        Reads `<prefix>ROOT`, `<prefix>INSTANCE_NAME` and `<prefix>DEFAULT_TTL_SECS`;
        anything unset falls back to the dataclass defaults.
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        if f"{prefix}ROOT" in env:
            values["root"] = env[f"{prefix}ROOT"]
        if f"{prefix}INSTANCE_NAME" in env:
            values["instance_name"] = env[f"{prefix}INSTANCE_NAME"]
        raw_ttl = env.get(f"{prefix}DEFAULT_TTL_SECS")
        if raw_ttl is not None:
            try:
                values["default_ttl_secs"] = int(raw_ttl)
            except ValueError as exc:
                raise InitializationError(f"{prefix}DEFAULT_TTL_SECS must be an integer, got {raw_ttl!r}") from exc
        return cls(**values)
