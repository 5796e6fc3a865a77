from __future__ import annotations

import enum
import typing as t
from dataclasses import dataclass


class EntryState(str, enum.Enum):
    ABSENT = "ABSENT"
    LIVE = "LIVE"
    EXPIRED = "EXPIRED"


def _non_negative_int(data: t.Mapping[str, t.Any], field_name: str) -> int:
    if field_name not in data:
        raise KeyError(field_name)
    value = data[field_name]
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field_name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{field_name} must be non-negative, got {value}")
    return value


@dataclass(frozen=True)
class CacheMetadata:
    """Metadata stored next to every cached value.

    `ttl_secs == 0` marks an entry that never expires.
    """

    ttl_secs: int
    created_unixtime: int

    @property
    def expires_at(self) -> t.Optional[int]:
        if self.ttl_secs == 0:
            return None
        return self.created_unixtime + self.ttl_secs

    def is_expired(self, now: float) -> bool:
        if self.ttl_secs == 0:
            return False
        return now - self.created_unixtime >= self.ttl_secs

    def to_dict(self) -> t.Dict[str, int]:
        return {"ttl_secs": self.ttl_secs, "created_unixtime": self.created_unixtime}

    @classmethod
    def from_dict(cls, data: t.Any) -> "CacheMetadata":
        """Build metadata from a decoded JSON object.

        Unknown fields are ignored. Raises KeyError, TypeError or ValueError
        when the two required fields are missing or malformed.
        """
        if not isinstance(data, dict):
            raise TypeError(f"metadata must be a JSON object, got {type(data).__name__}")
        return cls(
            ttl_secs=_non_negative_int(data, "ttl_secs"),
            created_unixtime=_non_negative_int(data, "created_unixtime"),
        )
