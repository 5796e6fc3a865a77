from __future__ import annotations

import contextlib
import json
import logging
import os
import shutil
import stat
import time
import typing as t
from pathlib import Path

from file_cache.monitoring.metrics import file_cache_lookups_total, file_cache_writes_total
from file_cache.utils.config import CacheConfig

from .errors import (
    CacheIOError,
    CorruptMetadataError,
    DeserializationError,
    InitializationError,
    InvalidKeyError,
    SerializationError,
)
from .models import CacheMetadata, EntryState

_logger = logging.getLogger(__name__)

VALUE_SUFFIX = "-cache.json"
METADATA_SUFFIX = "-cache-metadata.json"
TMP_SUFFIX = ".tmp"

_FORBIDDEN_CHARS = ("/", "\\", "\x00")
# NAME_MAX on common filesystems
_MAX_NAME_BYTES = 255


def _is_safe_segment(segment: t.Any, suffix: str = "") -> bool:
    if not isinstance(segment, str) or not segment:
        return False
    if segment in (".", ".."):
        return False
    if any(ch in segment for ch in _FORBIDDEN_CHARS):
        return False
    return len((segment + suffix).encode("utf-8", "surrogatepass")) <= _MAX_NAME_BYTES


def _is_regular_file(path: Path) -> bool:
    try:
        return stat.S_ISREG(os.stat(path).st_mode)
    except OSError:
        return False


def _check_ttl(ttl_secs: t.Any) -> int:
    if isinstance(ttl_secs, bool) or not isinstance(ttl_secs, int):
        raise ValueError(f"ttl_secs must be an integer, got {type(ttl_secs).__name__}")
    if ttl_secs < 0:
        raise ValueError(f"ttl_secs must be non-negative, got {ttl_secs}")
    return ttl_secs


class FileCacheService:
    """Filesystem-backed key-value cache with per-entry TTL.

    Storage hierarchy::

        <root>/<instance_name>/<namespace>/<key>-cache.json
        <root>/<instance_name>/<namespace>/<key>-cache-metadata.json

    Values are stored as JSON. Expiration is evaluated lazily on read and
    expired files are left on disk until `delete` or `clear` removes them.

    Not safe for concurrent writers to the same (namespace, key).
    """

    def __init__(
        self,
        root: t.Union[str, "os.PathLike[str]"],
        instance_name: str,
        *,
        clock: t.Callable[[], float] = time.time,
        default_ttl_secs: int = 0,
    ) -> None:
        try:
            raw_root = os.fspath(root)
        except TypeError as exc:
            raise InitializationError(f"root must be a path, got {type(root).__name__}") from exc
        if not isinstance(raw_root, str) or not raw_root:
            raise InitializationError("root must be a non-empty string path")
        if "\x00" in raw_root:
            raise InitializationError("root must not contain NUL bytes")
        if not _is_safe_segment(instance_name):
            raise InitializationError(f"invalid instance name: {instance_name!r}")
        try:
            self._default_ttl_secs = _check_ttl(default_ttl_secs)
        except ValueError as exc:
            raise InitializationError(str(exc)) from exc

        self._root = Path(raw_root)
        self._instance_name = instance_name
        self._clock = clock
        _logger.info("file cache configured: root=%s instance=%s", self._root, instance_name)

    @classmethod
    def from_config(cls, config: CacheConfig, **kwargs: t.Any) -> "FileCacheService":
        return cls(
            config.root,
            config.instance_name,
            default_ttl_secs=config.default_ttl_secs,
            **kwargs,
        )

    @property
    def root(self) -> Path:
        return self._root

    @property
    def instance_name(self) -> str:
        return self._instance_name

    @property
    def instance_dir(self) -> Path:
        return self._root / self._instance_name

    # --- path derivation ---

    def _namespace_dir(self, namespace: str) -> Path:
        if not _is_safe_segment(namespace):
            raise InvalidKeyError(f"invalid namespace: {namespace!r}")
        return self.instance_dir / namespace

    def _paths(self, namespace: str, key: str) -> t.Tuple[Path, Path]:
        base_dir = self._namespace_dir(namespace)
        if not _is_safe_segment(key, METADATA_SUFFIX + TMP_SUFFIX):
            raise InvalidKeyError(f"invalid key: {key!r}")
        return base_dir / f"{key}{VALUE_SUFFIX}", base_dir / f"{key}{METADATA_SUFFIX}"

    def value_path(self, namespace: str, key: str) -> Path:
        return self._paths(namespace, key)[0]

    def metadata_path(self, namespace: str, key: str) -> Path:
        return self._paths(namespace, key)[1]

    # --- operations ---

    def store(
        self,
        namespace: str,
        key: str,
        value: t.Any,
        ttl_secs: t.Optional[int] = None,
        *,
        encoder: t.Optional[t.Callable[[t.Any], t.Any]] = None,
    ) -> None:
        """Write `value` under (namespace, key), replacing any previous entry.

        `ttl_secs=0` stores an entry that never expires; `None` uses the
        service default. `encoder` is passed to `json.dumps` as `default` for
        types JSON cannot encode natively.

        The old metadata is removed first and the new metadata is renamed into
        place last, so an interrupted store leaves the slot reading as absent.
        """
        value_path, metadata_path = self._paths(namespace, key)
        ttl = _check_ttl(self._default_ttl_secs if ttl_secs is None else ttl_secs)

        try:
            payload = json.dumps(value, default=encoder, allow_nan=False)
        except (TypeError, ValueError, RecursionError) as exc:
            raise SerializationError(f"cannot encode value for {namespace}/{key}: {exc}") from exc

        metadata = CacheMetadata(ttl_secs=ttl, created_unixtime=int(self._clock()))
        base_dir = value_path.parent
        tmp_path = metadata_path.with_name(metadata_path.name + TMP_SUFFIX)

        try:
            base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheIOError("failed to create cache directory", base_dir) from exc

        try:
            tmp_path.write_text(json.dumps(metadata.to_dict()), encoding="utf-8")
            metadata_path.unlink(missing_ok=True)
            value_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, metadata_path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            failed = Path(exc.filename) if exc.filename else value_path
            raise CacheIOError("failed to write cache entry", failed) from exc

        file_cache_writes_total.inc(operation="store")
        _logger.debug("stored %s/%s (ttl=%ss) at %s", namespace, key, ttl, value_path)

    def get(
        self,
        namespace: str,
        key: str,
        *,
        decoder: t.Optional[t.Callable[[t.Any], t.Any]] = None,
    ) -> t.Optional[t.Any]:
        """Return the cached value, or None when the entry is absent or expired.

        `decoder` receives the decoded JSON and converts it to the caller's
        type; TypeError, ValueError or KeyError from it are reported as
        DeserializationError.
        """
        value_path, metadata_path = self._paths(namespace, key)
        state, _ = self._evaluate(value_path, metadata_path)
        if state is EntryState.ABSENT:
            file_cache_lookups_total.inc(outcome="miss")
            _logger.debug("cache miss for %s/%s", namespace, key)
            return None
        if state is EntryState.EXPIRED:
            file_cache_lookups_total.inc(outcome="expired")
            _logger.debug("cache entry %s/%s has expired", namespace, key)
            return None

        try:
            raw = value_path.read_bytes()
        except OSError as exc:
            raise CacheIOError("failed to read cached value", value_path) from exc
        try:
            value = json.loads(raw)
        except ValueError as exc:
            raise DeserializationError(f"cached value is not valid JSON: {exc}", value_path) from exc
        if decoder is not None:
            try:
                value = decoder(value)
            except (TypeError, ValueError, KeyError) as exc:
                raise DeserializationError(
                    f"cached value does not match the expected shape: {exc}", value_path
                ) from exc

        file_cache_lookups_total.inc(outcome="hit")
        _logger.debug("cache hit for %s/%s", namespace, key)
        return value

    def state(self, namespace: str, key: str) -> EntryState:
        value_path, metadata_path = self._paths(namespace, key)
        return self._evaluate(value_path, metadata_path)[0]

    def exists(self, namespace: str, key: str) -> bool:
        """True when `get` would return a value; raises where `get` would."""
        return self.state(namespace, key) is EntryState.LIVE

    def metadata(self, namespace: str, key: str) -> t.Optional[CacheMetadata]:
        """Return the stored metadata, expired or not, or None when absent."""
        return self._read_metadata(self.metadata_path(namespace, key))

    def delete(self, namespace: str, key: str) -> None:
        value_path, metadata_path = self._paths(namespace, key)
        tmp_path = metadata_path.with_name(metadata_path.name + TMP_SUFFIX)
        # metadata goes first so a partial delete reads as absent
        for path in (metadata_path, value_path, tmp_path):
            try:
                path.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                raise CacheIOError("failed to delete cache file", path) from exc
        file_cache_writes_total.inc(operation="delete")
        _logger.debug("deleted %s/%s", namespace, key)

    def clear(self, namespace: t.Optional[str] = None) -> None:
        """Remove every entry in `namespace`, or the whole instance when None."""
        target = self.instance_dir if namespace is None else self._namespace_dir(namespace)
        if not target.exists():
            return
        try:
            shutil.rmtree(target)
        except OSError as exc:
            raise CacheIOError("failed to clear cache directory", target) from exc
        file_cache_writes_total.inc(operation="clear")
        _logger.info("cleared file cache directory %s", target)

    # --- internals ---

    def _read_metadata(self, metadata_path: Path) -> t.Optional[CacheMetadata]:
        try:
            raw = metadata_path.read_bytes()
        except (FileNotFoundError, NotADirectoryError):
            return None
        except OSError as exc:
            if _is_regular_file(metadata_path):
                raise CorruptMetadataError("unreadable cache metadata", metadata_path) from exc
            raise CacheIOError("failed to read cache metadata", metadata_path) from exc
        try:
            return CacheMetadata.from_dict(json.loads(raw))
        except (ValueError, TypeError, KeyError) as exc:
            _logger.warning("corrupt cache metadata at %s: %s", metadata_path, exc)
            raise CorruptMetadataError("corrupt cache metadata", metadata_path) from exc

    def _evaluate(self, value_path: Path, metadata_path: Path) -> t.Tuple[EntryState, t.Optional[CacheMetadata]]:
        metadata = self._read_metadata(metadata_path)
        if metadata is None:
            if value_path.exists():
                _logger.debug("value without metadata at %s, treating as absent", value_path)
            return EntryState.ABSENT, None
        if metadata.is_expired(self._clock()):
            return EntryState.EXPIRED, metadata
        if not _is_regular_file(value_path):
            raise CacheIOError("cached value missing for live metadata", value_path)
        return EntryState.LIVE, metadata
