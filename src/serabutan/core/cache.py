from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass
from hashlib import sha256
from pathlib import Path
from typing import Any, Callable

"""
Simple on-disk JSON cache.

- Stores JSON-serializable values under `.cache/serabutan/` by default.
- Keys are hashed (SHA-256) to avoid filesystem path issues.
- TTL is enforced on read.

Used by the geocoder so repeated address lookups do not hit Nominatim again
(its usage policy asks for ~1 request/second).
"""

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """Serialized cache envelope stored on disk."""

    created_at_unix: int
    ttl_seconds: int
    value: Any


class FileCache:
    """A filesystem-backed cache keyed by (namespace, key)."""

    def __init__(self, base_dir: Path, enabled: bool = True, default_ttl_seconds: int = 86400):
        self._base_dir = base_dir
        self._enabled = enabled
        self._default_ttl_seconds = default_ttl_seconds

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _key_path(self, namespace: str, key: str) -> Path:
        digest = sha256(f"{namespace}:{key}".encode("utf-8")).hexdigest()
        return self._base_dir / namespace / f"{digest}.json"

    def _read_entry(self, path: Path) -> CacheEntry | None:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return CacheEntry(
                created_at_unix=int(raw["created_at_unix"]),
                ttl_seconds=int(raw["ttl_seconds"]),
                value=raw["value"],
            )
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable cache entry %s: %s", path, e)
            return None

    def get(self, namespace: str, key: str, ttl_seconds: int | None = None) -> Any | None:
        """Read a cached value if present and not expired; otherwise return None."""
        if not self._enabled:
            return None
        path = self._key_path(namespace, key)
        if not path.exists():
            return None
        entry = self._read_entry(path)
        if entry is None:
            return None

        effective_ttl = ttl_seconds if ttl_seconds is not None else entry.ttl_seconds
        if int(time.time()) - entry.created_at_unix > effective_ttl:
            return None
        return entry.value

    def get_stale(self, namespace: str, key: str) -> Any | None:
        """Read a cached value even if expired (for stale-if-error fallbacks)."""
        if not self._enabled:
            return None
        path = self._key_path(namespace, key)
        if not path.exists():
            return None
        entry = self._read_entry(path)
        return entry.value if entry else None

    def set(self, namespace: str, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        """Write a JSON-serializable value to disk (temp file + atomic replace)."""
        if not self._enabled:
            return None

        ttl = ttl_seconds if ttl_seconds is not None else self._default_ttl_seconds
        path = self._key_path(namespace, key)
        path.parent.mkdir(parents=True, exist_ok=True)

        payload = {
            "created_at_unix": int(time.time()),
            "ttl_seconds": int(ttl),
            "value": value,
        }
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)

    def get_or_set(
        self,
        namespace: str,
        key: str,
        builder: Callable[[], Any],
        ttl_seconds: int | None = None,
        *,
        stale_if_error: bool = False,
        stale_predicate: Callable[[Exception], bool] | None = None,
    ) -> Any:
        """Return cached value, or compute/store it via `builder`.

        With `stale_if_error`, a failing `builder()` falls back to an expired value on disk
        when one exists and `stale_predicate(exc)` is True (or no predicate is given).
        """
        cached = self.get(namespace, key, ttl_seconds=ttl_seconds)
        if cached is not None:
            return cached
        try:
            value = builder()
        except Exception as exc:
            if stale_if_error and (stale_predicate(exc) if stale_predicate else True):
                stale = self.get_stale(namespace, key)
                if stale is not None:
                    logger.warning("Serving stale %s entry after upstream error: %s", namespace, exc)
                    return stale
            raise
        self.set(namespace, key, value, ttl_seconds=ttl_seconds)
        return value
