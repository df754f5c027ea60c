"""Resolution Storage
==================

Memoizes provider data (family indexes, resolved faces) under string keys such
as `google:meta.json`:
- LRU in-memory layer
- Optional JSON files on disk, one per key
- Thread-safe, with concurrent computations of one key coalesced
"""

import json
import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from src.fontresolver.core.config import StorageConfig
from src.fontresolver.core.exceptions import StorageWriteError

logger = logging.getLogger(__name__)


@dataclass
class StorageStats:
    """Statistics for storage performance."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    disk_reads: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return (self.hits / total * 100.0) if total > 0 else 0.0


class FontStorage:
    """Key/value store with compute-on-miss semantics.

    Values must be JSON-serializable so they can be persisted to disk.
    """

    def __init__(self, config: StorageConfig | None = None):
        self.config = config or StorageConfig()
        self.cache_dir = self.config.cache_dir

        self._cache: OrderedDict[str, Any] = OrderedDict()
        self._lock = threading.RLock()
        self._key_locks: dict[str, list] = {}
        self._stats = StorageStats()

        logger.info(
            f"FontStorage initialized: enabled={self.config.enabled}, "
            f"cache_dir={self.cache_dir}, max_entries={self.config.max_entries}"
        )

    def get_item(self, key: str, init: Callable[[], Any] | None = None) -> Any:
        """Get a value, computing and storing it on a miss.

        Args:
            key: Storage key
            init: Function computing the value when it is not stored

        Returns:
            The stored or computed value, or None on a miss without `init`
        """
        if not self.config.enabled:
            return init() if init else None

        with self._key_lock(key):
            found, value = self._lookup(key)
            if found:
                return value

            with self._lock:
                self._stats.misses += 1

            if init is None:
                return None

            logger.info(f"Storage miss for {key}, computing...")
            start_time = time.time()
            value = init()
            logger.debug(f"Computed {key} in {time.time() - start_time:.2f}s")

            self.set_item(key, value)
            return value

    def set_item(self, key: str, value: Any) -> None:
        """Store a value in memory and, when configured, on disk."""
        with self._lock:
            self._cache[key] = value
            self._cache.move_to_end(key)
            self._evict_lru()

        if self.cache_dir is not None:
            self._write_disk(key, value)

    def has_item(self, key: str) -> bool:
        with self._lock:
            if key in self._cache:
                return True
        return self.cache_dir is not None and self._disk_path(key).exists()

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._cache.pop(key, None)
        if self.cache_dir is not None:
            self._disk_path(key).unlink(missing_ok=True)

    def get_stats(self) -> StorageStats:
        with self._lock:
            return StorageStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                evictions=self._stats.evictions,
                disk_reads=self._stats.disk_reads,
            )

    @contextmanager
    def _key_lock(self, key: str):
        # Entries hold [lock, users] and are dropped when the last user leaves
        with self._lock:
            entry = self._key_locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._lock:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._key_locks[key]

    def _lookup(self, key: str) -> tuple[bool, Any]:
        with self._lock:
            if key in self._cache:
                self._cache.move_to_end(key)
                self._stats.hits += 1
                logger.debug(f"Storage hit for {key}")
                return True, self._cache[key]

        if self.cache_dir is None:
            return False, None

        path = self._disk_path(key)
        if not path.exists():
            return False, None

        try:
            value = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable cache entry {path}: {e}")
            return False, None

        with self._lock:
            self._cache[key] = value
            self._evict_lru()
            self._stats.hits += 1
            self._stats.disk_reads += 1
        logger.debug(f"Storage hit for {key} (disk)")
        return True, value

    def _evict_lru(self) -> None:
        while len(self._cache) > self.config.max_entries:
            evicted_key, _ = self._cache.popitem(last=False)
            self._stats.evictions += 1
            logger.debug(f"Evicted {evicted_key} from memory")

    def _disk_path(self, key: str) -> Path:
        # "google:Roboto-<hash>-data.json" -> <cache_dir>/google/Roboto-<hash>-data.json
        return self.cache_dir.joinpath(*key.split(":"))

    def _write_disk(self, key: str, value: Any) -> None:
        path = self._disk_path(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(value), encoding="utf-8")
        except (OSError, TypeError) as e:
            raise StorageWriteError(key, str(e)) from e
