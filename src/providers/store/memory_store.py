"""In-memory persistent store provider.

Dict-backed implementation of :class:`IPersistentStore` for tests and
single-process development.  Nothing survives a restart; swap in
:class:`SQLitePersistentStore` for real durability.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

import structlog

from src.interfaces.persistent_store import IPersistentStore

logger = structlog.get_logger(logger_name=__name__)


class MemoryPersistentStore(IPersistentStore):
    """Thread-safe dict store; sets are kept as frozensets so callers get copies."""

    def __init__(self) -> None:
        self._values: dict[str, str | frozenset[str]] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # IPersistentStore implementation
    # ------------------------------------------------------------------

    def get_string(self, key: str) -> str | None:
        with self._lock:
            value = self._values.get(key)
        return value if isinstance(value, str) else None

    def put_string(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value
        logger.debug("store_put_string", key=key)

    def get_string_set(self, key: str) -> set[str] | None:
        with self._lock:
            value = self._values.get(key)
        return set(value) if isinstance(value, frozenset) else None

    def put_string_set(self, key: str, values: Iterable[str]) -> None:
        with self._lock:
            self._values[key] = frozenset(values)
        logger.debug("store_put_string_set", key=key)

    def remove(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)
        logger.debug("store_remove", key=key)

    def get_provider_name(self) -> str:
        return "memory_store"

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
