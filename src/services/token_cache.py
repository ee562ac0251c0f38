"""Token cache: per-partition access tokens over a persistent store.

# ─── ARCHITECTURE ROLE ───────────────────────────────────────────────
#
# Layer: Services (business logic).
# Depends on: IPersistentStore.
#
# Every partition's token is stored as JSON under the partition name.
# A reserved key holds the *partition index*: the set of partition
# names that may have a stored token.  Bulk invalidation walks the index,
# so the index may list a partition whose value is already gone, but it
# must never miss a partition that still has a live token.
#
# Read path (no lock):
#   missing / unparseable value  → None
#   status != Succeed            → None, record kept in place
#   expired                      → None, record and index entry purged
#   otherwise                    → the record
#
# Write paths (set, remove, remove-all) each read the index, change it
# and write it back, so they run under one per-instance lock.  The index
# is always persisted before the value it describes.
#
# Nothing is cached in memory: every read goes to the store.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import datetime, timezone

import structlog
from pydantic import ValidationError

from src.interfaces.persistent_store import IPersistentStore
from src.models.token import TokenRecord

logger = structlog.get_logger(logger_name=__name__)

PARTITION_NAMES_KEY = "partitionNames"
READONLY_PARTITION = "readonly"


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)  # noqa: UP017


def _require_partition(partition_name: str) -> None:
    if not partition_name:
        msg = "Partition name must be a non-empty string"
        raise ValueError(msg)


class TokenCache:
    """Persistent cache of access tokens keyed by partition name.

    Construct one per process and share it; all state lives in *store*.
    Store failures propagate unchanged, there are no retries.

    Parameters
    ----------
    store:
        Durable string / string-set storage.
    partition_index_key:
        Reserved key under which the partition index is stored.  It can
        never be used as a partition name.
    readonly_partition:
        Partition whose token survives :meth:`remove_all_cached_tokens`.
    clock:
        Returns the current time as an aware UTC datetime.
    """

    def __init__(
        self,
        store: IPersistentStore,
        partition_index_key: str = PARTITION_NAMES_KEY,
        readonly_partition: str = READONLY_PARTITION,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._index_key = partition_index_key
        self._readonly_partition = readonly_partition
        self._clock = clock if clock is not None else _utc_now
        self._lock = threading.Lock()

    @property
    def readonly_partition(self) -> str:
        return self._readonly_partition

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def get_cached_token(self, partition_name: str) -> TokenRecord | None:
        """Return the usable cached token for *partition_name*, or ``None``.

        This read may write: a record found expired is removed from the
        store and the partition index before ``None`` is returned.  Records
        with a failed status are reported as ``None`` but left in place.
        A value that cannot be parsed is logged and also left in place; the
        next :meth:`set_cached_token` overwrites it.
        """
        _require_partition(partition_name)
        raw = self._store.get_string(partition_name)
        if raw is None:
            logger.warning("token_cache_miss", partition=partition_name)
            return None

        try:
            token = TokenRecord.from_json(raw)
        except ValidationError as exc:
            logger.warning(
                "token_cache_corrupt",
                partition=partition_name,
                error=str(exc)[:200],
            )
            return None

        if not token.succeeded:
            logger.warning(
                "token_cache_failed_status",
                partition=partition_name,
                status=token.status.value,
            )
            return None

        if token.is_expired(self._clock()):
            logger.warning(
                "token_cache_expired",
                partition=partition_name,
                expires_on=token.expires_on.isoformat(),
            )
            self._purge_expired(partition_name, raw)
            return None

        logger.debug("token_cache_hit", partition=partition_name)
        return token

    def set_cached_token(self, record: TokenRecord) -> None:
        """Cache *record*, replacing any token held for its partition.

        The partition is added to the index (persisted only if it was not
        already there) before the record itself is written.
        """
        partition_name = record.partition
        _require_partition(partition_name)
        if partition_name == self._index_key:
            msg = f"'{partition_name}' is reserved for the partition index"
            raise ValueError(msg)

        payload = record.to_json()
        with self._lock:
            partition_names = self._partition_names()
            if partition_name not in partition_names:
                partition_names.add(partition_name)
                self._store.put_string_set(self._index_key, partition_names)
            self._store.put_string(partition_name, payload)

        logger.debug(
            "token_cached",
            partition=partition_name,
            status=record.status.value,
            expires_on=record.expires_on.isoformat(),
        )

    def remove_all_cached_tokens(self) -> None:
        """Drop every cached token except the read-only partition's.

        The index is emptied completely, including the read-only entry,
        even though that partition's stored value is kept.
        """
        with self._lock:
            partition_names = self._partition_names()
            removed = 0
            for partition_name in partition_names:
                if partition_name == self._readonly_partition:
                    continue
                self._store.remove(partition_name)
                removed += 1
            self._store.put_string_set(self._index_key, set())

        logger.info("all_tokens_removed", removed=removed)

    def cached_partition_names(self) -> frozenset[str]:
        """Return the partitions currently listed in the index."""
        return frozenset(self._partition_names())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _partition_names(self) -> set[str]:
        partition_names = self._store.get_string_set(self._index_key)
        return set(partition_names) if partition_names is not None else set()

    def _remove_cached_token(self, partition_name: str) -> None:
        """Remove one partition's token and index entry.  Idempotent."""
        with self._lock:
            self._remove_locked(partition_name)

    def _purge_expired(self, partition_name: str, observed: str) -> None:
        # A concurrent set may have replaced the expired value since it was
        # read; only the value that was judged expired is removed.
        with self._lock:
            if self._store.get_string(partition_name) != observed:
                return
            self._remove_locked(partition_name)

    def _remove_locked(self, partition_name: str) -> None:
        partition_names = self._partition_names()
        partition_names.discard(partition_name)
        self._store.put_string_set(self._index_key, partition_names)
        self._store.remove(partition_name)
        logger.info("token_removed", partition=partition_name)
