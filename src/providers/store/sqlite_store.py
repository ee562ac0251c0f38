"""SQLite-backed persistent store provider.

Keeps strings and string sets in one table, keyed by name, with a ``kind``
column recording which of the two a row holds.  Sets are stored as a
sorted JSON array.  Uses sync ``sqlite3`` with a fresh connection per
operation: every call is a single-row point read or write, and WAL mode
plus a busy timeout lets concurrent threads share the file safely.

Any ``sqlite3`` failure is re-raised as :class:`StoreError`.
"""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import structlog

from src.interfaces.persistent_store import IPersistentStore
from src.utils.errors import StoreError
from src.utils.logging import get_logger

_DEFAULT_DB_PATH = Path("data/token_cache.db")

_KIND_STRING = "string"
_KIND_STRING_SET = "string_set"

_CREATE_TABLE_SQL = """\
CREATE TABLE IF NOT EXISTS {table} (
    key        TEXT PRIMARY KEY,
    kind       TEXT NOT NULL,
    value      TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
);
"""

_UPSERT_SQL = """\
INSERT INTO {table} (key, kind, value)
VALUES (?, ?, ?)
ON CONFLICT(key)
DO UPDATE SET kind       = excluded.kind,
              value      = excluded.value,
              updated_at = strftime('%Y-%m-%dT%H:%M:%fZ', 'now');
"""

_SELECT_SQL = "SELECT kind, value FROM {table} WHERE key = ?;"

_DELETE_SQL = "DELETE FROM {table} WHERE key = ?;"

_COUNT_SQL = "SELECT COUNT(*) FROM {table};"


class SQLitePersistentStore(IPersistentStore):
    """Durable string / string-set store backed by SQLite.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Parent directories are created
        by :meth:`initialize`.
    table_name:
        Table to use, so several stores can share one database file.
    busy_timeout:
        Seconds a connection waits on a locked database before failing.
    """

    def __init__(
        self,
        db_path: str | Path = _DEFAULT_DB_PATH,
        table_name: str = "preferences",
        busy_timeout: float = 5.0,
    ) -> None:
        self._db_path = Path(db_path)
        self._table = table_name
        self._busy_timeout = busy_timeout
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Create the table if needed.  Must be called once before use."""
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreError(
                f"Cannot create directory for {self._db_path}: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
        self._execute(_CREATE_TABLE_SQL)
        self._logger.info(
            "token_store_initialized",
            db_path=str(self._db_path),
            table=self._table,
            existing_keys=len(self),
        )

    # ------------------------------------------------------------------
    # IPersistentStore implementation
    # ------------------------------------------------------------------

    def get_string(self, key: str) -> str | None:
        row = self._execute(_SELECT_SQL, (key,))
        if row is None or row[0] != _KIND_STRING:
            return None
        return row[1]

    def put_string(self, key: str, value: str) -> None:
        self._execute(_UPSERT_SQL, (key, _KIND_STRING, value))

    def get_string_set(self, key: str) -> set[str] | None:
        row = self._execute(_SELECT_SQL, (key,))
        if row is None or row[0] != _KIND_STRING_SET:
            return None
        try:
            members = json.loads(row[1])
        except json.JSONDecodeError as exc:
            raise StoreError(
                f"Stored set under '{key}' is not valid JSON",
                provider_name=self.get_provider_name(),
            ) from exc
        if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
            raise StoreError(
                f"Stored set under '{key}' is not a JSON array of strings",
                provider_name=self.get_provider_name(),
            )
        return set(members)

    def put_string_set(self, key: str, values: Iterable[str]) -> None:
        payload = json.dumps(sorted(set(values)))
        self._execute(_UPSERT_SQL, (key, _KIND_STRING_SET, payload))

    def remove(self, key: str) -> None:
        self._execute(_DELETE_SQL, (key,))

    def get_provider_name(self) -> str:
        return f"sqlite_store:{self._table}"

    def __len__(self) -> int:
        row = self._execute(_COUNT_SQL)
        return row[0] if row else 0

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _connect(self) -> sqlite3.Connection:
        """Open a new SQLite connection with WAL mode for concurrency."""
        conn = sqlite3.connect(str(self._db_path), timeout=self._busy_timeout)
        conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _execute(self, sql: str, params: tuple[Any, ...] = ()) -> tuple[Any, ...] | None:
        """Run one statement in its own transaction and return the first row."""
        try:
            conn = self._connect()
            try:
                cursor = conn.execute(sql.format(table=self._table), params)
                row = cursor.fetchone()
                conn.commit()
                return row
            finally:
                conn.close()
        except sqlite3.Error as exc:
            raise StoreError(
                f"SQLite operation failed: {exc}",
                provider_name=self.get_provider_name(),
            ) from exc
