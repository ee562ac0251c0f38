"""Shared pytest fixtures for the token cache test suite."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from src.models.token import TokenRecord, TokenStatus
from src.providers.store.memory_store import MemoryPersistentStore
from src.providers.store.sqlite_store import SQLitePersistentStore
from src.services.token_cache import TokenCache

NOW = datetime(2026, 3, 14, 12, 0, 0, 123456, tzinfo=timezone.utc)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: Any) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_record(
    partition: str = "user-1234",
    status: TokenStatus = TokenStatus.SUCCEEDED,
    expires_on: datetime | None = None,
    **payload: Any,
) -> TokenRecord:
    """Build a TokenRecord expiring one hour after NOW unless told otherwise."""
    fields = {
        "token": "tok-" + partition,
        "db_account": "account-db",
        "db_name": "db",
        "db_collection_name": "collection",
        "account_id": "acct-42",
    }
    fields.update(payload)
    return TokenRecord(
        partition=partition,
        status=status,
        expires_on=expires_on or NOW + timedelta(hours=1),
        **fields,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store() -> MemoryPersistentStore:
    return MemoryPersistentStore()


@pytest.fixture
def sqlite_store(tmp_path: Path) -> SQLitePersistentStore:
    """An initialised SQLite store in a temp directory."""
    store = SQLitePersistentStore(db_path=tmp_path / "tokens" / "cache.db")
    store.initialize()
    return store


@pytest.fixture
def cache(memory_store: MemoryPersistentStore, clock: FakeClock) -> TokenCache:
    return TokenCache(store=memory_store, clock=clock)
