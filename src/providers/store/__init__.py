"""Persistent store providers.

SQLitePersistentStore is the durable default; MemoryPersistentStore keeps
everything in a dict and is meant for tests and throwaway sessions.  Both
implement IPersistentStore, so the token cache never knows which it has.
"""

from src.providers.store.memory_store import MemoryPersistentStore
from src.providers.store.sqlite_store import SQLitePersistentStore

__all__ = ["MemoryPersistentStore", "SQLitePersistentStore"]
