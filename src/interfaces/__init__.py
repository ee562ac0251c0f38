"""Public interface definitions for external collaborators.

The token cache talks to storage exclusively through the abstract base
class defined here; concrete adapters live in ``src/providers/`` and are
chosen in ``src/main.py``.

    Interface          →  Concrete implementations (in src/providers/)
    ─────────────────────────────────────────────────────────────────
    IPersistentStore   →  SQLitePersistentStore, MemoryPersistentStore
"""

from src.interfaces.persistent_store import IPersistentStore

__all__ = [
    "IPersistentStore",
]
