"""Token cache composition root.

Wires a persistent store and the TokenCache service together from
Settings.  Loads configuration from ``config/token_cache.yaml`` plus
``.env`` / environment variables and configures structured logging.

Callers build one cache at startup and share it for the process lifetime::

    from src.main import build_token_cache

    cache = build_token_cache()
    token = cache.get_cached_token("user-1234")
"""

from __future__ import annotations

import structlog

from src.config.loader import load_settings
from src.config.settings import Settings
from src.interfaces.persistent_store import IPersistentStore
from src.providers.store.memory_store import MemoryPersistentStore
from src.providers.store.sqlite_store import SQLitePersistentStore
from src.services.token_cache import TokenCache
from src.utils.errors import ConfigurationError
from src.utils.logging import configure_logging_from_settings, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = load_settings()

configure_logging_from_settings(settings)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def build_persistent_store(app_settings: Settings) -> IPersistentStore:
    """Create and initialise the store named by ``token_store_backend``."""
    backend = app_settings.token_store_backend.strip().lower()
    if backend == "memory":
        return MemoryPersistentStore()
    if backend == "sqlite":
        store = SQLitePersistentStore(
            db_path=app_settings.token_store_db_path,
            table_name=app_settings.token_store_table,
            busy_timeout=app_settings.token_store_busy_timeout,
        )
        store.initialize()
        return store
    raise ConfigurationError(
        f"Unknown token store backend '{app_settings.token_store_backend}' "
        "(expected 'sqlite' or 'memory')"
    )


def build_token_cache(
    custom_settings: Settings | None = None,
    store: IPersistentStore | None = None,
) -> TokenCache:
    """Assemble a TokenCache.

    Parameters
    ----------
    custom_settings:
        Application settings.  Uses module-level ``settings`` if not provided.
    store:
        Pre-built store to use instead of the configured backend.
    """
    s = custom_settings if custom_settings is not None else settings
    if not s.partition_index_key:
        raise ConfigurationError("partition_index_key must not be empty")
    if s.partition_index_key == s.readonly_partition:
        raise ConfigurationError("partition_index_key and readonly_partition must differ")

    resolved_store = store if store is not None else build_persistent_store(s)
    _logger.info(
        "token_cache_ready",
        store=resolved_store.get_provider_name(),
        readonly_partition=s.readonly_partition,
    )
    return TokenCache(
        store=resolved_store,
        partition_index_key=s.partition_index_key,
        readonly_partition=s.readonly_partition,
    )
