"""Utility modules for the token cache.

- **errors** -- exception hierarchy rooted at TokenCacheError; store
  adapters raise StoreError, the composition root raises ConfigurationError.
- **logging** -- structlog setup with a dual renderer: coloured console
  output in development, structured JSON in production.
"""

from src.utils.errors import ConfigurationError, StoreError, TokenCacheError
from src.utils.logging import configure_logging, configure_logging_from_settings, get_logger

__all__ = [
    "ConfigurationError",
    "StoreError",
    "TokenCacheError",
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
]
