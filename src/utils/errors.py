"""Custom exception hierarchy for the token cache.

All application exceptions inherit from :class:`TokenCacheError`, which
carries an optional ``provider_name`` so callers can tell which storage
backend (e.g. "sqlite_store:preferences") raised the failure.

    TokenCacheError        (base -- catch-all for any token cache error)
    +-- StoreError         (persistence layer failed: I/O, locked DB, bad data)
    +-- ConfigurationError (startup / unknown backend / bad settings)

A cache *miss* is never an exception: lookups return ``None``.  Caller
mistakes such as an empty partition name raise the built-in ``ValueError``.
"""


class TokenCacheError(Exception):
    """Base exception for all token cache errors.

    The ``__str__`` method prefixes the provider name in brackets for
    structured log output, e.g. ``[sqlite_store:preferences] database is locked``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class StoreError(TokenCacheError):
    """Raised when the underlying persistent store fails.

    The token cache never retries or masks this error; it reaches the
    caller exactly as the store adapter raised it.
    """

    def __init__(
        self,
        message: str = "Persistent store operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ConfigurationError(TokenCacheError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
