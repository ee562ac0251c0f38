"""Abstract base class for persistent key-value store providers.

Defines the durable storage contract the token cache is built on: string
values and string sets addressed by string keys, in a single key space.
Implementations may use SQLite, a plain dict, or any other backend; the
adapter pattern lets the backend change without touching cache logic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable


class IPersistentStore(ABC):
    """Contract for durable string / string-set storage.

    Every individual write must be crash-consistent on its own, and point
    operations must be safe to call from several threads at once.  A key
    holding a string reads as absent through :meth:`get_string_set` and
    vice versa.  Failures are raised as
    :class:`~src.utils.errors.StoreError`.
    """

    @abstractmethod
    def get_string(self, key: str) -> str | None:
        """Return the string stored under *key*, or ``None`` if absent."""

    @abstractmethod
    def put_string(self, key: str, value: str) -> None:
        """Store *value* under *key*, replacing whatever was there."""

    @abstractmethod
    def get_string_set(self, key: str) -> set[str] | None:
        """Return a copy of the set stored under *key*, or ``None`` if absent.

        Mutating the returned set never changes what is stored.
        """

    @abstractmethod
    def put_string_set(self, key: str, values: Iterable[str]) -> None:
        """Store *values* as a set under *key*, replacing whatever was there."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete *key*.  No-op if the key does not exist."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this provider."""
