"""Token cache domain models: re-exports the public model classes."""

from __future__ import annotations

from src.models.token import TokenRecord, TokenStatus

__all__ = [
    "TokenRecord",
    "TokenStatus",
]
