"""Token cache record models.

Defines the Pydantic v2 model persisted once per partition.  Records are
frozen: a partition's cached token is only ever replaced wholesale by a
later write, never patched in place.

The JSON form uses camelCase keys (``expiresOn``, ``dbAccount``...) so
values written by other clients of the same store stay readable, and
unknown keys are ignored so newer writers do not break older readers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TokenStatus(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """Outcome of the token request that produced a cached record."""

    SUCCEEDED = "Succeed"
    FAILED = "Failed"


class TokenRecord(BaseModel):
    """A cached access token for one partition.

    Only ``partition``, ``status`` and ``expires_on`` drive cache behaviour;
    the remaining fields are an opaque payload handed back to the caller
    untouched.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    partition: str = Field(min_length=1)
    status: TokenStatus
    # Always timezone-aware UTC; naive values are taken to already be UTC.
    expires_on: datetime = Field(alias="expiresOn")

    token: str | None = None
    db_account: str | None = Field(default=None, alias="dbAccount")
    db_name: str | None = Field(default=None, alias="dbName")
    db_collection_name: str | None = Field(default=None, alias="dbCollectionName")
    account_id: str | None = Field(default=None, alias="accountId")

    @field_validator("expires_on")
    @classmethod
    def _normalise_to_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)  # noqa: UP017
        return value.astimezone(timezone.utc)  # noqa: UP017

    @property
    def succeeded(self) -> bool:
        return self.status is TokenStatus.SUCCEEDED

    def is_expired(self, now: datetime) -> bool:
        """Return ``True`` when the token expires at or before *now*."""
        return self.expires_on <= now

    def to_json(self) -> str:
        """Serialise to the stored JSON form (camelCase keys)."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str) -> TokenRecord:
        """Parse a stored value.  Raises ``pydantic.ValidationError`` if malformed."""
        return cls.model_validate_json(raw)
