"""Application settings loaded from environment variables via pydantic-settings.

Values come from (highest priority first):

  1. Environment variables, e.g. ``TOKEN_STORE_DB_PATH=/var/lib/app/tokens.db``
  2. A ``.env`` file in the working directory
  3. The defaults below

Field ``token_store_db_path`` maps to env var ``TOKEN_STORE_DB_PATH``.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Token cache settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Storage ===
    # "sqlite" for a durable file store, "memory" for a throwaway dict.
    token_store_backend: str = "sqlite"
    token_store_db_path: str = "data/token_cache.db"
    token_store_table: str = "preferences"
    token_store_busy_timeout: float = 5.0

    # === Reserved names ===
    partition_index_key: str = "partitionNames"
    readonly_partition: str = "readonly"

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"
