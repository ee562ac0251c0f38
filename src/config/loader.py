"""YAML configuration loader layered under environment settings.

Configuration is resolved in layers (later layers win):

  1. Field defaults in :class:`Settings`
  2. ``config/token_cache.yaml``: static defaults checked into a deployment
  3. ``.env`` file and environment variables

The YAML file holds a flat ``token_cache:`` mapping whose keys are
Settings field names::

    token_cache:
      token_store_backend: sqlite
      token_store_db_path: /var/lib/tokens/cache.db
"""

from pathlib import Path

import yaml

from src.config.settings import Settings
from src.utils.errors import ConfigurationError
from src.utils.logging import get_logger

_SECTION = "token_cache"


def load_settings(path: str | Path = "config/token_cache.yaml") -> Settings:
    """Build Settings from the YAML file, letting the environment override it.

    A missing file is not an error; the result is plain ``Settings()``.
    Unknown keys in the YAML section are ignored with a warning.
    """
    config_path = Path(path)
    if not config_path.exists():
        return Settings()

    with open(config_path, encoding="utf-8") as f:
        try:
            document = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Cannot parse {config_path}: {exc}") from exc

    section = document.get(_SECTION, {}) if isinstance(document, dict) else None
    if not isinstance(section, dict):
        raise ConfigurationError(f"'{_SECTION}' in {config_path} must be a mapping")

    # Fields sourced from env/.env show up in model_fields_set; those win.
    env_settings = Settings()
    yaml_values = {}
    for key, value in section.items():
        if key not in Settings.model_fields:
            get_logger(__name__).warning("unknown_config_key", key=key, path=str(config_path))
            continue
        if key not in env_settings.model_fields_set:
            yaml_values[key] = value

    return Settings(**yaml_values)
