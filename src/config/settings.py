"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# Settings are read from TWO sources (in priority order):
#
#   1. **Environment variables** - e.g., CACHE_PATH=/var/cache/subsweep
#   2. **.env file** - key=value lines in the project root .env file
#
# Field name `cache_path` maps to env var `CACHE_PATH`.  Defaults apply
# when neither source sets a value.
#
# The subtitle options themselves (which item types, which languages)
# live in config/config.yaml, see src/config/loader.py.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Subtitle sweep process settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Paths ===
    cache_path: str = "./data/cache"
    history_file_name: str = "subtitlehistory.json"
    config_path: str = "config/config.yaml"

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def get_history_path(self) -> Path:
        """Return the full path of the retry-history file."""
        return Path(self.cache_path) / self.history_file_name
