"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  - Static defaults, including the `subtitles:`
#                            options block
#   2. .env file           - Local overrides (not committed)
#   3. Environment vars    - Set at deploy time
#
# Only process-level values (paths, logging, app env) come from the
# environment; the subtitle options are YAML-only.
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from src.config.settings import Settings


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built Settings; a fresh instance is read from the
                  environment when omitted.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        yaml.YAMLError: If the file exists but is not valid YAML.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    if settings is None:
        settings = Settings()
    env_overrides = {
        "app": {
            "env": settings.app_env,
        },
        "paths": {
            "cache_path": settings.cache_path,
            "history_file": str(settings.get_history_path()),
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
