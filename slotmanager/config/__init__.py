"""Settings for slotmanager.

Values come from SLOTMANAGER_* environment variables layered over TOML
files in an explicitly configured directory (see ``loader``).

Usage:
    from slotmanager.config import get_settings

    settings = get_settings("/etc/myapp/slotmanager")
    endpoint = settings.lookup_endpoint
"""

from functools import lru_cache
from pathlib import Path

from slotmanager.config.loader import load_config
from slotmanager.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings(config_dir: str | Path | None = None) -> Settings:
    """Build Settings once per process and cache them.

    Args:
        config_dir: TOML directory (default: SLOTMANAGER_CONFIG_DIR, else none)
    """
    set_toml_config(load_config(config_dir))
    return Settings()


def reload_settings(config_dir: str | Path | None = None) -> Settings:
    """Drop the cached Settings and build them again."""
    get_settings.cache_clear()
    return get_settings(config_dir)


__all__ = ["get_settings", "reload_settings", "Settings"]
