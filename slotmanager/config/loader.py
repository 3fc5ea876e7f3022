"""TOML sources for Settings.

Files are read only from a directory the host names, either through the
``config_dir`` argument or SLOTMANAGER_CONFIG_DIR. Nothing is discovered
from the working directory, so an application embedding slotmanager never
has its own ``config/`` picked up by accident.

Inside that directory:
    default.toml      base values, optional
    {env}.toml        overrides, read only when an environment is named
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV_VAR = "SLOTMANAGER_CONFIG_DIR"
ENVIRONMENT_ENV_VAR = "SLOTMANAGER_ENV"


def resolve_config_dir(config_dir: str | Path | None = None) -> Path | None:
    """Return the directory to read TOML files from, or None for no files.

    Raises:
        FileNotFoundError: If a named directory does not exist
    """
    if config_dir is None:
        config_dir = os.environ.get(CONFIG_DIR_ENV_VAR) or None
    if config_dir is None:
        return None

    path = Path(config_dir)
    if not path.is_dir():
        raise FileNotFoundError(f"Config directory not found: {path}")
    return path


def get_environment() -> str | None:
    """Environment name from SLOTMANAGER_ENV, None when unset or blank."""
    env = os.environ.get(ENVIRONMENT_ENV_VAR, "").strip()
    return env or None


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as f:
        return tomllib.load(f)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge override into a copy of base, recursing into nested tables."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_dir: str | Path | None = None,
    env: str | None = None,
) -> dict[str, Any]:
    """Read and merge the TOML files for Settings.

    Args:
        config_dir: Directory holding the files (default: SLOTMANAGER_CONFIG_DIR)
        env: Environment overlay to apply (default: SLOTMANAGER_ENV)

    Returns:
        Merged values, empty when no directory is configured
    """
    directory = resolve_config_dir(config_dir)
    if directory is None:
        return {}

    config: dict[str, Any] = {}
    default_path = directory / "default.toml"
    if default_path.exists():
        config = load_toml(default_path)

    env = env or get_environment()
    if env is not None:
        env_path = directory / f"{env}.toml"
        if env_path.exists():
            config = deep_merge(config, load_toml(env_path))

    return config
