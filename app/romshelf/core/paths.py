"""XDG-compliant path management for romshelf.

This module provides standardized paths following the XDG Base Directory
Specification for configuration storage. Settings, the systems list and
per-user gamelists all live under the config directory.

XDG defaults:
- Config: ~/.config/romshelf/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "romshelf"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get the romshelf directory under an XDG base directory.

    Args:
        env_var: Variable naming the base directory ("XDG_CONFIG_HOME").
        default_subdir: Base directory under home when the variable is unset.

    Returns:
        ``<base>/romshelf``.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/romshelf/ (or XDG_CONFIG_HOME/romshelf/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/romshelf/settings.toml.
    """
    return get_config_dir() / "settings.toml"


def get_systems_path() -> Path:
    """Get the systems configuration file path.

    Returns:
        Path to ~/.config/romshelf/systems.toml.
    """
    return get_config_dir() / "systems.toml"


def get_gamelists_dir() -> Path:
    """Get the per-user gamelists directory.

    Systems whose ROM directory holds no gamelist.xml keep theirs in
    ``<gamelists>/<system name>/gamelist.xml``.

    Returns:
        Path to ~/.config/romshelf/gamelists/.
    """
    return get_config_dir() / "gamelists"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create a romshelf directory with its parents.

    Args:
        path: Directory to create.
        name: Directory label used in the error message.

    Returns:
        ``path``, now guaranteed to exist.

    Raises:
        RuntimeError: If ``path`` cannot be created. The message names the
            directory by its label.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")
