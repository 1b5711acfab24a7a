"""Systems configuration file I/O operations.

This module provides functions for loading and saving the systems.toml
file with proper validation using Pydantic models.
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from romshelf.core.paths import get_systems_path
from romshelf.models.systems import SystemConfig, SystemsConfig


class SystemsConfigError(Exception):
    """Base exception for systems configuration errors."""


class SystemsConfigNotFoundError(SystemsConfigError):
    """Raised when the systems file is not found."""


class SystemsConfigParseError(SystemsConfigError):
    """Raised when the systems file cannot be parsed."""


class SystemsConfigValidationError(SystemsConfigError):
    """Raised when the systems file content is invalid."""


def load_systems_config(path: Path | None = None) -> SystemsConfig:
    """Load and validate the systems configuration from a TOML file.

    Args:
        path: Path to the systems file. If None, uses the default systems path.

    Returns:
        Validated SystemsConfig object.

    Raises:
        SystemsConfigNotFoundError: If the file doesn't exist.
        SystemsConfigParseError: If the TOML syntax is invalid.
        SystemsConfigValidationError: If the content doesn't match the schema.
    """
    systems_path = path or get_systems_path()

    if not systems_path.exists():
        raise SystemsConfigNotFoundError(f"Systems file not found: {systems_path}")

    try:
        with open(systems_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SystemsConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SystemsConfigError(f"Failed to read systems file: {e}") from e

    try:
        return SystemsConfig.model_validate(data)
    except ValidationError as e:
        raise SystemsConfigValidationError(f"Invalid systems content: {e}") from e


def save_systems_config(config: SystemsConfig, path: Path | None = None) -> Path:
    """Save the systems configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        config: The SystemsConfig object to save.
        path: Path to save to. If None, uses the default systems path.

    Returns:
        Path where the file was saved.

    Raises:
        SystemsConfigError: If the file cannot be written.
    """
    systems_path = path or get_systems_path()

    data = {"systems": [_system_to_dict(system) for system in config.systems]}

    tmp_path: Path | None = None
    try:
        systems_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=systems_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(systems_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SystemsConfigError(f"Failed to write systems file: {e}") from e

    return systems_path


def require_systems(systems_path: Path | None = None) -> SystemsConfig:
    """Load the systems configuration or exit with a helpful error message.

    Args:
        systems_path: Optional custom systems file path.

    Returns:
        Loaded and validated SystemsConfig.

    Raises:
        typer.Exit: If the systems file cannot be loaded.
    """
    import typer

    from romshelf.utils.formatting import print_error, print_info

    path = systems_path or get_systems_path()
    try:
        return load_systems_config(path)
    except SystemsConfigNotFoundError as e:
        print_error(f"Systems file not found: {path}")
        print_info("Run 'romshelf systems add NAME PATH' to configure a system.")
        raise typer.Exit(code=1) from e
    except SystemsConfigError as e:
        print_error(f"Failed to load systems: {e}")
        raise typer.Exit(code=1) from e


def _system_to_dict(system: SystemConfig) -> dict[str, Any]:
    """Convert a SystemConfig to a dictionary for TOML serialization.

    Optional fields are only written when set.

    Args:
        system: The SystemConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, Any] = {"name": system.name}
    if system.fullname:
        result["fullname"] = system.fullname
    result["path"] = system.path
    result["extensions"] = list(system.extensions)
    if system.gamelist:
        result["gamelist"] = system.gamelist
    return result
