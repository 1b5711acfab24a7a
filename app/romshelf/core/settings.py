"""Application settings.

This module provides the settings model and I/O functions for romshelf.
Settings gate gamelist writes and select how intermediate folder paths
are built.

Settings are stored in ~/.config/romshelf/settings.toml
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from romshelf.catalog.tree import FolderPathStyle
from romshelf.core.paths import get_settings_path


class Settings(BaseModel):
    """Runtime settings.

    Attributes:
        disable_gamelist_writes: Never write gamelist documents.
        ignore_gamelist: Neither read nor write gamelist documents.
        folder_paths: Path style of folders created while resolving a game path.
    """

    model_config = ConfigDict(extra="forbid")

    disable_gamelist_writes: Annotated[
        bool,
        Field(description="Never write gamelist.xml files"),
    ] = False
    ignore_gamelist: Annotated[
        bool,
        Field(description="Neither read nor write gamelist.xml files"),
    ] = False
    folder_paths: Annotated[
        FolderPathStyle,
        Field(description="Path style of intermediate folders (stem or full)"),
    ] = FolderPathStyle.STEM

    @property
    def writes_enabled(self) -> bool:
        """Check whether gamelist documents may be written."""
        return not (self.disable_gamelist_writes or self.ignore_gamelist)


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    A missing file yields the default settings.

    Args:
        path: Path to the settings file. If None, uses the default settings path.

    Returns:
        Validated Settings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or its content is invalid.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save the settings. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    data = _settings_to_dict(settings)

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def _settings_to_dict(settings: Settings) -> dict[str, object]:
    """Convert Settings to a dictionary for TOML serialization.

    Only non-default values are included to keep the file clean.

    Args:
        settings: The Settings to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {}

    if settings.disable_gamelist_writes:
        result["disable_gamelist_writes"] = True

    if settings.ignore_gamelist:
        result["ignore_gamelist"] = True

    if settings.folder_paths != FolderPathStyle.STEM:
        result["folder_paths"] = settings.folder_paths.value

    return result
