"""Systems configuration models.

This module defines the Pydantic models representing the systems.toml
file that lists the emulated systems and their ROM directories.
"""

from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SystemConfig(BaseModel):
    """A single configured system.

    Attributes:
        name: Short identifier (e.g., "nes"). Names the per-user gamelist directory.
        fullname: Human-readable name (e.g., "Nintendo Entertainment System").
        path: ROM directory. A leading ~ is expanded.
        extensions: File extensions recognized as games (e.g., [".nes", ".zip"]).
        gamelist: Optional explicit gamelist.xml location.
    """

    model_config = ConfigDict(extra="forbid")

    name: Annotated[str, Field(min_length=1, description="System identifier")]
    fullname: Annotated[str | None, Field(description="Display name")] = None
    path: Annotated[str, Field(min_length=1, description="ROM directory")]
    extensions: Annotated[
        list[str],
        Field(default_factory=list, description="Game file extensions"),
    ]
    gamelist: Annotated[str | None, Field(description="Gamelist location override")] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that the name can be used as a directory name."""
        if "/" in v or "\\" in v or v in (".", ".."):
            msg = f"Invalid system name: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Ensure every extension starts with a dot."""
        return [ext if ext.startswith(".") else f".{ext}" for ext in v if ext]

    @property
    def root_path(self) -> Path:
        """ROM directory with ~ expanded."""
        return Path(self.path).expanduser()

    @property
    def gamelist_path(self) -> Path | None:
        """Gamelist override with ~ expanded, if any."""
        if self.gamelist is None:
            return None
        return Path(self.gamelist).expanduser()


class SystemsConfig(BaseModel):
    """All configured systems.

    Attributes:
        systems: Configured systems in file order.
    """

    model_config = ConfigDict(extra="forbid")

    systems: Annotated[
        list[SystemConfig],
        Field(default_factory=list, description="Configured systems"),
    ]

    @model_validator(mode="after")
    def validate_unique_names(self) -> "SystemsConfig":
        """Validate that no system name appears twice."""
        names = [system.name for system in self.systems]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            msg = f"Duplicate system names: {sorted(duplicates)}"
            raise ValueError(msg)
        return self

    def get(self, name: str) -> SystemConfig | None:
        """Get a system by name."""
        for system in self.systems:
            if system.name == name:
                return system
        return None
