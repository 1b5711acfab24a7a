"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from romshelf.catalog.system import System
from romshelf.core.systems import save_systems_config
from romshelf.models.systems import SystemConfig, SystemsConfig

GAMELIST_HEADER = "<?xml version='1.0' encoding='utf-8'?>\n"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory for every test."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "romshelf"


@pytest.fixture
def rom_root(tmp_path: Path) -> Path:
    """Create a small NES ROM directory.

    Layout::

        roms/nes/
            a.nes
            b.nes
            Super Mario Bros. (USA).nes
            readme.txt
            empty/
            hacks/
                hack1.nes
                deep/
                    deep1.nes
    """
    root = tmp_path / "roms" / "nes"
    (root / "hacks" / "deep").mkdir(parents=True)
    (root / "empty").mkdir()
    for name in ("a.nes", "b.nes", "Super Mario Bros. (USA).nes", "readme.txt"):
        (root / name).write_bytes(b"NES\x1a")
    (root / "hacks" / "hack1.nes").write_bytes(b"NES\x1a")
    (root / "hacks" / "deep" / "deep1.nes").write_bytes(b"NES\x1a")
    return root


@pytest.fixture
def gamelist_file(tmp_path: Path) -> Path:
    """Location of the gamelist used by the ``nes`` fixture system."""
    return tmp_path / "gamelists" / "nes" / "gamelist.xml"


@pytest.fixture
def make_system(rom_root: Path, gamelist_file: Path) -> Callable[..., System]:
    """Factory for a System over ``rom_root`` with an explicit gamelist path."""

    def _make(**kwargs: object) -> System:
        options: dict[str, object] = {
            "full_name": "Nintendo Entertainment System",
            "extensions": (".nes",),
            "gamelist": gamelist_file,
        }
        options.update(kwargs)
        return System("nes", rom_root, **options)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def write_gamelist(gamelist_file: Path) -> Callable[[str], Path]:
    """Write a gamelist body (the <gameList> element) to the fixture location."""

    def _write(body: str) -> Path:
        gamelist_file.parent.mkdir(parents=True, exist_ok=True)
        gamelist_file.write_text(GAMELIST_HEADER + body, encoding="utf-8")
        return gamelist_file

    return _write


@pytest.fixture
def systems_file(isolated_config: Path, rom_root: Path, gamelist_file: Path) -> Path:
    """Write a systems.toml configuring the ``nes`` fixture system."""
    config = SystemsConfig(
        systems=[
            SystemConfig(
                name="nes",
                fullname="Nintendo Entertainment System",
                path=str(rom_root),
                extensions=[".nes"],
                gamelist=str(gamelist_file),
            )
        ]
    )
    return save_systems_config(config, isolated_config / "systems.toml")


@pytest.fixture
def settings_file(isolated_config: Path) -> Callable[[str], Path]:
    """Write settings.toml content to the isolated config directory."""

    def _write(content: str) -> Path:
        isolated_config.mkdir(parents=True, exist_ok=True)
        path = isolated_config / "settings.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
