"""Unit tests for systems configuration I/O."""

from pathlib import Path

import pytest
import typer
from romshelf.core.systems import (
    SystemsConfigNotFoundError,
    SystemsConfigParseError,
    SystemsConfigValidationError,
    load_systems_config,
    require_systems,
    save_systems_config,
)
from romshelf.models.systems import SystemConfig, SystemsConfig

VALID_SYSTEMS = """
[[systems]]
name = "nes"
fullname = "Nintendo Entertainment System"
path = "~/roms/nes"
extensions = [".nes", "zip"]

[[systems]]
name = "snes"
path = "/roms/snes"
gamelist = "/srv/gamelists/snes.xml"
"""


class TestSystemConfig:
    """Tests for SystemConfig model."""

    def test_extensions_normalized(self) -> None:
        """Extensions get a leading dot; empty ones are dropped."""
        config = SystemConfig(name="nes", path="/roms/nes", extensions=["nes", ".zip", ""])

        assert config.extensions == [".nes", ".zip"]

    @pytest.mark.parametrize("name", ["a/b", "..", ".", "a\\b", ""])
    def test_invalid_names(self, name: str) -> None:
        """Names must be usable as directory names."""
        with pytest.raises(ValueError):
            SystemConfig(name=name, path="/roms")

    def test_paths_expand_user(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """A leading ~ is expanded."""
        monkeypatch.setenv("HOME", str(tmp_path))
        config = SystemConfig(name="nes", path="~/roms", gamelist="~/gl.xml")

        assert config.root_path == tmp_path / "roms"
        assert config.gamelist_path == tmp_path / "gl.xml"

    def test_no_gamelist_override(self) -> None:
        """gamelist_path is None without an override."""
        assert SystemConfig(name="nes", path="/roms").gamelist_path is None


class TestSystemsConfig:
    """Tests for SystemsConfig model."""

    def test_duplicate_names_rejected(self) -> None:
        """System names must be unique."""
        with pytest.raises(ValueError, match="Duplicate system names"):
            SystemsConfig(
                systems=[
                    SystemConfig(name="nes", path="/a"),
                    SystemConfig(name="nes", path="/b"),
                ]
            )

    def test_get(self) -> None:
        """get finds systems by name."""
        config = SystemsConfig(systems=[SystemConfig(name="nes", path="/a")])

        assert config.get("nes") is config.systems[0]
        assert config.get("snes") is None


class TestLoadSystemsConfig:
    """Tests for load_systems_config function."""

    def test_load(self, tmp_path: Path) -> None:
        """A valid file is loaded in order."""
        path = tmp_path / "systems.toml"
        path.write_text(VALID_SYSTEMS)

        config = load_systems_config(path)

        assert [system.name for system in config.systems] == ["nes", "snes"]
        assert config.systems[0].extensions == [".nes", ".zip"]
        assert config.systems[1].gamelist == "/srv/gamelists/snes.xml"

    def test_not_found(self, tmp_path: Path) -> None:
        """A missing file raises SystemsConfigNotFoundError."""
        with pytest.raises(SystemsConfigNotFoundError):
            load_systems_config(tmp_path / "systems.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Invalid TOML raises SystemsConfigParseError."""
        path = tmp_path / "systems.toml"
        path.write_text("[[systems]\n")

        with pytest.raises(SystemsConfigParseError):
            load_systems_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise SystemsConfigValidationError."""
        path = tmp_path / "systems.toml"
        path.write_text('[[systems]]\nname = "nes"\n')

        with pytest.raises(SystemsConfigValidationError):
            load_systems_config(path)


class TestSaveSystemsConfig:
    """Tests for save_systems_config function."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """Saved systems load back unchanged."""
        source = tmp_path / "systems.toml"
        source.write_text(VALID_SYSTEMS)
        config = load_systems_config(source)
        target = tmp_path / "out" / "systems.toml"

        save_systems_config(config, target)

        assert load_systems_config(target) == config

    def test_optional_fields_omitted(self, tmp_path: Path) -> None:
        """Unset optional fields are not written."""
        path = tmp_path / "systems.toml"

        save_systems_config(SystemsConfig(systems=[SystemConfig(name="nes", path="/a")]), path)

        text = path.read_text()
        assert "fullname" not in text
        assert "gamelist" not in text


class TestRequireSystems:
    """Tests for require_systems function."""

    def test_missing_file_exits(self, tmp_path: Path) -> None:
        """A missing file exits with code 1."""
        with pytest.raises(typer.Exit) as exc_info:
            require_systems(tmp_path / "systems.toml")

        assert exc_info.value.exit_code == 1

    def test_loads_default_location(self, isolated_config: Path) -> None:
        """The default systems file is read."""
        isolated_config.mkdir(parents=True)
        (isolated_config / "systems.toml").write_text(VALID_SYSTEMS)

        assert len(require_systems().systems) == 2
