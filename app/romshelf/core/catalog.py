"""Catalog building.

Turns a configured system into a populated System: scan the ROM
directory, then overlay the metadata stored in its gamelist.
"""

import logging
from dataclasses import dataclass

from romshelf.catalog.scanner import GameScanner
from romshelf.catalog.system import System
from romshelf.core.settings import Settings
from romshelf.gamelist.reader import GamelistLoadResult, load_gamelist
from romshelf.models.systems import SystemConfig

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CatalogBuild:
    """A built catalog and how it was obtained.

    Attributes:
        system: The populated system.
        scanned: Number of games found by the directory scan.
        load: Result of loading the gamelist.
    """

    system: System
    scanned: int
    load: GamelistLoadResult


def system_from_config(config: SystemConfig) -> System:
    """Create an empty System from its configuration."""
    return System(
        config.name,
        config.root_path,
        full_name=config.fullname,
        extensions=tuple(config.extensions),
        gamelist=config.gamelist_path,
    )


def build_catalog(
    config: SystemConfig,
    settings: Settings | None = None,
    *,
    scan: bool = True,
) -> CatalogBuild:
    """Build the catalog of a configured system.

    Args:
        config: System configuration.
        settings: Runtime settings. Defaults to Settings().
        scan: If False, the tree only holds what the gamelist lists.

    Returns:
        CatalogBuild with the populated system.
    """
    settings = settings or Settings()
    system = system_from_config(config)

    scanned = GameScanner(system).populate() if scan else 0
    logger.debug("Scanned %d games for %s", scanned, system.name)

    load = load_gamelist(system, settings)
    return CatalogBuild(system=system, scanned=scanned, load=load)
