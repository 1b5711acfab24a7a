"""Data models for romshelf.

This module exports the configuration models used throughout the application.
"""

from romshelf.models.systems import SystemConfig, SystemsConfig

__all__ = [
    "SystemConfig",
    "SystemsConfig",
]
