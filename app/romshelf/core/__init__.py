"""Core services: paths, settings, systems configuration and catalog building."""
