"""romshelf - ROM catalogs synchronized with gamelist.xml metadata."""

__version__ = "0.1.0"
