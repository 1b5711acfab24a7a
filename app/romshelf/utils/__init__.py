"""Utility modules for romshelf.

This module exports commonly used utility functions.
"""

from romshelf.utils.formatting import (
    build_catalog_tree,
    console,
    create_catalog_table,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)

__all__ = [
    "build_catalog_tree",
    "console",
    "create_catalog_table",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
