"""
Utilities package for fixedcol.

Shared helpers for logging and other cross-cutting concerns. Keep this package
lightweight and free of codec logic.
"""

from fixedcol.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
