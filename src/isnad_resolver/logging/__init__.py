"""
Logging package for ``isnad_resolver``.

Use ``get_logger("<module>")`` in modules to inherit shared handlers and write
to a module-specific log file.
"""

from .logger import LogSettings, get_logger

__all__ = [
    "LogSettings",
    "get_logger",
]
