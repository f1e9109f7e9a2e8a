"""
CLI package for isnad_resolver.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from isnad_resolver.cli.app import app, main

__all__ = [
    "app",
    "main",
]
