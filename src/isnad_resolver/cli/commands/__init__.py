"""
CLI command modules for isnad_resolver.

Each command module defines a single Typer-compatible command function.
"""

from isnad_resolver.cli.commands.lookup import lookup_command
from isnad_resolver.cli.commands.match import match_command
from isnad_resolver.cli.commands.resolve import resolve_command
from isnad_resolver.cli.commands.search import search_command
from isnad_resolver.cli.commands.stats import stats_command

__all__ = [
    "lookup_command",
    "match_command",
    "resolve_command",
    "search_command",
    "stats_command",
]
