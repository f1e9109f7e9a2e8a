from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from isnad_resolver.cli.utils import load_registry
from isnad_resolver.core.exceptions import ResolverError

console = Console()


def stats_command(
    registry: Optional[Path] = typer.Option(
        None,
        "--registry",
        "-r",
        help="Narrator database (.db) or JSON export",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Show summary statistics for a narrator registry.
    """
    try:
        reg = load_registry(registry, verbose=verbose)
    except ResolverError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)

    records = list(reg)

    table = Table(title="Narrator Registry Statistics")
    table.add_column("Field", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Narrators", str(len(records)))
    table.add_row("With full Arabic name", str(sum(1 for r in records if r.full_name_arabic)))
    table.add_row("With kunya", str(sum(1 for r in records if r.kunya)))
    table.add_row("Alternate names", str(sum(len(r.alternate_names) for r in records)))
    table.add_row("With Ibn Hajar rank", str(sum(1 for r in records if r.ibn_hajar_rank)))
    table.add_row("Without usable name", str(sum(1 for r in records if not r.has_usable_name())))

    console.print(table)
