from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from isnad_resolver.cli.utils import load_registry, write_json
from isnad_resolver.core.exceptions import ResolverError
from isnad_resolver.search.engine import search_by_fields

console = Console()


def lookup_command(
    arabic: Optional[str] = typer.Option(None, "--arabic", "-a", help="Part of the primary or full Arabic name"),
    english: Optional[str] = typer.Option(None, "--english", "-e", help="Part of the primary or full English name"),
    death_year: Optional[int] = typer.Option(None, "--death-year", help="Death year (AH)"),
    registry: Optional[Path] = typer.Option(
        None,
        "--registry",
        "-r",
        help="Narrator database (.db) or JSON export",
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1),
    offset: int = typer.Option(0, "--offset", min=0),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable rich logging"),
):
    """
    Look narrators up by name fields or death year, ordered by Arabic name.
    """
    if not (arabic or english or death_year is not None):
        console.print("[red]Error:[/red] give at least one of --arabic, --english, --death-year")
        raise typer.Exit(code=1)

    try:
        reg = load_registry(registry, verbose=verbose)
    except ResolverError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)

    page = search_by_fields(
        reg,
        arabic_name=arabic,
        english_name=english,
        death_year_ah=death_year,
        limit=limit,
        offset=offset,
    )

    if as_json:
        write_json(page.to_dict())
        return

    table = Table(title=f"Lookup ({page.total} found)")
    table.add_column("ID", style="bold")
    table.add_column("Arabic")
    table.add_column("English")
    table.add_column("Death (AH)", justify="right")

    for hit in page.results:
        rec = hit.record
        table.add_row(
            rec.id,
            rec.primary_arabic_name,
            rec.primary_english_name,
            str(rec.death_year_ah) if rec.death_year_ah is not None else "",
        )

    console.print(table)
