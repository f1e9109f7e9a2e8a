from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from isnad_resolver.cli.utils import load_registry, write_json
from isnad_resolver.core.exceptions import ResolverError
from isnad_resolver.search.engine import search_narrators
from isnad_resolver.search.filters import SearchFilters

console = Console()


def search_command(
    query: str = typer.Argument(..., help="Search terms (Arabic or English)"),
    reliability: Optional[List[str]] = typer.Option(
        None,
        "--reliability",
        help="sahaba | thiqah | saduq | daif (repeatable)",
    ),
    generation: Optional[List[str]] = typer.Option(
        None,
        "--generation",
        help="Taqrib category text; 'a|b' accepts either (repeatable)",
    ),
    residence: Optional[List[str]] = typer.Option(
        None,
        "--residence",
        help="Place of residence text; 'a|b' accepts either (repeatable)",
    ),
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
    Search the narrator registry with relevance ranking.
    """
    filters = SearchFilters.build(reliability, generation, residence)

    try:
        reg = load_registry(registry, verbose=verbose)
        page = search_narrators(reg, query, filters=filters, limit=limit, offset=offset)
    except ResolverError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)

    if as_json:
        write_json(page.to_dict())
        return

    table = Table(title=f"Search: {query} ({page.total} found)")
    table.add_column("ID", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Arabic")
    table.add_column("English")
    table.add_column("Kunya")
    table.add_column("Rank")

    for hit in page.results:
        rec = hit.record
        table.add_row(
            rec.id,
            f"{hit.score:.0f}",
            rec.primary_arabic_name,
            rec.primary_english_name,
            rec.kunya or "",
            rec.ibn_hajar_rank or rec.taqrib_category or "",
        )

    console.print(table)
