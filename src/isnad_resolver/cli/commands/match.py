from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from isnad_resolver.cli.utils import load_registry, write_json
from isnad_resolver.core.exceptions import ResolverError
from isnad_resolver.matching.matcher import find_matches

console = Console()


def match_command(
    name: str = typer.Argument(..., help="Narrator name (Arabic or English)"),
    english: Optional[str] = typer.Option(
        None,
        "--english",
        "-e",
        help="English name to match alongside the Arabic one",
    ),
    registry: Optional[Path] = typer.Option(
        None,
        "--registry",
        "-r",
        help="Narrator database (.db) or JSON export",
    ),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Maximum candidates to show"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable rich logging"),
):
    """
    Rank registry narrators against a free-text name.
    """
    try:
        reg = load_registry(registry, verbose=verbose)
    except ResolverError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)

    matches = find_matches(reg, arabic_query=name, english_query=english)[:limit]

    if as_json:
        write_json({
            "query": name,
            "matches": [
                {
                    "narrator_id": m.narrator_id,
                    "confidence": round(m.confidence, 4),
                    "matched_name": m.matched_name,
                    "matched_field": m.matched_field,
                    "primary_arabic_name": m.record.primary_arabic_name,
                    "primary_english_name": m.record.primary_english_name,
                }
                for m in matches
            ],
        })
        return

    if not matches:
        console.print("No matching narrators.")
        return

    table = Table(title=f"Matches for {name}")
    table.add_column("ID", style="bold")
    table.add_column("Confidence", justify="right")
    table.add_column("Matched name")
    table.add_column("Field")
    table.add_column("English")

    for m in matches:
        table.add_row(
            m.narrator_id,
            f"{m.confidence:.2f}",
            m.matched_name,
            m.matched_field,
            m.record.primary_english_name,
        )

    console.print(table)
