from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from isnad_resolver.cli.utils import SQLITE_SUFFIXES, load_registry, resolve_registry_path, write_json
from isnad_resolver.core.exceptions import ResolverError
from isnad_resolver.matching.chain import ExtractedNarrator, resolve_chain
from isnad_resolver.registry.sqlite_store import SqliteNarratorStore

console = Console()


def _read_chain(path: Path) -> list[ExtractedNarrator]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    entries = data.get("narrators") if isinstance(data, dict) else data
    if not isinstance(entries, list):
        raise ValueError("chain JSON must be a list or an object with a 'narrators' list")
    for position, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict):
            raise ValueError(f"chain entry {position} must be an object, got {type(entry).__name__}")
    return [ExtractedNarrator.from_dict(e) for e in entries]


def resolve_command(
    chain: Path = typer.Argument(..., exists=True, readable=True, help="JSON list of extracted narrators"),
    registry: Optional[Path] = typer.Option(
        None,
        "--registry",
        "-r",
        help="Narrator database (.db) or JSON export",
    ),
    details: bool = typer.Option(
        False,
        "--details",
        help="Fetch scholarly opinions for matches (SQLite registries only)",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable rich logging"),
):
    """
    Resolve every narrator of an isnad against the registry.
    """
    try:
        narrators = _read_chain(chain)
    except (ValueError, TypeError) as exc:
        console.print(f"[red]Error:[/red] invalid chain file: {exc}")
        raise typer.Exit(code=1)

    try:
        reg = load_registry(registry, verbose=verbose)
        if details:
            db_path = resolve_registry_path(registry)
            if db_path.suffix.lower() not in SQLITE_SUFFIXES:
                console.print("[red]Error:[/red] --details needs a SQLite registry")
                raise typer.Exit(code=1)
            with SqliteNarratorStore(db_path) as store:
                resolution = resolve_chain(reg, narrators, detail_lookup=store.get_narrator_detail)
        else:
            resolution = resolve_chain(reg, narrators)
    except ResolverError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1)

    if as_json:
        write_json(resolution.to_dict())
        return

    table = Table(title="Chain resolution")
    table.add_column("#", justify="right")
    table.add_column("Extracted name")
    table.add_column("Narrator ID", style="bold")
    table.add_column("Confidence", justify="right")
    table.add_column("Matched name")

    for r in resolution.results:
        if r.matched and r.match is not None:
            table.add_row(
                str(r.narrator.number),
                r.narrator.arabic_name,
                r.match.narrator_id,
                f"{r.match.confidence:.2f}",
                r.match.matched_name,
            )
        else:
            table.add_row(
                str(r.narrator.number),
                r.narrator.arabic_name,
                "[dim]skipped[/dim]" if r.skipped else "[yellow]unmatched[/yellow]",
                "",
                "",
            )

    console.print(table)
    console.print(
        f"Matched {resolution.matched} of {len(resolution.results)} "
        f"({resolution.unmatched} unmatched)"
    )
