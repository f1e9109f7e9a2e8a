from __future__ import annotations

import typer
from rich.console import Console

from isnad_resolver.cli.commands.lookup import lookup_command
from isnad_resolver.cli.commands.match import match_command
from isnad_resolver.cli.commands.resolve import resolve_command
from isnad_resolver.cli.commands.search import search_command
from isnad_resolver.cli.commands.stats import stats_command

app = typer.Typer(
    name="isnad-resolver",
    help="Hadith narrator identity resolution and registry search",
    add_completion=False,
)

console = Console()

app.command("match")(match_command)
app.command("resolve")(resolve_command)
app.command("search")(search_command)
app.command("lookup")(lookup_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()
