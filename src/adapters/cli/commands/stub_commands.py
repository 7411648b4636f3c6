"""
Commandes CLI du catalogue de stubs.
"""

from typing import Annotated

import typer

from src.adapters.cli.helpers import console, with_container
from src.services.stub_resolver import clamp_runtime, parse_stub_minutes


stub_app = typer.Typer(
    name="stub",
    help="Catalogue des fichiers stubs",
    rich_markup_mode="rich",
)


@stub_app.command("find")
def stub_find(
    minutes: Annotated[int, typer.Argument(help="Duree cible en minutes")],
) -> None:
    """Affiche le stub qui serait retenu pour une duree."""
    _stub_find(minutes)


@with_container()
def _stub_find(container, minutes: int) -> None:
    resolver = container.stub_resolver()
    stub_file = resolver.find_closest_stub(minutes)

    if stub_file is None:
        console.print(f"[red]Aucun stub exploitable dans {resolver.stubs_dir}[/red]")
        raise typer.Exit(code=1)

    target = clamp_runtime(minutes)
    if target != minutes:
        console.print(f"[dim]Duree ramenee a {target} min[/dim]")
    console.print(
        f"{minutes} min -> [green]{stub_file.name}[/green] "
        f"({parse_stub_minutes(stub_file)} min)"
    )
