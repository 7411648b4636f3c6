"""
Commandes CLI de consultation des registres (durees, placeholders).
"""

from typing import Annotated, Optional

import typer
from rich.table import Table

from src.adapters.cli.helpers import console, with_container


runtime_app = typer.Typer(
    name="runtime",
    help="Registre des durees moyennes d'episode par serie",
    rich_markup_mode="rich",
)

placeholders_app = typer.Typer(
    name="placeholders",
    help="Registre des placeholders en attente de mise a niveau",
    rich_markup_mode="rich",
)


@runtime_app.command("get")
def runtime_get(
    series_id: Annotated[int, typer.Argument(help="ID TVDB de la serie")],
) -> None:
    """Affiche la duree moyenne connue d'une serie."""
    _runtime_get(series_id)


@with_container()
def _runtime_get(container, series_id: int) -> None:
    runtime = container.runtime_repository().get_series_runtime(series_id)
    if runtime is None:
        console.print(f"[yellow]Duree inconnue pour la serie {series_id}[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"Serie {series_id}: [green]{runtime} min[/green]")


@runtime_app.command("set")
def runtime_set(
    series_id: Annotated[int, typer.Argument(help="ID TVDB de la serie")],
    minutes: Annotated[int, typer.Argument(help="Duree moyenne en minutes", min=1)],
) -> None:
    """Enregistre (ou remplace) la duree moyenne d'une serie."""
    _runtime_set(series_id, minutes)


@with_container()
def _runtime_set(container, series_id: int, minutes: int) -> None:
    container.runtime_repository().set_series_runtime(series_id, minutes)
    console.print(f"Serie {series_id}: duree fixee a [green]{minutes} min[/green]")


@placeholders_app.command("list")
def placeholders_list(
    series: Annotated[
        Optional[int],
        typer.Option("--series", "-s", help="Filtrer sur un ID TVDB de serie"),
    ] = None,
) -> None:
    """Liste les placeholders suivis."""
    _placeholders_list(series)


@with_container()
def _placeholders_list(container, series: Optional[int]) -> None:
    repository = container.placeholder_repository()
    entries = repository.list_all() if series is None else repository.list_for_series(series)

    if not entries:
        console.print("[dim]Aucun placeholder suivi.[/dim]")
        return

    table = Table(title="Placeholders suivis", show_header=True, header_style="bold cyan")
    table.add_column("Serie", justify="right")
    table.add_column("Episode", style="cyan")
    table.add_column("Fichier", style="dim")

    for entry in entries:
        table.add_row(
            str(entry.series_id),
            f"S{entry.season_number:02d}E{entry.episode_number:02d}",
            entry.file_path,
        )

    console.print(table)
    console.print(f"[bold]{len(entries)}[/bold] placeholder(s)")
