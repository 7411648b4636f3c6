"""
Commande CLI reconcile : reconciliation d'un repertoire de serie avec TVDB.

Le repertoire est scanne dans une bibliotheque en memoire, puis la
reconciliation complete est executee (stubs, saisons et episodes virtuels).
"""

import asyncio
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from src.adapters.cli.helpers import console, with_container
from src.adapters.host.series_scanner import scan_series_directory
from src.core.entities.media import Episode, Season, Series
from src.services.reconciler import ReconciliationResult


def reconcile(
    series_dir: Annotated[
        Path,
        typer.Argument(help="Repertoire racine de la serie", file_okay=False),
    ],
    tvdb_id: Annotated[int, typer.Option("--tvdb-id", help="ID TVDB de la serie")],
    order: Annotated[
        str,
        typer.Option("--order", help="Ordre des episodes (official, dvd, absolute...)"),
    ] = "",
    language: Annotated[
        Optional[str],
        typer.Option("--language", "-l", help="Langue TVDB des titres (ex: eng, fra)"),
    ] = None,
) -> None:
    """Reconcilie une serie avec le catalogue TVDB."""
    asyncio.run(_reconcile_async(series_dir, tvdb_id, order, language))


@with_container()
async def _reconcile_async(
    container, series_dir: Path, tvdb_id: int, order: str, language: Optional[str]
) -> None:
    """Implementation async de la commande reconcile."""
    config = container.config()
    if not config.tvdb_enabled and not config.remove_all_missing_episodes_on_refresh:
        console.print("[red]Cle API TVDB non configuree (STUBSYNC_TVDB_API_KEY).[/red]")
        raise typer.Exit(code=1)

    library, series = scan_series_directory(
        series_dir.expanduser(),
        container.filename_parser(),
        tvdb_id=tvdb_id,
        library=container.library(),
        display_order=order,
        language=language or config.metadata_language,
    )
    reconciler = container.reconciler(
        library=library,
        stubs=container.stub_lifecycle_manager(library=library),
    )

    try:
        result = await reconciler.reconcile_series(series)
    finally:
        await container.tvdb_client().close()
        container.api_cache().close()

    _display_result(series, result)


def _describe(item) -> str:
    if isinstance(item, Episode):
        number = f"S{(item.parent_index_number or 0):02d}E{(item.index_number or 0):02d}"
        return f"{number} - {item.name}" if item.name else number
    if isinstance(item, Season):
        return item.name or f"Season {item.index_number}"
    return item.name


def _display_result(series: Series, result: ReconciliationResult) -> None:
    """Affiche le bilan d'une reconciliation."""
    if not result.changed:
        console.print(f"[green]{series.name}: deja a jour.[/green]")
    else:
        table = Table(title=f"Reconciliation de {series.name}", show_header=True, header_style="bold cyan")
        table.add_column("Action", style="cyan")
        table.add_column("Element")
        table.add_column("Fichier", style="dim")

        for season in result.created_seasons:
            table.add_row("[green]+ saison[/green]", _describe(season), "")
        for episode in result.created_episodes:
            action = "[green]+ virtuel[/green]" if episode.is_virtual else "[green]+ stub[/green]"
            table.add_row(action, _describe(episode), str(episode.path or ""))
        for item in result.deleted_items:
            table.add_row("[red]- supprime[/red]", _describe(item), "")

        console.print(table)

    stubs = result.stubs
    console.print(
        f"Stubs: [green]{stubs.accurate_stubs_created}[/green] precis, "
        f"[yellow]{stubs.placeholders_created}[/yellow] placeholders, "
        f"{stubs.placeholders_upgraded} mis a niveau, "
        f"{stubs.files_deleted} supprimes"
        + (f", [red]{stubs.failures} echecs[/red]" if stubs.failures else "")
    )
