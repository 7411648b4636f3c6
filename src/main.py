"""
Point d'entrée CLI de stubsync.

Configure le logging et monte les commandes CLI.
"""

from typing import Annotated

import typer
from loguru import logger

from .adapters.cli.commands import (
    placeholders_app,
    reconcile,
    runtime_app,
    stub_app,
)
from .adapters.cli.helpers import console, with_container
from .logging_config import configure_logging

__version__ = "0.1.0"

app = typer.Typer(
    name="stubsync",
    help="Réconciliation des épisodes manquants et fichiers stubs",
)


def _log_level(verbose: int, quiet: bool, default: str) -> str:
    if quiet:
        return "ERROR"
    if verbose >= 2:
        return "TRACE"
    if verbose == 1:
        return "DEBUG"
    return default


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Augmenter la verbosite (-v, -vv)"
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Mode silencieux (erreurs uniquement)"),
    ] = False,
) -> None:
    """stubsync - Episodes manquants et fichiers stubs."""
    _configure(verbose, quiet)


@with_container()
def _configure(container, verbose: int, quiet: bool) -> None:
    settings = container.config()
    configure_logging(
        log_level=_log_level(verbose, quiet, settings.log_level),
        log_file=settings.log_file,
        rotation_size=settings.log_rotation_size,
        retention_count=settings.log_retention_count,
    )


# Commandes
app.command()(reconcile)
app.add_typer(runtime_app, name="runtime")
app.add_typer(placeholders_app, name="placeholders")
app.add_typer(stub_app, name="stub")


@app.command()
def info() -> None:
    """Affiche la configuration actuelle."""
    _info()


@with_container()
def _info(container) -> None:
    config = container.config()
    logger.info("Configuration stubsync")
    console.print(f"Données : {config.data_dir}")
    console.print(f"Registre des durées : {config.runtime_store_path}")
    console.print(f"Registre des placeholders : {config.placeholder_store_path}")
    console.print(f"Catalogue STUBS : {config.stubs_dir}")
    console.print(f"Cache API : {config.cache_dir}")
    console.print(f"API TVDB : {'activée' if config.tvdb_enabled else 'désactivée'}")
    console.print(f"Spéciaux manquants : {'oui' if config.include_missing_specials else 'non'}")
    console.print(
        f"Suppression totale au rafraîchissement : "
        f"{'oui' if config.remove_all_missing_episodes_on_refresh else 'non'}"
    )
    console.print(
        f"Fichiers stubs : {'oui' if config.create_stub_files_for_missing_episodes else 'non'}"
    )
    console.print(f"Niveau de log : {config.log_level}")


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"stubsync v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
