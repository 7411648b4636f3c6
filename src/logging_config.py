"""
Configuration du logging de l'application via loguru.

Deux sorties :
- console : lisible, colorée, préfixée par la série en cours de réconciliation
- fichier : JSON avec rotation, seule surface d'erreur du moteur ; chaque
  ligne porte la série et l'ID TVDB dans "extra" pour suivre une série
  qui ne converge plus

Le contexte de série est posé par le service de réconciliation avec
``logger.contextualize(series=..., tvdb_id=...)`` ; hors d'une passe il
vaut NO_SERIES.
"""

import sys
from pathlib import Path

from loguru import logger

NO_SERIES = "-"

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<magenta>{extra[series]}</magenta> | "
    "<level>{message}</level>"
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/stubsync.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure les sorties console et fichier.

    Args :
        log_level : Niveau minimum sur la console (TRACE, DEBUG, INFO, WARNING, ERROR)
        log_file : Fichier JSON des passes de réconciliation
        rotation_size : Taille avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs conservés
    """
    logger.remove()
    logger.configure(extra={"series": NO_SERIES, "tvdb_id": None})

    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT, colorize=True)

    # Tous niveaux : les stubs déjà présents ne sont tracés qu'en DEBUG
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # événements publiés depuis d'autres threads
    )

    logger.debug("Logging configuré", log_file=str(log_file), console_level=log_level)
