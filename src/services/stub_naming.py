"""
Nommage des repertoires de saison et des fichiers stubs.

Format des fichiers : S{saison:02}E{episode:02} - {TitreNettoye}{.mp4|.mkv}
Les repertoires de saison suivent la meme convention que les saisons
virtuelles (nom localise "Season N", nom d'affichage pour la saison 0).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pathvalidate import sanitize_filename

from src.core.ports.library import ILocalization, LibraryOptions
from src.utils.constants import (
    ACCURATE_STUB_EXTENSION,
    APPROXIMATE_STUB_EXTENSION,
    DEFAULT_EPISODE_TITLE,
    DEFAULT_SEASON_ZERO_NAME,
    SEASON_NAME_KEY,
)


@dataclass(frozen=True)
class StubPaths:
    """Les deux chemins candidats d'un episode (placeholder et stub precis)."""

    approximate: Path
    accurate: Path


def sanitize_episode_title(title: Optional[str]) -> str:
    """
    Nettoie un titre d'episode pour l'utiliser comme nom de fichier.

    Transformations appliquées :
    - Caractères invalides dans un nom de fichier -> underscore
    - Suppression des points et espaces finaux
    - Repli sur "Episode" si le résultat est vide

    Args:
        title: Titre brut de l'épisode (peut être None).

    Returns:
        Titre valide pour un nom de fichier.
    """
    if not title or not title.strip():
        return DEFAULT_EPISODE_TITLE

    text = sanitize_filename(title, platform="universal", replacement_text="_")
    text = text.rstrip(". ")

    if not text.strip():
        return DEFAULT_EPISODE_TITLE
    return text


def season_folder_name(
    season_number: int,
    options: LibraryOptions,
    localization: ILocalization,
) -> str:
    """
    Nom d'une saison (affichage et repertoire).

    Args:
        season_number: Numero de saison (0 = speciaux)
        options: Options de bibliotheque de la serie
        localization: Source de la chaine "Season {0}"
    """
    if season_number == 0:
        return options.season_zero_display_name or DEFAULT_SEASON_ZERO_NAME
    template = localization.get_localized_string(SEASON_NAME_KEY)
    return template.format(season_number)


def stub_base_name(season_number: int, episode_number: int, title: Optional[str]) -> str:
    """Nom de base (sans extension) du stub d'un episode."""
    return (
        f"S{season_number:02d}E{episode_number:02d} - {sanitize_episode_title(title)}"
    )


def stub_paths(season_dir: Path, base_name: str) -> StubPaths:
    """Chemins .mp4 (approximatif) et .mkv (precis) d'un episode."""
    return StubPaths(
        approximate=season_dir / f"{base_name}{APPROXIMATE_STUB_EXTENSION}",
        accurate=season_dir / f"{base_name}{ACCURATE_STUB_EXTENSION}",
    )
