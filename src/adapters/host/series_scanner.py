"""
Construction d'un arbre de bibliotheque depuis le repertoire d'une serie.

Structure attendue :
    <serie>/
        Season 1/S01E01 - Pilot.mkv
        Season 1/Show.S01E02E03.720p.mkv   (multi-episode)
        Specials/S00E01 - Making of.mp4

Les saisons sont reconnues par le numero dans le nom du repertoire, ou par
le nom d'affichage de la saison 0. Les episodes sont parses avec guessit.
"""

import re
from pathlib import Path
from typing import Optional

from loguru import logger

from src.adapters.host.memory_library import InMemoryLibrary
from src.core.entities.media import Episode, ItemType, Season, Series
from src.core.ports.parser import IFilenameParser
from src.utils.constants import DEFAULT_SEASON_ZERO_NAME, VIDEO_EXTENSIONS

_SEASON_NUMBER_PATTERN = re.compile(r"(\d+)")


def parse_season_folder(folder_name: str, season_zero_name: str = DEFAULT_SEASON_ZERO_NAME) -> Optional[int]:
    """
    Extrait le numero de saison d'un nom de repertoire.

    Exemples : "Season 2" -> 2, "Saison 03" -> 3, "Specials" -> 0, "Extras" -> None
    """
    name = folder_name.strip()
    if name.lower() in (season_zero_name.lower(), DEFAULT_SEASON_ZERO_NAME.lower()):
        return 0
    match = _SEASON_NUMBER_PATTERN.search(name)
    if match is None:
        return None
    return int(match.group(1))


def scan_series_directory(
    series_dir: Path,
    parser: IFilenameParser,
    tvdb_id: Optional[int] = None,
    library: Optional[InMemoryLibrary] = None,
    name: Optional[str] = None,
    display_order: str = "",
    language: str = "eng",
) -> tuple[InMemoryLibrary, Series]:
    """
    Scanne le repertoire d'une serie et alimente une bibliotheque en memoire.

    Args:
        series_dir: Repertoire racine de la serie
        parser: Parser de noms de fichiers
        tvdb_id: ID TVDB de la serie
        library: Bibliotheque a alimenter (nouvelle si None)
        name: Nom de la serie (nom du repertoire par defaut)
        display_order: Schema d'ordre des episodes
        language: Langue des metadonnees

    Returns:
        Tuple (bibliotheque, serie)
    """
    library = library or InMemoryLibrary()
    series_name = name or series_dir.name
    series = Series(
        id=library.new_item_id(str(series_dir), ItemType.SERIES),
        name=series_name,
        path=series_dir,
        tvdb_id=tvdb_id,
        display_order=display_order,
        preferred_language=language,
    )
    library.add_series(series)

    if not series_dir.is_dir():
        logger.warning(f"Repertoire de serie introuvable: {series_dir}")
        return library, series

    zero_name = library.get_library_options(series).season_zero_display_name
    seasons: dict[int, Season] = {}

    for folder in sorted(p for p in series_dir.iterdir() if p.is_dir()):
        season_number = parse_season_folder(folder.name, zero_name)
        if season_number is None:
            logger.debug(f"Repertoire ignore (pas une saison): {folder.name}")
            continue
        season = seasons.get(season_number)
        if season is None:
            season = _add_season(library, series, season_number, folder.name, folder)
            seasons[season_number] = season
        for file_path in sorted(folder.iterdir()):
            _add_episode_file(library, parser, season, file_path)

    # Fichiers poses directement a la racine de la serie
    for file_path in sorted(p for p in series_dir.iterdir() if p.is_file()):
        if file_path.suffix.lower() not in VIDEO_EXTENSIONS:
            continue
        parsed = parser.parse(file_path.name)
        if parsed.season is None:
            continue
        season = seasons.get(parsed.season)
        if season is None:
            season = _add_season(library, series, parsed.season, f"Season {parsed.season}", None)
            seasons[parsed.season] = season
        _add_episode_file(library, parser, season, file_path)

    logger.debug(
        f"Serie {series_name} scannee: {len(seasons)} saisons, "
        f"{sum(len(library.get_episodes(s)) for s in seasons.values())} episodes"
    )
    return library, series


def _add_season(
    library: InMemoryLibrary,
    series: Series,
    season_number: int,
    season_name: str,
    folder: Optional[Path],
) -> Season:
    season = Season(
        id=library.new_item_id(f"{series.id}{season_number}{season_name}", ItemType.SEASON),
        series=series,
        index_number=season_number,
        name=season_name,
        path=folder,
    )
    library.add_season(series, season)
    return season


def _add_episode_file(
    library: InMemoryLibrary,
    parser: IFilenameParser,
    season: Season,
    file_path: Path,
) -> None:
    if not file_path.is_file() or file_path.suffix.lower() not in VIDEO_EXTENSIONS:
        return

    parsed = parser.parse(file_path.name)
    if not parsed.is_episode:
        logger.debug(f"Numero d'episode introuvable: {file_path.name}")
        return

    episode = Episode(
        id=library.new_item_id(str(file_path), ItemType.EPISODE),
        series=season.series,
        season=season,
        name=parsed.episode_title or file_path.stem,
        index_number=parsed.episode,
        index_number_end=parsed.episode_end,
        parent_index_number=season.index_number,
        path=file_path,
    )
    library.add_episode(season, episode)
