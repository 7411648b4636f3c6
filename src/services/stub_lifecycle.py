"""
Cycle de vie des fichiers stubs d'une serie.

Deux niveaux de stubs :
- placeholder approximatif (.mp4, stub de 30 min) tant que la duree de la
  serie est inconnue, suivi dans le registre des placeholders ;
- stub precis (.mkv, stub le plus proche de la duree connue).

Une passe se deroule en deux temps : mise a niveau des placeholders suivis
(etape A), puis provisionnement episode par episode (etape B). Chaque
operation fichier est isolee : un echec sur un episode est journalise et
n'interrompt pas les suivants.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from loguru import logger

from src.core.entities.media import Season, Series
from src.core.ports.api_clients import EpisodeRecord
from src.core.ports.file_system import IFileSystem
from src.core.ports.library import ILibraryTree, ILocalization
from src.core.ports.repositories import IPlaceholderRepository, IRuntimeRepository
from src.services.stub_naming import (
    StubPaths,
    season_folder_name,
    stub_base_name,
    stub_paths,
)
from src.services.stub_resolver import StubResolver
from src.utils.constants import (
    ACCURATE_STUB_EXTENSION,
    DEFAULT_PLACEHOLDER_MINUTES,
    PRESENT_FILE_MIN_BYTES,
    VALID_ACCURATE_STUB_MIN_BYTES,
)


@dataclass
class StubLifecycleStats:
    """Compteurs d'une passe de gestion des stubs."""

    placeholders_upgraded: int = 0
    placeholders_dropped: int = 0
    placeholders_created: int = 0
    accurate_stubs_created: int = 0
    files_deleted: int = 0
    failures: int = 0


class StubLifecycleManager:
    """
    Gestion des fichiers stubs d'une serie (creation, mise a niveau, nettoyage).

    Le registre des placeholders et le systeme de fichiers sont deux sources
    de verite : un placeholder suivi dont le fichier a disparu est oublie,
    un placeholder present sur disque mais non suivi est traite comme orphelin.
    """

    def __init__(
        self,
        file_system: IFileSystem,
        resolver: StubResolver,
        runtimes: IRuntimeRepository,
        placeholders: IPlaceholderRepository,
        library: ILibraryTree,
        localization: ILocalization,
    ) -> None:
        self._fs = file_system
        self._resolver = resolver
        self._runtimes = runtimes
        self._placeholders = placeholders
        self._library = library
        self._localization = localization

    # ------------------------------------------------------------------
    # Chemins
    # ------------------------------------------------------------------

    def season_directory(self, series: Series, season_number: int) -> Optional[Path]:
        """Repertoire d'une saison sous la racine de la serie."""
        if series.path is None:
            return None
        options = self._library.get_library_options(series)
        return series.path / season_folder_name(season_number, options, self._localization)

    def expected_stub_paths(
        self, record: EpisodeRecord, series: Series
    ) -> Optional[StubPaths]:
        """Chemins attendus des stubs d'un episode, sans rien creer."""
        if record.season_number is None or record.number is None:
            return None
        season_dir = self.season_directory(series, record.season_number)
        if season_dir is None:
            return None
        base_name = stub_base_name(record.season_number, record.number, record.name)
        return stub_paths(season_dir, base_name)

    def find_existing_stub(self, record: EpisodeRecord, series: Series) -> Optional[Path]:
        """
        Retourne le stub present sur disque pour un episode.

        Le placeholder (.mp4) est le chemin attendu par convention ; le stub
        precis (.mkv) est accepte a defaut.
        """
        paths = self.expected_stub_paths(record, series)
        if paths is None:
            return None
        for candidate in (paths.approximate, paths.accurate):
            if self._fs.exists(candidate):
                return candidate
        return None

    def _known_runtime(self, tvdb_id: int) -> Optional[int]:
        runtime = self._runtimes.get_series_runtime(tvdb_id)
        if runtime is None or runtime <= 0:
            return None
        return runtime

    # ------------------------------------------------------------------
    # Etape A : mise a niveau des placeholders suivis
    # ------------------------------------------------------------------

    def upgrade_placeholders(
        self, series: Series, stats: Optional[StubLifecycleStats] = None
    ) -> StubLifecycleStats:
        """
        Remplace les placeholders suivis par des stubs precis si la duree est connue.

        Le placeholder n'est supprime (et oublie) qu'une fois la copie du
        stub precis reussie : un echec laisse l'etat tel quel pour la passe suivante.
        """
        stats = stats or StubLifecycleStats()
        if not series.has_tvdb_id():
            return stats

        tvdb_id = series.tvdb_id
        entries = self._placeholders.list_for_series(tvdb_id)
        if not entries:
            return stats

        logger.debug(
            f"Verification de {len(entries)} placeholders pour la serie {series.name}"
        )

        runtime = self._known_runtime(tvdb_id)
        for entry in entries:
            placeholder_path = Path(entry.file_path)
            if not self._fs.exists(placeholder_path):
                self._placeholders.remove(
                    entry.series_id, entry.season_number, entry.episode_number
                )
                stats.placeholders_dropped += 1
                continue

            if runtime is None:
                # Duree encore inconnue : le placeholder reste en attente
                continue

            label = f"S{entry.season_number:02d}E{entry.episode_number:02d}"
            stub_file = self._resolver.find_closest_stub(runtime)
            if stub_file is None:
                logger.warning(
                    f"Aucun stub pour {series.name} {label} ({runtime} min), placeholder conserve"
                )
                stats.failures += 1
                continue

            accurate_path = placeholder_path.with_suffix(ACCURATE_STUB_EXTENSION)
            if not self._fs.copy(stub_file, accurate_path):
                logger.error(f"Mise a niveau echouee pour {series.name} {label}")
                stats.failures += 1
                continue

            if self._fs.delete(placeholder_path):
                stats.files_deleted += 1
            self._placeholders.remove(
                entry.series_id, entry.season_number, entry.episode_number
            )
            stats.placeholders_upgraded += 1
            logger.info(
                f"Placeholder mis a niveau pour {series.name} {label} ({runtime} min)"
            )

        if stats.placeholders_upgraded:
            logger.info(
                f"{stats.placeholders_upgraded} placeholders mis a niveau pour {series.name}"
            )
        return stats

    # ------------------------------------------------------------------
    # Etape B : provisionnement episode par episode
    # ------------------------------------------------------------------

    async def sync_series_stubs(
        self,
        series: Series,
        episodes: list[EpisodeRecord],
        existing_seasons: list[Season],
        season_numbers: list[int],
    ) -> StubLifecycleStats:
        """
        Cree ou met a jour les stubs de tous les episodes distants d'une serie.

        Appele avant la creation des elements virtuels pour que les nouveaux
        episodes puissent pointer directement sur un fichier.

        Args:
            series: Serie (racine connue et ID TVDB requis)
            episodes: Catalogue distant deja filtre
            existing_seasons: Saisons locales existantes
            season_numbers: Numeros de saison distants

        Returns:
            Compteurs de la passe
        """
        stats = StubLifecycleStats()
        if not series.has_tvdb_id():
            logger.debug(f"Serie {series.name} sans ID TVDB, pas de stubs")
            return stats
        if series.path is None:
            return stats

        logger.debug(f"Creation des stubs des episodes manquants de {series.name}")
        self.upgrade_placeholders(series, stats)

        runtime = self._known_runtime(series.tvdb_id)

        for season_number in season_numbers:
            season_episodes = [
                e for e in episodes
                if e.season_number == season_number and e.number is not None
            ]
            existing_season = next(
                (s for s in existing_seasons if s.index_number == season_number), None
            )
            known_files = self._existing_episode_files(existing_season)

            season_dir = self.season_directory(series, season_number)
            if season_dir is None or not self._fs.make_dirs(season_dir):
                logger.warning(f"Repertoire de saison indisponible: {season_dir}")
                continue

            for record in season_episodes:
                # Point d'annulation entre deux episodes, jamais pendant une copie
                await asyncio.sleep(0)
                try:
                    self._sync_episode(
                        series, record, season_dir, runtime, known_files, stats
                    )
                except Exception as e:
                    stats.failures += 1
                    logger.error(
                        f"Erreur de stub pour {series.name} "
                        f"S{season_number:02d}E{record.number:02d}: {e}"
                    )

        logger.debug(f"Fin de creation des stubs pour {series.name}")
        return stats

    def _existing_episode_files(self, season: Optional[Season]) -> set[Path]:
        """Fichiers deja associes a des episodes de la saison et presents sur disque."""
        files: set[Path] = set()
        if season is None:
            return files
        for episode in self._library.get_episodes(season):
            if episode.path is not None and self._fs.exists(episode.path):
                files.add(episode.path)
        return files

    def _sync_episode(
        self,
        series: Series,
        record: EpisodeRecord,
        season_dir: Path,
        runtime: Optional[int],
        known_files: set[Path],
        stats: StubLifecycleStats,
    ) -> None:
        season_number = record.season_number
        episode_number = record.number
        paths = stub_paths(
            season_dir, stub_base_name(season_number, episode_number, record.name)
        )
        mp4_path, mkv_path = paths.approximate, paths.accurate

        tracked = any(
            p.season_number == season_number and p.episode_number == episode_number
            for p in self._placeholders.list_for_series(series.tvdb_id)
        )
        orphaned_mp4 = (
            self._fs.exists(mp4_path) and not tracked and mp4_path not in known_files
        )

        if orphaned_mp4:
            if runtime is not None:
                self._resolve_orphan_with_runtime(
                    series, record, paths, runtime, known_files, stats
                )
            else:
                self._resolve_orphan_without_runtime(series, record, paths, stats)
            return

        if runtime is not None:
            if self._is_present(mkv_path) or mkv_path in known_files:
                return
            if self._copy_closest(runtime, mkv_path, record):
                stats.accurate_stubs_created += 1
        else:
            if self._is_present(mp4_path) or mp4_path in known_files:
                return
            if self._copy_closest(DEFAULT_PLACEHOLDER_MINUTES, mp4_path, record):
                self._placeholders.add(
                    series.tvdb_id, season_number, episode_number, str(mp4_path)
                )
                stats.placeholders_created += 1

    def _resolve_orphan_with_runtime(
        self,
        series: Series,
        record: EpisodeRecord,
        paths: StubPaths,
        runtime: int,
        known_files: set[Path],
        stats: StubLifecycleStats,
    ) -> None:
        """Placeholder orphelin alors que la duree est connue."""
        mp4_path, mkv_path = paths.approximate, paths.accurate

        if self._fs.exists(mkv_path):
            if self._fs.get_size(mkv_path) >= VALID_ACCURATE_STUB_MIN_BYTES:
                # Stub precis valide : le placeholder est superflu
                if self._fs.delete(mp4_path):
                    stats.files_deleted += 1
                    logger.debug(f"Placeholder orphelin supprime (.mkv valide): {mp4_path}")
                return

            # Stub precis trop petit : on revient au placeholder pour cette passe
            if self._fs.delete(mkv_path):
                stats.files_deleted += 1
                logger.debug(f"Stub .mkv invalide supprime (trop petit): {mkv_path}")
            if self._copy_closest(DEFAULT_PLACEHOLDER_MINUTES, mp4_path, record):
                logger.debug(f"Placeholder restaure apres .mkv invalide: {mp4_path}")
            self._placeholders.add(
                series.tvdb_id, record.season_number, record.number, str(mp4_path)
            )
            stats.placeholders_created += 1
            return

        if self._fs.delete(mp4_path):
            stats.files_deleted += 1
            logger.debug(f"Placeholder orphelin supprime: {mp4_path}")

        if mkv_path not in known_files:
            if self._copy_closest(runtime, mkv_path, record):
                stats.accurate_stubs_created += 1

    def _resolve_orphan_without_runtime(
        self,
        series: Series,
        record: EpisodeRecord,
        paths: StubPaths,
        stats: StubLifecycleStats,
    ) -> None:
        """Placeholder orphelin sans duree connue : on le reprend en charge."""
        mp4_path, mkv_path = paths.approximate, paths.accurate

        if self._fs.exists(mkv_path):
            if self._fs.delete(mkv_path):
                stats.files_deleted += 1
                logger.debug(f"Stub .mkv orphelin supprime (duree inconnue): {mkv_path}")

        if not self._is_present(mp4_path):
            self._copy_closest(DEFAULT_PLACEHOLDER_MINUTES, mp4_path, record)

        self._placeholders.add(
            series.tvdb_id, record.season_number, record.number, str(mp4_path)
        )
        stats.placeholders_created += 1

    def _is_present(self, path: Path) -> bool:
        """Un fichier de 1 KiB ou moins compte comme absent."""
        return self._fs.exists(path) and self._fs.get_size(path) > PRESENT_FILE_MIN_BYTES

    def _copy_closest(self, minutes: int, destination: Path, record: EpisodeRecord) -> bool:
        """Copie le stub le plus proche de `minutes` vers `destination`."""
        label = record.name or "Unknown"
        stub_file = self._resolver.find_closest_stub(minutes)
        if stub_file is None:
            logger.warning(f"Aucun stub disponible pour '{label}' ({minutes} min)")
            return False

        if not self._fs.copy(stub_file, destination):
            logger.error(f"Copie du stub echouee pour '{label}': {stub_file} -> {destination}")
            return False

        logger.info(f"Stub copie pour '{label}': {stub_file.name} -> {destination}")
        return True
