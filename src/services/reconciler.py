"""
Service de reconciliation des episodes manquants.

Compare le catalogue TVDB d'une serie a l'arbre local et synchronise :
- saisons et episodes virtuels (crees pour les trous, supprimes s'ils ne
  correspondent plus a rien cote catalogue)
- fichiers stubs (via StubLifecycleManager), crees AVANT les episodes
  virtuels pour que ceux-ci pointent directement sur un fichier

Les episodes reels (non virtuels) ne sont jamais supprimes par ce service.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional

from loguru import logger

from src.core.entities.media import (
    Episode,
    ItemType,
    LibraryItem,
    RefreshPriority,
    Season,
    Series,
    series_of,
)
from src.core.ports.api_clients import DEFAULT_SEASON_TYPE, EpisodeRecord, IEpisodeCatalog
from src.core.ports.library import ILibraryTree, ILocalization
from src.core.ports.repositories import IRuntimeRepository
from src.services.stub_lifecycle import StubLifecycleManager, StubLifecycleStats
from src.services.stub_naming import season_folder_name
from src.utils.helpers import clean_title, parse_aired_date


# Schemas d'ordre pour lesquels les indications "airs before/after" ont un sens
NATIVE_DISPLAY_ORDERS = ("", DEFAULT_SEASON_TYPE)


@dataclass(frozen=True)
class ReconciliationOptions:
    """
    Options de reconciliation, passees explicitement au service.

    Attributs :
        include_missing_specials : Garder la saison 0 du catalogue
        remove_all_missing_episodes_on_refresh : Ignorer le catalogue (supprime tous les virtuels)
        create_stub_files_for_missing_episodes : Creer des fichiers stubs
    """

    include_missing_specials: bool = False
    remove_all_missing_episodes_on_refresh: bool = False
    create_stub_files_for_missing_episodes: bool = True

    @classmethod
    def from_settings(cls, settings) -> "ReconciliationOptions":
        return cls(
            include_missing_specials=settings.include_missing_specials,
            remove_all_missing_episodes_on_refresh=settings.remove_all_missing_episodes_on_refresh,
            create_stub_files_for_missing_episodes=settings.create_stub_files_for_missing_episodes,
        )


@dataclass
class ReconciliationResult:
    """Bilan d'une passe de reconciliation."""

    created_seasons: list[Season] = field(default_factory=list)
    created_episodes: list[Episode] = field(default_factory=list)
    deleted_items: list[LibraryItem] = field(default_factory=list)
    stubs: StubLifecycleStats = field(default_factory=StubLifecycleStats)
    skipped: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.created_seasons or self.created_episodes or self.deleted_items)


def episode_matches(episode: Episode, record: EpisodeRecord) -> bool:
    """
    Un enregistrement distant correspond a un episode local quand son numero
    est dans la plage de l'episode et que les saisons concordent.
    """
    return (
        record.number is not None
        and episode.contains_episode_number(record.number)
        and episode.parent_index_number == record.season_number
    )


def _distinct_season_numbers(episodes: Iterable[EpisodeRecord]) -> list[int]:
    seen: list[int] = []
    for record in episodes:
        if record.season_number is not None and record.season_number not in seen:
            seen.append(record.season_number)
    return seen


class MissingEpisodeReconciler:
    """
    Reconciliation d'une serie (ou d'une saison) avec le catalogue TVDB.

    Le service ne garde aucun etat entre deux passes : l'arbre local,
    les registres et le systeme de fichiers sont relus a chaque appel.

    Example:
        reconciler = MissingEpisodeReconciler(catalog, library, localization, stubs, runtimes)
        result = await reconciler.reconcile_series(series)
    """

    def __init__(
        self,
        catalog: IEpisodeCatalog,
        library: ILibraryTree,
        localization: ILocalization,
        stubs: StubLifecycleManager,
        runtimes: IRuntimeRepository,
        options: Optional[ReconciliationOptions] = None,
    ) -> None:
        self._catalog = catalog
        self._library = library
        self._localization = localization
        self._stubs = stubs
        self._runtimes = runtimes
        self._options = options or ReconciliationOptions()

    @property
    def options(self) -> ReconciliationOptions:
        return self._options

    # ------------------------------------------------------------------
    # Serie
    # ------------------------------------------------------------------

    async def reconcile_series(self, series: Series) -> ReconciliationResult:
        """
        Reconcilie toutes les saisons d'une serie.

        Args:
            series: Serie a reconcilier (ID TVDB requis)

        Returns:
            Bilan des elements crees et supprimes
        """
        with logger.contextualize(series=series.name, tvdb_id=series.tvdb_id):
            return await self._reconcile_series(series)

    async def _reconcile_series(self, series: Series) -> ReconciliationResult:
        result = ReconciliationResult()
        if not series.has_tvdb_id():
            logger.debug(f"Pas d'ID TVDB pour {series.name}, reconciliation ignoree")
            result.skipped = True
            return result

        existing_seasons = [
            s for s in self._library.get_seasons(series) if s.index_number is not None
        ]

        all_episodes = await self._fetch_catalog(series)
        if all_episodes:
            # Meme langue et meme ordre : la duree vient de la reponse deja recuperee
            await self._record_runtime(series)

        if not self._options.include_missing_specials:
            all_episodes = [e for e in all_episodes if e.season_number != 0]

        all_seasons = _distinct_season_numbers(all_episodes)

        if self._options.create_stub_files_for_missing_episodes and series.path is not None:
            result.stubs = await self._stubs.sync_series_stubs(
                series, all_episodes, existing_seasons, all_seasons
            )

        known_numbers = {s.index_number for s in existing_seasons}
        for season_number in all_seasons:
            if season_number not in known_numbers:
                new_season = self.add_virtual_season(season_number, series)
                result.created_seasons.append(new_season)
                existing_seasons.append(new_season)

        for season in existing_seasons:
            await self._reconcile_season_with(season, all_episodes, result)

        orphaned_seasons = [
            s for s in existing_seasons
            if s.index_number not in all_seasons and not self._library.get_episodes(s)
        ]
        self.delete_virtual_items(orphaned_seasons, result)

        logger.info(
            f"Reconciliation de {series.name}: {len(result.created_seasons)} saisons "
            f"et {len(result.created_episodes)} episodes crees, "
            f"{len(result.deleted_items)} elements supprimes"
        )
        return result

    async def _fetch_catalog(self, series: Series) -> list[EpisodeRecord]:
        """
        Recupere le catalogue distant de la serie.

        Un echec donne une liste vide ; l'option de suppression totale
        remplace volontairement le catalogue par une liste vide.
        """
        if self._options.remove_all_missing_episodes_on_refresh:
            return []

        try:
            episodes = await self._catalog.get_series_episodes(
                series.tvdb_id, series.preferred_language, _display_order(series)
            )
        except Exception as e:
            logger.warning(f"Catalogue TVDB indisponible pour {series.tvdb_id}: {e}")
            return []

        if not episodes:
            logger.warning(f"Aucun episode TVDB pour l'ID {series.tvdb_id}")
            return []

        logger.debug(
            f"TVDB {series.tvdb_id}: {len(episodes)} episodes "
            f"[{', '.join(f'S{e.season_number}E{e.number}' for e in episodes)}]"
        )
        return list(episodes)

    async def _record_runtime(self, series: Series) -> None:
        """Memorise la duree moyenne d'episode quand le catalogue la connait."""
        try:
            runtime = await self._catalog.get_average_runtime(
                series.tvdb_id, series.preferred_language, _display_order(series)
            )
        except Exception as e:
            logger.debug(f"Duree moyenne indisponible pour {series.tvdb_id}: {e}")
            return
        if runtime is not None and runtime > 0:
            self._runtimes.set_series_runtime(series.tvdb_id, runtime)

    # ------------------------------------------------------------------
    # Saison
    # ------------------------------------------------------------------

    async def reconcile_season(self, season: Season) -> ReconciliationResult:
        """
        Reconcilie une seule saison (rafraichissement de saison).

        Le catalogue est recupere puis filtre comme pour une serie, sans
        gestion des stubs.
        """
        series = season.series
        with logger.contextualize(series=series.name, tvdb_id=series.tvdb_id):
            return await self._reconcile_single_season(season)

    async def _reconcile_single_season(self, season: Season) -> ReconciliationResult:
        result = ReconciliationResult()
        series = season.series
        if not series.has_tvdb_id():
            logger.debug(f"Pas d'ID TVDB pour {series.name}, reconciliation ignoree")
            result.skipped = True
            return result

        all_episodes = await self._fetch_catalog(series)
        if not self._options.include_missing_specials:
            all_episodes = [e for e in all_episodes if e.season_number != 0]

        await self._reconcile_season_with(season, all_episodes, result)
        return result

    async def _reconcile_season_with(
        self,
        season: Season,
        all_episodes: list[EpisodeRecord],
        result: ReconciliationResult,
    ) -> None:
        if season.index_number is None:
            logger.debug(f"Saison sans numero ({season.name}), ignoree")
            return

        season_episodes = [e for e in all_episodes if e.season_number == season.index_number]
        existing_episodes = list(self._library.get_episodes(season))

        for record in season_episodes:
            found = [e for e in existing_episodes if episode_matches(e, record)]
            if found:
                if any(not e.is_virtual for e in found):
                    # Un episode physique remplace ses doublons virtuels
                    virtual_matches = [e for e in found if e.is_virtual]
                    self.delete_virtual_items(virtual_matches, result)
                    existing_episodes = [e for e in existing_episodes if e not in virtual_matches]
                continue

            new_episode = self.add_virtual_episode(record, season)
            if new_episode is not None:
                result.created_episodes.append(new_episode)
                existing_episodes.append(new_episode)

        orphaned_episodes = [
            e for e in existing_episodes
            if e.parent_index_number == season.index_number
            and e.is_virtual
            and not any(episode_matches(e, record) for record in season_episodes)
        ]
        self.delete_virtual_items(orphaned_episodes, result)

    # ------------------------------------------------------------------
    # Creation / suppression d'elements
    # ------------------------------------------------------------------

    def add_virtual_season(self, season_number: int, series: Series) -> Season:
        """Cree une saison virtuelle et la met en file de rafraichissement."""
        options = self._library.get_library_options(series)
        season_name = season_folder_name(season_number, options, self._localization)

        logger.debug(f"Creation de la saison {season_name} pour {series.name}")
        season = Season(
            id=self._library.new_item_id(
                f"{series.id}{season_number}{season_name}", ItemType.SEASON
            ),
            series=series,
            index_number=season_number,
            name=season_name,
            is_virtual=True,
        )
        self._library.add_season(series, season)
        self._library.queue_refresh(season, RefreshPriority.HIGH)
        return season

    def add_virtual_episode(
        self, record: Optional[EpisodeRecord], season: Optional[Season]
    ) -> Optional[Episode]:
        """
        Cree un episode pour un enregistrement distant.

        Si un fichier stub existe pour l'episode, l'episode est physique et
        pointe dessus ; sinon il est virtuel et sans chemin.
        """
        if record is None or record.season_number is None or season is None:
            return None

        series = season.series
        stub_path = None
        if self._options.create_stub_files_for_missing_episodes and series.path is not None:
            stub_path = self._stubs.find_existing_stub(record, series)

        episode = Episode(
            id=self._library.new_item_id(
                f"{series.id}{record.season_number}Episode {record.number}", ItemType.EPISODE
            ),
            series=series,
            season=season,
            name=clean_title(record.name) or "",
            index_number=record.number,
            parent_index_number=record.season_number,
            is_virtual=stub_path is None,
            path=stub_path,
            overview=record.overview,
            premiere_date=parse_aired_date(record.aired),
            tvdb_id=record.id,
            date_last_saved=datetime.now(timezone.utc),
        )

        # Indications d'ordre valables uniquement pour l'ordre de diffusion
        if series.display_order in NATIVE_DISPLAY_ORDERS:
            episode.airs_before_episode_number = record.airs_before_episode
            episode.airs_after_season_number = record.airs_after_season
            episode.airs_before_season_number = record.airs_before_season

        logger.debug(
            f"Creation de l'episode {'virtuel' if episode.is_virtual else 'stub'} "
            f"{series.name} S{record.season_number:02d}E{(record.number or 0):02d}"
        )
        self._library.add_episode(season, episode)
        self._library.queue_refresh(episode, RefreshPriority.HIGH)
        return episode

    def delete_virtual_items(
        self,
        items: Iterable[LibraryItem],
        result: Optional[ReconciliationResult] = None,
    ) -> None:
        """Supprime des elements de l'arbre sans toucher aux fichiers."""
        for item in items:
            logger.debug(
                f"Suppression de {item.item_type.value} {item.name} "
                f"(S{_fmt(getattr(item, 'parent_index_number', None))}"
                f"E{_fmt(getattr(item, 'index_number', None))})"
            )
            self._library.delete_item(item, delete_files=False)
            if result is not None:
                result.deleted_items.append(item)

    # ------------------------------------------------------------------
    # Aides pour les evenements
    # ------------------------------------------------------------------

    def is_enabled_for_library(self, item: LibraryItem) -> bool:
        """Verifie que la reconciliation est activee pour la bibliotheque de l'element."""
        if not isinstance(item, (Series, Season, Episode)):
            logger.debug(f"Type non pris en charge: {type(item).__name__}")
            return False
        series = series_of(item)
        return self._library.get_library_options(series).missing_episode_fetcher_enabled

    def find_virtual_siblings(
        self, item: LibraryItem, parent: Optional[LibraryItem] = None
    ) -> list[LibraryItem]:
        """
        Elements virtuels occupant la meme position qu'un element reel.

        Meme numero pour une saison ; meme numero et meme saison pour un episode.
        """
        if isinstance(item, Episode):
            return self._library.find_items(
                ItemType.EPISODE,
                parent=parent,
                is_virtual=True,
                index_number=item.index_number,
                parent_index_number=item.parent_index_number,
            )
        if isinstance(item, Season):
            return self._library.find_items(
                ItemType.SEASON,
                parent=parent,
                is_virtual=True,
                index_number=item.index_number,
            )
        return []

    async def restore_season(self, season: Season) -> ReconciliationResult:
        """Recree une saison virtuelle a la place d'une saison reelle supprimee."""
        if season.index_number is None:
            return ReconciliationResult(skipped=True)
        new_season = self.add_virtual_season(season.index_number, season.series)
        result = await self.reconcile_season(new_season)
        result.created_seasons.insert(0, new_season)
        return result

    async def restore_episode(self, episode: Episode) -> Optional[Episode]:
        """Recree un episode virtuel a la place d'un episode reel supprime."""
        series = episode.series
        if not series.has_tvdb_id():
            logger.debug(f"Pas d'ID TVDB pour {series.name}")
            return None

        records = await self._fetch_catalog(series)
        record = next((r for r in records if episode_matches(episode, r)), None)
        return self.add_virtual_episode(record, episode.season)


def _display_order(series: Series) -> str:
    return series.display_order or DEFAULT_SEASON_TYPE


def _fmt(number: Optional[int]) -> str:
    return f"{number:02d}" if number is not None else "??"
