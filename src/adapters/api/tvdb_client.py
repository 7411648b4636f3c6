"""
Client TVDB API v4 pour le catalogue d'episodes.

Implemente IEpisodeCatalog : liste complete des episodes d'une serie selon
un schema d'ordre (official, dvd, absolute...) et duree moyenne d'episode.
Gere l'authentification JWT, le caching et les relances automatiquement.

Reference API: https://thetvdb.github.io/v4-api/
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Optional

import httpx
from loguru import logger

from src.adapters.api.cache import APICache, make_cache_key
from src.adapters.api.retry import request_with_retry
from src.core.exceptions import CatalogUnavailableError
from src.core.ports.api_clients import (
    DEFAULT_SEASON_TYPE,
    EpisodeRecord,
    IEpisodeCatalog,
)
from src.utils.helpers import clean_title


@dataclass(frozen=True)
class CatalogSnapshot:
    """
    Catalogue d'une serie tel que renvoye par TVDB, mis en cache tel quel.

    Attributes:
        average_runtime: Duree moyenne d'episode en minutes (None si inconnue)
        episodes: Episodes dans l'ordre renvoye par l'API
    """

    average_runtime: Optional[int]
    episodes: tuple[EpisodeRecord, ...]


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_episode(item: dict[str, Any], series_id: int) -> EpisodeRecord:
    """Convertit un episode JSON TVDB v4 en EpisodeRecord."""
    return EpisodeRecord(
        id=_optional_int(item.get("id")),
        series_id=_optional_int(item.get("seriesId")) or series_id,
        season_number=_optional_int(item.get("seasonNumber")),
        number=_optional_int(item.get("number")),
        name=clean_title(item.get("name")),
        overview=item.get("overview"),
        aired=item.get("aired"),
        airs_before_episode=_optional_int(item.get("airsBeforeEpisode")),
        airs_after_season=_optional_int(item.get("airsAfterSeason")),
        airs_before_season=_optional_int(item.get("airsBeforeSeason")),
    )


class TVDBClient(IEpisodeCatalog):
    """
    Client TVDB pour le catalogue d'episodes des series.

    Le token JWT est obtenu a la premiere requete et rafraichi avant
    expiration. Sans cle API, toute requete leve CatalogUnavailableError.

    Example:
        cache = APICache(cache_dir=".cache/api")
        client = TVDBClient(api_key="your-api-key", cache=cache)
        episodes = await client.get_series_episodes(81189, "eng")
        runtime = await client.get_average_runtime(81189)
        await client.close()
    """

    BASE_URL = "https://api4.thetvdb.com/v4"
    # Garde-fou contre une pagination qui ne se terminerait pas
    MAX_PAGES = 50

    def __init__(
        self,
        api_key: Optional[str],
        cache: APICache,
        default_language: str = "eng",
    ) -> None:
        """
        Args:
            api_key: Cle API TVDB (Project API Key), None si non configuree
            cache: Cache des catalogues
            default_language: Langue de la duree moyenne quand aucune n'est donnee
        """
        self._api_key = api_key
        self._cache = cache
        self._default_language = default_language
        self._token: Optional[str] = None
        self._token_expiry: Optional[datetime] = None
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP unique (connection pooling)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.BASE_URL,
                timeout=httpx.Timeout(30.0, connect=10.0),
            )
        return self._client

    async def _ensure_token(self) -> str:
        """
        S'assure qu'un token JWT valide est disponible.

        Le token v4 est valide un mois ; il est renouvele apres 25 jours.

        Raises:
            CatalogUnavailableError: Si aucune cle API n'est configuree
        """
        if not self._api_key:
            raise CatalogUnavailableError("Cle API TVDB non configuree")

        if self._token and self._token_expiry and datetime.now() < self._token_expiry:
            return self._token

        client = await self._get_client()
        response = await request_with_retry(
            client,
            "POST",
            "/login",
            json={"apikey": self._api_key},
        )
        data = response.json()

        # API v4: token dans "data"
        self._token = data["data"]["token"]
        self._token_expiry = datetime.now() + timedelta(days=25)
        logger.debug("Token TVDB obtenu")
        return self._token

    def _get_auth_headers(self) -> dict[str, str]:
        if not self._token:
            raise RuntimeError("Token not available. Call _ensure_token() first.")
        return {"Authorization": f"Bearer {self._token}"}

    async def get_series_episodes(
        self,
        series_id: int,
        language: str,
        season_type: str = DEFAULT_SEASON_TYPE,
    ) -> list[EpisodeRecord]:
        """
        Recupere tous les episodes d'une serie.

        Verifie le cache avant d'appeler l'API. Une serie inconnue (404)
        donne une liste vide.

        Args:
            series_id: ID TVDB de la serie
            language: Code langue TVDB (ex: "eng", "fra")
            season_type: Schema d'ordre ("official", "dvd", "absolute"...)

        Returns:
            Liste des episodes dans l'ordre de l'API
        """
        snapshot = await self._get_snapshot(series_id, language, season_type or DEFAULT_SEASON_TYPE)
        if snapshot is None:
            return []
        return list(snapshot.episodes)

    async def get_average_runtime(
        self,
        series_id: int,
        language: Optional[str] = None,
        season_type: str = DEFAULT_SEASON_TYPE,
    ) -> Optional[int]:
        """
        Retourne la duree moyenne d'episode en minutes.

        Lue dans la meme reponse que le catalogue : avec la langue et le
        schema d'un appel get_series_episodes, l'instantane en cache sert
        sans nouvelle requete.
        """
        snapshot = await self._get_snapshot(
            series_id, language or self._default_language, season_type or DEFAULT_SEASON_TYPE
        )
        if snapshot is None or not snapshot.average_runtime:
            return None
        return snapshot.average_runtime

    async def _get_snapshot(
        self, series_id: int, language: str, season_type: str
    ) -> Optional[CatalogSnapshot]:
        # Cache-first: verifier le cache avant toute requete HTTP
        cache_key = make_cache_key(self.source, "episodes", series_id, season_type, language)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        await self._ensure_token()
        client = await self._get_client()

        snapshot = await self._fetch_snapshot(
            client, f"/series/{series_id}/episodes/{season_type}/{language}", series_id
        )
        if snapshot is None:
            # Langue indisponible pour cette serie : titres dans la langue d'origine
            logger.debug(
                f"Catalogue TVDB {series_id} indisponible en '{language}', repli sans langue"
            )
            snapshot = await self._fetch_snapshot(
                client, f"/series/{series_id}/episodes/{season_type}", series_id
            )
        if snapshot is None:
            logger.warning(f"Serie TVDB {series_id} introuvable")
            return None

        await self._cache.set_catalog(cache_key, snapshot)
        return snapshot

    async def _fetch_snapshot(
        self, client: httpx.AsyncClient, url: str, series_id: int
    ) -> Optional[CatalogSnapshot]:
        """
        Parcourt toutes les pages d'un endpoint episodes.

        Returns:
            Instantane complet, ou None si l'endpoint repond 404
        """
        episodes: list[EpisodeRecord] = []
        average_runtime: Optional[int] = None
        page = 0

        while page < self.MAX_PAGES:
            try:
                response = await request_with_retry(
                    client,
                    "GET",
                    url,
                    params={"page": str(page)},
                    headers=self._get_auth_headers(),
                )
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 404:
                    return None
                raise

            payload = response.json()
            data = payload.get("data") or {}

            if average_runtime is None:
                series = data.get("series") or {}
                average_runtime = _optional_int(series.get("averageRuntime"))

            for item in data.get("episodes") or []:
                episodes.append(parse_episode(item, series_id))

            links = payload.get("links") or {}
            if not links.get("next"):
                break
            page += 1

        logger.debug(f"{len(episodes)} episodes TVDB recuperes pour la serie {series_id}")
        return CatalogSnapshot(average_runtime=average_runtime, episodes=tuple(episodes))

    @property
    def source(self) -> str:
        """Retourne l'identifiant de la source API."""
        return "tvdb"

    async def close(self) -> None:
        """Ferme le client HTTP et libere les ressources."""
        if self._client:
            await self._client.aclose()
            self._client = None
