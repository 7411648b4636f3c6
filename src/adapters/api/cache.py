"""
Cache persistant des reponses du catalogue distant.

Le cache utilise diskcache pour survivre aux redemarrages : une passe de
reconciliation declenchee par evenement relit souvent le meme catalogue
que la passe precedente (suppression d'episode, rafraichissement de saison).

TTL par defaut :
- Catalogue d'episodes (CATALOG_TTL) : 12 heures, les nouveaux episodes
  apparaissent sans attendre plusieurs jours
- Jeton d'authentification : jamais mis en cache (garde en memoire par le client)
"""

import asyncio
from functools import partial
from pathlib import Path
from typing import Any, Optional, Union

from diskcache import Cache


def make_cache_key(source: str, *parts: object) -> str:
    """Construit une cle de cache du type 'tvdb:episodes:81189:official:eng'."""
    return ":".join([source, *(str(p) for p in parts)])


class APICache:
    """
    Cache asynchrone avec TTL pour les appels au catalogue.

    Les operations diskcache sont bloquantes : elles passent par
    run_in_executor pour ne pas geler la boucle d'evenements.

    Example:
        cache = APICache(cache_dir=".cache/api")
        await cache.set_catalog("tvdb:episodes:81189:official:eng", snapshot)
        snapshot = await cache.get("tvdb:episodes:81189:official:eng")
    """

    CATALOG_TTL = 12 * 60 * 60  # 12 heures en secondes

    def __init__(self, cache_dir: Union[str, Path] = ".cache/api") -> None:
        """
        Args:
            cache_dir: Repertoire du cache (cree si inexistant)
        """
        self._cache = Cache(str(cache_dir))

    async def get(self, key: str) -> Optional[Any]:
        """Retourne la valeur stockee, ou None si absente ou expiree."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._cache.get, key)

    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Stocke une valeur (picklable) avec une duree de vie en secondes."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None, partial(self._cache.set, key, value, expire=ttl)
        )

    async def set_catalog(self, key: str, value: Any) -> None:
        """Stocke un instantane de catalogue (TTL de 12h)."""
        await self.set(key, value, self.CATALOG_TTL)

    def close(self) -> None:
        """Ferme la connexion au cache."""
        self._cache.close()
