"""
Client du catalogue distant (TheTVDB).

- TVDBClient : catalogue d'episodes et duree moyenne (API v4)
- APICache : cache persistant des catalogues
- RateLimitError / request_with_retry : relance sur 429 et erreurs reseau

Le client implemente IEpisodeCatalog defini dans core/ports/api_clients.py.
"""

from src.adapters.api.cache import APICache
from src.adapters.api.retry import RateLimitError, request_with_retry, with_retry
from src.adapters.api.tvdb_client import CatalogSnapshot, TVDBClient

__all__ = [
    "APICache",
    "CatalogSnapshot",
    "RateLimitError",
    "TVDBClient",
    "request_with_retry",
    "with_retry",
]
