"""
Relance des requetes TVDB sur les erreurs transitoires.

Deux familles d'erreurs sont relancees :
- 429 Too Many Requests (RateLimitError), en respectant Retry-After s'il est fourni
- erreurs de transport httpx (connexion refusee, timeout...)

Les autres statuts HTTP remontent immediatement.

Usage:
    response = await request_with_retry(client, "GET", "/series/81189/episodes/official/eng")
"""

from typing import Optional

import httpx
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from src.core.exceptions import CatalogUnavailableError


class RateLimitError(CatalogUnavailableError):
    """
    Exception levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (header Retry-After),
                     ou None si non specifie.
    """

    def __init__(self, retry_after: Optional[int] = None) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


RETRYABLE_ERRORS = (RateLimitError, httpx.TransportError)


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Lit un header Retry-After exprime en secondes (les dates HTTP sont ignorees)."""
    if not value:
        return None
    try:
        return max(0, int(value.strip()))
    except ValueError:
        return None


def wait_retry_after_or_backoff(max_wait: int):
    """
    Strategie d'attente tenacity.

    Utilise le Retry-After du serveur quand il est connu (borne par max_wait),
    sinon un backoff exponentiel avec jitter.
    """
    backoff = wait_random_exponential(multiplier=1, min=1, max=max_wait)

    def _wait(retry_state: RetryCallState) -> float:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        if isinstance(error, RateLimitError) and error.retry_after is not None:
            return float(min(error.retry_after, max_wait))
        return backoff(retry_state)

    return _wait


def with_retry(max_attempts: int = 5, max_wait: int = 60):
    """
    Decorateur de relance pour les appels async vers TVDB.

    Args:
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre deux tentatives en secondes (defaut: 60)
    """
    return retry(
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        wait=wait_retry_after_or_backoff(max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: int = 60,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec relance automatique.

    Args:
        client: Client httpx async
        method: Methode HTTP
        url: URL (relative a la base du client ou absolue)
        max_attempts: Nombre maximum de tentatives
        max_wait: Attente maximale entre deux tentatives (secondes)
        **kwargs: Arguments passes a client.request()

    Raises:
        RateLimitError: 429 persistant apres epuisement des tentatives
        httpx.TransportError: Erreur reseau persistante
        httpx.HTTPStatusError: Autres erreurs HTTP (sans relance)
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        response.raise_for_status()
        return response

    return await _do_request()
