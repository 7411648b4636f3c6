"""
Exceptions du domaine stubsync.

Les erreurs d'E/S des registres et du systeme de fichiers ne remontent pas
(elles sont journalisees sur place) ; seules les erreurs du catalogue
distant sont typees ici.
"""


class StubSyncError(Exception):
    """Erreur de base du projet."""


class CatalogUnavailableError(StubSyncError):
    """
    Le catalogue distant ne peut pas etre interroge.

    Levee par le client TVDB quand aucune cle API n'est configuree ;
    le moteur de reconciliation la traduit en catalogue vide.
    """
