"""
Interface port pour le parsing de noms de fichiers d'episodes.
"""

from abc import ABC, abstractmethod

from src.core.value_objects.parsed_info import ParsedFilename


class IFilenameParser(ABC):
    """
    Interface pour le parsing de noms de fichiers video d'episodes.

    Definit le contrat pour extraire saison et numero(s) d'episode depuis
    un nom de fichier. L'implementation utilise la bibliotheque guessit.
    """

    @abstractmethod
    def parse(self, filename: str) -> ParsedFilename:
        """
        Parse un nom de fichier video.

        Args:
            filename: Nom du fichier a parser (sans le chemin)

        Retourne:
            ParsedFilename avec les informations extraites.
            Le champ title est toujours renseigne (au minimum le nom sans extension).
        """
        ...
