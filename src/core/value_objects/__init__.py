"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- ParsedFilename : Informations extraites du parsing d'un nom de fichier d'episode
"""

from src.core.value_objects.parsed_info import ParsedFilename

__all__ = ["ParsedFilename"]
