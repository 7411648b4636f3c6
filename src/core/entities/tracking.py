"""
Entites de suivi des fichiers stubs.

Enregistrements persistes par les registres : duree moyenne connue
d'une serie et placeholders en attente de mise a niveau.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SeriesRuntimeEntry:
    """
    Duree moyenne d'episode connue pour une serie.

    Attributs :
        series_id : ID TVDB de la serie (cle unique)
        average_runtime_minutes : Duree moyenne en minutes
    """

    series_id: int
    average_runtime_minutes: int


@dataclass(frozen=True)
class PlaceholderStubEntry:
    """
    Placeholder approximatif en attente d'une duree exacte.

    Unique par (series_id, season_number, episode_number). Le chemin
    est indicatif : il faut verifier que le fichier existe encore
    avant d'agir dessus.
    """

    series_id: int
    season_number: int
    episode_number: int
    file_path: str

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.series_id, self.season_number, self.episode_number)
