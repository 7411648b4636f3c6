"""
Configuration de l'application via pydantic-settings.

La configuration est chargée depuis les variables d'environnement avec le préfixe STUBSYNC_,
et peut optionnellement être fournie via un fichier .env.

La clé API TVDB est optionnelle - la récupération du catalogue distant est désactivée si non fournie.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Trouver le fichier .env à la racine du projet (parent de src/)
_PROJECT_ROOT = Path(__file__).parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Paramètres de l'application avec support des variables d'environnement.

    Tous les paramètres peuvent être surchargés via des variables d'environnement
    avec le préfixe STUBSYNC_.
    Exemple : STUBSYNC_CREATE_STUB_FILES_FOR_MISSING_EPISODES=false

    Les chemins sont automatiquement étendus (~ -> répertoire home).
    L'objet est passé explicitement au moteur de réconciliation.
    """

    model_config = SettingsConfigDict(
        env_prefix="STUBSYNC_",
        env_file=_ENV_FILE if _ENV_FILE.exists() else ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Chemins (avec expansion ~)
    data_dir: Path = Field(default=Path("~/.local/share/stubsync"))
    stubs_dir: Path = Field(default=Path("~/.local/share/stubsync/STUBS"))
    cache_dir: Path = Field(default=Path(".cache/api"))

    # Réconciliation des épisodes manquants
    include_missing_specials: bool = Field(default=False)
    remove_all_missing_episodes_on_refresh: bool = Field(default=False)
    create_stub_files_for_missing_episodes: bool = Field(default=True)

    # Nommage des saisons (chaîne localisée NameSeasonNumber, saison 0)
    season_name_template: str = Field(default="Season {0}")
    season_zero_display_name: str = Field(default="Specials")

    # Catalogue distant (OPTIONNEL)
    tvdb_api_key: Optional[str] = Field(default=None)
    metadata_language: str = Field(default="eng")

    # Logging (fichier + stderr, rotation 10MB, 5 fichiers de rétention)
    log_level: str = Field(default="INFO")
    log_file: Path = Field(default=Path("logs/stubsync.log"))
    log_rotation_size: str = Field(default="10 MB")
    log_retention_count: int = Field(default=5, ge=1)

    @field_validator("data_dir", "stubs_dir", "cache_dir", "log_file", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Étend ~ vers le répertoire home dans les chemins."""
        return Path(v).expanduser()

    @property
    def tvdb_enabled(self) -> bool:
        """Vérifie si l'API TVDB est configurée."""
        return bool(self.tvdb_api_key)

    @property
    def runtime_store_path(self) -> Path:
        """Fichier du registre des durées par série."""
        return self.data_dir / "Series_Runtime_Index.txt"

    @property
    def placeholder_store_path(self) -> Path:
        """Fichier du registre des placeholders."""
        return self.data_dir / "Placeholder_Stubs_List.txt"
