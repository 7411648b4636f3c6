"""
Constantes globales pour stubsync.

Ce module contient les constantes du cycle de vie des fichiers stubs:
- Extensions des stubs approximatifs (placeholder) et precis
- Bornes de duree couvertes par le catalogue de stubs
- Seuils de taille pour juger un stub present ou valide
- Extensions video reconnues lors du scan d'une serie
"""

# Placeholder approximatif (duree par defaut) / stub precis (duree connue)
APPROXIMATE_STUB_EXTENSION = ".mp4"
ACCURATE_STUB_EXTENSION = ".mkv"

# Motifs des fichiers du catalogue de stubs (ex: "25min.mkv")
STUB_CATALOG_PATTERNS = ("*.mp4", "*.mkv")
STUB_MINUTES_MARKER = "min"

# Bande de durees couverte par les stubs pre-generes (minutes)
MIN_STUB_RUNTIME_MINUTES = 10
MAX_STUB_RUNTIME_MINUTES = 240

# Duree du placeholder quand la duree de la serie est inconnue
DEFAULT_PLACEHOLDER_MINUTES = 30

# Un fichier de 1 KiB ou moins n'est pas considere comme present
PRESENT_FILE_MIN_BYTES = 1024

# Taille minimale d'un stub precis valide (en dessous : corrompu/incomplet)
VALID_ACCURATE_STUB_MIN_BYTES = 20 * 1024

# Titre de repli quand le titre d'episode est vide apres nettoyage
DEFAULT_EPISODE_TITLE = "Episode"

# Nom de repli de la saison 0
DEFAULT_SEASON_ZERO_NAME = "Specials"

# Cle de la chaine localisee "Saison N"
SEASON_NAME_KEY = "NameSeasonNumber"

# Extensions video reconnues lors du scan d'une serie existante
VIDEO_EXTENSIONS = frozenset({
    ".mkv",
    ".mp4",
    ".avi",
    ".mov",
    ".wmv",
    ".flv",
    ".webm",
    ".m4v",
    ".mpg",
    ".mpeg",
    ".ts",
    ".vob",
})
