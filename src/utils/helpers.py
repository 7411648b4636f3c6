"""
Fonctions utilitaires partagees dans le projet stubsync.

Ce module centralise les fonctions reutilisees a travers le codebase :
- strip_invisible_chars / clean_title : nettoyage des titres venant de l'API
- parse_aired_date : conversion tolerante d'une date de diffusion
"""

import unicodedata
from datetime import datetime
from typing import Optional

# Formats acceptes en plus de l'ISO 8601
_EXTRA_DATE_FORMATS = ("%Y/%m/%d", "%d/%m/%Y", "%m/%d/%Y")


def strip_invisible_chars(text: str) -> str:
    """
    Retire les caractères Unicode invisibles d'une chaîne.

    Supprime les caractères de contrôle et les marques directionnelles
    qui peuvent provenir des APIs (LRM, RLM, BOM, etc.).
    """
    result = []
    for char in text:
        category = unicodedata.category(char)
        if category in ("Cf", "Cc"):
            continue
        result.append(char)
    return "".join(result)


def clean_title(title: Optional[str]) -> Optional[str]:
    """Nettoie un titre : retire les caractères invisibles et les espaces superflus."""
    if not title:
        return title
    return strip_invisible_chars(title).strip()


def parse_aired_date(value: Optional[str]) -> Optional[datetime]:
    """
    Convertit une date de diffusion en datetime.

    Une date absente ou mal formee donne None (jamais d'exception).

    Args:
        value: Date brute (ex: "2008-01-20", "2008-01-20T02:00:00Z")

    Returns:
        datetime correspondant, ou None.
    """
    if not value or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass

    for fmt in _EXTRA_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None
