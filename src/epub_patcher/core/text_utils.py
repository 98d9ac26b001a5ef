"""
Utilitaires pour le nettoyage des chaînes de caractères.
"""

from ..config import TITLE_SEPARATORS


def normalize_title(title: str) -> str:
    """Remplace chaque '_' et '-' du titre par un espace."""
    if not title:
        return ""
    for sep in TITLE_SEPARATORS:
        title = title.replace(sep, " ")
    return title
