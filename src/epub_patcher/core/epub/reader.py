"""
Module de lecture EPUB.

Responsabilité unique: Lire les métadonnées descriptives (titre, auteurs,
éditeur) d'un fichier EPUB, pour comparer avant et après le patch.
"""

import logging
from typing import Any, Dict, List, Optional

from ebooklib import epub
from ebooklib.epub import EpubBook

logger = logging.getLogger(__name__)


def safe_read_epub(epub_path: str) -> Optional[EpubBook]:
    """
    Lit un fichier EPUB de manière sécurisée.

    Args:
        epub_path: Chemin vers le fichier EPUB

    Returns:
        Objet EpubBook si succès, None sinon
    """
    try:
        return epub.read_epub(epub_path, options={"ignore_ncx": True})
    except Exception as e:
        logger.warning("ebooklib failed to read %s: %s", epub_path, e)
        return None


def _get_metadata_field(book: EpubBook, namespace: str, name: str) -> Optional[Any]:
    """
    Helper générique pour extraire un champ de métadonnées.

    Args:
        book: Objet EpubBook
        namespace: Namespace de métadonnées (ex: 'DC')
        name: Nom du champ (ex: 'title')

    Returns:
        Valeur du champ ou None
    """
    try:
        meta = book.get_metadata(namespace, name)
    except KeyError:
        # Namespace absent du document
        logger.debug("No %s metadata namespace for field %s", namespace, name)
        return None
    if meta:
        return meta[0][0]
    return None


def _get_title(book: EpubBook) -> Optional[str]:
    """Extrait le titre du livre."""
    return _get_metadata_field(book, "DC", "title")


def _get_publisher(book: EpubBook) -> Optional[str]:
    """Extrait l'éditeur du livre."""
    return _get_metadata_field(book, "DC", "publisher")


def _get_authors(book: EpubBook) -> Optional[List[str]]:
    """
    Extrait la liste des auteurs.

    Returns:
        Liste des auteurs ou None si aucun trouvé
    """
    try:
        auths_meta = book.get_metadata("DC", "creator") or []
    except KeyError:
        return None
    authors = [a[0] if isinstance(a, tuple) else str(a) for a in auths_meta]
    return authors or None


def extract_metadata(epub_path: str) -> Dict:
    """
    Extrait les métadonnées descriptives d'un fichier EPUB.

    Args:
        epub_path: Chemin vers le fichier EPUB

    Returns:
        Dictionnaire avec les clés title, authors, publisher
        (None pour les champs absents ou si le fichier est illisible)
    """
    data = {"title": None, "authors": None, "publisher": None}

    book = safe_read_epub(epub_path)
    if not book:
        logger.warning("Could not read EPUB file: %s", epub_path)
        return data

    data["title"] = _get_title(book)
    data["authors"] = _get_authors(book)
    data["publisher"] = _get_publisher(book)

    logger.info("Extracted metadata for %s", epub_path)
    return data
