"""
Module d'écriture EPUB.

Responsabilité unique: Écrire l'auteur et l'éditeur dans le document OPF
d'un EPUB et normaliser son titre, en reconstruisant le conteneur.
"""

import logging
import os
import tempfile
from typing import Dict, Optional

from ..errors import InputNotFoundError, PatchError
from ..models import PatchResult
from .archive import extract_epub, find_metadata_entry, repack_epub
from .opf import (
    find_metadata_element,
    load_document,
    normalize_title_element,
    resolve_namespaces,
    save_document,
    set_field,
)

logger = logging.getLogger(__name__)


def _check_input(epub_path: str):
    if not os.path.isfile(epub_path):
        raise InputNotFoundError(f"File not found: {epub_path}", epub_path)


def apply_patch(
    epub_path: str, author: str, publisher: str, new_field_ns: Optional[str] = None
) -> Dict[str, str]:
    """
    Applique le patch des métadonnées sur un EPUB.

    Étapes:
    1. Extraction complète dans un dossier temporaire
    2. Localisation et parsing du document OPF
    3. Trouver-ou-créer dc:creator et dc:publisher
    4. Normalisation de dc:title
    5. Réécriture de l'OPF puis reconstruction atomique de l'EPUB

    Le dossier temporaire est supprimé quelle que soit l'issue. Toute erreur
    levée avant l'étape 5 laisse le fichier d'origine intact.

    Args:
        epub_path: Chemin vers le fichier EPUB à modifier
        author: Valeur de dc:creator
        publisher: Valeur de dc:publisher
        new_field_ns: "dc" ou "default", namespace des éléments créés

    Returns:
        Dictionnaire {title, author, publisher} des valeurs écrites

    Raises:
        PatchError: Sous-classe décrivant l'échec
    """
    _check_input(epub_path)

    with tempfile.TemporaryDirectory(prefix="epub_patcher_") as scratch_dir:
        archive = extract_epub(epub_path, scratch_dir)
        opf_entry = find_metadata_entry(archive)
        opf_path = archive.path_of(opf_entry)
        logger.info("Metadata document: %s", opf_entry)

        tree = load_document(opf_path)
        namespaces = resolve_namespaces(tree)
        metadata = find_metadata_element(tree, namespaces)

        set_field(tree, metadata, namespaces, "creator", author, new_field_ns)
        set_field(tree, metadata, namespaces, "publisher", publisher, new_field_ns)
        title = normalize_title_element(tree, namespaces)

        save_document(tree, opf_path)
        repack_epub(archive, epub_path)

    return {"title": title, "author": author, "publisher": publisher}


def patch_epub(
    epub_path: str, author: str, publisher: str, new_field_ns: Optional[str] = None
) -> PatchResult:
    """
    Patche un EPUB et rapporte le résultat sans lever d'exception.

    Returns:
        PatchResult avec success=True, ou success=False et l'erreur
        d'origine dans ``error`` (sa cause reste accessible via __cause__)
    """
    logger.info("--- DEBUT PATCH EPUB - %s ---", epub_path)
    result = PatchResult(
        path=epub_path,
        filename=os.path.basename(epub_path),
        author=author,
        publisher=publisher,
    )

    try:
        written = apply_patch(epub_path, author, publisher, new_field_ns)
    except PatchError as e:
        result.error = e
        result.note = f"{type(e).__name__}: {e}"
        if e.__cause__ is not None:
            result.note += f" (cause: {e.__cause__})"
        logger.exception("Error patching epub %s", epub_path)
        return result

    result.new_title = written["title"]
    result.new_authors = [written["author"]]
    result.new_publisher = written["publisher"]
    result.success = True
    result.note = "Metadata updated"
    logger.info("PATCHED EPUB %s. SUCCESS.", epub_path)
    return result
