"""
Logique pour le mode ligne de commande.

Utilise PatcherService pour réutiliser la logique de patch.
"""

import logging
import os
from typing import List

from .core.models import PatchResult
from .core.patcher_service import PatcherService

logger = logging.getLogger(__name__)


def cli_patch(path: str, author: str, publisher: str) -> List[PatchResult]:
    """
    Patche un fichier EPUB, ou tous les EPUB d'un dossier.

    Args:
        path: Fichier EPUB ou dossier
        author: Auteur à écrire
        publisher: Éditeur à écrire

    Returns:
        Liste des résultats
    """
    logger.info("CLI mode - patching: %s", path)

    service = PatcherService()
    if os.path.isdir(path):
        results = service.patch_folder(path, author, publisher)
    else:
        results = [service.patch_file(path, author, publisher)]

    logger.info("CLI mode - processed %d files", len(results))
    return results


def print_patch_summary(results: List[PatchResult]):
    """Affiche un résumé des fichiers patchés."""
    print("\n=== Résumé du traitement ===")
    print(f"Fichiers traités: {len(results)}")

    succeeded = sum(1 for r in results if r.success)
    print(f"Succès: {succeeded}")
    print(f"Échecs: {len(results) - succeeded}")

    for result in results:
        print(f"\n{result.filename}:")

        if not result.success:
            print(f"  Erreur: {result.note}")
            continue

        if result.original_title != result.new_title:
            print(f"  Titre: {result.original_title} -> {result.new_title}")

        if result.original_authors != result.new_authors:
            orig_authors = ", ".join(result.original_authors or [])
            new_authors = ", ".join(result.new_authors or [])
            print(f"  Auteurs: {orig_authors} -> {new_authors}")

        if result.original_publisher != result.new_publisher:
            print(f"  Éditeur: {result.original_publisher} -> {result.new_publisher}")
